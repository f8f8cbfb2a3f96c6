"""
Schémas Pydantic pour les mises à jour quotidiennes.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre le champ `date` et le type `datetime.date` dans Pydantic v2.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, field_validator


class DailyUpdateCreate(BaseModel):
    date: dt.date
    category: Optional[str] = None
    content: str
    created_by: int

    @field_validator("content")
    @classmethod
    def content_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le contenu ne peut pas être vide.")
        return v.strip()


class DailyUpdateUpdate(BaseModel):
    date: Optional[dt.date] = None
    category: Optional[str] = None
    content: Optional[str] = None

    @field_validator("content")
    @classmethod
    def content_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le contenu ne peut pas être vide.")
        return v.strip() if v else v


class DailyUpdateResponse(BaseModel):
    id: int
    date: str
    category: Optional[str]
    content: str
    created_by: Optional[int]
    created_at: Optional[dt.datetime]

    model_config = {"from_attributes": True}
