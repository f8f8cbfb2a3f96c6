"""
Schémas Pydantic pour les branches.
"""

from typing import Optional

from pydantic import BaseModel, field_validator


class BranchCreate(BaseModel):
    name: str
    location: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de la branche ne peut pas être vide.")
        return v.strip()


class BranchUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le nom de la branche ne peut pas être vide.")
        return v.strip() if v else v


class BranchResponse(BaseModel):
    id: int
    name: str
    location: Optional[str]

    model_config = {"from_attributes": True}
