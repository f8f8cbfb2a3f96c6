"""
Schémas Pydantic pour les élèves.

Les champs arrivent en multipart (photo optionnelle), d'où des valeurs texte
que Pydantic convertit. fees_due n'apparaît qu'en réponse : la base le calcule.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class StudentCreate(BaseModel):
    """Schéma de création d'un élève (POST /api/students)."""
    name: str
    parent_phone: Optional[str] = None
    fees_total: int = Field(default=0, ge=0)
    fees_paid: int = Field(default=0, ge=0)
    branch_id: Optional[int] = None
    class_grade: Optional[str] = None
    report_card_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de l'élève ne peut pas être vide.")
        return v.strip()


class StudentUpdate(BaseModel):
    """Schéma de mise à jour partielle (PUT /api/students/{id}). Les champs absents ne sont pas modifiés."""
    name: Optional[str] = None
    parent_phone: Optional[str] = None
    fees_total: Optional[int] = Field(default=None, ge=0)
    fees_paid: Optional[int] = Field(default=None, ge=0)
    branch_id: Optional[int] = None
    class_grade: Optional[str] = None
    report_card_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le nom de l'élève ne peut pas être vide.")
        return v.strip() if v else v


class StudentResponse(BaseModel):
    """Élève enrichi du nom de sa branche (null si aucune branche)."""
    id: int
    name: str
    parent_phone: Optional[str]
    fees_total: int
    fees_paid: int
    fees_due: int
    branch_id: Optional[int]
    branch_name: Optional[str] = None
    photo_url: Optional[str]
    report_card_url: Optional[str]
    class_grade: Optional[str]

    model_config = {"from_attributes": True}


class StudentCreatedResponse(BaseModel):
    success: bool = True
    id: int
    photo_url: Optional[str]
