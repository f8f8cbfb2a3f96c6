"""
Schémas Pydantic pour les comptes utilisateurs.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class Role(str, Enum):
    """Rôles acceptés à l'entrée de l'API (stockés en texte en base)."""
    ADMIN = "admin"
    MANAGER = "manager"
    STUDENT = "student"


class UserCreate(BaseModel):
    username: str
    password: str
    role: Role
    branch_id: Optional[int] = None
    student_id: Optional[int] = None

    @field_validator("username", "password")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v


class UserUpdate(BaseModel):
    """
    Mise à jour partielle d'un compte.
    Un mot de passe absent ou vide conserve le mot de passe existant.
    """
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None
    branch_id: Optional[int] = None
    student_id: Optional[int] = None

    @field_validator("username")
    @classmethod
    def username_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le nom d'utilisateur ne peut pas être vide.")
        return v


class UserResponse(BaseModel):
    """Compte enrichi des noms de branche et d'élève liés. Le mot de passe n'est jamais renvoyé."""
    id: int
    username: str
    role: str
    branch_id: Optional[int]
    student_id: Optional[int]
    branch_name: Optional[str] = None
    student_name: Optional[str] = None

    model_config = {"from_attributes": True}
