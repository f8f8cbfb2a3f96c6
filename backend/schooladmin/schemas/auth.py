"""
Schémas Pydantic pour la connexion.
"""

from typing import Optional

from pydantic import BaseModel

from schooladmin.schemas.user import Role


class LoginRequest(BaseModel):
    role: Role
    username: str
    password: str


class SessionInfo(BaseModel):
    """Descripteur de session minimal renvoyé après une connexion réussie."""
    id: int
    username: str
    role: str
    branch_id: Optional[int]

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    success: bool = True
    user: SessionInfo
