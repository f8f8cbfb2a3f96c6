"""
Schémas Pydantic de réponse partagés par les routers CRUD.
"""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


class CreatedResponse(BaseModel):
    """Réponse d'une création : identifiant attribué par la base."""
    success: bool = True
    id: int
