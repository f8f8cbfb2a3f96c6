"""
Schéma Pydantic pour les statistiques financières du tableau de bord.
"""

from pydantic import BaseModel


class StatsResponse(BaseModel):
    total_students: int = 0
    total_paid: int = 0
    total_due: int = 0
