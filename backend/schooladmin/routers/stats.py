"""
Router pour les statistiques du tableau de bord.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from schooladmin.database import get_db
from schooladmin.schemas.stats import StatsResponse
from schooladmin.services import stats_service
from schooladmin.services.query_builder import parse_branch_scope

router = APIRouter(prefix="/api/stats", tags=["Statistiques"])


@router.get("", response_model=StatsResponse, summary="Statistiques des frais")
def get_stats(
    branch_id: Optional[str] = Query(None, description="Identifiant de branche ou 'all'"),
    db: Session = Depends(get_db),
):
    """Nombre d'élèves, total payé et total restant dû, toutes branches ou une seule."""
    try:
        scope = parse_branch_scope(branch_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return stats_service.get_stats(db, scope)
