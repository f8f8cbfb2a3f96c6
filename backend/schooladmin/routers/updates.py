"""
Router pour le fil des mises à jour quotidiennes.
"""

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from schooladmin.database import get_db
from schooladmin.schemas.common import CreatedResponse, SuccessResponse
from schooladmin.schemas.daily_update import DailyUpdateCreate, DailyUpdateResponse, DailyUpdateUpdate
from schooladmin.services import daily_update_service
from schooladmin.services.query_builder import QueryFilters

router = APIRouter(prefix="/api/updates", tags=["Mises à jour"])


@router.get("", response_model=List[DailyUpdateResponse], summary="Lister les mises à jour")
def list_updates(
    category: Optional[str] = Query(None),
    start_date: Optional[dt.date] = Query(None, alias="startDate"),
    end_date: Optional[dt.date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """
    Retourne les mises à jour, de la plus récente à la plus ancienne.
    Filtres optionnels : catégorie (classe) et période [startDate, endDate] inclusive.
    """
    filters = QueryFilters(category=category, start_date=start_date, end_date=end_date)
    return daily_update_service.get_updates(db, filters)


@router.post("", response_model=CreatedResponse, status_code=201, summary="Publier une mise à jour")
def create_update(data: DailyUpdateCreate, db: Session = Depends(get_db)):
    return CreatedResponse(id=daily_update_service.create_update(db, data))


@router.put("/{update_id}", response_model=SuccessResponse, summary="Modifier une mise à jour")
def update_update(update_id: int, data: DailyUpdateUpdate, db: Session = Depends(get_db)):
    if daily_update_service.update_update(db, update_id, data) is None:
        raise HTTPException(status_code=404, detail="Mise à jour introuvable.")
    return SuccessResponse()


@router.delete("/{update_id}", response_model=SuccessResponse, summary="Supprimer une mise à jour")
def delete_update(update_id: int, db: Session = Depends(get_db)):
    if not daily_update_service.delete_update(db, update_id):
        raise HTTPException(status_code=404, detail="Mise à jour introuvable.")
    return SuccessResponse()
