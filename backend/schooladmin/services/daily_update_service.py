"""
Service métier pour le fil des mises à jour quotidiennes.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from schooladmin.models.daily_update import DailyUpdate
from schooladmin.schemas.daily_update import DailyUpdateCreate, DailyUpdateResponse, DailyUpdateUpdate
from schooladmin.services.query_builder import QueryFilters, apply_filters

logger = logging.getLogger(__name__)

FILTER_COLUMNS = {
    "category": DailyUpdate.category,
    "start_date": DailyUpdate.date,
    "end_date": DailyUpdate.date,
}


def get_updates(db: Session, filters: Optional[QueryFilters] = None) -> list[DailyUpdateResponse]:
    """
    Retourne les mises à jour filtrées par catégorie et/ou période [début, fin] inclusive,
    de la plus récente à la plus ancienne.
    """
    stmt = apply_filters(select(DailyUpdate), filters or QueryFilters(), FILTER_COLUMNS)
    updates = db.execute(
        stmt.order_by(DailyUpdate.date.desc(), DailyUpdate.id.desc())
    ).scalars().all()
    return [DailyUpdateResponse.model_validate(u) for u in updates]


def get_update(db: Session, update_id: int) -> Optional[DailyUpdateResponse]:
    update = db.get(DailyUpdate, update_id)
    if update is None:
        return None
    return DailyUpdateResponse.model_validate(update)


def create_update(db: Session, data: DailyUpdateCreate) -> int:
    """Publie une mise à jour. created_at est attribué par le serveur de base de données."""
    update = DailyUpdate(
        date=data.date.isoformat(),
        category=data.category,
        content=data.content,
        created_by=data.created_by,
    )
    db.add(update)
    db.commit()
    db.refresh(update)
    logger.info("Mise à jour publiée : %s (%s, %s)", update.id, update.date, update.category)
    return update.id


def update_update(db: Session, update_id: int, data: DailyUpdateUpdate) -> Optional[DailyUpdateResponse]:
    update = db.get(DailyUpdate, update_id)
    if update is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("date") is not None:
        update_data["date"] = update_data["date"].isoformat()
    for field, value in update_data.items():
        if field in ("date", "content") and value is None:
            continue
        setattr(update, field, value)

    db.commit()
    db.refresh(update)
    return DailyUpdateResponse.model_validate(update)


def delete_update(db: Session, update_id: int) -> bool:
    update = db.get(DailyUpdate, update_id)
    if update is None:
        return False

    db.delete(update)
    db.commit()
    return True
