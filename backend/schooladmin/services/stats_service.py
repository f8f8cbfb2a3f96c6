"""
Statistiques financières : nombre d'élèves, total payé, total restant dû.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from schooladmin.models.student import Student
from schooladmin.schemas.stats import StatsResponse
from schooladmin.services.query_builder import QueryFilters, apply_filters


def get_stats(db: Session, branch_id: Optional[int] = None) -> StatsResponse:
    """
    Agrège les élèves, éventuellement limités à une branche.
    COALESCE garantit des sommes à 0 (jamais null) sur un ensemble vide.
    """
    stmt = apply_filters(
        select(
            func.count(Student.id),
            func.coalesce(func.sum(Student.fees_paid), 0),
            func.coalesce(func.sum(Student.fees_total - Student.fees_paid), 0),
        ),
        QueryFilters(branch_id=branch_id),
        {"branch_id": Student.branch_id},
    )
    total_students, total_paid, total_due = db.execute(stmt).one()

    return StatsResponse(
        total_students=total_students or 0,
        total_paid=total_paid or 0,
        total_due=total_due or 0,
    )
