"""
Service métier pour les élèves : CRUD et lecture enrichie du nom de branche.
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from schooladmin.models.branch import Branch
from schooladmin.models.student import Student
from schooladmin.models.user import User
from schooladmin.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from schooladmin.services.query_builder import QueryFilters, apply_filters

logger = logging.getLogger(__name__)


def _enriched_select():
    """Élèves + nom de branche. LEFT JOIN : un élève sans branche reste listé."""
    return (
        select(Student, Branch.name.label("branch_name"))
        .outerjoin(Branch, Student.branch_id == Branch.id)
    )


def get_students(db: Session, branch_id: Optional[int] = None) -> list[StudentResponse]:
    """Retourne les élèves, éventuellement limités à une branche."""
    stmt = apply_filters(
        _enriched_select(),
        QueryFilters(branch_id=branch_id),
        {"branch_id": Student.branch_id},
    ).order_by(Student.id)

    rows = db.execute(stmt).all()
    return [_to_response(student, branch_name) for student, branch_name in rows]


def get_student(db: Session, student_id: int) -> Optional[StudentResponse]:
    row = db.execute(_enriched_select().where(Student.id == student_id)).first()
    if row is None:
        return None
    student, branch_name = row
    return _to_response(student, branch_name)


def create_student(db: Session, data: StudentCreate, photo_url: Optional[str] = None) -> int:
    """
    Crée un élève et retourne son identifiant.
    photo_url est la référence produite par l'upload, stockée telle quelle.
    """
    student = Student(**data.model_dump(), photo_url=photo_url)
    db.add(student)
    db.commit()
    db.refresh(student)
    logger.info("Élève créé : %s (%s)", student.name, student.id)
    return student.id


def update_student(
    db: Session,
    student_id: int,
    data: StudentUpdate,
    photo_url: Optional[str] = None,
) -> Optional[StudentResponse]:
    """
    Met à jour les champs fournis d'un élève.
    La photo n'est remplacée que si un nouvel upload est fourni.
    """
    student = db.get(Student, student_id)
    if student is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    # Colonnes NOT NULL : un null explicite vaut absence
    for field in ("name", "fees_total", "fees_paid"):
        if update_data.get(field) is None:
            update_data.pop(field, None)
    for field, value in update_data.items():
        setattr(student, field, value)
    if photo_url is not None:
        student.photo_url = photo_url

    db.commit()
    return get_student(db, student_id)


def delete_student(db: Session, student_id: int) -> bool:
    """
    Supprime définitivement un élève.
    Refusé si un compte utilisateur y est encore lié.
    Retourne True si supprimé, False si introuvable.
    """
    student = db.get(Student, student_id)
    if student is None:
        return False

    nb_users = db.execute(
        select(func.count()).select_from(User).where(User.student_id == student_id)
    ).scalar() or 0
    if nb_users:
        raise ValueError(
            f"Impossible de supprimer cet élève : {nb_users} compte(s) y sont encore liés."
        )

    db.delete(student)
    db.commit()
    logger.info("Élève supprimé : %s", student_id)
    return True


def _to_response(student: Student, branch_name: Optional[str]) -> StudentResponse:
    return StudentResponse(
        id=student.id,
        name=student.name,
        parent_phone=student.parent_phone,
        fees_total=student.fees_total,
        fees_paid=student.fees_paid,
        fees_due=student.fees_due,
        branch_id=student.branch_id,
        branch_name=branch_name if student.branch_id is not None else None,
        photo_url=student.photo_url,
        report_card_url=student.report_card_url,
        class_grade=student.class_grade,
    )
