"""
Service métier pour les comptes utilisateurs.

Les mots de passe sont stockés et comparés en clair (comportement historique
conservé, voir auth_service).
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from schooladmin.models.branch import Branch
from schooladmin.models.daily_update import DailyUpdate
from schooladmin.models.student import Student
from schooladmin.models.user import User
from schooladmin.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)


def _enriched_select():
    """Comptes + noms de branche et d'élève liés, null si la clé étrangère est vide."""
    return (
        select(User, Branch.name.label("branch_name"), Student.name.label("student_name"))
        .outerjoin(Branch, User.branch_id == Branch.id)
        .outerjoin(Student, User.student_id == Student.id)
    )


def get_users(db: Session) -> list[UserResponse]:
    rows = db.execute(_enriched_select().order_by(User.id)).all()
    return [_to_response(*row) for row in rows]


def get_user(db: Session, user_id: int) -> Optional[UserResponse]:
    row = db.execute(_enriched_select().where(User.id == user_id)).first()
    if row is None:
        return None
    return _to_response(*row)


def create_user(db: Session, data: UserCreate) -> int:
    """Crée un compte et retourne son identifiant. Le nom d'utilisateur est UNIQUE en base."""
    user = User(
        username=data.username,
        password=data.password,
        role=data.role.value,
        branch_id=data.branch_id,
        student_id=data.student_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Compte créé : %s (%s, rôle %s)", user.username, user.id, user.role)
    return user.id


def update_user(db: Session, user_id: int, data: UserUpdate) -> Optional[UserResponse]:
    """
    Met à jour les champs fournis d'un compte.
    Un mot de passe absent ou vide laisse le mot de passe stocké inchangé.
    """
    user = db.get(User, user_id)
    if user is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if not update_data.get("password"):
        update_data.pop("password", None)
    # Colonnes NOT NULL : un null explicite vaut absence
    for field in ("username", "role"):
        if update_data.get(field) is None:
            update_data.pop(field, None)
    if "role" in update_data:
        update_data["role"] = update_data["role"].value

    for field, value in update_data.items():
        setattr(user, field, value)

    db.commit()
    return get_user(db, user_id)


def delete_user(db: Session, user_id: int) -> bool:
    """
    Supprime un compte.
    Refusé si le compte est l'auteur de mises à jour quotidiennes.
    """
    user = db.get(User, user_id)
    if user is None:
        return False

    nb_updates = db.execute(
        select(func.count()).select_from(DailyUpdate).where(DailyUpdate.created_by == user_id)
    ).scalar() or 0
    if nb_updates:
        raise ValueError(
            f"Impossible de supprimer ce compte : il est l'auteur de {nb_updates} mise(s) à jour."
        )

    db.delete(user)
    db.commit()
    logger.info("Compte supprimé : %s", user_id)
    return True


def _to_response(user: User, branch_name: Optional[str], student_name: Optional[str]) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        role=user.role,
        branch_id=user.branch_id,
        student_id=user.student_id,
        branch_name=branch_name if user.branch_id is not None else None,
        student_name=student_name if user.student_id is not None else None,
    )
