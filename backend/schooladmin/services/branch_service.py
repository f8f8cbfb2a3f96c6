"""
Service métier pour les branches.
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from schooladmin.models.branch import Branch
from schooladmin.models.student import Student
from schooladmin.models.user import User
from schooladmin.schemas.branch import BranchCreate, BranchResponse, BranchUpdate

logger = logging.getLogger(__name__)


def get_branches(db: Session) -> list[BranchResponse]:
    """Retourne toutes les branches, par ordre de création."""
    branches = db.execute(select(Branch).order_by(Branch.id)).scalars().all()
    return [BranchResponse.model_validate(b) for b in branches]


def get_branch(db: Session, branch_id: int) -> Optional[BranchResponse]:
    branch = db.get(Branch, branch_id)
    if branch is None:
        return None
    return BranchResponse.model_validate(branch)


def create_branch(db: Session, data: BranchCreate) -> int:
    """
    Crée une branche et retourne son identifiant.
    L'unicité du nom est garantie par la contrainte UNIQUE de la table.
    """
    branch = Branch(name=data.name, location=data.location)
    db.add(branch)
    db.commit()
    db.refresh(branch)
    logger.info("Branche créée : %s (%s)", branch.name, branch.id)
    return branch.id


def update_branch(db: Session, branch_id: int, data: BranchUpdate) -> Optional[BranchResponse]:
    """Met à jour les champs fournis d'une branche."""
    branch = db.get(Branch, branch_id)
    if branch is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    # Colonne NOT NULL : un null explicite vaut absence
    if update_data.get("name") is None:
        update_data.pop("name", None)
    for field, value in update_data.items():
        setattr(branch, field, value)

    db.commit()
    db.refresh(branch)
    return BranchResponse.model_validate(branch)


def delete_branch(db: Session, branch_id: int) -> bool:
    """
    Supprime une branche.
    Refusé si des élèves ou des comptes y sont encore rattachés.
    Retourne True si supprimé, False si introuvable.
    """
    branch = db.get(Branch, branch_id)
    if branch is None:
        return False

    nb_students = db.execute(
        select(func.count()).select_from(Student).where(Student.branch_id == branch_id)
    ).scalar() or 0
    nb_users = db.execute(
        select(func.count()).select_from(User).where(User.branch_id == branch_id)
    ).scalar() or 0

    if nb_students or nb_users:
        raise ValueError(
            f"Impossible de supprimer cette branche : {nb_students} élève(s) et "
            f"{nb_users} compte(s) y sont encore rattachés."
        )

    db.delete(branch)
    db.commit()
    logger.info("Branche supprimée : %s", branch_id)
    return True
