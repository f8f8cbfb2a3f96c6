"""
Création du schéma et données initiales.

Les tables sont créées si absentes (create_all est idempotent). Chaque table
est ensuite peuplée uniquement si elle est vide : dès qu'une ligne existe,
la table n'est plus jamais réensemencée, même si cette ligne ne vient pas
du jeu initial.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

import schooladmin.models  # noqa: F401 : enregistre toutes les tables dans Base.metadata
from schooladmin.database import Base, Database
from schooladmin.models.branch import Branch
from schooladmin.models.student import Student
from schooladmin.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_BRANCHES = [
    {"name": "Main Branch", "location": "Chennai"},
    {"name": "North Wing", "location": "Bangalore"},
]

# L'admin n'a pas de branche ; manager et élève sont rattachés à la branche 1
DEFAULT_USERS = [
    {"username": "admin", "password": "Happy@2026", "role": "admin", "branch_id": None},
    {"username": "manager", "password": "manager123", "role": "manager", "branch_id": 1},
    {"username": "student", "password": "student123", "role": "student", "branch_id": 1},
]

DEFAULT_STUDENTS = [
    {"name": "Alice Johnson", "parent_phone": "919876543210", "fees_total": 10000,
     "fees_paid": 5000, "branch_id": 1, "class_grade": "Nursery"},
    {"name": "Bob Smith", "parent_phone": "919876543211", "fees_total": 10000,
     "fees_paid": 10000, "branch_id": 2, "class_grade": "LKG"},
    {"name": "Charlie Brown", "parent_phone": "919876543212", "fees_total": 12000,
     "fees_paid": 10000, "branch_id": 1, "class_grade": "Nursery"},
]

# Ordre d'ensemencement : les branches d'abord (clé étrangère branch_id = 1)
SEED_PLAN = [
    (Branch, DEFAULT_BRANCHES),
    (User, DEFAULT_USERS),
    (Student, DEFAULT_STUDENTS),
]


def create_schema(database: Database) -> None:
    """Crée les tables manquantes. Les tables existantes ne sont pas modifiées."""
    Base.metadata.create_all(bind=database.engine)


def _is_empty(db: Session, model) -> bool:
    count = db.execute(select(func.count()).select_from(model)).scalar() or 0
    return count == 0


def seed_defaults(db: Session) -> list[str]:
    """
    Insère les données initiales dans chaque table vide.
    Retourne la liste des tables ensemencées (vide si tout existait déjà).
    """
    seeded = []
    for model, rows in SEED_PLAN:
        if not _is_empty(db, model):
            continue
        db.add_all([model(**row) for row in rows])
        db.commit()
        seeded.append(model.__tablename__)
        logger.info("Table %s ensemencée : %d lignes", model.__tablename__, len(rows))
    return seeded


def init_db(database: Database, seed: bool = True) -> list[str]:
    """Point d'entrée du démarrage : schéma puis données initiales."""
    create_schema(database)
    if not seed:
        return []

    db = database.session()
    try:
        return seed_defaults(db)
    finally:
        db.close()
