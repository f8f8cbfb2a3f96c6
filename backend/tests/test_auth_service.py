"""
Tests de la vérification des identifiants.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from schooladmin.services.auth_service import authenticate
from schooladmin.services.schema_service import seed_defaults


@pytest.fixture
def seeded(db):
    seed_defaults(db)
    return db


def test_admin_par_defaut(seeded):
    session = authenticate(seeded, "admin", "Happy@2026", "admin")

    assert session is not None
    assert session.username == "admin"
    assert session.role == "admin"
    assert session.branch_id is None
    assert session.model_dump().keys() == {"id", "username", "role", "branch_id"}


def test_mauvais_mot_de_passe_refuse(seeded):
    assert authenticate(seeded, "admin", "wrong", "admin") is None


def test_mauvais_role_refuse(seeded):
    """Le rôle fait partie du triplet comparé."""
    assert authenticate(seeded, "admin", "Happy@2026", "manager") is None


def test_comparaison_exacte_sensible_a_la_casse(seeded):
    assert authenticate(seeded, "Admin", "Happy@2026", "admin") is None


def test_manager_rattache_a_la_branche_1(seeded):
    session = authenticate(seeded, "manager", "manager123", "manager")
    assert session.branch_id == 1


def test_erreur_de_stockage_propagee():
    """Une panne de base n'est pas confondue avec un refus d'identifiants."""
    db = MagicMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))

    with pytest.raises(OperationalError):
        authenticate(db, "admin", "Happy@2026", "admin")
