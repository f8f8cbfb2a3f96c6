"""
Tests des statistiques financières.
"""

from schooladmin.services.schema_service import seed_defaults
from schooladmin.services.stats_service import get_stats


def test_stats_base_vide(db):
    """Ensemble vide : des zéros, jamais null."""
    stats = get_stats(db)
    assert stats.model_dump() == {"total_students": 0, "total_paid": 0, "total_due": 0}


def test_stats_toutes_branches(db):
    seed_defaults(db)

    stats = get_stats(db)

    assert stats.total_students == 3
    assert stats.total_paid == 25000
    assert stats.total_due == 7000


def test_stats_par_branche(db):
    seed_defaults(db)

    main = get_stats(db, 1)
    north = get_stats(db, 2)

    assert (main.total_students, main.total_paid, main.total_due) == (2, 15000, 7000)
    assert (north.total_students, north.total_paid, north.total_due) == (1, 10000, 0)


def test_stats_branche_sans_eleve(db):
    seed_defaults(db)

    stats = get_stats(db, 999)

    assert stats.model_dump() == {"total_students": 0, "total_paid": 0, "total_due": 0}
