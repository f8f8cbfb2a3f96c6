"""
Configuration partagée pour tous les tests.

Deux styles de fixtures :
- client : get_db remplacé par un MagicMock (aucune base réelle), pour les tests de routers ;
- database / db / live_client : base SQLite en mémoire isolée par test, pour les services
  et les scénarios de bout en bout.
"""

import os
import tempfile

# Avant tout import de l'application : les photos de test vont dans un dossier temporaire
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="schooladmin-uploads-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

from schooladmin.database import Database, get_db  # noqa: E402
from schooladmin.main import create_app  # noqa: E402
from schooladmin.services.schema_service import create_schema  # noqa: E402


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(mock_db):
    """Client HTTP de test avec la BDD mockée."""
    app = create_app(Database("sqlite://"), seed=False)
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def database():
    """Base SQLite en mémoire, schéma créé, sans données initiales."""
    database = Database("sqlite://")
    create_schema(database)
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def live_client(database):
    """Client HTTP branché sur une vraie base en mémoire, avec les données initiales."""
    app = create_app(database, seed=True)
    with TestClient(app) as c:
        yield c
