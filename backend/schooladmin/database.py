"""
Connexion à la base de données via SQLAlchemy.

Le moteur et la fabrique de sessions sont encapsulés dans un objet Database
construit explicitement et attaché à l'application (app.state.database).
Les tests peuvent ainsi créer une base SQLite en mémoire isolée par test.
"""

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite n'applique les clés étrangères qu'avec PRAGMA foreign_keys=ON, par connexion."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Poignée de stockage : un moteur SQLAlchemy et sa fabrique de sessions."""

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        if url.startswith("sqlite"):
            # FastAPI exécute les endpoints synchrones dans un pool de threads
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                # Une seule connexion partagée, sinon chaque connexion voit une base vide
                engine_kwargs.setdefault("poolclass", StaticPool)

        self.engine = create_engine(url, **engine_kwargs)

        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    """Dépendance FastAPI : fournit une session BDD et la ferme après usage."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
