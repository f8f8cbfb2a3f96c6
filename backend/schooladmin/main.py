"""
Point d'entrée principal de l'API d'administration scolaire.
Démarrage : uvicorn schooladmin.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

import schooladmin.models  # noqa: F401 : enregistre tous les modèles dans Base.metadata avant les routers
from schooladmin.config import settings
from schooladmin.database import Database
from schooladmin.routers import auth, branches, stats, students, updates, users
from schooladmin.services.schema_service import init_db

logger = logging.getLogger(__name__)


def create_app(database: Optional[Database] = None, seed: Optional[bool] = None) -> FastAPI:
    """
    Construit l'application autour d'une poignée de stockage explicite.
    Sans argument, la base est celle de DATABASE_URL.
    """
    database = database or Database(settings.DATABASE_URL)
    seed = settings.SEED_ON_STARTUP if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Cycle de vie : crée le schéma et les données initiales au démarrage."""
        logging.getLogger("schooladmin").setLevel(settings.LOG_LEVEL.upper())
        seeded = init_db(app.state.database, seed=seed)
        if seeded:
            logger.info("Données initiales insérées : %s", ", ".join(seeded))
        yield
        app.state.database.dispose()

    app = FastAPI(
        title="School Admin API",
        description="API d'administration multi-branches : élèves, frais, comptes et mises à jour quotidiennes",
        version="0.1.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    app.include_router(auth.router)
    app.include_router(branches.router)
    app.include_router(students.router)
    app.include_router(users.router)
    app.include_router(stats.router)
    app.include_router(updates.router)

    # Photos déposées par l'upload multipart
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Erreur de stockage (contrainte, connexion...) : 500 avec le message du moteur."""
        logger.error("Erreur de stockage sur %s %s : %s", request.method, request.url.path, exc, exc_info=True)
        message = str(getattr(exc, "orig", None) or exc)
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
        passe bien par CORSMiddleware (qui injecte les headers CORS).
        """
        logger.error("Exception non gérée : %s", exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Une erreur interne est survenue."},
        )

    @app.get("/api/health", tags=["Santé"])
    def health_check():
        """Vérifie que l'API est opérationnelle."""
        return {"status": "ok", "service": "School Admin API", "version": "0.1.0"}

    return app


app = create_app()
