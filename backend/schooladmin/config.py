"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Base de données (SQLite par défaut, PostgreSQL via postgresql://...)
    DATABASE_URL: str = "sqlite:///./school.db"

    # Photos des élèves déposées par l'upload multipart, servies sous /uploads
    UPLOAD_DIR: str = "public/uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"

    # Données initiales (branches, comptes, élèves) si les tables sont vides
    SEED_ON_STARTUP: bool = True

    # CORS
    CORS_ORIGINS: List[str] = [
        "https://happydayplayschools.in",
        "https://www.happydayplayschools.in",
    ]

    # Journalisation
    LOG_LEVEL: str = "INFO"

    # Environnement
    ENV: str = "development"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
