"""
Dépôt des fichiers envoyés en multipart (photos des élèves).

Le fichier est écrit tel quel dans UPLOAD_DIR sous le nom
<horodatage en ms>-<nom d'origine> et référencé par son chemin web
(/uploads/<nom>). Le contenu n'est jamais inspecté.
"""

import logging
import re
import shutil
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from schooladmin.config import settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_filename(filename: Optional[str]) -> str:
    # Seul le nom de base est gardé : pas de chemin fourni par le client
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


def save_upload(
    upload: UploadFile,
    upload_dir: Optional[str] = None,
    url_prefix: Optional[str] = None,
) -> str:
    """Enregistre le fichier et retourne sa référence stable (chemin web)."""
    directory = Path(upload_dir or settings.UPLOAD_DIR)
    directory.mkdir(parents=True, exist_ok=True)

    stored_name = f"{int(time.time() * 1000)}-{_safe_filename(upload.filename)}"
    with open(directory / stored_name, "wb") as out:
        shutil.copyfileobj(upload.file, out)

    prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")
    logger.info("Fichier déposé : %s", stored_name)
    return f"{prefix}/{stored_name}"


def discard_upload(url: Optional[str], upload_dir: Optional[str] = None) -> None:
    """Supprime le fichier référencé par un chemin web rendu par save_upload."""
    if not url:
        return
    stored = Path(upload_dir or settings.UPLOAD_DIR) / _safe_filename(url.rsplit("/", 1)[-1])
    stored.unlink(missing_ok=True)
    logger.info("Fichier retiré : %s", stored.name)
