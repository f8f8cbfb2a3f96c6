"""
Vérification des identifiants (rôle + nom d'utilisateur + mot de passe).

Comparaison exacte en clair, sans hachage ni limitation de tentatives :
comportement historique conservé tel quel. Une réécriture de production
devra hacher les mots de passe.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from schooladmin.models.user import User
from schooladmin.schemas.auth import SessionInfo

logger = logging.getLogger(__name__)


def authenticate(db: Session, username: str, password: str, role: str) -> Optional[SessionInfo]:
    """
    Retourne le descripteur de session si un compte correspond aux trois champs,
    None sinon (identifiants refusés). Les erreurs de stockage sont propagées.
    """
    user = db.execute(
        select(User).where(
            User.username == username,
            User.password == password,
            User.role == role,
        )
    ).scalars().first()

    if user is None:
        logger.info("Connexion refusée pour '%s' (rôle %s)", username, role)
        return None

    return SessionInfo.model_validate(user)
