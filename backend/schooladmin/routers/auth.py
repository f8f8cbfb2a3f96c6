"""
Router pour la connexion (rôle + identifiants).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from schooladmin.database import get_db
from schooladmin.schemas.auth import LoginRequest, LoginResponse
from schooladmin.services import auth_service

router = APIRouter(prefix="/api", tags=["Authentification"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Identifiants invalides"}},
    summary="Se connecter",
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Vérifie le triplet (nom d'utilisateur, mot de passe, rôle).
    Retourne un descripteur de session minimal, ou 401 si aucun compte ne correspond.
    """
    session = auth_service.authenticate(db, data.username, data.password, data.role.value)
    if session is None:
        return JSONResponse(
            status_code=401,
            content={"success": False, "message": "Identifiants invalides."},
        )
    return LoginResponse(user=session)
