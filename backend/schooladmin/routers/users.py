"""
Router pour les comptes utilisateurs (admin, manager, élève).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from schooladmin.database import get_db
from schooladmin.schemas.common import CreatedResponse, SuccessResponse
from schooladmin.schemas.user import UserCreate, UserResponse, UserUpdate
from schooladmin.services import user_service

router = APIRouter(prefix="/api/users", tags=["Comptes"])


@router.get("", response_model=List[UserResponse], summary="Lister les comptes")
def list_users(db: Session = Depends(get_db)):
    """Retourne les comptes avec le nom de leur branche et de l'élève lié (null si aucun)."""
    return user_service.get_users(db)


@router.get("/{user_id}", response_model=UserResponse, summary="Détail d'un compte")
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Compte introuvable.")
    return user


@router.post("", response_model=CreatedResponse, status_code=201, summary="Créer un compte")
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    return CreatedResponse(id=user_service.create_user(db, data))


@router.put("/{user_id}", response_model=SuccessResponse, summary="Modifier un compte")
def update_user(user_id: int, data: UserUpdate, db: Session = Depends(get_db)):
    """Sans nouveau mot de passe (absent ou vide), le mot de passe actuel est conservé."""
    if user_service.update_user(db, user_id, data) is None:
        raise HTTPException(status_code=404, detail="Compte introuvable.")
    return SuccessResponse()


@router.delete("/{user_id}", response_model=SuccessResponse, summary="Supprimer un compte")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    try:
        success = user_service.delete_user(db, user_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail="Compte introuvable.")
    return SuccessResponse()
