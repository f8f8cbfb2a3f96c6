"""
Router pour la gestion des branches.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from schooladmin.database import get_db
from schooladmin.schemas.branch import BranchCreate, BranchResponse, BranchUpdate
from schooladmin.schemas.common import CreatedResponse, SuccessResponse
from schooladmin.services import branch_service

router = APIRouter(prefix="/api/branches", tags=["Branches"])


@router.get("", response_model=List[BranchResponse], summary="Lister les branches")
def list_branches(db: Session = Depends(get_db)):
    return branch_service.get_branches(db)


@router.get("/{branch_id}", response_model=BranchResponse, summary="Détail d'une branche")
def get_branch(branch_id: int, db: Session = Depends(get_db)):
    branch = branch_service.get_branch(db, branch_id)
    if branch is None:
        raise HTTPException(status_code=404, detail="Branche introuvable.")
    return branch


@router.post("", response_model=CreatedResponse, status_code=201, summary="Créer une branche")
def create_branch(data: BranchCreate, db: Session = Depends(get_db)):
    """Crée une branche. Un nom déjà utilisé est refusé par la contrainte d'unicité."""
    return CreatedResponse(id=branch_service.create_branch(db, data))


@router.put("/{branch_id}", response_model=SuccessResponse, summary="Modifier une branche")
def update_branch(branch_id: int, data: BranchUpdate, db: Session = Depends(get_db)):
    if branch_service.update_branch(db, branch_id, data) is None:
        raise HTTPException(status_code=404, detail="Branche introuvable.")
    return SuccessResponse()


@router.delete("/{branch_id}", response_model=SuccessResponse, summary="Supprimer une branche")
def delete_branch(branch_id: int, db: Session = Depends(get_db)):
    """
    Supprime une branche définitivement.
    Bloqué (409) si des élèves ou des comptes y sont encore rattachés.
    """
    try:
        success = branch_service.delete_branch(db, branch_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail="Branche introuvable.")
    return SuccessResponse()
