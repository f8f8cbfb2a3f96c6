"""
Router pour les élèves.
GET    /api/students?branch_id=<id|all> : liste enrichie du nom de branche
POST   /api/students : création (multipart, photo optionnelle)
PUT    /api/students/{id} : mise à jour partielle (multipart, photo optionnelle, champ clear)
DELETE /api/students/{id} : suppression
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Type, TypeVar

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from schooladmin.database import get_db
from schooladmin.schemas.common import SuccessResponse
from schooladmin.schemas.student import (
    StudentCreate,
    StudentCreatedResponse,
    StudentResponse,
    StudentUpdate,
)
from schooladmin.services import student_service
from schooladmin.services.query_builder import parse_branch_scope
from schooladmin.services.upload_service import discard_upload, save_upload

router = APIRouter(prefix="/api/students", tags=["Élèves"])

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Champs facultatifs qu'un PUT peut remettre à null via le champ multipart "clear"
CLEARABLE_FIELDS = ("parent_phone", "branch_id", "class_grade", "report_card_url")


def _form_to_schema(schema: Type[SchemaT], fields: dict, cleared: Optional[List[str]] = None) -> SchemaT:
    """
    Construit le schéma à partir des champs multipart.
    Un champ absent ou vide est considéré comme non fourni.
    Les champs de `cleared` sont fournis explicitement à null.
    """
    provided = {k: v for k, v in fields.items() if v is not None and v != ""}
    for field in cleared or []:
        if field in provided:
            raise HTTPException(status_code=422, detail=f"Le champ {field} ne peut pas être à la fois fourni et effacé.")
        provided[field] = None
    try:
        return schema(**provided)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


def _parse_clear(clear: Optional[str]) -> List[str]:
    """Lit la liste "clear" (noms séparés par des virgules) et refuse les champs non effaçables."""
    names = [name.strip() for name in (clear or "").split(",") if name.strip()]
    unknown = [name for name in names if name not in CLEARABLE_FIELDS]
    if unknown:
        raise HTTPException(status_code=422, detail=f"Champs non effaçables : {', '.join(unknown)}")
    return names


def _store_photo(photo: Optional[UploadFile]) -> Optional[str]:
    if photo is None or not photo.filename:
        return None
    return save_upload(photo)


@contextmanager
def _stored_photo(photo: Optional[UploadFile]) -> Iterator[Optional[str]]:
    """Dépose la photo ; si l'écriture en base échoue (404 compris), le fichier est retiré."""
    photo_url = _store_photo(photo)
    try:
        yield photo_url
    except Exception:
        discard_upload(photo_url)
        raise


@router.get("", response_model=List[StudentResponse], summary="Lister les élèves")
def list_students(
    branch_id: Optional[str] = Query(None, description="Identifiant de branche ou 'all'"),
    db: Session = Depends(get_db),
):
    """Retourne les élèves avec le nom de leur branche, toutes branches ou une seule."""
    try:
        scope = parse_branch_scope(branch_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return student_service.get_students(db, scope)


@router.get("/{student_id}", response_model=StudentResponse, summary="Détail d'un élève")
def get_student(student_id: int, db: Session = Depends(get_db)):
    student = student_service.get_student(db, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.post("", response_model=StudentCreatedResponse, status_code=201, summary="Créer un élève")
def create_student(
    name: Optional[str] = Form(None),
    parent_phone: Optional[str] = Form(None),
    fees_total: Optional[str] = Form(None),
    fees_paid: Optional[str] = Form(None),
    branch_id: Optional[str] = Form(None),
    class_grade: Optional[str] = Form(None),
    report_card_url: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """
    Crée un élève. Les frais absents valent 0, fees_due est calculé par la base.
    La photo éventuelle est déposée sous /uploads et son chemin est enregistré.
    """
    data = _form_to_schema(StudentCreate, {
        "name": name,
        "parent_phone": parent_phone,
        "fees_total": fees_total,
        "fees_paid": fees_paid,
        "branch_id": branch_id,
        "class_grade": class_grade,
        "report_card_url": report_card_url,
    })
    with _stored_photo(photo) as photo_url:
        student_id = student_service.create_student(db, data, photo_url)
    return StudentCreatedResponse(id=student_id, photo_url=photo_url)


@router.put("/{student_id}", response_model=SuccessResponse, summary="Modifier un élève")
def update_student(
    student_id: int,
    name: Optional[str] = Form(None),
    parent_phone: Optional[str] = Form(None),
    fees_total: Optional[str] = Form(None),
    fees_paid: Optional[str] = Form(None),
    branch_id: Optional[str] = Form(None),
    class_grade: Optional[str] = Form(None),
    report_card_url: Optional[str] = Form(None),
    clear: Optional[str] = Form(None, description="Champs à remettre à null, séparés par des virgules"),
    photo: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """
    Met à jour les champs fournis. Un champ absent ou vide garde sa valeur actuelle.
    Pour remettre à null parent_phone, branch_id, class_grade ou report_card_url,
    les nommer dans clear (ex. clear=branch_id,class_grade).
    Sans nouvelle photo, la photo actuelle est conservée.
    """
    data = _form_to_schema(StudentUpdate, {
        "name": name,
        "parent_phone": parent_phone,
        "fees_total": fees_total,
        "fees_paid": fees_paid,
        "branch_id": branch_id,
        "class_grade": class_grade,
        "report_card_url": report_card_url,
    }, cleared=_parse_clear(clear))
    with _stored_photo(photo) as photo_url:
        if student_service.update_student(db, student_id, data, photo_url) is None:
            raise HTTPException(status_code=404, detail="Élève introuvable.")
    return SuccessResponse()


@router.delete("/{student_id}", response_model=SuccessResponse, summary="Supprimer un élève")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    """Supprime définitivement un élève. Bloqué (409) si un compte y est encore lié."""
    try:
        success = student_service.delete_student(db, student_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return SuccessResponse()
