"""
Tests d'intégration API pour les élèves.
GET    /api/students?branch_id=
POST   /api/students (multipart)
PUT    /api/students/{id} (multipart)
DELETE /api/students/{id}
"""

from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError

from schooladmin.schemas.student import StudentResponse


# --- Helpers ---

def make_student_response(**kwargs) -> StudentResponse:
    fees_total = kwargs.get("fees_total", 10000)
    fees_paid = kwargs.get("fees_paid", 5000)
    return StudentResponse(
        id=kwargs.get("id", 1),
        name=kwargs.get("name", "Alice Johnson"),
        parent_phone=kwargs.get("parent_phone", "919876543210"),
        fees_total=fees_total,
        fees_paid=fees_paid,
        fees_due=fees_total - fees_paid,
        branch_id=kwargs.get("branch_id", 1),
        branch_name=kwargs.get("branch_name", "Main Branch"),
        photo_url=kwargs.get("photo_url", None),
        report_card_url=None,
        class_grade=kwargs.get("class_grade", "Nursery"),
    )


# ============================================================
# GET /api/students
# ============================================================

class TestListStudents:
    def test_toutes_les_branches(self, client):
        with patch("schooladmin.routers.students.student_service.get_students") as mock:
            mock.return_value = [make_student_response()]
            response = client.get("/api/students?branch_id=all")

        assert response.status_code == 200
        assert response.json()[0]["fees_due"] == 5000
        assert mock.call_args.args[1] is None

    def test_sans_parametre(self, client):
        with patch("schooladmin.routers.students.student_service.get_students", return_value=[]) as mock:
            response = client.get("/api/students")

        assert response.status_code == 200
        assert response.json() == []
        assert mock.call_args.args[1] is None

    def test_filtre_branche(self, client):
        with patch("schooladmin.routers.students.student_service.get_students", return_value=[]) as mock:
            client.get("/api/students?branch_id=2")

        assert mock.call_args.args[1] == 2

    def test_branche_invalide(self, client):
        response = client.get("/api/students?branch_id=nord")
        assert response.status_code == 422


# ============================================================
# POST /api/students
# ============================================================

def test_create_student_sans_photo(client):
    with patch("schooladmin.routers.students.student_service.create_student", return_value=7) as mock:
        response = client.post("/api/students", data={
            "name": "Divya",
            "parent_phone": "919800000000",
            "fees_total": "8000",
            "fees_paid": "",
            "branch_id": "1",
            "class_grade": "UKG",
        })

    assert response.status_code == 201
    assert response.json() == {"success": True, "id": 7, "photo_url": None}
    data, photo_url = mock.call_args.args[1], mock.call_args.args[2]
    assert data.fees_total == 8000
    assert data.fees_paid == 0  # champ vide → valeur par défaut
    assert data.branch_id == 1
    assert photo_url is None


def test_create_student_avec_photo(client):
    with patch("schooladmin.routers.students.student_service.create_student", return_value=8), \
         patch("schooladmin.routers.students.save_upload", return_value="/uploads/1700000000000-divya.png") as mock_upload:
        response = client.post(
            "/api/students",
            data={"name": "Divya"},
            files={"photo": ("divya.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 201
    assert response.json()["photo_url"] == "/uploads/1700000000000-divya.png"
    mock_upload.assert_called_once()


def test_create_student_echec_retire_la_photo(client):
    """Si l'insertion échoue, la photo déjà déposée ne reste pas orpheline."""
    with patch("schooladmin.routers.students.student_service.create_student",
               side_effect=SQLAlchemyError("FOREIGN KEY constraint failed")), \
         patch("schooladmin.routers.students.save_upload", return_value="/uploads/1-divya.png"), \
         patch("schooladmin.routers.students.discard_upload") as mock_discard:
        response = client.post(
            "/api/students",
            data={"name": "Divya", "branch_id": "99"},
            files={"photo": ("divya.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 500
    mock_discard.assert_called_once_with("/uploads/1-divya.png")


def test_create_student_nom_manquant(client):
    response = client.post("/api/students", data={"fees_total": "1000"})
    assert response.status_code == 422


def test_create_student_frais_non_numeriques(client):
    response = client.post("/api/students", data={"name": "Divya", "fees_total": "beaucoup"})
    assert response.status_code == 422


# ============================================================
# PUT /api/students/{id}
# ============================================================

def test_update_student_partiel(client):
    with patch("schooladmin.routers.students.student_service.update_student") as mock:
        mock.return_value = make_student_response(fees_paid=9000)
        response = client.put("/api/students/1", data={"fees_paid": "9000"})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    data = mock.call_args.args[2]
    assert data.model_dump(exclude_unset=True) == {"fees_paid": 9000}
    assert mock.call_args.args[3] is None  # pas de nouvelle photo


def test_update_student_introuvable(client):
    with patch("schooladmin.routers.students.student_service.update_student", return_value=None):
        response = client.put("/api/students/99", data={"name": "X"})

    assert response.status_code == 404
    assert "introuvable" in response.json()["detail"].lower()


def test_update_student_introuvable_retire_la_photo(client):
    with patch("schooladmin.routers.students.student_service.update_student", return_value=None), \
         patch("schooladmin.routers.students.save_upload", return_value="/uploads/2-ravi.png"), \
         patch("schooladmin.routers.students.discard_upload") as mock_discard:
        response = client.put(
            "/api/students/99",
            data={"name": "Ravi"},
            files={"photo": ("ravi.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 404
    mock_discard.assert_called_once_with("/uploads/2-ravi.png")


def test_update_student_avec_photo_conservee_en_cas_de_succes(client):
    with patch("schooladmin.routers.students.student_service.update_student") as mock, \
         patch("schooladmin.routers.students.save_upload", return_value="/uploads/2-ravi.png"), \
         patch("schooladmin.routers.students.discard_upload") as mock_discard:
        mock.return_value = make_student_response(photo_url="/uploads/2-ravi.png")
        response = client.put(
            "/api/students/1",
            files={"photo": ("ravi.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 200
    assert mock.call_args.args[3] == "/uploads/2-ravi.png"
    mock_discard.assert_not_called()


def test_update_student_effacer_des_champs(client):
    """Les champs nommés dans clear sont transmis explicitement à null."""
    with patch("schooladmin.routers.students.student_service.update_student") as mock:
        mock.return_value = make_student_response(branch_id=None, branch_name=None, class_grade=None)
        response = client.put("/api/students/1", data={"clear": "branch_id, class_grade", "fees_paid": "9000"})

    assert response.status_code == 200
    data = mock.call_args.args[2]
    assert data.model_dump(exclude_unset=True) == {"fees_paid": 9000, "branch_id": None, "class_grade": None}


def test_update_student_effacer_champ_obligatoire_refuse(client):
    response = client.put("/api/students/1", data={"clear": "name"})

    assert response.status_code == 422
    assert "name" in response.json()["detail"]


def test_update_student_champ_fourni_et_efface_refuse(client):
    response = client.put("/api/students/1", data={"branch_id": "2", "clear": "branch_id"})

    assert response.status_code == 422


# ============================================================
# DELETE /api/students/{id}
# ============================================================

def test_delete_student_succes(client):
    with patch("schooladmin.routers.students.student_service.delete_student", return_value=True):
        response = client.delete("/api/students/1")
    assert response.status_code == 200


def test_delete_student_introuvable(client):
    with patch("schooladmin.routers.students.student_service.delete_student", return_value=False):
        response = client.delete("/api/students/1")
    assert response.status_code == 404


def test_delete_student_lie_a_un_compte(client):
    with patch("schooladmin.routers.students.student_service.delete_student") as mock:
        mock.side_effect = ValueError("Impossible de supprimer cet élève : 1 compte(s) y sont encore liés.")
        response = client.delete("/api/students/1")
    assert response.status_code == 409
