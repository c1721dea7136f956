import uuid
from http import HTTPStatus

import pytest

REQUIRED = {"full_name": "Sara Ahmadi", "whatsapp_number": "+989121234567"}


def test_create_registration_defaults_applicant_count(client, registration_repo):
    response = client.post("/registrations", json=REQUIRED)

    assert response.status_code == HTTPStatus.CREATED
    body = response.json()
    assert body["applicant_count"] == 1
    assert body["full_name"] == REQUIRED["full_name"]
    assert body["whatsapp_number"] == REQUIRED["whatsapp_number"]
    stored = registration_repo.rows[uuid.UUID(body["registration_id"])]
    assert stored["applicant_count"] == 1


def test_create_registration_omits_absent_optionals(client):
    body = client.post("/registrations", json=REQUIRED).json()
    for field in ("job_title", "address_full", "note", "visa_type"):
        assert field not in body
    assert {"registration_id", "created_at", "updated_at"} <= body.keys()


def test_create_registration_with_all_fields(client):
    payload = {
        **REQUIRED,
        "job_title": "Engineer",
        "address_full": "Tehran, Valiasr St.",
        "note": "family trip",
        "applicant_count": 3,
        "visa_type": "tourist",
    }
    body = client.post("/registrations", json=payload).json()
    for key, value in payload.items():
        assert body[key] == value


@pytest.mark.parametrize("applicant_count", [0, -1])
def test_create_registration_rejects_bad_applicant_count(client, registration_repo, applicant_count):
    response = client.post("/registrations", json={**REQUIRED, "applicant_count": applicant_count})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {"error": "invalid_applicant_count"}
    assert registration_repo.rows == {}
    assert registration_repo.calls == []


@pytest.mark.parametrize("payload, code", [
    ({"whatsapp_number": "0912"}, "full_name_required"),
    ({"full_name": "  ", "whatsapp_number": "0912"}, "full_name_required"),
    ({"full_name": "Reza"}, "whatsapp_number_required"),
    ({"full_name": "Reza", "whatsapp_number": ""}, "whatsapp_number_required"),
])
def test_create_registration_missing_required(client, payload, code):
    response = client.post("/registrations", json=payload)
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {"error": code}


def test_create_registration_invalid_json(client, registration_repo):
    response = client.post("/registrations", content=b"[", headers={"Content-Type": "application/json"})
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {"error": "invalid_json"}
    assert registration_repo.calls == []


def test_get_registration(client):
    created = client.post("/registrations", json={**REQUIRED, "visa_type": "student"}).json()

    response = client.get(f"/registrations/{created['registration_id']}")

    assert response.status_code == HTTPStatus.OK
    assert response.json() == created


def test_get_registration_not_found(client):
    response = client.get(f"/registrations/{uuid.uuid4()}")
    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.json() == {"error": "registration_not_found"}


def test_get_registration_invalid_id(client):
    response = client.get("/registrations/12345")
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {"error": "invalid_registration_id"}
