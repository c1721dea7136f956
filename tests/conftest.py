"""Shared test fixtures.

Environment variables are set before any application import so that
``Settings()`` can be built without a real database. Endpoint tests run the
FastAPI app with the repository dependencies replaced by in-memory versions;
the lifespan (and therefore the asyncpg pool) is never started.
"""
import os

os.environ.update({
    "DB_HOST": "localhost",
    "DB_PORT": "5432",
    "DB_NAME": "safaraya_test",
    "DB_USER": "postgres",
    "DB_PASS": "postgres",
    "SERVICE_HOST": "",
})

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from safaraya.api.deps import get_registration_file_repo, get_registration_repo, get_user_repo
from safaraya.core.config import Settings, get_settings
from safaraya.core.exceptions import file_not_found, registration_not_found, user_not_found
from safaraya.db import nullable
from safaraya.main import app
from safaraya.repositories.registration_repo import DEFAULT_APPLICANT_COUNT, REGISTRATION_NULLABLE
from safaraya.repositories.user_repo import USER_NULLABLE

PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"


def _now():
    return datetime.now(timezone.utc)


class InMemoryUserRepository:
    def __init__(self):
        self.rows: dict[int, dict] = {}
        self.next_id = 1
        self.calls: list[str] = []

    async def fetch_all(self):
        self.calls.append("fetch_all")
        return [
            nullable.decode(
                {
                    "id": row["id"],
                    "name": row["name"],
                    "age": row["age"],
                    "created_at": row["created_at"],
                    "has_cv": row["cv_file"] is not None,
                },
                USER_NULLABLE,
            )
            for row in self.rows.values()
        ]

    async def create(self, user_in):
        self.calls.append("create")
        name, age = nullable.encode(user_in, USER_NULLABLE)
        row = {"id": self.next_id, "name": name, "age": age, "cv_file": None, "created_at": _now()}
        self.rows[row["id"]] = row
        self.next_id += 1
        user = nullable.decode({k: v for k, v in row.items() if k != "cv_file"}, USER_NULLABLE)
        user["has_cv"] = False
        return user

    async def save_cv(self, user_id, cv_data):
        self.calls.append("save_cv")
        if user_id not in self.rows:
            raise user_not_found()
        self.rows[user_id]["cv_file"] = cv_data

    async def get_cv(self, user_id):
        self.calls.append("get_cv")
        if user_id not in self.rows:
            raise user_not_found()
        return self.rows[user_id]["cv_file"]


class InMemoryRegistrationRepository:
    def __init__(self):
        self.rows: dict[uuid.UUID, dict] = {}
        self.calls: list[str] = []

    async def create(self, registration_in):
        self.calls.append("create")
        applicant_count = registration_in.get("applicant_count")
        if applicant_count is None:
            applicant_count = DEFAULT_APPLICANT_COUNT
        job_title, address_full, note, visa_type = nullable.encode(registration_in, REGISTRATION_NULLABLE)
        now = _now()
        row = {
            "registration_id": uuid.uuid4(),
            "full_name": registration_in["full_name"],
            "job_title": job_title,
            "address_full": address_full,
            "whatsapp_number": registration_in["whatsapp_number"],
            "note": note,
            "applicant_count": applicant_count,
            "visa_type": visa_type,
            "created_at": now,
            "updated_at": now,
        }
        self.rows[row["registration_id"]] = row
        return nullable.decode(row, REGISTRATION_NULLABLE)

    async def get_by_id(self, registration_id):
        self.calls.append("get_by_id")
        if registration_id not in self.rows:
            raise registration_not_found()
        return nullable.decode(self.rows[registration_id], REGISTRATION_NULLABLE)


class InMemoryRegistrationFileRepository:
    def __init__(self, registrations: InMemoryRegistrationRepository):
        self.registrations = registrations
        self.rows: dict[uuid.UUID, dict] = {}
        self.calls: list[str] = []

    async def save(self, registration_id, file_type, filename, data):
        self.calls.append("save")
        if registration_id not in self.registrations.rows:
            raise registration_not_found()
        file_id = uuid.uuid4()
        self.rows[file_id] = {
            "file_id": file_id,
            "registration_id": registration_id,
            "file_type": file_type,
            "filename": filename,
            "file_size": len(data),
            "file": data,
            "created_at": _now(),
        }
        return file_id

    async def get_by_id(self, file_id):
        self.calls.append("get_by_id")
        if file_id not in self.rows:
            raise file_not_found()
        return dict(self.rows[file_id])


@pytest.fixture()
def settings():
    return Settings(SERVICE_HOST="")


@pytest.fixture()
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture()
def registration_repo():
    return InMemoryRegistrationRepository()


@pytest.fixture()
def file_repo(registration_repo):
    return InMemoryRegistrationFileRepository(registration_repo)


@pytest.fixture()
def client(settings, user_repo, registration_repo, file_repo):
    """TestClient wired to the in-memory repositories."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_user_repo] = lambda: user_repo
    app.dependency_overrides[get_registration_repo] = lambda: registration_repo
    app.dependency_overrides[get_registration_file_repo] = lambda: file_repo

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture()
def registration(registration_repo):
    """A stored registration row, created directly in the repository."""
    row = {
        "registration_id": uuid.uuid4(),
        "full_name": "Sara Ahmadi",
        "job_title": None,
        "address_full": None,
        "whatsapp_number": "+989121234567",
        "note": None,
        "applicant_count": 2,
        "visa_type": "tourist",
        "created_at": _now(),
        "updated_at": _now(),
    }
    registration_repo.rows[row["registration_id"]] = row
    return row
