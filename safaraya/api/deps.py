from typing import AsyncGenerator
from uuid import UUID

from asyncpg import Connection
from fastapi import Depends, Request

from safaraya.core.config import Settings, get_settings
from safaraya.core.deadline import Deadline
from safaraya.db.session import get_pool
from safaraya.repositories.registration_file_repo import RegistrationFileRepository
from safaraya.repositories.registration_repo import RegistrationRepository
from safaraya.repositories.user_repo import UserRepository
from safaraya.schemas.registration_schema import RegistrationCreate
from safaraya.schemas.user_schema import UserCreate
from safaraya.services.ingestion import (
    CV_UPLOAD,
    REGISTRATION_FILE_UPLOAD,
    REGISTRATION_FORM_UPLOAD,
    IngestedFile,
    UploadPolicy,
    ingest_upload,
)
from safaraya.services.validation import (
    parse_user_id,
    parse_uuid,
    validate_registration_create,
    validate_user_create,
)

# Endpoints declare request-derived dependencies (path ids, JSON payloads,
# uploads) before repository dependencies. FastAPI resolves them in that
# order, so the storage deadline and the pool connection only start once the
# request body has been received.


# ---- Path identifiers ---- #

def user_id_path(user_id: str) -> int:
    return parse_user_id(user_id)


def registration_id_path(registration_id: str) -> UUID:
    return parse_uuid(registration_id, "registration_id")


def file_id_path(file_id: str) -> UUID:
    return parse_uuid(file_id, "file_id")


# ---- Request bodies ---- #

async def user_create_payload(request: Request) -> UserCreate:
    return validate_user_create(await request.body())


async def registration_create_payload(request: Request) -> RegistrationCreate:
    return validate_registration_create(await request.body())


def _upload_dependency(policy: UploadPolicy):
    async def dependency(request: Request, settings: Settings = Depends(get_settings)) -> IngestedFile:
        return await ingest_upload(request, policy, settings.MAX_UPLOAD_SIZE, settings.FORM_OVERHEAD_BYTES)

    return dependency


cv_upload = _upload_dependency(CV_UPLOAD)
registration_file_upload = _upload_dependency(REGISTRATION_FILE_UPLOAD)
registration_form_upload = _upload_dependency(REGISTRATION_FORM_UPLOAD)


# ---- Storage ---- #

def get_deadline(settings: Settings = Depends(get_settings)) -> Deadline:
    return Deadline(settings.REQUEST_TIMEOUT_SECONDS)


async def get_db_connection(deadline: Deadline = Depends(get_deadline)) -> AsyncGenerator[Connection, None]:
    pool = await get_pool()
    connection = await deadline.run("acquireConnection", pool.acquire())
    try:
        yield connection
    finally:
        await pool.release(connection)


def get_user_repo(
        conn: Connection = Depends(get_db_connection),
        deadline: Deadline = Depends(get_deadline),
) -> UserRepository:
    return UserRepository(conn, deadline)


def get_registration_repo(
        conn: Connection = Depends(get_db_connection),
        deadline: Deadline = Depends(get_deadline),
) -> RegistrationRepository:
    return RegistrationRepository(conn, deadline)


def get_registration_file_repo(
        conn: Connection = Depends(get_db_connection),
        deadline: Deadline = Depends(get_deadline),
) -> RegistrationFileRepository:
    return RegistrationFileRepository(conn, deadline)
