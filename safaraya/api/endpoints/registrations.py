import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from safaraya.api.deps import (
    get_registration_file_repo,
    get_registration_repo,
    registration_create_payload,
    registration_file_upload,
    registration_id_path,
)
from safaraya.repositories.registration_file_repo import RegistrationFileRepository
from safaraya.repositories.registration_repo import RegistrationRepository
from safaraya.schemas.registration_schema import FileUploaded, RegistrationCreate, RegistrationOut
from safaraya.services.ingestion import IngestedFile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.post("", response_model=RegistrationOut, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
async def create_registration(
        payload: RegistrationCreate = Depends(registration_create_payload),
        registration_repo: RegistrationRepository = Depends(get_registration_repo),
):
    created = await registration_repo.create(payload.model_dump())
    return RegistrationOut(**created)


@router.get("/{registration_id}", response_model=RegistrationOut, response_model_exclude_none=True)
async def get_registration(
        reg_id: UUID = Depends(registration_id_path),
        registration_repo: RegistrationRepository = Depends(get_registration_repo),
):
    logger.info("getRegistration start: registrationID=%s", reg_id)
    registration = await registration_repo.get_by_id(reg_id)
    return RegistrationOut(**registration)


@router.post("/{registration_id}/files", response_model=FileUploaded, status_code=status.HTTP_201_CREATED)
async def upload_registration_file(
        reg_id: UUID = Depends(registration_id_path),
        upload: IngestedFile = Depends(registration_file_upload),
        file_repo: RegistrationFileRepository = Depends(get_registration_file_repo),
):
    logger.info("uploadRegistrationFile storing: registrationID=%s size=%d", reg_id, len(upload.data))
    file_id = await file_repo.save(reg_id, upload.file_type, upload.filename, upload.data)
    return FileUploaded(file_id=file_id)
