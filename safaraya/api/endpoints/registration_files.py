import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from safaraya.api.deps import file_id_path, get_registration_file_repo, registration_form_upload
from safaraya.api.responses import attachment_response
from safaraya.core.exceptions import file_not_found
from safaraya.repositories.registration_file_repo import RegistrationFileRepository
from safaraya.schemas.registration_schema import FileUploaded
from safaraya.services.content_type import detect_content_type
from safaraya.services.ingestion import IngestedFile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/registration-files", tags=["registration-files"])


@router.post("", response_model=FileUploaded, status_code=status.HTTP_201_CREATED)
async def upload_file(
        upload: IngestedFile = Depends(registration_form_upload),
        file_repo: RegistrationFileRepository = Depends(get_registration_file_repo),
):
    logger.info("registrationFiles storing: registrationID=%s size=%d", upload.registration_id, len(upload.data))
    file_id = await file_repo.save(upload.registration_id, upload.file_type, upload.filename, upload.data)
    return FileUploaded(file_id=file_id)


@router.get("/{file_id}")
async def download_file(
        fid: UUID = Depends(file_id_path),
        file_repo: RegistrationFileRepository = Depends(get_registration_file_repo),
):
    logger.info("downloadRegistrationFile start: fileID=%s", fid)
    registration_file = await file_repo.get_by_id(fid)
    data = registration_file["file"]
    if not data:
        raise file_not_found()
    return attachment_response(
        data,
        detect_content_type(data),
        registration_file["filename"],
        registration_file["file_size"],
    )
