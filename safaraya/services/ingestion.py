"""
Multipart upload ingestion shared by the CV and registration-file endpoints.

Every upload goes through :func:`ingest_upload` with a per-endpoint
:class:`UploadPolicy`. The file bytes are buffered in memory, bounded by the
configured ceiling, before anything is handed to a repository.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Request
from starlette.types import Message, Receive
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from safaraya.core.exceptions import (
    empty_file,
    file_required,
    file_too_large,
    invalid_file_type,
    invalid_form,
    missing_field,
)
from safaraya.services.content_type import PDF, detect_content_type
from safaraya.services.validation import parse_uuid

logger = logging.getLogger(__name__)

FILE_FIELD = "file"


@dataclass(frozen=True)
class UploadPolicy:
    name: str
    require_pdf: bool = False
    require_file_type: bool = False
    require_registration_id: bool = False


CV_UPLOAD = UploadPolicy("uploadUserCV", require_pdf=True)
REGISTRATION_FILE_UPLOAD = UploadPolicy("uploadRegistrationFile", require_file_type=True)
REGISTRATION_FORM_UPLOAD = UploadPolicy(
    "registrationFiles", require_file_type=True, require_registration_id=True
)


@dataclass
class IngestedFile:
    data: bytes
    filename: str
    file_type: Optional[str] = None
    registration_id: Optional[UUID] = None


def _check_request_headers(request: Request, policy: UploadPolicy, max_size: int, overhead: int) -> None:
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        logger.info("%s: not a multipart request: content_type=%r", policy.name, content_type)
        raise invalid_form()

    declared = request.headers.get("content-length")
    if declared is None:
        return
    try:
        declared_length = int(declared)
    except ValueError:
        raise invalid_form()
    if declared_length > max_size + overhead:
        logger.info("%s: request too large: %d bytes", policy.name, declared_length)
        raise file_too_large()


def _limited_receive(receive: Receive, policy: UploadPolicy, limit: int) -> Receive:
    """Wrap an ASGI receive so a body without a usable Content-Length is still capped."""
    received = 0

    async def limited() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > limit:
                logger.info("%s: request body exceeded %d bytes", policy.name, limit)
                raise file_too_large()
        return message

    return limited


def _required_text(form: FormData, field: str) -> str:
    value = form.get(field)
    if not isinstance(value, str) or not value.strip():
        raise missing_field(field)
    return value.strip()


async def _read_file(upload: UploadFile, policy: UploadPolicy, max_size: int) -> bytes:
    if upload.size is not None and upload.size > max_size:
        logger.info("%s: file too large: %d bytes", policy.name, upload.size)
        raise file_too_large()

    # read one byte past the ceiling so an understated size is still caught
    data = await upload.read(max_size + 1)
    if len(data) > max_size:
        logger.info("%s: file exceeded limit during read: %d bytes", policy.name, len(data))
        raise file_too_large()
    if not data:
        raise empty_file()
    return data


def _check_pdf(data: bytes, declared: Optional[str], policy: UploadPolicy) -> None:
    detected = detect_content_type(data)
    if detected != PDF and declared != PDF:
        logger.info("%s: invalid mime type: detected=%s header=%s", policy.name, detected, declared)
        raise invalid_file_type()


async def ingest_upload(
    request: Request,
    policy: UploadPolicy,
    max_size: int,
    overhead: int = 1024,
) -> IngestedFile:
    logger.info("%s start: content_length=%s", policy.name, request.headers.get("content-length"))
    _check_request_headers(request, policy, max_size, overhead)

    limited = Request(request.scope, _limited_receive(request.receive, policy, max_size + overhead))
    try:
        form = await limited.form()
    except (MultiPartException, StarletteHTTPException) as exc:
        logger.info("%s: parse form failed: %s", policy.name, exc)
        raise invalid_form()

    try:
        registration_id = None
        if policy.require_registration_id:
            registration_id = parse_uuid(_required_text(form, "registration_id"), "registration_id")

        file_type = None
        if policy.require_file_type:
            file_type = _required_text(form, "file_type")

        upload = form.get(FILE_FIELD)
        if not isinstance(upload, UploadFile):
            logger.info("%s: missing file part", policy.name)
            raise file_required()

        data = await _read_file(upload, policy, max_size)
        declared = upload.headers.get("content-type") if upload.headers else None
        if policy.require_pdf:
            _check_pdf(data, declared, policy)

        return IngestedFile(
            data=data,
            filename=upload.filename or "",
            file_type=file_type,
            registration_id=registration_id,
        )
    finally:
        await form.close()
