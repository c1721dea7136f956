import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status

from safaraya.api.deps import cv_upload, get_user_repo, user_create_payload, user_id_path
from safaraya.api.responses import attachment_response, build_cv_download_url
from safaraya.core.config import Settings, get_settings
from safaraya.core.exceptions import cv_not_found
from safaraya.repositories.user_repo import UserRepository
from safaraya.schemas.user_schema import UploadStatus, UserCreate, UserOut
from safaraya.services.content_type import PDF
from safaraya.services.ingestion import IngestedFile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserOut], response_model_exclude_none=True)
async def list_users(
        request: Request,
        settings: Settings = Depends(get_settings),
        user_repo: UserRepository = Depends(get_user_repo),
):
    logger.info("getUsers start: remote=%s", request.client.host if request.client else None)
    users = await user_repo.fetch_all()
    for user in users:
        if user.get("has_cv"):
            user["cv_file_download_url"] = build_cv_download_url(request, user["id"], settings)
    logger.info("getUsers returning %d users", len(users))
    return [UserOut(**user) for user in users]


@router.post("", response_model=UserOut, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
async def create_user(
        payload: UserCreate = Depends(user_create_payload),
        user_repo: UserRepository = Depends(get_user_repo),
):
    created = await user_repo.create(payload.model_dump())
    return UserOut(**created)


@router.post("/{user_id}/cv", response_model=UploadStatus, status_code=status.HTTP_201_CREATED)
async def upload_user_cv(
        uid: int = Depends(user_id_path),
        upload: IngestedFile = Depends(cv_upload),
        user_repo: UserRepository = Depends(get_user_repo),
):
    logger.info("uploadUserCV storing: userID=%d size=%d", uid, len(upload.data))
    await user_repo.save_cv(uid, upload.data)
    return UploadStatus()


@router.get("/{user_id}/cv")
async def download_user_cv(
        uid: int = Depends(user_id_path),
        user_repo: UserRepository = Depends(get_user_repo),
):
    logger.info("downloadUserCV start: userID=%d", uid)
    cv_data = await user_repo.get_cv(uid)
    if not cv_data:
        raise cv_not_found()
    return attachment_response(cv_data, PDF, f"cv-{uid}.pdf")
