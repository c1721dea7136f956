from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    """Body of POST /users. Both fields are optional."""
    model_config = ConfigDict(strict=True)

    name: Optional[str] = None
    age: Optional[int] = None


class UserOut(BaseModel):
    id: int
    name: Optional[str] = None
    age: Optional[int] = None
    created_at: datetime
    cv_file_download_url: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class UploadStatus(BaseModel):
    status: str = "uploaded"
