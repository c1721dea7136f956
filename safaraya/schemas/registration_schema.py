from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RegistrationCreate(BaseModel):
    """Body of POST /registrations.

    Required strings are declared optional here so that a missing value
    decodes cleanly and is reported as ``<field>_required`` by validation
    instead of as a malformed payload.
    """
    model_config = ConfigDict(strict=True)

    full_name: Optional[str] = None
    job_title: Optional[str] = None
    address_full: Optional[str] = None
    whatsapp_number: Optional[str] = None
    note: Optional[str] = None
    applicant_count: Optional[int] = None
    visa_type: Optional[str] = None


class RegistrationOut(BaseModel):
    registration_id: UUID
    full_name: str
    job_title: Optional[str] = None
    address_full: Optional[str] = None
    whatsapp_number: str
    note: Optional[str] = None
    applicant_count: int
    visa_type: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }


class FileUploaded(BaseModel):
    status: str = "uploaded"
    file_id: UUID
