"""
Validation and normalization of request payloads and path identifiers.
"""
from typing import Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from safaraya.core.exceptions import (
    invalid_identifier,
    invalid_payload,
    invalid_value,
    missing_field,
)
from safaraya.schemas.registration_schema import RegistrationCreate
from safaraya.schemas.user_schema import UserCreate

ModelT = TypeVar("ModelT", bound=BaseModel)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def decode_payload(model: Type[ModelT], body: bytes) -> ModelT:
    """Decode a JSON body into ``model``; any shape or type error is invalid_json."""
    try:
        return model.model_validate_json(body or b"")
    except PydanticValidationError:
        raise invalid_payload()


def require_text(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise missing_field(name)
    return value


def check_minimum(value: Optional[int], name: str, minimum: int) -> Optional[int]:
    # absent passes; the storage default is applied later
    if value is not None and value < minimum:
        raise invalid_value(name)
    return value


def validate_user_create(body: bytes) -> UserCreate:
    return decode_payload(UserCreate, body)


def validate_registration_create(body: bytes) -> RegistrationCreate:
    payload = decode_payload(RegistrationCreate, body)
    require_text(payload.full_name, "full_name")
    require_text(payload.whatsapp_number, "whatsapp_number")
    check_minimum(payload.applicant_count, "applicant_count", 1)
    return payload


def parse_user_id(raw: str) -> int:
    text = raw or ""
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits or not digits.isascii() or not digits.isdigit():
        raise invalid_identifier("user_id")
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        raise invalid_identifier("user_id")
    return value


def parse_uuid(raw: Optional[str], name: str) -> UUID:
    try:
        return UUID((raw or "").strip())
    except ValueError:
        raise invalid_identifier(name)
