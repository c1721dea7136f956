import enum
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    METHOD = "method"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.METHOD: status.HTTP_405_METHOD_NOT_ALLOWED,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiError(Exception):
    """Error carrying a kind and a stable machine-readable code."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __repr__(self):
        return f"{type(self).__name__}({self.code!r})"


class ValidationError(ApiError):
    kind = ErrorKind.VALIDATION


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND


class MethodError(ApiError):
    kind = ErrorKind.METHOD

    def __init__(self, code: str = "method_not_allowed"):
        super().__init__(code)


class InternalError(ApiError):
    kind = ErrorKind.INTERNAL

    def __init__(self, code: str = "internal_error"):
        super().__init__(code)


# ------------------ Validation ------------------ #

def missing_field(name: str) -> ValidationError:
    return ValidationError(f"{name}_required")


def invalid_value(name: str) -> ValidationError:
    return ValidationError(f"invalid_{name}")


def invalid_identifier(name: str) -> ValidationError:
    return ValidationError(f"invalid_{name}")


def invalid_payload() -> ValidationError:
    return ValidationError("invalid_json")


def invalid_form() -> ValidationError:
    return ValidationError("invalid_form")


def file_required() -> ValidationError:
    return ValidationError("file_required")


def file_too_large() -> ValidationError:
    return ValidationError("file_too_large")


def empty_file() -> ValidationError:
    return ValidationError("empty_file")


def invalid_file_type() -> ValidationError:
    return ValidationError("invalid_file_type")


# ------------------ Not found ------------------ #

def user_not_found() -> NotFoundError:
    return NotFoundError("user_not_found")


def cv_not_found() -> NotFoundError:
    return NotFoundError("cv_not_found")


def registration_not_found() -> NotFoundError:
    return NotFoundError("registration_not_found")


def file_not_found() -> NotFoundError:
    return NotFoundError("file_not_found")


def route_not_found() -> NotFoundError:
    return NotFoundError("not_found")


# ------------------ Handlers ------------------ #

def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.code})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.info("not found: path=%s method=%s", request.url.path, request.method)
        return error_response(route_not_found())
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        logger.info("invalid method: path=%s method=%s", request.url.path, request.method)
        response = error_response(MethodError())
        if exc.headers and "Allow" in exc.headers:
            response.headers["Allow"] = exc.headers["Allow"]
        return response
    if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
        return error_response(ValidationError("bad_request"))
    logger.error("http error %s on %s", exc.status_code, request.url.path)
    return error_response(InternalError())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(invalid_payload())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return error_response(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
