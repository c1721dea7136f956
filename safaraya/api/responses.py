"""
Response assembly helpers: download URLs and binary attachments.
"""
from urllib.parse import quote

from fastapi import Request, Response

from safaraya.core.config import Settings


def request_base_url(request: Request) -> str:
    host = request.headers.get("host") or request.url.netloc
    return f"{request.url.scheme}://{host}"


def build_cv_download_url(request: Request, user_id: int, settings: Settings) -> str:
    base = settings.absolute_service_host or request_base_url(request)
    return base + settings.CV_DOWNLOAD_PATH_TEMPLATE.format(user_id=user_id)


def content_disposition(filename: str) -> str:
    try:
        filename.encode("latin-1")
    except UnicodeEncodeError:
        return f"attachment; filename*=utf-8''{quote(filename)}"
    escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
    return f'attachment; filename="{escaped}"'


def attachment_response(data: bytes, media_type: str, filename: str, size: int | None = None) -> Response:
    headers = {"Content-Disposition": content_disposition(filename)}
    if size is not None and size > 0:
        headers["Content-Length"] = str(size)
    return Response(content=data, media_type=media_type, headers=headers)
