import logging

from fastapi import APIRouter, Request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

# liveness answers whatever method the prober uses
PING_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/ping", methods=PING_METHODS)
async def ping(request: Request):
    logger.info("ping request: method=%s remote=%s", request.method, request.client.host if request.client else None)
    return {"message": "pong v2"}
