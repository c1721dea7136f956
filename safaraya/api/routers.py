# safaraya/api/routers.py
from fastapi import APIRouter
from safaraya.api.endpoints import health, registration_files, registrations, users

router = APIRouter()

router.include_router(health.router)
router.include_router(users.router)
router.include_router(registrations.router)
router.include_router(registration_files.router)
