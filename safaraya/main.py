from fastapi import FastAPI
from contextlib import asynccontextmanager
from safaraya.api import routers
import logging
from safaraya.core.config import get_settings
from safaraya.core.exceptions import register_exception_handlers
from safaraya.db.session import connect_db_pool, close_db_pool

logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_db_pool()
    yield
    await close_db_pool()

app = FastAPI(
    title="Safaraya API",
    description="Users with CVs, visa registrations and their uploaded documents",
    version="2.0.0",
    lifespan=lifespan,
    redirect_slashes=False,
)

register_exception_handlers(app)
app.include_router(routers.router)
