# safaraya/core/config.py

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- Database Config ---
    DB_HOST: str
    DB_PORT: int
    DB_NAME: str
    DB_USER: str
    DB_PASS: str
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 10

    # --- Service Config ---
    SERVICE_HOST: str = ""
    CV_DOWNLOAD_PATH_TEMPLATE: str = "/users/{user_id}/cv"
    REQUEST_TIMEOUT_SECONDS: float = 5.0
    LOG_LEVEL: str = "INFO"

    # --- Upload Config ---
    MAX_UPLOAD_SIZE: int = 5 << 20
    FORM_OVERHEAD_BYTES: int = 1024

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://"
            f"{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def asyncpg_url(self) -> str:
        return (
            f"postgresql://"
            f"{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def absolute_service_host(self) -> str | None:
        """SERVICE_HOST if it is an absolute http(s) base, otherwise None."""
        host = self.SERVICE_HOST.strip()
        if host.startswith("http://") or host.startswith("https://"):
            return host.rstrip("/")
        return None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
