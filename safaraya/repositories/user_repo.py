import logging
import time
from typing import Optional

from asyncpg import Connection

from safaraya.core.deadline import Deadline
from safaraya.core.exceptions import user_not_found
from safaraya.db import nullable

logger = logging.getLogger(__name__)

USER_NULLABLE = ("name", "age")


def rows_affected(status: str) -> int:
    """Row count from a command status tag such as ``UPDATE 1``."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


class UserRepository:

    def __init__(self, conn: Connection, deadline: Deadline):
        self.conn = conn
        self.deadline = deadline

    # ------------------ Retrieval Methods ------------------ #

    async def fetch_all(self) -> list[dict]:
        start = time.perf_counter()
        sql = "SELECT id, name, age, created_at, cv_file IS NOT NULL AS has_cv FROM users;"
        records = await self.deadline.run("fetch_users", self.conn.fetch(sql))
        users = [nullable.decode(record, USER_NULLABLE) for record in records]
        logger.info("fetch_users: fetched %d rows in %.3fs", len(users), time.perf_counter() - start)
        return users

    async def get_cv(self, user_id: int) -> Optional[bytes]:
        """Stored CV bytes, None when the user exists without a CV."""
        start = time.perf_counter()
        sql = "SELECT cv_file FROM users WHERE id = $1;"
        record = await self.deadline.run("get_user_cv", self.conn.fetchrow(sql, user_id))
        if record is None:
            raise user_not_found()
        logger.info("get_user_cv: fetched CV for user=%d in %.3fs", user_id, time.perf_counter() - start)
        return record["cv_file"]

    # ------------------ Creation ------------------ #

    async def create(self, user_in: dict) -> dict:
        start = time.perf_counter()
        sql = """
            INSERT INTO users (name, age)
            VALUES ($1, $2)
            RETURNING id, name, age, created_at;
        """
        record = await self.deadline.run(
            "insert_user", self.conn.fetchrow(sql, *nullable.encode(user_in, USER_NULLABLE))
        )
        user = nullable.decode(record, USER_NULLABLE)
        user["has_cv"] = False
        logger.info("insert_user: inserted id=%d in %.3fs", user["id"], time.perf_counter() - start)
        return user

    # ------------------ Update Methods ------------------ #

    async def save_cv(self, user_id: int, cv_data: bytes) -> None:
        start = time.perf_counter()
        sql = "UPDATE users SET cv_file = $2 WHERE id = $1;"
        status = await self.deadline.run("save_user_cv", self.conn.execute(sql, user_id, cv_data))
        if rows_affected(status) == 0:
            raise user_not_found()
        logger.info("save_user_cv: saved CV for user=%d in %.3fs", user_id, time.perf_counter() - start)
