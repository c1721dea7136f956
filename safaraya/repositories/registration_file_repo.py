import logging
import time
from uuid import UUID

from asyncpg import Connection

from safaraya.core.deadline import Deadline
from safaraya.core.exceptions import file_not_found, registration_not_found

logger = logging.getLogger(__name__)


class RegistrationFileRepository:

    def __init__(self, conn: Connection, deadline: Deadline):
        self.conn = conn
        self.deadline = deadline

    async def registration_exists(self, registration_id: UUID) -> bool:
        sql = "SELECT EXISTS (SELECT 1 FROM registration WHERE registration_id = $1);"
        exists = await self.deadline.run("registration_exists", self.conn.fetchval(sql, registration_id))
        return bool(exists)

    async def save(self, registration_id: UUID, file_type: str, filename: str, data: bytes) -> UUID:
        start = time.perf_counter()
        # not atomic with the insert below; a concurrent delete is not guarded against
        if not await self.registration_exists(registration_id):
            raise registration_not_found()

        sql = """
            INSERT INTO file_upload (registration_id, file_type, filename, file, file_size)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING file_id;
        """
        file_id = await self.deadline.run(
            "save_registration_file",
            self.conn.fetchval(sql, registration_id, file_type, filename, data, len(data)),
        )
        logger.info(
            "save_registration_file: saved file_id=%s for registration=%s in %.3fs",
            file_id, registration_id, time.perf_counter() - start,
        )
        return file_id

    async def get_by_id(self, file_id: UUID) -> dict:
        start = time.perf_counter()
        sql = """
            SELECT file_id, registration_id, file_type, filename, file_size, file, created_at
            FROM file_upload
            WHERE file_id = $1;
        """
        record = await self.deadline.run("get_registration_file", self.conn.fetchrow(sql, file_id))
        if record is None:
            raise file_not_found()
        logger.info("get_registration_file: fetched file_id=%s in %.3fs", file_id, time.perf_counter() - start)
        return dict(record)
