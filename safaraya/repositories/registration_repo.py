import logging
import time
from uuid import UUID

from asyncpg import Connection

from safaraya.core.deadline import Deadline
from safaraya.core.exceptions import registration_not_found
from safaraya.db import nullable

logger = logging.getLogger(__name__)

DEFAULT_APPLICANT_COUNT = 1

REGISTRATION_COLUMNS = """
    registration_id, full_name, job_title, address_full, whatsapp_number,
    note, applicant_count, visa_type, created_at, updated_at
"""
REGISTRATION_NULLABLE = ("job_title", "address_full", "note", "visa_type")


class RegistrationRepository:

    def __init__(self, conn: Connection, deadline: Deadline):
        self.conn = conn
        self.deadline = deadline

    async def create(self, registration_in: dict) -> dict:
        start = time.perf_counter()
        applicant_count = registration_in.get("applicant_count")
        if applicant_count is None:
            applicant_count = DEFAULT_APPLICANT_COUNT

        job_title, address_full, note, visa_type = nullable.encode(registration_in, REGISTRATION_NULLABLE)
        sql = f"""
            INSERT INTO registration (
                full_name, job_title, address_full, whatsapp_number, note, applicant_count, visa_type
            ) VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING {REGISTRATION_COLUMNS};
        """
        record = await self.deadline.run(
            "insert_registration",
            self.conn.fetchrow(
                sql,
                registration_in["full_name"],
                job_title,
                address_full,
                registration_in["whatsapp_number"],
                note,
                applicant_count,
                visa_type,
            ),
        )
        registration = nullable.decode(record, REGISTRATION_NULLABLE)
        logger.info(
            "insert_registration: inserted id=%s in %.3fs",
            registration["registration_id"], time.perf_counter() - start,
        )
        return registration

    async def get_by_id(self, registration_id: UUID) -> dict:
        start = time.perf_counter()
        sql = f"SELECT {REGISTRATION_COLUMNS} FROM registration WHERE registration_id = $1;"
        record = await self.deadline.run("get_registration", self.conn.fetchrow(sql, registration_id))
        if record is None:
            raise registration_not_found()
        logger.info("get_registration: fetched id=%s in %.3fs", registration_id, time.perf_counter() - start)
        return nullable.decode(record, REGISTRATION_NULLABLE)
