# safaraya/db/seed.py
import asyncio
import logging
import random

from faker import Faker
from tqdm import tqdm

from safaraya.db.session import connect_db_pool, get_pool, close_db_pool

logger = logging.getLogger(__name__)

fake = Faker()

NUM_USERS = 50
NUM_REGISTRATIONS = 5_000
BATCH_REGISTRATIONS = 500
FILES_PER_REGISTRATION = (0, 3)

VISA_TYPES = ["tourist", "business", "student", "work", "umrah"]
FILE_TYPES = ["passport", "photo", "id_card", "bank_statement"]

SAMPLE_PDF = (
    b"%PDF-1.4\n1 0 obj<</Type/Catalog/Pages 2 0 R>>endobj\n"
    b"2 0 obj<</Type/Pages/Kids[]/Count 0>>endobj\ntrailer<</Root 1 0 R>>\n%%EOF\n"
)


def maybe(value, probability: float = 0.7):
    """Return value or None, so nullable columns get both cases."""
    return value if random.random() < probability else None


async def insert_user(conn, name: str | None, age: int | None, with_cv: bool) -> int:
    sql = """
    INSERT INTO users (name, age, cv_file)
    VALUES ($1, $2, $3)
    RETURNING id;
    """
    rec = await conn.fetchrow(sql, name, age, SAMPLE_PDF if with_cv else None)
    return rec["id"]


def fake_registration() -> tuple:
    return (
        fake.name(),
        maybe(fake.job()),
        maybe(fake.address().replace("\n", ", ")),
        fake.msisdn(),
        maybe(fake.sentence(nb_words=8), 0.3),
        random.choices([1, 2, 3, 4, 5], weights=[0.6, 0.2, 0.1, 0.05, 0.05])[0],
        maybe(random.choice(VISA_TYPES)),
    )


async def seed():
    await connect_db_pool()
    pool = await get_pool()
    if pool is None:
        raise RuntimeError("Database pool could not be initialized")

    async with pool.acquire() as conn:
        logger.info("creating %d users", NUM_USERS)
        for _ in range(NUM_USERS):
            await insert_user(
                conn,
                maybe(fake.name()),
                maybe(random.randint(18, 70)),
                with_cv=random.random() < 0.4,
            )

        reg_sql = """
        INSERT INTO registration
        (full_name, job_title, address_full, whatsapp_number, note, applicant_count, visa_type)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        """
        batch = []
        for _ in tqdm(range(NUM_REGISTRATIONS), desc="Generating registrations"):
            batch.append(fake_registration())
            if len(batch) >= BATCH_REGISTRATIONS:
                await conn.executemany(reg_sql, batch)
                batch.clear()
        if batch:
            await conn.executemany(reg_sql, batch)

        registration_ids = [
            r["registration_id"]
            for r in await conn.fetch("SELECT registration_id FROM registration ORDER BY random() LIMIT 200;")
        ]

        file_sql = """
        INSERT INTO file_upload (registration_id, file_type, filename, file, file_size)
        VALUES ($1, $2, $3, $4, $5)
        """
        file_rows = []
        for reg_id in tqdm(registration_ids, desc="Attaching files"):
            for _ in range(random.randint(*FILES_PER_REGISTRATION)):
                file_type = random.choice(FILE_TYPES)
                file_rows.append((reg_id, file_type, f"{file_type}.pdf", SAMPLE_PDF, len(SAMPLE_PDF)))
        if file_rows:
            await conn.executemany(file_sql, file_rows)

        logger.info("seed complete")

    await close_db_pool()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
