from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

from safaraya.db.base import Base
from safaraya.db.models.user_model import User  # noqa: F401
from safaraya.db.models.registration_model import Registration  # noqa: F401
from safaraya.db.models.file_upload_model import FileUpload  # noqa: F401
from safaraya.core.config import get_settings

# Alembic Config object
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Alembic runs on a sync engine, so the asyncpg driver suffix is dropped.
DATABASE_URL = get_settings().database_url.replace("+asyncpg", "")


def run_migrations_offline():
    """Run migrations in 'offline' mode."""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Run migrations in 'online' mode (sync engine for Alembic)."""
    connectable = create_engine(
        DATABASE_URL,
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
