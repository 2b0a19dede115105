import sys
from os.path import abspath, dirname
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# backend/ sur le chemin pour importer 'crewdesk' hors installation
sys.path.insert(0, abspath(dirname(dirname(__file__))))

from crewdesk.core.config import settings
from crewdesk.core.database import Base
# Modèles importés pour peupler Base.metadata
from crewdesk.shared.models import (  # noqa: F401
    Admin, Client,
    Crew, CrewDocument, CrewTag, CrewClientAssignment,
    ClientRequest, RequestFollowUp,
    Reminder,
)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def sync_database_url(url: str) -> str:
    """Alembic tourne en synchrone (psycopg2) : on retire le driver asyncpg."""
    return url.replace("postgresql+asyncpg://", "postgresql://", 1)


config.set_main_option("sqlalchemy.url", sync_database_url(settings.DATABASE_URL))


def run_migrations_offline() -> None:
    """Émet le SQL sans connexion (alembic upgrade --sql)."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
