# crewdesk/core/database.py
"""
Moteur SQLAlchemy async + session par requête.

get_db() est injecté via DbDep - une AsyncSession par requête HTTP,
fermée automatiquement en sortie du contexte.
"""
from typing import AsyncGenerator

from sqlalchemy import Enum as SAEnum
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from crewdesk.core.config import settings


class Base(DeclarativeBase):
    pass


def pg_enum(enum_cls, name: str) -> SAEnum:
    """Type ENUM Postgres stockant les valeurs (pas les noms) des membres."""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
    )


def _async_database_url() -> str:
    url = settings.DATABASE_URL
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


engine = create_async_engine(
    _async_database_url(),
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
