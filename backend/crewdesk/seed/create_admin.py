# seed/create_admin.py
"""
Création du premier super_admin (aucun autre chemin ne permet d'en créer
un tant qu'aucun super_admin n'existe).

    python -m crewdesk.seed.create_admin --username root --email root@example.com --password ...

Idempotent : ne fait rien si le username ou l'email est déjà pris.
"""
import argparse
import asyncio
import logging

from crewdesk.core.database import AsyncSessionLocal
from crewdesk.core.logging import setup_logging
from crewdesk.core.security import hash_password
from crewdesk.modules.auth.repository import AuthRepository
from crewdesk.shared.enums import AdminRole

logger = logging.getLogger(__name__)

repo = AuthRepository()


async def create_super_admin(username: str, email: str, password: str, full_name: str) -> bool:
    async with AsyncSessionLocal() as db:
        if await repo.admin_exists(db, username, email):
            logger.info("Admin %s already exists, nothing to do", username)
            return False
        admin = await repo.create_admin(
            db,
            username=username,
            email=email.lower(),
            full_name=full_name,
            hashed_password=hash_password(password),
            role=AdminRole.SUPER_ADMIN,
            is_active=True,
        )
        logger.info("Super admin created: id=%s username=%s", admin.id, admin.username)
        return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the initial CrewDesk super admin")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--full-name", default="Super Admin")
    args = parser.parse_args()

    if len(args.password) < 6:
        parser.error("password must be at least 6 characters")

    setup_logging()
    asyncio.run(create_super_admin(args.username, args.email, args.password, args.full_name))


if __name__ == "__main__":
    main()
