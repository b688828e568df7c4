"""Bootstrap account seeder.

Seeds one account per classification so a fresh database can be used
immediately. Idempotent via an existence check on the e-mail address:
accounts that already exist are left untouched.

Default password for every seeded account is ``123456``; change it (or
delete the accounts) outside local development.
"""

import json

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from warden.core.config import get_settings
from warden.domain.enums import UserType
from warden.domain.services import roles_for_type
from warden.infrastructure.security import BcryptPasswordService

logger = structlog.get_logger(__name__)

DEFAULT_PASSWORD = "123456"

# (email, classification, first_name, last_name)
SEED_USERS: list[tuple[str, UserType, str, str]] = [
    ("adam@miko.sk", UserType.ADMIN, "Adam", "Miko"),
    ("user@user.sk", UserType.USER, "User", "User"),
    ("guest@guest.sk", UserType.GUEST, "Guest", "Guest"),
]


async def seed_users(session: AsyncSession) -> None:
    """Seed the bootstrap accounts. Idempotent.

    Args:
        session: Async database session.
    """
    password_service = BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)

    seeded_count = 0
    skipped_count = 0

    for email, user_type, first_name, last_name in SEED_USERS:
        result = await session.execute(
            text("SELECT 1 FROM users WHERE email = :email LIMIT 1"),
            {"email": email},
        )
        if result.scalar() is not None:
            skipped_count += 1
            continue

        user_id = uuid7()
        roles = sorted(role.value for role in roles_for_type(user_type))
        await session.execute(
            text("""
                INSERT INTO users (id, email, type, roles)
                VALUES (:id, :email, :type, :roles)
            """),
            {
                "id": user_id,
                "email": email,
                "type": user_type.value,
                "roles": json.dumps(roles),
            },
        )
        await session.execute(
            text("""
                INSERT INTO user_profiles (id, user_id, first_name, last_name, username)
                VALUES (:id, :user_id, :first_name, :last_name, :username)
            """),
            {
                "id": uuid7(),
                "user_id": user_id,
                "first_name": first_name,
                "last_name": last_name,
                "username": email.split("@")[0],
            },
        )
        await session.execute(
            text("""
                INSERT INTO user_passwords (id, user_id, hash)
                VALUES (:id, :user_id, :hash)
            """),
            {
                "id": uuid7(),
                "user_id": user_id,
                "hash": password_service.hash_password(DEFAULT_PASSWORD),
            },
        )
        seeded_count += 1

    logger.info(
        "users_seeded",
        seeded=seeded_count,
        skipped=skipped_count,
    )
