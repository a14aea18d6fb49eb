import logging

from sqlalchemy import select

from store_api.database import async_session_maker
from store_api.users.models import AccessLevel, User
from store_api.users.service import add_user_with_profile
from store_api.utils.errors import commit_or_conflict

logger = logging.getLogger(__name__)


async def create_admin_user():
    from store_api.config import ADMIN_NAME, ADMIN_PASSWORD

    if not ADMIN_NAME or not ADMIN_PASSWORD:
        logger.info("ADMIN_NAME/ADMIN_PASSWORD not set, skipping admin bootstrap")
        return

    async with async_session_maker() as session:
        result = await session.execute(select(User).where(User.name == ADMIN_NAME))
        existing = result.scalar_one_or_none()

        if existing:
            if existing.access_level != AccessLevel.ADMIN:
                existing.access_level = AccessLevel.ADMIN
                await session.commit()
                logger.info("Promoted existing user %s to admin", ADMIN_NAME)
            else:
                logger.info("Admin %s already exists, skipping creation", ADMIN_NAME)
            return

        await add_user_with_profile(session, ADMIN_NAME, ADMIN_PASSWORD, AccessLevel.ADMIN)
        await commit_or_conflict(session, "Admin already exists")
        logger.info("Admin %s created", ADMIN_NAME)
