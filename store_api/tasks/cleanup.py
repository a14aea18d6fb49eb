import asyncio
import logging
from datetime import datetime, timedelta

from celery import shared_task
from sqlalchemy import delete, or_

from store_api.config import LOG_RETENTION_DAYS
from store_api.database import async_session_maker
from store_api.logs.models import UserLog
from store_api.users.models import ConfirmationCode

logger = logging.getLogger(__name__)


async def purge_old_logs(now: datetime | None = None) -> int:
    cutoff = (now or datetime.utcnow()) - timedelta(days=LOG_RETENTION_DAYS)
    async with async_session_maker() as session:
        result = await session.execute(delete(UserLog).where(UserLog.timestamp < cutoff))
        await session.commit()
    return result.rowcount


async def purge_stale_confirmation_codes(now: datetime | None = None) -> int:
    """Drop codes that were used or have expired. Their users are kept."""
    now = now or datetime.utcnow()
    async with async_session_maker() as session:
        result = await session.execute(
            delete(ConfirmationCode).where(
                or_(ConfirmationCode.used.is_(True), ConfirmationCode.expiration < now)
            )
        )
        await session.commit()
    return result.rowcount


@shared_task
def clean_old_logs():
    deleted = asyncio.run(purge_old_logs())
    logger.info("Removed %s activity log entries", deleted)


@shared_task
def clean_stale_confirmation_codes():
    deleted = asyncio.run(purge_stale_confirmation_codes())
    logger.info("Removed %s stale confirmation codes", deleted)
