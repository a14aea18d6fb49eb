import logging

from fastapi import APIRouter, Depends, Path
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.admin.service import MAX_BULK_COUNT, resolve_bulk_entity, set_page_preference_for_all
from store_api.auth.dependencies import get_admin_user
from store_api.database import get_async_session
from store_api.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_admin_user)])


@router.patch("/pagepreferences/{value}", response_class=PlainTextResponse)
async def update_all_page_preferences(
    value: int = Path(..., ge=1, le=MAX_BULK_COUNT),
    session: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_admin_user),
):
    updated = await set_page_preference_for_all(session, value)
    logger.info("Admin %s set page preference %s on %s profiles", admin.id, value, updated)
    return f"Successfully updated the page preference of {updated} users to {value}."


@router.post("/{entity}/{count}", response_class=PlainTextResponse)
async def bulk_generate(
    entity: str,
    count: int = Path(..., ge=1, le=MAX_BULK_COUNT),
    session: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_admin_user),
):
    label, generate, _ = resolve_bulk_entity(entity)
    created = await generate(session, count, admin.id)
    logger.info("Admin %s generated %s %s", admin.id, created, label)
    return f"Successfully generated {created} {label}."


@router.delete("/{entity}/{count}", response_class=PlainTextResponse)
async def bulk_delete(
    entity: str,
    count: int = Path(..., ge=1, le=MAX_BULK_COUNT),
    session: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_admin_user),
):
    label, _, purge = resolve_bulk_entity(entity)
    deleted = await purge(session, count)
    logger.info("Admin %s deleted %s %s", admin.id, deleted, label)
    return f"Successfully deleted {deleted} {label}."
