from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession


async def get_or_404(session: AsyncSession, model, ident, detail: str | None = None):
    obj = await session.get(model, ident)
    if obj is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{model.__name__} not found",
        )
    return obj


async def ensure_reference(session: AsyncSession, model, ident, label: str):
    """Raise 404 when an optional foreign key points at a row that doesn't exist."""
    if ident is None:
        return None
    obj = await session.get(model, ident)
    if obj is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} with id {ident} does not exist",
        )
    return obj


async def commit_or_conflict(session: AsyncSession, detail: str = "Conflicting data"):
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


def _naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None) if value.tzinfo else value


def ensure_date_order(start: datetime | None, end: datetime | None, start_field: str, end_field: str):
    """Reject a row whose stored and incoming dates together end before they start."""
    if start is not None and end is not None and _naive_utc(end) < _naive_utc(start):
        raise HTTPException(status_code=422, detail=f"{end_field} must not be earlier than {start_field}")
