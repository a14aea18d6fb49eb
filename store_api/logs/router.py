from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.auth.dependencies import get_admin_user
from store_api.database import get_async_session
from store_api.logs.models import UserLog
from store_api.logs.schemas import UserLogOut
from store_api.users.models import User
from store_api.utils.query_params import MAX_PAGE_SIZE, paginate

router = APIRouter()


@router.get("/{offset}/{limit}", response_model=List[UserLogOut])
async def list_logs(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_admin_user),
):
    stmt = select(UserLog).order_by(UserLog.timestamp.desc(), UserLog.id.desc())
    result = await session.execute(paginate(stmt, offset, limit))
    return result.scalars().all()
