from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.auth.dependencies import get_admin_user, get_current_user
from store_api.database import get_async_session
from store_api.users.models import AccessLevel, User, UserProfile
from store_api.users.schemas import UserCreate, UserDetailOut, UserOut, UserUpdate
from store_api.users.service import add_user_with_profile, build_user_detail, name_taken, pwd_context
from store_api.utils.errors import commit_or_conflict, get_or_404
from store_api.utils.query_params import MAX_PAGE_SIZE, SEARCH_RESULT_LIMIT, paginate, search_condition

router = APIRouter()


async def _list_users(session: AsyncSession, offset: int, limit: int | None):
    result = await session.execute(paginate(select(User).order_by(User.id), offset, limit))
    return result.scalars().all()


@router.get("", response_model=List[UserOut])
async def list_users(
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_users(session, offset, limit)


@router.get("/search", response_model=List[UserOut])
async def search_users(
    query: str = Query(""),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    stmt = (
        select(User)
        .where(search_condition(User.name, query))
        .order_by(User.name)
        .limit(SEARCH_RESULT_LIMIT)
    )
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("/{offset}/{limit}", response_model=List[UserOut])
async def list_users_paged(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_users(session, offset, limit)


@router.get("/{user_id}", response_model=UserDetailOut)
async def get_user(
    user_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    target = await get_or_404(session, User, user_id, "User not found")
    return await build_user_detail(session, target)


@router.post("", response_model=UserDetailOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    session: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_admin_user),
):
    new_user = await add_user_with_profile(session, payload.name, payload.password, payload.access_level)
    await commit_or_conflict(session, f"User name '{payload.name}' is already taken")
    return await build_user_detail(session, new_user)


@router.put("/{user_id}", response_model=UserDetailOut)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    is_admin = current_user.access_level == AccessLevel.ADMIN
    if current_user.id != user_id and not is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only edit your own account")

    target = await get_or_404(session, User, user_id, "User not found")
    data = payload.model_dump(exclude_unset=True, exclude={"user_profile"})

    if "access_level" in data and data["access_level"] != target.access_level and not is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can change access levels")
    if "name" in data and await name_taken(session, data["name"], exclude_id=target.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"User name '{data['name']}' is already taken")

    if data.get("password"):
        target.password = pwd_context.hash(data.pop("password"))
    data.pop("password", None)
    for field, value in data.items():
        if field == "access_level" and value is None:
            continue
        setattr(target, field, value)

    if payload.user_profile is not None:
        profile = await session.get(UserProfile, target.id)
        if profile is None:
            profile = UserProfile(user_id=target.id)
            session.add(profile)
        for field, value in payload.user_profile.model_dump(exclude_unset=True).items():
            if value is None and field in ("gender", "marital_status", "page_preference"):
                continue
            setattr(profile, field, value)

    await commit_or_conflict(session, "User name is already taken")
    return await build_user_detail(session, target)


@router.delete("/{user_id}", response_class=PlainTextResponse)
async def delete_user(
    user_id: int,
    session: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_admin_user),
):
    if user_id == admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    target = await get_or_404(session, User, user_id, "User not found")
    await session.delete(target)
    await commit_or_conflict(session, "User could not be deleted")
    return f"Successfully deleted user {user_id}."
