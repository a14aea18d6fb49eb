from fastapi import HTTPException, status
from passlib.context import CryptContext
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.employees.models import StoreEmployee
from store_api.roles.models import StoreEmployeeRole
from store_api.shifts.models import StoreShift
from store_api.stores.models import Store
from store_api.users.models import AccessLevel, User, UserProfile
from store_api.users.schemas import UserDetailOut, UserProfileOut

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


async def name_taken(session: AsyncSession, name: str | None, exclude_id: int | None = None) -> bool:
    if name is None:
        return False
    stmt = select(User.id).where(User.name == name)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    result = await session.execute(stmt)
    return result.first() is not None


async def add_user_with_profile(
    session: AsyncSession, name: str | None, password: str, access_level: AccessLevel
) -> User:
    """Stage a user together with its mandatory profile. The caller commits."""
    if await name_taken(session, name):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"User name '{name}' is already taken")

    user = User(name=name, password=pwd_context.hash(password), access_level=access_level)
    session.add(user)
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"User name '{name}' is already taken")

    session.add(UserProfile(user_id=user.id))
    return user


async def _count_owned(session: AsyncSession, model, user_id: int) -> int:
    result = await session.execute(select(func.count()).select_from(model).where(model.user_id == user_id))
    return result.scalar_one()


async def build_user_detail(session: AsyncSession, user: User) -> UserDetailOut:
    profile = await session.get(UserProfile, user.id)
    return UserDetailOut(
        id=user.id,
        name=user.name,
        access_level=user.access_level,
        user_profile=UserProfileOut.model_validate(profile) if profile else None,
        store_count=await _count_owned(session, Store, user.id),
        store_employee_count=await _count_owned(session, StoreEmployee, user.id),
        store_employee_role_count=await _count_owned(session, StoreEmployeeRole, user.id),
        store_shift_count=await _count_owned(session, StoreShift, user.id),
    )
