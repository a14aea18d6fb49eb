from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.auth.dependencies import ensure_can_modify, get_confirmed_user, get_current_user
from store_api.database import get_async_session
from store_api.employees.models import StoreEmployee
from store_api.roles.models import StoreEmployeeRole
from store_api.roles.schemas import (
    StoreEmployeeRoleCreate,
    StoreEmployeeRoleDetailOut,
    StoreEmployeeRoleOut,
    StoreEmployeeRoleUpdate,
    RoleEmployeeSummary,
)
from store_api.users.models import User
from store_api.utils.errors import commit_or_conflict, get_or_404
from store_api.utils.query_params import MAX_PAGE_SIZE, SEARCH_RESULT_LIMIT, paginate, search_condition

router = APIRouter()


async def _list_roles(session: AsyncSession, offset: int, limit: int | None):
    stmt = paginate(select(StoreEmployeeRole).order_by(StoreEmployeeRole.id), offset, limit)
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("", response_model=List[StoreEmployeeRoleOut])
async def list_roles(
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_roles(session, offset, limit)


@router.get("/search", response_model=List[StoreEmployeeRoleOut])
async def search_roles(
    query: str = Query(""),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    stmt = (
        select(StoreEmployeeRole)
        .where(search_condition(StoreEmployeeRole.name, query))
        .order_by(StoreEmployeeRole.name)
        .limit(SEARCH_RESULT_LIMIT)
    )
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("/{offset}/{limit}", response_model=List[StoreEmployeeRoleOut])
async def list_roles_paged(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_roles(session, offset, limit)


@router.get("/{role_id}", response_model=StoreEmployeeRoleDetailOut)
async def get_role(
    role_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    role = await get_or_404(session, StoreEmployeeRole, role_id, "Role not found")
    result = await session.execute(
        select(StoreEmployee)
        .where(StoreEmployee.store_employee_role_id == role.id)
        .order_by(StoreEmployee.id)
    )
    return StoreEmployeeRoleDetailOut(
        **StoreEmployeeRoleOut.model_validate(role).model_dump(),
        store_employees=[RoleEmployeeSummary.model_validate(e) for e in result.scalars().all()],
    )


@router.post("", response_model=StoreEmployeeRoleOut, status_code=status.HTTP_201_CREATED)
async def create_role(
    payload: StoreEmployeeRoleCreate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    role = StoreEmployeeRole(**payload.model_dump(), user_id=user.id)
    session.add(role)
    await commit_or_conflict(session, "Role could not be created")
    return role


@router.put("/{role_id}", response_model=StoreEmployeeRoleOut)
async def update_role(
    role_id: int,
    payload: StoreEmployeeRoleUpdate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    role = await get_or_404(session, StoreEmployeeRole, role_id, "Role not found")
    ensure_can_modify(user, role.user_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(role, field, value)
    await commit_or_conflict(session, "Role could not be updated")
    return role


@router.delete("/{role_id}", response_class=PlainTextResponse)
async def delete_role(
    role_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    role = await get_or_404(session, StoreEmployeeRole, role_id, "Role not found")
    ensure_can_modify(user, role.user_id)
    # employees keep their rows; the database nulls their role reference
    await session.delete(role)
    await commit_or_conflict(session, "Role could not be deleted")
    return f"Successfully deleted role {role_id}."
