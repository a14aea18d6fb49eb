from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.auth.dependencies import ensure_can_modify, get_confirmed_user, get_current_user
from store_api.database import get_async_session
from store_api.employees.models import StoreEmployee
from store_api.employees.schemas import (
    StoreEmployeeCreate,
    StoreEmployeeDetailOut,
    StoreEmployeeOut,
    StoreEmployeeUpdate,
)
from store_api.roles.models import StoreEmployeeRole
from store_api.roles.schemas import StoreEmployeeRoleOut
from store_api.shifts.models import StoreShift
from store_api.shifts.schemas import StoreShiftOut
from store_api.users.models import User
from store_api.utils.errors import commit_or_conflict, ensure_date_order, ensure_reference, get_or_404
from store_api.utils.query_params import MAX_PAGE_SIZE, SEARCH_RESULT_LIMIT, paginate, search_condition

router = APIRouter()


async def _list_employees(session: AsyncSession, offset: int, limit: int | None):
    stmt = paginate(select(StoreEmployee).order_by(StoreEmployee.id), offset, limit)
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("", response_model=List[StoreEmployeeOut])
async def list_employees(
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_employees(session, offset, limit)


@router.get("/search", response_model=List[StoreEmployeeOut])
async def search_employees(
    query: str = Query(""),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    stmt = (
        select(StoreEmployee)
        .where(
            or_(
                search_condition(StoreEmployee.first_name, query),
                search_condition(StoreEmployee.last_name, query),
            )
        )
        .order_by(StoreEmployee.first_name, StoreEmployee.last_name)
        .limit(SEARCH_RESULT_LIMIT)
    )
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("/filter", response_model=List[StoreEmployeeOut])
async def filter_employees_by_salary(
    min_salary: float = Query(0.0, alias="minSalary"),
    offset: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    stmt = (
        select(StoreEmployee)
        .where(StoreEmployee.salary > min_salary)
        .order_by(StoreEmployee.salary, StoreEmployee.id)
    )
    result = await session.execute(paginate(stmt, offset, limit))
    return result.scalars().all()


@router.get("/{offset}/{limit}", response_model=List[StoreEmployeeOut])
async def list_employees_paged(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_employees(session, offset, limit)


@router.get("/{employee_id}", response_model=StoreEmployeeDetailOut)
async def get_employee(
    employee_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    employee = await get_or_404(session, StoreEmployee, employee_id, "Employee not found")
    role = None
    if employee.store_employee_role_id is not None:
        role = await session.get(StoreEmployeeRole, employee.store_employee_role_id)
    shifts = await session.execute(
        select(StoreShift)
        .where(StoreShift.store_employee_id == employee.id)
        .order_by(StoreShift.store_id)
    )
    return StoreEmployeeDetailOut(
        **StoreEmployeeOut.model_validate(employee).model_dump(),
        store_employee_role=StoreEmployeeRoleOut.model_validate(role) if role else None,
        store_shifts=[StoreShiftOut.model_validate(s) for s in shifts.scalars().all()],
    )


@router.post("", response_model=StoreEmployeeOut, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: StoreEmployeeCreate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    await ensure_reference(session, StoreEmployeeRole, payload.store_employee_role_id, "Role")
    employee = StoreEmployee(**payload.model_dump(), user_id=user.id)
    session.add(employee)
    await commit_or_conflict(session, "Employee could not be created")
    return employee


@router.put("/{employee_id}", response_model=StoreEmployeeOut)
async def update_employee(
    employee_id: int,
    payload: StoreEmployeeUpdate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    employee = await get_or_404(session, StoreEmployee, employee_id, "Employee not found")
    ensure_can_modify(user, employee.user_id)
    data = payload.model_dump(exclude_unset=True)
    if "store_employee_role_id" in data:
        await ensure_reference(session, StoreEmployeeRole, data["store_employee_role_id"], "Role")
    for field, value in data.items():
        setattr(employee, field, value)
    ensure_date_order(employee.employment_date, employee.termination_date, "employmentDate", "terminationDate")
    await commit_or_conflict(session, "Employee could not be updated")
    return employee


@router.delete("/{employee_id}", response_class=PlainTextResponse)
async def delete_employee(
    employee_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    employee = await get_or_404(session, StoreEmployee, employee_id, "Employee not found")
    ensure_can_modify(user, employee.user_id)
    await session.delete(employee)
    await commit_or_conflict(session, "Employee could not be deleted")
    return f"Successfully deleted employee {employee_id}."
