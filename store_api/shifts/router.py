from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.auth.dependencies import ensure_can_modify, get_confirmed_user, get_current_user
from store_api.database import get_async_session
from store_api.employees.models import StoreEmployee
from store_api.shifts.models import StoreShift
from store_api.shifts.schemas import StoreShiftCreate, StoreShiftOut, StoreShiftUpdate
from store_api.stores.models import Store
from store_api.users.models import User
from store_api.utils.errors import commit_or_conflict, ensure_date_order, ensure_reference, get_or_404
from store_api.utils.query_params import MAX_PAGE_SIZE, paginate

router = APIRouter()

SHIFT_NOT_FOUND = "Shift not found"


async def _list_shifts(session: AsyncSession, offset: int, limit: int | None):
    stmt = select(StoreShift).order_by(StoreShift.store_id, StoreShift.store_employee_id)
    result = await session.execute(paginate(stmt, offset, limit))
    return result.scalars().all()


@router.get("", response_model=List[StoreShiftOut])
async def list_shifts(
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_shifts(session, offset, limit)


# (store_id, store_employee_id) owns the two-segment path, so paging gets its own prefix
@router.get("/page/{offset}/{limit}", response_model=List[StoreShiftOut])
async def list_shifts_paged(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_shifts(session, offset, limit)


@router.get("/{store_id}/{store_employee_id}", response_model=StoreShiftOut)
async def get_shift(
    store_id: int,
    store_employee_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_or_404(session, StoreShift, (store_id, store_employee_id), SHIFT_NOT_FOUND)


@router.post("", response_model=StoreShiftOut, status_code=status.HTTP_201_CREATED)
async def create_shift(
    payload: StoreShiftCreate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    await ensure_reference(session, Store, payload.store_id, "Store")
    await ensure_reference(session, StoreEmployee, payload.store_employee_id, "Employee")
    if await session.get(StoreShift, (payload.store_id, payload.store_employee_id)) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This employee already has a shift at this store",
        )

    shift = StoreShift(**payload.model_dump(), user_id=user.id)
    session.add(shift)
    await commit_or_conflict(session, "This employee already has a shift at this store")
    return shift


@router.put("/{store_id}/{store_employee_id}", response_model=StoreShiftOut)
async def update_shift(
    store_id: int,
    store_employee_id: int,
    payload: StoreShiftUpdate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    shift = await get_or_404(session, StoreShift, (store_id, store_employee_id), SHIFT_NOT_FOUND)
    ensure_can_modify(user, shift.user_id)
    # only the times change; the (store, employee) key is fixed
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(shift, field, value)
    ensure_date_order(shift.start_date, shift.end_date, "startDate", "endDate")
    await commit_or_conflict(session, "Shift could not be updated")
    return shift


@router.delete("/{store_id}/{store_employee_id}", response_class=PlainTextResponse)
async def delete_shift(
    store_id: int,
    store_employee_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    shift = await get_or_404(session, StoreShift, (store_id, store_employee_id), SHIFT_NOT_FOUND)
    ensure_can_modify(user, shift.user_id)
    await session.delete(shift)
    await commit_or_conflict(session, "Shift could not be deleted")
    return f"Successfully deleted shift for store {store_id} and employee {store_employee_id}."
