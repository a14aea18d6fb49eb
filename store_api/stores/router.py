from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.auth.dependencies import ensure_can_modify, get_confirmed_user, get_current_user
from store_api.database import get_async_session
from store_api.shifts.models import StoreShift
from store_api.shifts.schemas import StoreShiftOut
from store_api.stores.models import Store
from store_api.stores.schemas import (
    StoreCreate,
    StoreDetailOut,
    StoreHeadcountReportRow,
    StoreOut,
    StoreSalaryReportRow,
    StoreUpdate,
)
from store_api.stores.service import get_headcount_report, get_salary_report
from store_api.users.models import User
from store_api.utils.errors import commit_or_conflict, ensure_date_order, get_or_404
from store_api.utils.query_params import MAX_PAGE_SIZE, SEARCH_RESULT_LIMIT, paginate, search_condition

router = APIRouter()


async def _list_stores(session: AsyncSession, offset: int, limit: int | None):
    result = await session.execute(paginate(select(Store).order_by(Store.id), offset, limit))
    return result.scalars().all()


@router.get("", response_model=List[StoreOut])
async def list_stores(
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_stores(session, offset, limit)


@router.get("/search", response_model=List[StoreOut])
async def search_stores(
    query: str = Query(""),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    stmt = (
        select(Store)
        .where(search_condition(Store.name, query))
        .order_by(Store.name)
        .limit(SEARCH_RESULT_LIMIT)
    )
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("/salaryreport/{offset}/{limit}", response_model=List[StoreSalaryReportRow])
async def salary_report(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_salary_report(session, offset, limit)


@router.get("/headcountreport/{offset}/{limit}", response_model=List[StoreHeadcountReportRow])
async def headcount_report(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_headcount_report(session, offset, limit)


@router.get("/{offset}/{limit}", response_model=List[StoreOut])
async def list_stores_paged(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await _list_stores(session, offset, limit)


@router.get("/{store_id}", response_model=StoreDetailOut)
async def get_store(
    store_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    store = await get_or_404(session, Store, store_id, "Store not found")
    shifts = await session.execute(
        select(StoreShift).where(StoreShift.store_id == store.id).order_by(StoreShift.store_employee_id)
    )
    return StoreDetailOut(
        **StoreOut.model_validate(store).model_dump(),
        store_shifts=[StoreShiftOut.model_validate(s) for s in shifts.scalars().all()],
    )


@router.post("", response_model=StoreOut, status_code=status.HTTP_201_CREATED)
async def create_store(
    payload: StoreCreate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    store = Store(**payload.model_dump(), user_id=user.id)
    session.add(store)
    await commit_or_conflict(session, "Store could not be created")
    return store


@router.put("/{store_id}", response_model=StoreOut)
async def update_store(
    store_id: int,
    payload: StoreUpdate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    store = await get_or_404(session, Store, store_id, "Store not found")
    ensure_can_modify(user, store.user_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(store, field, value)
    ensure_date_order(store.open_date, store.close_date, "openDate", "closeDate")
    await commit_or_conflict(session, "Store could not be updated")
    return store


@router.delete("/{store_id}", response_class=PlainTextResponse)
async def delete_store(
    store_id: int,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_confirmed_user),
):
    store = await get_or_404(session, Store, store_id, "Store not found")
    ensure_can_modify(user, store.user_id)
    # shifts at this store go with it (ON DELETE CASCADE)
    await session.delete(store)
    await commit_or_conflict(session, "Store could not be deleted")
    return f"Successfully deleted store {store_id}."
