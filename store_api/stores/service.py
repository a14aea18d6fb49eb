from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.employees.models import StoreEmployee
from store_api.shifts.models import StoreShift
from store_api.stores.models import Store
from store_api.stores.schemas import StoreHeadcountReportRow, StoreOut, StoreSalaryReportRow
from store_api.utils.query_params import paginate


async def get_salary_report(session: AsyncSession, offset: int, limit: int) -> list[StoreSalaryReportRow]:
    """Stores ranked by the average salary of the employees that work a shift there."""
    average_salary = func.avg(StoreEmployee.salary).label("average_salary")
    stmt = (
        select(Store, average_salary)
        .join(StoreShift, StoreShift.store_id == Store.id)
        .join(StoreEmployee, StoreEmployee.id == StoreShift.store_employee_id)
        .group_by(Store.id)
        .order_by(desc(average_salary), Store.id)
    )
    result = await session.execute(paginate(stmt, offset, limit))
    return [
        StoreSalaryReportRow(**StoreOut.model_validate(store).model_dump(), average_salary=float(avg))
        for store, avg in result.all()
    ]


async def get_headcount_report(session: AsyncSession, offset: int, limit: int) -> list[StoreHeadcountReportRow]:
    """Stores ranked by how many distinct employees have a shift there."""
    # the (store, employee) key already makes each counted employee distinct
    headcount = func.count(StoreShift.store_employee_id).label("headcount")
    stmt = (
        select(Store, headcount)
        .outerjoin(StoreShift, StoreShift.store_id == Store.id)
        .group_by(Store.id)
        .order_by(desc(headcount), Store.id)
    )
    result = await session.execute(paginate(stmt, offset, limit))
    return [
        StoreHeadcountReportRow(**StoreOut.model_validate(store).model_dump(), headcount=count)
        for store, count in result.all()
    ]
