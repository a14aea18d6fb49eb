import logging
import random
from datetime import datetime, timedelta

from fastapi import HTTPException, status
from sqlalchemy import delete, insert, select, tuple_, update
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.employees.models import StoreEmployee
from store_api.roles.models import StoreEmployeeRole
from store_api.shifts.models import StoreShift
from store_api.stores.models import Store, StoreCategory
from store_api.users.models import Gender, UserProfile

logger = logging.getLogger(__name__)

MAX_BULK_COUNT = 9_999_999
BULK_BATCH_SIZE = 1_000

# Sample data
FIRST_NAMES = ["James", "Mary", "Robert", "Patricia", "John", "Jennifer", "Michael", "Linda",
               "David", "Elizabeth", "William", "Barbara", "Richard", "Susan", "Joseph", "Jessica",
               "Thomas", "Sarah", "Andrei", "Ioana", "Mihai", "Elena", "Jo", "Alex"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
              "Rodriguez", "Martinez", "Hernandez", "Lopez", "Wilson", "Anderson", "Taylor",
              "Moore", "Popescu", "Ionescu", "Pop", "Stan"]
STORE_ADJECTIVES = ["Golden", "Corner", "Urban", "Happy", "Green", "Royal", "Bright", "Central",
                    "Sunny", "Silver", "Little", "Grand"]
STORE_NOUNS = ["Market", "Shop", "Emporium", "Outlet", "Depot", "Boutique", "Bazaar", "Mart",
               "Store", "Corner", "Gallery", "Hub"]
STREETS = ["Main St", "Oak Ave", "Pine Rd", "Maple Dr", "Cedar Ln", "Elm St", "Park Ave",
           "Lake Rd", "Hill St", "River Rd"]
LOCATIONS = [
    ("Cluj-Napoca", "Cluj", "400000", "Romania"),
    ("Bucharest", "Ilfov", "010011", "Romania"),
    ("Springfield", "Illinois", "62701", "USA"),
    ("Austin", "Texas", "73301", "USA"),
    ("Portland", "Oregon", "97201", "USA"),
    ("Munich", "Bavaria", "80331", "Germany"),
    ("Lyon", "Auvergne-Rhone-Alpes", "69001", "France"),
]
ROLE_NAMES = ["Cashier", "Stocker", "Manager", "Assistant Manager", "Security", "Cleaner",
              "Sales Associate", "Supervisor", "Accountant", "Merchandiser"]
ROLE_QUALIFIERS = ["Junior", "Senior", "Lead", "Trainee", "Head", "Night", "Weekend"]


def _random_datetime(start: datetime, end: datetime) -> datetime:
    span = int((end - start).total_seconds())
    return start + timedelta(seconds=random.randint(0, max(span, 0)))


def _fake_store(owner_id: int) -> dict:
    city, state, zip_code, country = random.choice(LOCATIONS)
    open_date = _random_datetime(datetime(1990, 1, 1), datetime(2020, 12, 31))
    close_date = _random_datetime(open_date, open_date + timedelta(days=365 * 20)) if random.random() < 0.2 else None
    return {
        "name": f"{random.choice(STORE_ADJECTIVES)} {random.choice(STORE_NOUNS)} {random.randint(1, 9999)}",
        "description": f"A {random.choice(STORE_ADJECTIVES).lower()} place to shop.",
        "address": f"{random.randint(1, 999)} {random.choice(STREETS)}",
        "city": city,
        "state": state,
        "zip_code": zip_code,
        "country": country,
        "category": random.choice(list(StoreCategory)),
        "open_date": open_date,
        "close_date": close_date,
        "user_id": owner_id,
    }


def _fake_role(owner_id: int) -> dict:
    name = f"{random.choice(ROLE_QUALIFIERS)} {random.choice(ROLE_NAMES)}"
    return {
        "name": name,
        "description": f"Responsibilities of a {name.lower()}.",
        "role_level": random.randint(1, 10),
        "user_id": owner_id,
    }


def _fake_employee(owner_id: int, role_ids: list[int]) -> dict:
    employment_date = _random_datetime(datetime(2000, 1, 1), datetime(2023, 12, 31))
    termination_date = (
        _random_datetime(employment_date, employment_date + timedelta(days=365 * 5))
        if random.random() < 0.15
        else None
    )
    return {
        "first_name": random.choice(FIRST_NAMES),
        "last_name": random.choice(LAST_NAMES),
        "gender": random.choice(list(Gender)),
        "employment_date": employment_date,
        "termination_date": termination_date,
        "salary": round(random.uniform(1_500, 15_000), 2),
        "store_employee_role_id": random.choice(role_ids) if role_ids else None,
        "user_id": owner_id,
    }


def _fake_shift(owner_id: int, store_id: int, employee_id: int) -> dict:
    start_date = _random_datetime(datetime(2020, 1, 1), datetime(2024, 12, 31))
    return {
        "store_id": store_id,
        "store_employee_id": employee_id,
        "start_date": start_date,
        "end_date": start_date + timedelta(hours=random.choice([4, 6, 8, 10, 12])),
        "user_id": owner_id,
    }


async def _insert_in_batches(session: AsyncSession, model, rows_factory, count: int):
    for batch_start in range(0, count, BULK_BATCH_SIZE):
        batch_size = min(BULK_BATCH_SIZE, count - batch_start)
        await session.execute(insert(model), [rows_factory() for _ in range(batch_size)])
        logger.debug("Inserted %s/%s %s rows", batch_start + batch_size, count, model.__tablename__)


async def _scalar_list(session: AsyncSession, stmt) -> list:
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def generate_stores(session: AsyncSession, count: int, owner_id: int) -> int:
    await _insert_in_batches(session, Store, lambda: _fake_store(owner_id), count)
    await session.commit()
    return count


async def generate_roles(session: AsyncSession, count: int, owner_id: int) -> int:
    await _insert_in_batches(session, StoreEmployeeRole, lambda: _fake_role(owner_id), count)
    await session.commit()
    return count


async def generate_employees(session: AsyncSession, count: int, owner_id: int) -> int:
    role_ids = await _scalar_list(session, select(StoreEmployeeRole.id))
    await _insert_in_batches(session, StoreEmployee, lambda: _fake_employee(owner_id, role_ids), count)
    await session.commit()
    return count


def _pick_free_pairs(store_ids: list[int], employee_ids: list[int], taken: set, count: int) -> list[tuple]:
    available = len(store_ids) * len(employee_ids) - len(taken)
    if available < count:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Not enough stores and employees to create {count} new shifts ({available} pairs left)",
        )
    if available <= 4 * count:
        # dense: enumerate what is left and sample from it
        free = [(s, e) for s in store_ids for e in employee_ids if (s, e) not in taken]
        return random.sample(free, count)

    picked = set()
    while len(picked) < count:
        pair = (random.choice(store_ids), random.choice(employee_ids))
        if pair not in taken:
            picked.add(pair)
    return list(picked)


async def generate_shifts(session: AsyncSession, count: int, owner_id: int) -> int:
    store_ids = await _scalar_list(session, select(Store.id))
    employee_ids = await _scalar_list(session, select(StoreEmployee.id))
    existing = await session.execute(select(StoreShift.store_id, StoreShift.store_employee_id))
    taken = {tuple(row) for row in existing.all()}

    pairs = iter(_pick_free_pairs(store_ids, employee_ids, taken, count))
    await _insert_in_batches(session, StoreShift, lambda: _fake_shift(owner_id, *next(pairs)), count)
    await session.commit()
    return count


async def _delete_first(session: AsyncSession, model, key_columns, count: int) -> int:
    """Delete the first ``count`` rows of ``model`` by ascending primary key."""
    first_keys = select(*key_columns).order_by(*key_columns).limit(count)
    if len(key_columns) == 1:
        condition = key_columns[0].in_(first_keys)
    else:
        condition = tuple_(*key_columns).in_(first_keys)
    result = await session.execute(
        delete(model).where(condition).execution_options(synchronize_session=False)
    )
    await session.commit()
    return result.rowcount


async def delete_stores(session: AsyncSession, count: int) -> int:
    return await _delete_first(session, Store, [Store.id], count)


async def delete_roles(session: AsyncSession, count: int) -> int:
    return await _delete_first(session, StoreEmployeeRole, [StoreEmployeeRole.id], count)


async def delete_employees(session: AsyncSession, count: int) -> int:
    return await _delete_first(session, StoreEmployee, [StoreEmployee.id], count)


async def delete_shifts(session: AsyncSession, count: int) -> int:
    return await _delete_first(
        session, StoreShift, [StoreShift.store_id, StoreShift.store_employee_id], count
    )


async def set_page_preference_for_all(session: AsyncSession, value: int) -> int:
    result = await session.execute(
        update(UserProfile).values(page_preference=value).execution_options(synchronize_session=False)
    )
    await session.commit()
    return result.rowcount


BULK_ENTITIES = {
    "stores": ("stores", generate_stores, delete_stores),
    "storeemployees": ("employees", generate_employees, delete_employees),
    "storeemployeeroles": ("roles", generate_roles, delete_roles),
    "storeshifts": ("shifts", generate_shifts, delete_shifts),
}


def resolve_bulk_entity(entity: str):
    handlers = BULK_ENTITIES.get(entity.lower())
    if handlers is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown entity '{entity}'. Expected one of: {', '.join(BULK_ENTITIES)}",
        )
    return handlers
