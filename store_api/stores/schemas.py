from datetime import datetime
from typing import List

from pydantic import Field, model_validator

from store_api.shifts.schemas import StoreShiftOut
from store_api.stores.models import StoreCategory
from store_api.utils.schemas import CamelModel


class StoreBase(CamelModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    category: StoreCategory = StoreCategory.RETAIL
    open_date: datetime | None = None
    close_date: datetime | None = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.open_date and self.close_date and self.close_date < self.open_date:
            raise ValueError("closeDate must not be earlier than openDate")
        return self


class StoreCreate(StoreBase):
    pass


class StoreUpdate(StoreBase):
    pass


class StoreOut(StoreBase):
    id: int
    user_id: int | None = None


class StoreDetailOut(StoreOut):
    store_shifts: List[StoreShiftOut] = []


class StoreSalaryReportRow(StoreOut):
    average_salary: float


class StoreHeadcountReportRow(StoreOut):
    headcount: int
