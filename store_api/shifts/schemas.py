from datetime import datetime

from pydantic import model_validator

from store_api.utils.schemas import CamelModel


class StoreShiftTimes(CamelModel):
    start_date: datetime | None = None
    end_date: datetime | None = None

    @model_validator(mode="after")
    def check_order(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate must not be earlier than startDate")
        return self


class StoreShiftCreate(StoreShiftTimes):
    store_id: int
    store_employee_id: int


class StoreShiftUpdate(StoreShiftTimes):
    pass


class StoreShiftOut(CamelModel):
    store_id: int
    store_employee_id: int
    start_date: datetime | None = None
    end_date: datetime | None = None
    user_id: int | None = None
