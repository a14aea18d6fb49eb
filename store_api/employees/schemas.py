from datetime import datetime
from typing import List

from pydantic import Field, model_validator

from store_api.roles.schemas import StoreEmployeeRoleOut
from store_api.shifts.schemas import StoreShiftOut
from store_api.users.models import Gender
from store_api.utils.schemas import CamelModel


class StoreEmployeeBase(CamelModel):
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)
    gender: Gender = Gender.MALE
    employment_date: datetime | None = None
    termination_date: datetime | None = None
    salary: float = Field(0.0, ge=0)
    store_employee_role_id: int | None = None

    @model_validator(mode="after")
    def check_dates(self):
        if (
            self.employment_date
            and self.termination_date
            and self.termination_date < self.employment_date
        ):
            raise ValueError("terminationDate must not be earlier than employmentDate")
        return self


class StoreEmployeeCreate(StoreEmployeeBase):
    pass


class StoreEmployeeUpdate(StoreEmployeeBase):
    pass


class StoreEmployeeOut(StoreEmployeeBase):
    id: int
    user_id: int | None = None


class StoreEmployeeDetailOut(StoreEmployeeOut):
    store_employee_role: StoreEmployeeRoleOut | None = None
    store_shifts: List[StoreShiftOut] = []
