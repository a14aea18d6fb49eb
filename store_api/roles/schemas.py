from typing import List

from pydantic import Field

from store_api.utils.schemas import CamelModel


class StoreEmployeeRoleBase(CamelModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    role_level: int = Field(0, ge=0)


class StoreEmployeeRoleCreate(StoreEmployeeRoleBase):
    pass


class StoreEmployeeRoleUpdate(StoreEmployeeRoleBase):
    pass


class StoreEmployeeRoleOut(StoreEmployeeRoleBase):
    id: int
    user_id: int | None = None


class RoleEmployeeSummary(CamelModel):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    salary: float


class StoreEmployeeRoleDetailOut(StoreEmployeeRoleOut):
    store_employees: List[RoleEmployeeSummary] = []
