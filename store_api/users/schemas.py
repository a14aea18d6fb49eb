from datetime import datetime

from pydantic import Field

from store_api.users.models import AccessLevel, Gender, MaritalStatus
from store_api.utils.schemas import CamelModel


class UserProfileOut(CamelModel):
    bio: str | None = None
    birthday: datetime | None = None
    gender: Gender = Gender.MALE
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    location: str | None = None
    page_preference: int = 5


class UserProfileUpdate(CamelModel):
    bio: str | None = None
    birthday: datetime | None = None
    gender: Gender | None = None
    marital_status: MaritalStatus | None = None
    location: str | None = None
    page_preference: int | None = Field(None, ge=1, le=9_999_999)


class UserOut(CamelModel):
    id: int
    name: str | None
    access_level: AccessLevel


class UserDetailOut(UserOut):
    user_profile: UserProfileOut | None = None
    store_count: int = 0
    store_employee_count: int = 0
    store_employee_role_count: int = 0
    store_shift_count: int = 0


class UserCreate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=450)
    password: str = Field(..., min_length=1)
    access_level: AccessLevel = AccessLevel.REGULAR


class UserUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=450)
    password: str | None = Field(None, min_length=1)
    access_level: AccessLevel | None = None
    user_profile: UserProfileUpdate | None = None
