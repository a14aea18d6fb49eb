from datetime import datetime

from pydantic import Field

from store_api.users.schemas import UserDetailOut, UserOut
from store_api.utils.schemas import CamelModel


class Credentials(CamelModel):
    name: str = Field(..., min_length=1, max_length=450)
    password: str = Field(..., min_length=1)


class RegisterOut(CamelModel):
    user: UserOut
    code: str
    expiration: datetime


class LoginOut(CamelModel):
    token: str
    refresh_token: str
    user: UserDetailOut
