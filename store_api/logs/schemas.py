from datetime import datetime

from store_api.utils.schemas import CamelModel


class UserLogOut(CamelModel):
    id: int
    timestamp: datetime | None = None
    user_id: int | None = None
    action: str
    path: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    status_code: int | None = None
    query_string: str | None = None
