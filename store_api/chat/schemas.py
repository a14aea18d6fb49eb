from datetime import datetime

from pydantic import Field

from store_api.utils.schemas import CamelModel


class ChatMessageCreate(CamelModel):
    nickname: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=4000)


class ChatMessageOut(CamelModel):
    id: int
    nickname: str | None = None
    message: str | None = None
    timestamp: datetime | None = None
