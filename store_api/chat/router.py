from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.auth.dependencies import get_current_user, get_moderator_or_admin
from store_api.chat.models import ChatMessage
from store_api.chat.schemas import ChatMessageCreate, ChatMessageOut
from store_api.database import get_async_session
from store_api.users.models import User
from store_api.utils.errors import get_or_404
from store_api.utils.query_params import MAX_PAGE_SIZE, paginate

router = APIRouter()


@router.get("/{offset}/{limit}", response_model=List[ChatMessageOut])
async def list_messages(
    offset: int = Path(..., ge=0),
    limit: int = Path(..., ge=1, le=MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    stmt = select(ChatMessage).order_by(ChatMessage.timestamp.desc(), ChatMessage.id.desc())
    result = await session.execute(paginate(stmt, offset, limit))
    return result.scalars().all()


@router.post("", response_model=ChatMessageOut, status_code=status.HTTP_201_CREATED)
async def post_message(
    payload: ChatMessageCreate,
    session: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    message = ChatMessage(nickname=payload.nickname, message=payload.message, timestamp=datetime.utcnow())
    session.add(message)
    await session.commit()
    return message


@router.delete("/{message_id}", response_class=PlainTextResponse)
async def delete_message(
    message_id: int,
    session: AsyncSession = Depends(get_async_session),
    moderator: User = Depends(get_moderator_or_admin),
):
    message = await get_or_404(session, ChatMessage, message_id, "Message not found")
    await session.delete(message)
    await session.commit()
    return f"Successfully deleted message {message_id}."
