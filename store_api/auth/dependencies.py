from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.auth.tokens import decode_token
from store_api.database import get_async_session
from store_api.users.models import AccessLevel, User


class BearerTokenWithCookie(HTTPBearer):
    """Reads the bearer token from the Authorization header, falling back to the cookie."""

    async def __call__(self, request: Request) -> str:
        auth_header = request.headers.get("Authorization")
        cookie_auth = request.cookies.get("Authorization")
        scheme, param = get_authorization_scheme_param(auth_header or cookie_auth)
        if scheme.lower() != "bearer" or not param:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        return param


bearer_scheme = BearerTokenWithCookie()


async def get_current_user(
    token: str = Depends(bearer_scheme), session: AsyncSession = Depends(get_async_session)
) -> User:
    try:
        payload = decode_token(token)
        if payload.get("type") == "refresh":
            raise ValueError("refresh token used as access token")
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = await session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account no longer exists")
    return user


async def get_confirmed_user(current_user: User = Depends(get_current_user)) -> User:
    if current_user.access_level < AccessLevel.REGULAR:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is not confirmed")
    return current_user


async def get_moderator_or_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.access_level < AccessLevel.MODERATOR:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Moderators or admins only")
    return current_user


async def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    if current_user.access_level != AccessLevel.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin only")
    return current_user


def ensure_can_modify(current_user: User, owner_id: int | None):
    """Owners may change their own rows; moderators and admins may change any row."""
    if current_user.access_level >= AccessLevel.MODERATOR:
        return
    if owner_id is None or owner_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have enough privileges to modify this entry",
        )
