import secrets
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import redis.asyncio as redis

from store_api.auth.dependencies import bearer_scheme, get_current_user
from store_api.auth.schemas import Credentials, LoginOut, RegisterOut
from store_api.auth.tokens import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    REFRESH_TOKEN_EXPIRE_DAYS,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from store_api.config import CONFIRMATION_CODE_EXPIRY_MINUTES, REDIS_HOST, REDIS_PORT
from store_api.database import get_async_session
from store_api.users.models import AccessLevel, ConfirmationCode, User
from store_api.users.schemas import UserDetailOut, UserOut
from store_api.users.service import add_user_with_profile, build_user_detail, pwd_context
from store_api.utils.errors import commit_or_conflict
from store_api.utils.ip import get_real_ip
from store_api.utils.ratelimit import is_blocked, register_failed_attempt, reset_attempts

router = APIRouter()

redis_client = redis.Redis(host=REDIS_HOST, port=int(REDIS_PORT), decode_responses=True)

ACCESS_COOKIE_MAX_AGE = ACCESS_TOKEN_EXPIRE_MINUTES * 60
REFRESH_COOKIE_MAX_AGE = REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60


def _set_auth_cookies(response: JSONResponse, access_token: str, refresh_token: str):
    response.set_cookie(
        key="Authorization",
        value=f"Bearer {access_token}",
        httponly=True,
        secure=True,
        samesite="Lax",
        max_age=ACCESS_COOKIE_MAX_AGE,
        path="/",
    )
    response.set_cookie(
        key="refresh_token",
        value=refresh_token,
        httponly=True,
        secure=True,
        samesite="Lax",
        max_age=REFRESH_COOKIE_MAX_AGE,
        path="/",
    )


@router.post("/register", response_model=RegisterOut, status_code=status.HTTP_201_CREATED)
async def register(payload: Credentials, session: AsyncSession = Depends(get_async_session)):
    user = await add_user_with_profile(session, payload.name, payload.password, AccessLevel.UNCONFIRMED)
    confirmation = ConfirmationCode(
        code=secrets.token_urlsafe(24),
        expiration=datetime.utcnow() + timedelta(minutes=CONFIRMATION_CODE_EXPIRY_MINUTES),
        used=False,
        user_id=user.id,
    )
    session.add(confirmation)
    await commit_or_conflict(session, f"User name '{payload.name}' is already taken")
    return RegisterOut(user=UserOut.model_validate(user), code=confirmation.code, expiration=confirmation.expiration)


@router.post("/register/confirm/{code}", response_model=UserOut)
async def confirm_registration(code: str, session: AsyncSession = Depends(get_async_session)):
    result = await session.execute(select(ConfirmationCode).where(ConfirmationCode.code == code))
    confirmation = result.scalar_one_or_none()
    if not confirmation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Confirmation code not found")
    if confirmation.used:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Confirmation code has already been used")
    if confirmation.expiration is not None and confirmation.expiration < datetime.utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Confirmation code has expired")

    user = await session.get(User, confirmation.user_id)
    confirmation.used = True
    if user.access_level < AccessLevel.REGULAR:
        user.access_level = AccessLevel.REGULAR
    await session.commit()
    return user


@router.post("/login", response_model=LoginOut)
async def login(
    request: Request,
    payload: Credentials,
    session: AsyncSession = Depends(get_async_session),
):
    ip = await get_real_ip(request)
    if await is_blocked(ip):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many failed login attempts, try again later",
        )

    result = await session.execute(select(User).where(User.name == payload.name))
    user = result.scalar_one_or_none()
    if not user or not pwd_context.verify(payload.password, user.password):
        attempts_left = await register_failed_attempt(ip)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid credentials, {attempts_left} attempts left",
        )
    await reset_attempts(ip)

    access_token = create_access_token({"sub": str(user.id)})
    refresh_token = create_refresh_token({"sub": str(user.id)})
    await redis_client.set(f"refresh_token:{user.id}", refresh_token, ex=REFRESH_COOKIE_MAX_AGE)

    body = LoginOut(
        token=access_token,
        refresh_token=refresh_token,
        user=await build_user_detail(session, user),
    )
    response = JSONResponse(content=body.model_dump(mode="json", by_alias=True))
    _set_auth_cookies(response, access_token, refresh_token)
    return response


@router.post("/refresh")
async def refresh_token(request: Request):
    token = request.cookies.get("refresh_token")
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing refresh token")

    try:
        payload = decode_token(token)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    saved_token = await redis_client.get(f"refresh_token:{user_id}")
    if saved_token != token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token mismatch")

    new_access = create_access_token({"sub": str(user_id)})
    new_refresh = create_refresh_token({"sub": str(user_id)})
    await redis_client.set(f"refresh_token:{user_id}", new_refresh, ex=REFRESH_COOKIE_MAX_AGE)

    response = JSONResponse(content={"token": new_access, "refreshToken": new_refresh})
    _set_auth_cookies(response, new_access, new_refresh)
    return response


@router.get("/me", response_model=UserDetailOut)
async def get_me(user: User = Depends(get_current_user), session: AsyncSession = Depends(get_async_session)):
    return await build_user_detail(session, user)


@router.get("/logout")
async def logout(token: str = Depends(bearer_scheme)):
    try:
        payload = decode_token(token)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        user_id = None
    if user_id is not None:
        await redis_client.delete(f"refresh_token:{user_id}")

    response = JSONResponse(content={"message": "Logged out"})
    response.delete_cookie("Authorization", path="/")
    response.delete_cookie("refresh_token", path="/")
    return response
