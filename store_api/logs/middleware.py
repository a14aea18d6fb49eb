"""Per-request activity log: one line in ``user_activity.log`` and one ``user_logs`` row."""
import logging
import os
import re

from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from store_api.auth.tokens import decode_token
from store_api.config import LOG_DIR
from store_api.database import async_session_maker
from store_api.logs.models import UserLog
from store_api.users.models import User
from store_api.utils.ip import get_real_ip

os.makedirs(LOG_DIR, exist_ok=True)

logger = logging.getLogger(__name__)
activity_logger = logging.getLogger("store_api.activity")
activity_logger.setLevel(logging.INFO)
if not activity_logger.handlers:
    _handler = logging.FileHandler(os.path.join(LOG_DIR, "user_activity.log"))
    _handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    activity_logger.addHandler(_handler)

UNLOGGED_PATHS = re.compile(r"/(docs|redoc|openapi\.json|favicon|auth/refresh)")
MAX_USER_AGENT_LENGTH = 250


def _user_id_from_request(request: Request) -> int | None:
    raw = request.headers.get("Authorization") or request.cookies.get("Authorization")
    scheme, token = get_authorization_scheme_param(raw)
    if scheme.lower() != "bearer" or not token:
        return None
    try:
        return int(decode_token(token).get("sub"))
    except (JWTError, TypeError, ValueError):
        return None


async def _store_entry(entry: UserLog):
    async with async_session_maker() as session:
        # the token may outlive its account
        if entry.user_id is not None and await session.get(User, entry.user_id) is None:
            entry.user_id = None
        session.add(entry)
        await session.commit()


class LogUserActionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if UNLOGGED_PATHS.match(request.url.path):
            return await call_next(request)

        entry = UserLog(
            user_id=_user_id_from_request(request),
            path=request.url.path,
            query_string=str(request.url.query),
            ip_address=await get_real_ip(request),
            user_agent=request.headers.get("user-agent", "unknown")[:MAX_USER_AGENT_LENGTH],
        )
        entry.action = f"{request.method} {entry.path}" + (f"?{entry.query_string}" if entry.query_string else "")

        response = await call_next(request)
        entry.status_code = response.status_code

        activity_logger.info(
            "%s user=%s %s -> %s UA=%s",
            entry.ip_address, entry.user_id, entry.action, entry.status_code, entry.user_agent,
        )
        try:
            await _store_entry(entry)
        except SQLAlchemyError:
            # a lost log row must not change the response
            logger.exception("Could not store activity entry for %s", entry.action)
        return response
