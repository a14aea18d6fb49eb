import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from store_api.auth.dependencies import get_current_user
from store_api.auth.router import router as auth_router
from store_api.admin.router import router as admin_router
from store_api.chat.router import router as chat_router
from store_api.employees.router import router as employees_router
from store_api.logs.middleware import LogUserActionMiddleware
from store_api.logs.router import router as logs_router
from store_api.roles.router import router as roles_router
from store_api.shifts.router import router as shifts_router
from store_api.stores.models import StoreCategory
from store_api.stores.router import router as stores_router
from store_api.users.models import AccessLevel, Gender, MaritalStatus, User
from store_api.users.router import router as users_router
from store_api.utils.create_admin import create_admin_user
from store_api.utils.enums import enum_choices

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_admin_user()
    yield


app = FastAPI(lifespan=lifespan, title="Store API", description="Store and employee management API", version="0.0.1")

app.add_middleware(LogUserActionMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def plain_text_http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def plain_text_validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return PlainTextResponse("\n".join(messages), status_code=422)


@app.get("/enums")
async def list_enums(user: User = Depends(get_current_user)):
    return {
        "accessLevel": enum_choices(AccessLevel),
        "gender": enum_choices(Gender),
        "maritalStatus": enum_choices(MaritalStatus),
        "storeCategory": enum_choices(StoreCategory),
    }


app.include_router(
    router=auth_router,
    prefix="/auth",
    tags=["Auth"],
)

app.include_router(
    router=admin_router,
    prefix="/users",
    tags=["Admin"],
)

app.include_router(
    router=users_router,
    prefix="/users",
    tags=["Users"],
)

app.include_router(
    router=stores_router,
    prefix="/stores",
    tags=["Stores"],
)

app.include_router(
    router=employees_router,
    prefix="/storeemployees",
    tags=["Employees"],
)

app.include_router(
    router=roles_router,
    prefix="/storeemployeeroles",
    tags=["Roles"],
)

app.include_router(
    router=shifts_router,
    prefix="/storeshifts",
    tags=["Shifts"],
)

app.include_router(
    router=chat_router,
    prefix="/chat",
    tags=["Chat"],
)

app.include_router(
    router=logs_router,
    prefix="/logs",
    tags=["Logs"],
)
