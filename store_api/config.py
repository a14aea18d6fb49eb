from dotenv import load_dotenv
import os

load_dotenv()

DB_HOST = os.environ.get("DB_HOST", "localhost")
DB_PORT = os.environ.get("DB_PORT", "5432")
DB_NAME = os.environ.get("DB_NAME", "store")
DB_USER = os.environ.get("DB_USER", "postgres")
DB_PASS = os.environ.get("DB_PASS", "postgres")

DATABASE_URL = os.environ.get(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

REDIS_PORT = os.environ.get("REDIS_PORT", "6379")
REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")

SECRET = os.environ.get("SECRET", "change-me")

ADMIN_NAME = os.environ.get("ADMIN_NAME")
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")

CONFIRMATION_CODE_EXPIRY_MINUTES = int(os.environ.get("CONFIRMATION_CODE_EXPIRY_MINUTES", 10))

LOG_DIR = os.environ.get("LOG_DIR", "logs")
LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", 7))

LOGIN_MAX_ATTEMPTS = int(os.environ.get("LOGIN_MAX_ATTEMPTS", 5))
LOGIN_BLOCK_SECONDS = int(os.environ.get("LOGIN_BLOCK_SECONDS", 10 * 60))
