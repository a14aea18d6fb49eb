import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="store_api_tests_")

os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{os.path.join(_tmp, 'store_api.db')}")
os.environ.setdefault("LOG_DIR", os.path.join(_tmp, "logs"))
os.environ.setdefault("SECRET", "test-secret")
