# Storage Package
from .sqlite_session_storage import SQLiteSessionStorage
from .migrations import run_migrations

__all__ = ["SQLiteSessionStorage", "run_migrations"]
