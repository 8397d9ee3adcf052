"""Database layer - engine, base classes and column types."""

from admission_kernel.db.base import Base, TrackedBase, TZDateTime, UUIDString
from admission_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "drop_tables",
    "reset_engine",
    "Base",
    "TrackedBase",
    "TZDateTime",
    "UUIDString",
]
