"""Database utilities - engine and session."""

from src.taskboard.core.db.engine import create_schema, dispose_engine, get_engine
from src.taskboard.core.db.session import get_session

__all__ = [
    # Engine
    "create_schema",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
]
