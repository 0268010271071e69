"""Database engine and session management."""

from .db_session import DbSessionService, build_engine

__all__ = ["DbSessionService", "build_engine"]
