"""Database configuration and utilities."""

from .session import Base, SessionLocal, get_session

__all__ = ["Base", "get_session", "SessionLocal"]
