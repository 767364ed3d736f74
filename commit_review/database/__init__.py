"""Database module for conversation memory."""

from .db import Base, SessionLocal, check_db_connection, engine, init_db

__all__ = ["engine", "SessionLocal", "Base", "init_db", "check_db_connection"]
