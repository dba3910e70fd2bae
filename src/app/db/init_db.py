"""
Database initialization helper.
"""

import app.models  # noqa: F401  (registers models with Base)
from app.db import Base, get_engine


def init_db() -> None:
    """
    Create database tables for all registered models.
    """
    Base.metadata.create_all(bind=get_engine())


def drop_db() -> None:
    Base.metadata.drop_all(bind=get_engine())
