from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, Text

from app.db import Base
from app.utils.ids import new_object_id


def _utc_now():
    return datetime.now(UTC)


class Category(Base):
    """Location category; filter menus reference these by id."""

    __tablename__ = "categories"

    id = Column(String(24), primary_key=True, default=new_object_id)
    name = Column(String(200), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)
