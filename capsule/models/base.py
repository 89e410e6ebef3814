from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, DateTime
from datetime import datetime

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.utcnow()


class TimestampMixin:
    """Mixin for the insert-time timestamp column"""
    __abstract__ = True
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

__all__ = ["Base", "TimestampMixin", "utcnow"]
