"""Inspiration model for storing short snippets of text (quotes, thoughts, links, tasks, notes)."""

from sqlalchemy import Column, String, Text
from capsule.models.base import Base, TimestampMixin


class Inspiration(Base, TimestampMixin):
    """Model representing a single captured inspiration."""

    __tablename__ = "inspirations"
    id = Column(String, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    category = Column(String, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Inspiration id={self.id!r} category={self.category!r}>"
