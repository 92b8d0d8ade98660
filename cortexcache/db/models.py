"""
SQLAlchemy ORM Model Definitions

Defines all database table structures for the system, including:
- snippets: Snippets Table
- kv_store: Key-Value Store Table (backs database sessions)
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from cortexcache.common.time import utc_now_naive


class Base(DeclarativeBase):
    """SQLAlchemy ORM Base Class"""
    pass


class Snippet(Base):
    """
    Snippets Table

    Stores submitted text snippets. Rows are never updated; a snippet
    stops being visible once `expires` has passed.
    """
    __tablename__ = "snippets"

    # Primary Key ID
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Title, at most 100 characters
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    # Snippet body
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Creation Time (UTC)
    created: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )
    # Expiration Time (UTC)
    expires: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        Index("idx_snippets_created", "created"),
    )


class KeyValueStore(Base):
    """
    Key-Value Store Table

    Generic key-value pairs with optional expiration, used for session data.
    """
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    # NULL means never expires
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False
    )

    __table_args__ = (
        Index("idx_kv_store_expires_at", "expires_at"),
    )
