"""Declarative base and shared column mixins."""

import threading
import time
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all Jotion models."""

    pass


class TimestampMixin:
    """Adds created_at/updated_at columns maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


_clock_lock = threading.Lock()
_last_creation_time = 0


def next_creation_time() -> int:
    """
    Return a nanosecond timestamp strictly greater than any returned before.

    Used to order documents by insertion even when the wall clock does not
    advance between two inserts.
    """
    global _last_creation_time
    with _clock_lock:
        now = time.time_ns()
        if now <= _last_creation_time:
            now = _last_creation_time + 1
        _last_creation_time = now
        return now
