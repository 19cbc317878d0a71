"""Shared base for domain entities"""

from datetime import datetime, timezone
from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
BigIntId = BigInteger().with_variant(Integer(), "sqlite")


def utc_now() -> datetime:
    """Timezone-aware current time; timestamp columns reject naive values"""
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    pass
