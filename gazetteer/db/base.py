from datetime import datetime, timezone

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def exact_string(length: int) -> String:
    """String compared case- and accent-sensitively; MySQL's default collation folds both."""
    return String(length).with_variant(String(length, collation="utf8mb4_bin"), "mysql", "mariadb")
