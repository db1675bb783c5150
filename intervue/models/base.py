import enum

from ..extensions import db


class TimestampMixin:
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())


class StatusEnum(str, enum.Enum):
    """String-valued status enum; stored as its value in a String column."""

    @classmethod
    def values(cls):
        return [m.value for m in cls]

    @classmethod
    def choices(cls):
        return [(m.value, m.value) for m in cls]
