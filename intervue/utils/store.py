"""Helpers for talking to the relational store from service functions."""
from contextlib import contextmanager
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from ..errors import ConflictError, NotFound, RemoteUnavailable
from ..extensions import db


def utcnow():
    # naive UTC, matching how timestamps are stored
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt):
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def coerce_int(val):
    if val is None or val == "":
        return None
    try:
        return int(val)
    except (TypeError, ValueError):
        return None


@contextmanager
def remote_call(action):
    """Translate store failures raised inside the block into AppErrors.

    The session is rolled back so the caller never sees a partial write.
    """
    try:
        yield
    except StaleDataError as e:
        db.session.rollback()
        current_app.logger.info("%s: concurrent update detected", action)
        raise ConflictError("This record was changed by someone else, reload and try again") from e
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.info("%s: integrity error: %s", action, e.orig)
        raise ConflictError("The change conflicts with existing data") from e
    except DBAPIError as e:
        db.session.rollback()
        current_app.logger.exception("%s: store unavailable", action)
        raise RemoteUnavailable() from e


def fetch(model, entity_id, entity=None):
    """Load a row by primary key or raise NotFound."""
    name = entity or model.__name__
    key = coerce_int(entity_id)
    obj = None
    if key is not None:
        with remote_call(f"load {name}"):
            obj = db.session.get(model, key)
    if obj is None:
        raise NotFound(name, entity_id)
    return obj


def commit(action):
    with remote_call(action):
        db.session.commit()
