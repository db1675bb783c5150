from flask import current_app, flash

from ..errors import AppError, RemoteUnavailable
from ..extensions import db


def guarded(fn, *args, success=None, **kwargs):
    """Run one service operation at a view boundary.

    On success the optional ``success`` message is flashed and the result
    returned. Any AppError is flashed instead and None is returned, meaning
    the operation did not happen.
    """
    try:
        result = fn(*args, **kwargs)
    except AppError as e:
        db.session.rollback()
        if not isinstance(e, RemoteUnavailable):
            # transport failures are already logged with a traceback
            current_app.logger.info("%s failed: %s", getattr(fn, "__name__", fn), e.message)
        flash(e.message, "danger")
        return None
    if success:
        flash(success, "success")
    return result


def flash_form_errors(form):
    for field_name, errors in form.errors.items():
        label = getattr(getattr(form, field_name, None), "label", None)
        name = label.text if label is not None else field_name
        for err in errors:
            flash(f"{name}: {err}", "danger")
