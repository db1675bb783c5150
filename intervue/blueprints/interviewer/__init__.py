from flask import Blueprint

bp = Blueprint("interviewer", __name__)

from . import routes  # noqa: E402,F401
