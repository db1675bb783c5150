from functools import wraps

from ..access import evaluate, respond
from ..roles import canonical_role, STAFF_ROLES
from ..session import get_session


def roles_required(*roles):
    required = frozenset(canonical_role(r, strict=True) for r in roles)

    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            denied = respond(evaluate(get_session(), required))
            if denied is not None:
                return denied
            return view(*args, **kwargs)
        return wrapped
    return decorator


admin_required = roles_required(*STAFF_ROLES)
