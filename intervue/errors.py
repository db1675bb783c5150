"""Error taxonomy shared by services and views.

Services raise these; the operation boundary (``utils.notify.guarded``) turns
them into a flashed message and a ``None`` result, and the app-level error
handlers render any that escape a view.
"""


class AppError(Exception):
    http_status = 500
    default_message = "Unexpected error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(AppError):
    http_status = 401
    default_message = "Please sign in to continue"


class AuthorizationDenied(AppError):
    http_status = 403
    default_message = "You do not have access to this page"


class NotFound(AppError):
    http_status = 404
    default_message = "Not found"

    def __init__(self, entity, entity_id=None, message=None):
        self.entity = entity
        self.entity_id = entity_id
        if message is None:
            message = f"{entity} {entity_id} not found" if entity_id is not None else f"{entity} not found"
        super().__init__(message)


class ValidationError(AppError):
    http_status = 400
    default_message = "Invalid input"

    def __init__(self, message=None, field=None):
        self.field = field
        super().__init__(message)


class InvalidTransition(ValidationError):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move interview from {current} to {target}", field="status")


class ConflictError(AppError):
    http_status = 409
    default_message = "The record was changed or is still in use"


class RemoteUnavailable(AppError):
    http_status = 503
    default_message = "The data store is unavailable, please try again"
