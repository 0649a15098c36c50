class AppError(Exception):
    """Base error carrying a client-facing message and HTTP status."""

    status_code = 500
    message = "the server encountered a problem and could not process your request"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = 400
    message = "bad request"


class UnauthorizedError(AppError):
    status_code = 401
    message = "invalid or missing authentication token"


class ForbiddenError(AppError):
    status_code = 403
    message = "you do not have permission to perform this action"


class NotFoundError(AppError):
    status_code = 404
    message = "the requested resource could not be found"


class ValidationFailedError(AppError):
    """Multi-field validation failure; rendered as the bare error map."""

    status_code = 400
    message = "validation failed"

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__()


class PersistenceError(AppError):
    status_code = 500
    message = "failed to access the data store"


class QueryTimeoutError(AppError):
    status_code = 504
    message = "the data store took too long to respond"


class InternalError(AppError):
    status_code = 500
