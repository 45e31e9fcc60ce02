class AppError(Exception):
    """Base for errors that map to an HTTP response with a client-safe detail."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(AppError):
    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    @property
    def errors(self) -> list[dict[str, str]]:
        return [{"field": self.field, "message": self.message}]


class InvalidCredentials(AppError):
    status_code = 401
    detail = "Invalid credentials"


class Unauthenticated(AppError):
    status_code = 401
    detail = "Invalid or expired token"


class Forbidden(AppError):
    status_code = 403
    detail = "Admin access required"


class Conflict(AppError):
    status_code = 409
    detail = "Resource already exists"


class NotFound(AppError):
    status_code = 404
    detail = "Not found"


class PersistenceError(AppError):
    status_code = 500
    detail = "Could not save record"


class CalendarSyncFailure(AppError):
    """Raised inside the calendar client only; never reaches a caller."""

    status_code = 502
    detail = "Calendar sync failed"
