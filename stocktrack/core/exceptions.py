"""
Application Errors

Services raise these; main.py turns them into {"detail": message} responses.
"""


class AppError(Exception):
    """Base error carrying an HTTP status and a displayable message"""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidInputError(AppError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    status_code = 400
    default_message = "Record already exists"


class InsufficientStockError(AppError):
    status_code = 400

    def __init__(self, available: int, requested: int, additional: bool = False):
        self.available = available
        self.requested = requested
        label = "Requested additional" if additional else "Requested"
        super().__init__(f"Insufficient stock. Available: {available}, {label}: {requested}")


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class NotificationError(AppError):
    status_code = 500
    default_message = "Failed to send notification"
