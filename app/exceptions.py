"""Domain errors raised by the service layer.

Services never raise ``HTTPException``; ``app.main`` maps these to responses.
"""


class AppError(Exception):
    """Base class for business-rule rejections."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationRequired(AppError):
    """No valid session for the request."""
    status_code = 401


class AuthorizationError(AppError):
    """Caller is authenticated but not allowed to act on the resource."""
    status_code = 403

    def __init__(self, message: str = "You are not authorized to perform this action"):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Overlapping booking or duplicate unique record."""
    status_code = 409


class InvalidStateTransition(AppError):
    """The entity's current state does not allow the requested change."""
    status_code = 400
