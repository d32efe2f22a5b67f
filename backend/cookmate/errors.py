"""
Domain errors raised by the service layer.

Routers never translate these by hand: a single exception handler registered
in ``cookmate.main`` renders each one as ``{"detail": message, **extra}``
with the class's status code.
"""


class CookMateError(Exception):
    status_code = 500

    def __init__(self, message: str, **extra):
        super().__init__(message)
        self.message = message
        self.extra = extra


class ValidationError(CookMateError):
    """Missing or malformed input."""
    status_code = 400


class AuthenticationError(CookMateError):
    """Missing, invalid or expired credentials."""
    status_code = 401


class VerificationRequiredError(CookMateError):
    """The account exists but its email has not been verified yet."""
    status_code = 403

    def __init__(self, message: str = "Please verify your email before logging in"):
        super().__init__(message, requires_verification=True)


class NotFoundError(CookMateError):
    status_code = 404


class ConflictError(CookMateError):
    status_code = 409


class UpstreamError(CookMateError):
    """The store or the mail server failed; details are logged server-side."""
    status_code = 500
