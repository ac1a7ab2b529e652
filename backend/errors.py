"""
errors.py — Typed failures raised by the services.
The HTTP layer maps each class to a status code; services never build responses.
"""


class SocialError(Exception):
    """Base class for every error the services raise on purpose."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SocialError):
    """Malformed or empty required input."""

    status_code = 400


class ConflictError(SocialError):
    """Duplicate relationship, duplicate like, duplicate account."""

    status_code = 409

    def __init__(self, message: str, status: str | None = None):
        super().__init__(message)
        # Status of the existing row that caused the conflict, when there is one
        self.status = status


class NotFoundError(SocialError):
    status_code = 404


class ForbiddenError(SocialError):
    """Acting on a resource owned by someone else."""

    status_code = 403
