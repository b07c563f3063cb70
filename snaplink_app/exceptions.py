"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to, so the application-level
exception handler can translate it without knowing every subclass.
"""

from fastapi import status


class LinkError(Exception):
    """Base class for link service errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Link service error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class LinkValidationError(LinkError):
    """Malformed URL or code"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class LinkNotFoundError(LinkError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Link not found"


class DuplicateCodeError(LinkError):
    """The code is already taken by another link"""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Code '{code}' already exists")


class StorageError(LinkError):
    """
    Unexpected persistence failure.

    The message is for logs only; clients get a generic 500.
    """

    default_message = "Storage failure"
