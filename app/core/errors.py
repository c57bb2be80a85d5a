"""
Domain errors raised by the services and translated to HTTP responses in main.py
"""

from fastapi import status


class PortalError(Exception):
    """Base class for every error the services raise on purpose"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "invalid_argument"


class Unauthenticated(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "unauthenticated"


class Forbidden(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "forbidden"


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"


class Conflict(PortalError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "conflict"


class StoreUnavailable(PortalError):
    """The spreadsheet or the image host could not be reached or refused the call"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "store_unavailable"
