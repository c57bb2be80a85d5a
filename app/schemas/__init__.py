"""
Pydantic schemas package
"""

from .common import *
from .auth import *
from .company import *
from .event import *
from .registration import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "LoginRequest",
    "TokenResponse",
    "CompanyCreate",
    "CompanyUpdate",
    "EventCreate",
    "EventStatusUpdate",
    "RegistrationRequest",
]
