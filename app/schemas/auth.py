"""
Login schemas
"""

from typing import Literal, Optional
from pydantic import BaseModel

class LoginRequest(BaseModel):
    username: str
    password: str
    type: Literal["admin", "company"]

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_type: str
    company_id: Optional[str] = None
    company_name: Optional[str] = None
