"""
Company-related Pydantic schemas
"""

from typing import Literal, Optional
from pydantic import BaseModel

class CompanyCreate(BaseModel):
    """Schema for creating a company"""
    name: str
    username: str
    password: str
    image: Optional[str] = None  # base64 or data URL

class CompanyUpdate(BaseModel):
    """Schema for a partial company update"""
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    image: Optional[str] = None
    status: Optional[Literal["enabled", "disabled"]] = None
