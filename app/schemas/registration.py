"""
Registration-related Pydantic schemas
"""

from typing import Optional
from pydantic import BaseModel, Field

class RegistrationRequest(BaseModel):
    """Public registration form.

    Everything is optional here so missing fields reach the service and come
    back as one "All fields are required" error instead of a schema error.
    """
    company_name: Optional[str] = Field(default=None, alias="companyName")
    event_name: Optional[str] = Field(default=None, alias="eventName")
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[str] = None
    college: Optional[str] = None
    status: Optional[str] = None
    national_id: Optional[str] = Field(default=None, alias="nationalId")

    model_config = {"populate_by_name": True}

    def registrant(self) -> dict:
        return {
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "gender": self.gender,
            "college": self.college,
            "status": self.status,
            "national_id": self.national_id,
        }
