"""
Event-related Pydantic schemas
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field

class EventCreate(BaseModel):
    """Schema for creating an event"""
    company_name: str = Field(alias="companyName")
    event_name: str = Field(alias="eventName")
    event_description: str = Field(alias="eventDescription")
    event_date: str = Field(alias="eventDate")
    image: Optional[str] = None

    model_config = {"populate_by_name": True}

class EventStatusUpdate(BaseModel):
    """Enable or disable registration for an event"""
    company: str
    event: str
    status: Literal["enabled", "disabled"]
