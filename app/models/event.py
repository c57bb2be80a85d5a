"""
Event table columns and the event summary shown in listings
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

STATUS_ENABLED = "enabled"
STATUS_DISABLED = "disabled"
STATUSES = (STATUS_ENABLED, STATUS_DISABLED)

COL_NAME = "Name"
COL_PHONE = "Phone"
COL_EMAIL = "Email"
COL_GENDER = "Gender"
COL_COLLEGE = "College"
COL_STATUS = "Status"  # student or graduate
COL_NATIONAL_ID = "National ID"
COL_REGISTRATION_DATE = "Registration Date"
COL_IMAGE = "Image"
COL_DESCRIPTION = "EventDescription"
COL_DATE = "EventDate"
COL_EVENT_STATUS = "EventStatus"

EVENT_HEADERS = [
    COL_NAME,
    COL_PHONE,
    COL_EMAIL,
    COL_GENDER,
    COL_COLLEGE,
    COL_STATUS,
    COL_NATIONAL_ID,
    COL_REGISTRATION_DATE,
    COL_IMAGE,
    COL_DESCRIPTION,
    COL_DATE,
    COL_EVENT_STATUS,
]

# Columns that belong to the settings row, never to a registrant
METADATA_COLUMNS = frozenset({COL_IMAGE, COL_DESCRIPTION, COL_DATE, COL_EVENT_STATUS})


@dataclass
class EventSummary:
    """Event as listed for a company"""
    name: str
    image: Optional[str] = None
    description: str = ""
    date: str = ""
    status: str = STATUS_ENABLED
    registrations: int = 0
    company_status: str = STATUS_ENABLED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.name,
            "name": self.name,
            "image": self.image,
            "description": self.description,
            "date": self.date,
            "status": self.status,
            "registrations": self.registrations,
            "companyStatus": self.company_status,
        }
