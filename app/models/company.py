"""
Company model, one row of the flat companies sheet
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.models.event import STATUS_ENABLED

COMPANY_HEADERS = ["ID", "Name", "Username", "Password", "Image", "Status"]


def _cell(row: List[str], index: int) -> str:
    return row[index] if index < len(row) and row[index] is not None else ""


@dataclass
class Company:
    id: str
    name: str
    username: str
    password_hash: str
    image: Optional[str] = None
    status: str = STATUS_ENABLED

    @classmethod
    def from_row(cls, row: List[str]) -> "Company":
        return cls(
            id=_cell(row, 0),
            name=_cell(row, 1),
            username=_cell(row, 2),
            password_hash=_cell(row, 3),
            image=_cell(row, 4) or None,
            status=_cell(row, 5) or STATUS_ENABLED,
        )

    def to_row(self) -> List[str]:
        return [self.id, self.name, self.username, self.password_hash, self.image or "", self.status]

    @property
    def enabled(self) -> bool:
        return self.status != "disabled"

    def public_dict(self) -> Dict[str, Any]:
        # Password hash never leaves the service layer
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "image": self.image,
            "status": self.status,
        }
