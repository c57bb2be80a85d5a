"""
Public registration for events and the registrant listing shown to organizers
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List

from app.core.errors import Conflict, Forbidden, InvalidArgument, NotFound
from app.models.event import (
    COL_COLLEGE,
    COL_EMAIL,
    COL_GENDER,
    COL_IMAGE,
    COL_NAME,
    COL_NATIONAL_ID,
    COL_PHONE,
    COL_REGISTRATION_DATE,
    COL_STATUS,
    METADATA_COLUMNS,
    STATUS_DISABLED,
)
from app.models.table import EventTable, cell_at
from app.services.company_service import CompanyService
from app.services.event_service import EventService
from app.services.row_store import RowStore
from app.services.table_service import TableService

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\d{10,15}$")

# Registrant field -> table column
REGISTRANT_COLUMNS = {
    "name": COL_NAME,
    "phone": COL_PHONE,
    "email": COL_EMAIL,
    "gender": COL_GENDER,
    "college": COL_COLLEGE,
    "status": COL_STATUS,
    "national_id": COL_NATIONAL_ID,
}


def registration_timestamp() -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RegistrationService:
    """Registration rules layered over the event tables"""

    @staticmethod
    def validate_registrant(company_name: str, event_id: str, registrant: Dict[str, str]) -> Dict[str, str]:
        """Check every field before the store is touched; returns trimmed values"""
        values = {"company_name": company_name, "event_id": event_id}
        values.update({field: registrant.get(field) for field in REGISTRANT_COLUMNS})
        cleaned = {key: (value or "").strip() if isinstance(value, str) else "" for key, value in values.items()}

        missing = [key for key, value in cleaned.items() if not value]
        if missing:
            logger.info(f"Registration rejected, missing fields: {missing}")
            raise InvalidArgument("All fields are required")
        if not EMAIL_RE.match(cleaned["email"]):
            raise InvalidArgument("Invalid email format")
        if not PHONE_RE.match(cleaned["phone"]):
            raise InvalidArgument("Invalid phone number format")
        return cleaned

    @staticmethod
    def find_existing(table: EventTable, phone: str, email: str) -> bool:
        """Exact-string match on phone or email among registrant rows"""
        phone_col = table.column(COL_PHONE)
        email_col = table.column(COL_EMAIL)
        for row in table.registrant_rows():
            if email_col != -1 and cell_at(row, email_col) == email:
                return True
            if phone_col != -1 and cell_at(row, phone_col) == phone:
                return True
        return False

    @staticmethod
    def build_row(table: EventTable, registrant: Dict[str, str], registered_at: str) -> List[str]:
        """Registrant row aligned with the table header; metadata columns stay empty"""
        row = [""] * len(table.header)
        for field, column in REGISTRANT_COLUMNS.items():
            index = table.column(column)
            if index != -1:
                row[index] = registrant[field]
        date_index = table.column(COL_REGISTRATION_DATE)
        if date_index != -1:
            row[date_index] = registered_at
        image_index = table.column(COL_IMAGE)
        if image_index != -1:
            row[image_index] = ""
        return row

    @staticmethod
    def register(
        store: RowStore,
        company_name: str,
        event_id: str,
        registrant: Dict[str, str],
    ) -> Dict[str, str]:
        data = RegistrationService.validate_registrant(company_name, event_id, registrant)
        company_name, event_id = data["company_name"], data["event_id"]
        logger.info(f"Registration request for {company_name}/{event_id} from {data['email']}")

        company = CompanyService.find_by_name(store, company_name)
        if company is None:
            logger.warning(f"Company {company_name} not found in companies sheet")
            raise NotFound("Company not found")
        if not company.enabled:
            raise Forbidden("Company is disabled, registration is not available")

        try:
            event_name = EventService.resolve_event_name(store, company.name, event_id)
            table = TableService.read_table(store, company.name, event_name)
        except NotFound:
            logger.warning(f"Event {event_id} not found in company {company.name}")
            raise NotFound("Event not found")

        if table.status == STATUS_DISABLED:
            raise Forbidden("Event registration is currently disabled")

        if RegistrationService.find_existing(table, data["phone"], data["email"]):
            raise Conflict("You are already registered for this event")

        registered_at = registration_timestamp()
        row = RegistrationService.build_row(table, data, registered_at)
        TableService.append_to_table(store, company.name, event_name, row)

        logger.info(f"Registered {data['email']} for {company.name}/{event_name}")
        return {
            "name": data["name"],
            "email": data["email"],
            "registrationDate": registered_at,
        }

    @staticmethod
    def list_registrations(
        store: RowStore,
        company_name: str,
        event_id: str,
        caller_is_admin: bool = False,
    ) -> Dict[str, Any]:
        """Registrant rows keyed by header; National ID only for admins"""
        company = CompanyService.get_by_name(store, company_name)
        table = TableService.read_table(store, company.name, event_id)

        hidden = set(METADATA_COLUMNS)
        if not caller_is_admin:
            hidden.add(COL_NATIONAL_ID)
        visible = [(index, header) for index, header in enumerate(table.header) if header not in hidden]

        rows = [
            {header: cell_at(row, index) for index, header in visible}
            for row in table.registrant_rows()
        ]
        return {
            "headers": [header for _, header in visible],
            "rows": rows,
            "total": len(rows),
        }
