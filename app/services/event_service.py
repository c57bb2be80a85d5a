"""
Events of a company: one marker-delimited table per event in the company sheet
"""

import logging
import time
from typing import Dict, List, Optional
from urllib.parse import quote

from app.core.config import settings
from app.core.errors import Conflict, InvalidArgument, NotFound
from app.models.company import Company
from app.models.event import (
    COL_DATE,
    COL_DESCRIPTION,
    COL_EVENT_STATUS,
    COL_IMAGE,
    EVENT_HEADERS,
    STATUS_ENABLED,
    STATUSES,
    EventSummary,
)
from app.models.table import EventTable, SheetLayout
from app.services.company_service import CompanyService
from app.services.image_host import GitHubImageHost, check_image
from app.services.row_store import RowStore
from app.services.table_service import TableService

logger = logging.getLogger(__name__)


def registration_url(company_name: str, event_name: str) -> str:
    return f"{settings.BASE_URL.rstrip('/')}/{quote(company_name, safe='')}/{quote(event_name, safe='')}"


def build_settings_row(
    header: List[str],
    description: str,
    date: str,
    image_url: Optional[str] = None,
    status: str = STATUS_ENABLED,
) -> List[str]:
    row = [""] * len(header)
    values = {
        COL_IMAGE: image_url or "",
        COL_DESCRIPTION: description,
        COL_DATE: date,
        COL_EVENT_STATUS: status,
    }
    for column, value in values.items():
        if column in header:
            row[header.index(column)] = value
    return row


def summarize(table: EventTable, company: Company) -> EventSummary:
    return EventSummary(
        name=table.name,
        image=table.setting(COL_IMAGE) or None,
        description=table.setting(COL_DESCRIPTION),
        date=table.setting(COL_DATE),
        status=table.status,
        registrations=len(table.registrant_rows()),
        company_status=company.status,
    )


class EventService:
    """Event listing, creation, status toggling and removal"""

    @staticmethod
    def list_events(store: RowStore, company_name: str) -> List[EventSummary]:
        company = CompanyService.get_enabled(store, company_name)

        # Each table is re-read on its own so the count reflects current data
        events = []
        for table_range in TableService.list_tables(store, company.name):
            try:
                table = TableService.read_table(store, company.name, table_range.name)
            except NotFound:
                logger.error(f"Event {table_range.name} vanished while listing {company.name}")
                continue
            events.append(summarize(table, company))
        return events

    @staticmethod
    def get_event(store: RowStore, company_name: str, event_id: str) -> EventSummary:
        company = CompanyService.get_enabled(store, company_name)
        table = TableService.read_table(store, company.name, event_id)
        return summarize(table, company)

    @staticmethod
    def resolve_event_name(store: RowStore, sheet: str, event_id: str) -> str:
        """Stored table name for an id that may arrive decoded or re-cased from a URL"""
        layout = SheetLayout.parse(store.read_sheet(sheet))
        table = layout.find_normalized(event_id)
        if table is None:
            raise NotFound("Event not found")
        return table.name

    @staticmethod
    def create_event(
        store: RowStore,
        company_name: str,
        event_name: str,
        event_description: str,
        event_date: str,
        image: Optional[str] = None,
        image_host: Optional[GitHubImageHost] = None,
    ) -> Dict[str, str]:
        event_name = (event_name or "").strip()
        if not company_name or not event_name or not event_description or not event_date:
            raise InvalidArgument("Company name, event name, description and date are required")

        if image:
            check_image(image, settings.MAX_UPLOAD_SIZE)

        company = CompanyService.get_by_name(store, company_name)

        layout = TableService.layout(store, company.name)
        if layout.find_exact(event_name) or layout.find_normalized(event_name):
            raise Conflict(f"Event {event_name} already exists")

        # The table claims the name before the banner is committed
        TableService.create_table(store, company.name, event_name, EVENT_HEADERS)

        image_url = None
        if image and image_host is not None:
            file_name = f"event_{company.name}_{event_name}_{int(time.time() * 1000)}.jpg"
            image_url = image_host.upload_image(file_name, image, "events")
        elif image:
            logger.warning(f"Image supplied for event {event_name} but no image host is configured")

        settings_row = build_settings_row(EVENT_HEADERS, event_description, event_date, image_url)
        TableService.append_to_table(store, company.name, event_name, settings_row)

        logger.info(f"Created event {event_name} for company {company.name}")
        return {
            "id": event_name,
            "name": event_name,
            "image": image_url,
            "description": event_description,
            "date": event_date,
            "status": STATUS_ENABLED,
            "registrationUrl": registration_url(company.name, event_name),
        }

    @staticmethod
    def set_event_status(store: RowStore, company_name: str, event_id: str, status: str) -> Dict[str, str]:
        if not company_name or not event_id or not status:
            raise InvalidArgument("Company name, event name, and status are required")
        if status not in STATUSES:
            raise InvalidArgument('Status must be either "enabled" or "disabled"')

        company = CompanyService.get_by_name(store, company_name)
        layout = TableService.layout(store, company.name)
        table_range = layout.find(event_id)
        if table_range is None:
            raise NotFound("Event not found")

        table = EventTable.from_rows(table_range.name, layout.table_rows(table_range))
        header = list(table.header)
        if COL_EVENT_STATUS not in header:
            # Older tables predate the status column; headers only ever grow
            header.append(COL_EVENT_STATUS)
            store.update_row(company.name, table_range.header_index, header)
            table.header = header

        column = header.index(COL_EVENT_STATUS)
        offset = table.settings_row_offset()
        if offset is None:
            row = build_settings_row(header, "", "", status=status)
            TableService.append_to_table(store, company.name, table_range.name, row)
        else:
            row = list(table.rows[offset])
            row.extend([""] * (len(header) - len(row)))
            row[column] = status
            store.update_row(company.name, table_range.header_index + 1 + offset, row)

        logger.info(f"Event {table_range.name} of {company.name} set to {status}")
        return {"id": table_range.name, "name": table_range.name, "status": status}

    @staticmethod
    def delete_event(
        store: RowStore,
        company_name: str,
        event_name: str,
        image_host: Optional[GitHubImageHost] = None,
    ) -> Dict[str, str]:
        company = CompanyService.get_by_name(store, company_name)
        table = TableService.read_table(store, company.name, event_name)

        image_url = table.setting(COL_IMAGE)
        if image_url and image_host is not None:
            image_host.delete_url(image_url)

        TableService.delete_table(store, company.name, table.name)
        logger.info(f"Deleted event {table.name} of company {company.name}")
        return {"id": table.name, "name": table.name}
