"""
Company API routes - events and registrations, admin or owning company only
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.core.store import get_image_host, get_store
from app.schemas.event import EventCreate, EventStatusUpdate
from app.services.company_service import CompanyService
from app.services.event_service import EventService
from app.services.export_service import ExportService
from app.services.registration_service import RegistrationService
from app.services.row_store import RowStore
from app.utils.responses import success_response
from app.utils.security import Principal, ensure_company_access, get_current_user

router = APIRouter()

def authorize(store: RowStore, principal: Principal, company_name: str) -> str:
    """Check access and return the company's stored display name"""
    company = CompanyService.get_by_name(store, company_name)
    ensure_company_access(principal, company.id)
    return company.name

@router.post("/events")
def create_event(
    event_data: EventCreate,
    store: RowStore = Depends(get_store),
    image_host=Depends(get_image_host),
    principal: Principal = Depends(get_current_user)
):
    """Create an event table in the company sheet"""
    company_name = authorize(store, principal, event_data.company_name)

    event = EventService.create_event(
        store,
        company_name=company_name,
        event_name=event_data.event_name,
        event_description=event_data.event_description,
        event_date=event_data.event_date,
        image=event_data.image,
        image_host=image_host
    )

    return success_response(
        message="Event created successfully",
        data={"event": event},
        status_code=201
    )

@router.put("/events/status")
def set_event_status(
    status_update: EventStatusUpdate,
    store: RowStore = Depends(get_store),
    principal: Principal = Depends(get_current_user)
):
    """Enable or disable registration for an event"""
    company_name = authorize(store, principal, status_update.company)

    event = EventService.set_event_status(
        store,
        company_name=company_name,
        event_id=status_update.event,
        status=status_update.status
    )

    return success_response(
        message="Event status updated",
        data={"event": event}
    )

@router.delete("/events/{company_name}/{event_name}")
def delete_event(
    company_name: str,
    event_name: str,
    store: RowStore = Depends(get_store),
    image_host=Depends(get_image_host),
    principal: Principal = Depends(get_current_user)
):
    """Delete an event table and its banner image"""
    company_name = authorize(store, principal, company_name)
    deleted = EventService.delete_event(store, company_name, event_name, image_host=image_host)

    return success_response(
        message="Event deleted successfully",
        data={"event": deleted}
    )

@router.get("/events/{company_name}/{event_name}/registrations")
def list_registrations(
    company_name: str,
    event_name: str,
    store: RowStore = Depends(get_store),
    principal: Principal = Depends(get_current_user)
):
    """Registrations of an event; National ID is visible to admins only"""
    company_name = authorize(store, principal, company_name)
    listing = RegistrationService.list_registrations(
        store, company_name, event_name, caller_is_admin=principal.is_admin
    )

    return success_response(
        message="Registrations retrieved successfully",
        data=listing
    )

@router.get("/events/{company_name}/{event_name}/export.xlsx")
def export_registrations_excel(
    company_name: str,
    event_name: str,
    store: RowStore = Depends(get_store),
    principal: Principal = Depends(get_current_user)
):
    """Download registrations as an Excel file"""
    company_name = authorize(store, principal, company_name)
    listing = RegistrationService.list_registrations(
        store, company_name, event_name, caller_is_admin=principal.is_admin
    )
    content = ExportService.to_excel(listing["headers"], listing["rows"], sheet_name=event_name)

    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": ExportService.content_disposition(company_name, event_name, 'xlsx')}
    )

@router.get("/events/{company_name}/{event_name}/export.csv")
def export_registrations_csv(
    company_name: str,
    event_name: str,
    store: RowStore = Depends(get_store),
    principal: Principal = Depends(get_current_user)
):
    """Download registrations as CSV"""
    company_name = authorize(store, principal, company_name)
    listing = RegistrationService.list_registrations(
        store, company_name, event_name, caller_is_admin=principal.is_admin
    )
    content = ExportService.to_csv(listing["headers"], listing["rows"])

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": ExportService.content_disposition(company_name, event_name, 'csv')}
    )
