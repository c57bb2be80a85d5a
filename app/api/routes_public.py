"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends, Request

from app.core.store import get_store
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.registration import RegistrationRequest
from app.services.company_service import CompanyService
from app.services.event_service import EventService
from app.services.registration_service import RegistrationService
from app.services.row_store import RowStore
from app.utils.security import Principal, create_access_token, rate_limit_check, get_client_ip
from app.utils.responses import success_response, rate_limit_error

router = APIRouter()

@router.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.post("/auth/login")
def login(
    request: Request,
    credentials: LoginRequest,
    store: RowStore = Depends(get_store)
):
    """Exchange admin or company credentials for a bearer token"""
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        raise rate_limit_error()

    if credentials.type == "admin":
        CompanyService.authenticate_admin(credentials.username, credentials.password)
        principal = Principal(user_type="admin")
    else:
        company = CompanyService.authenticate_company(store, credentials.username, credentials.password)
        principal = Principal(user_type="company", company_id=company.id, company_name=company.name)

    token = TokenResponse(
        access_token=create_access_token(principal),
        user_type=principal.user_type,
        company_id=principal.company_id,
        company_name=principal.company_name
    )
    return success_response(message="Login successful", data=token.model_dump())

@router.get("/companies/{company_name}/events")
def list_events(
    company_name: str,
    store: RowStore = Depends(get_store)
):
    """Events of a company with their registration counts"""
    events = EventService.list_events(store, company_name)

    return success_response(
        message="Events retrieved successfully",
        data={"events": [event.to_dict() for event in events]}
    )

@router.get("/companies/{company_name}/events/{event_id}")
def get_event(
    company_name: str,
    event_id: str,
    store: RowStore = Depends(get_store)
):
    """Public details of one event for the registration page"""
    event = EventService.get_event(store, company_name, event_id)

    return success_response(
        message="Event retrieved successfully",
        data={"event": event.to_dict()}
    )

@router.post("/register")
def register(
    request: Request,
    registration: RegistrationRequest,
    store: RowStore = Depends(get_store)
):
    """Register a person for an event"""
    # Rate limiting for public access
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        raise rate_limit_error()

    result = RegistrationService.register(
        store,
        company_name=registration.company_name,
        event_id=registration.event_name,
        registrant=registration.registrant()
    )

    return success_response(
        message="Registration successful",
        data={"registration": result},
        status_code=201
    )
