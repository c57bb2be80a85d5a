"""
Tests for registration rules: validation, gating, duplicates and listings
"""

import pytest

from app.core.errors import Conflict, Forbidden, InvalidArgument, NotFound
from app.services.company_service import CompanyService
from app.services.event_service import EventService
from app.services.registration_service import RegistrationService
from app.services.row_store import InMemoryRowStore
from app.services.table_service import TableService

@pytest.fixture
def store():
    """Acme with a single event, Launch"""
    store = InMemoryRowStore()
    CompanyService.create_company(store, name="Acme", username="acme", password="pw123456")
    EventService.create_event(
        store,
        company_name="Acme",
        event_name="Launch",
        event_description="d",
        event_date="2025-01-01"
    )
    return store

def make_registrant(**overrides):
    registrant = {
        "name": "Sam",
        "phone": "01012345678",
        "email": "sam@x.com",
        "gender": "male",
        "college": "Eng",
        "status": "student",
        "national_id": "123",
    }
    registrant.update(overrides)
    return registrant

def test_register_success(store):
    """Test a valid registration is appended to the event table"""
    result = RegistrationService.register(store, "Acme", "Launch", make_registrant())

    assert result["name"] == "Sam"
    assert result["email"] == "sam@x.com"
    assert result["registrationDate"].endswith("Z")

    table = TableService.read_table(store, "Acme", "Launch")
    registrants = table.registrant_rows()
    assert len(registrants) == 1
    row = registrants[0]
    assert table.value(row, "National ID") == "123"
    assert table.value(row, "Registration Date") == result["registrationDate"]
    assert table.value(row, "Image") == ""
    assert table.value(row, "EventStatus") == ""

def test_register_same_email_twice_conflicts(store):
    """Test the duplicate law: success then Conflict"""
    RegistrationService.register(store, "Acme", "Launch", make_registrant())

    with pytest.raises(Conflict):
        RegistrationService.register(store, "Acme", "Launch", make_registrant(phone="01099999999", name="Other"))

def test_register_same_phone_twice_conflicts(store):
    """Test duplicate detection by phone"""
    RegistrationService.register(store, "Acme", "Launch", make_registrant())

    with pytest.raises(Conflict):
        RegistrationService.register(store, "Acme", "Launch", make_registrant(email="other@x.com"))

def test_duplicate_match_is_exact_string(store):
    """Test that a re-cased email is treated as a different registrant"""
    RegistrationService.register(store, "Acme", "Launch", make_registrant())
    RegistrationService.register(store, "Acme", "Launch", make_registrant(email="SAM@x.com", phone="01099999999"))

    table = TableService.read_table(store, "Acme", "Launch")
    assert len(table.registrant_rows()) == 2

def test_register_resolves_recased_names(store):
    """Test company and event names arriving re-cased from a URL"""
    RegistrationService.register(store, "acme", "launch", make_registrant())

    table = TableService.read_table(store, "Acme", "Launch")
    assert len(table.registrant_rows()) == 1

def test_register_disabled_event_forbidden(store):
    """Test registration is refused once the event is disabled"""
    EventService.set_event_status(store, "Acme", "Launch", "disabled")

    with pytest.raises(Forbidden):
        RegistrationService.register(store, "Acme", "Launch", make_registrant(email="new@x.com"))

def test_register_disabled_company_forbidden(store):
    """Test a disabled company rejects registrations with Forbidden, not NotFound"""
    company = CompanyService.get_by_name(store, "Acme")
    CompanyService.update_company(store, company.id, status="disabled")

    with pytest.raises(Forbidden):
        RegistrationService.register(store, "Acme", "Launch", make_registrant())

def test_register_unknown_company(store):
    """Test NotFound for an unknown company"""
    with pytest.raises(NotFound):
        RegistrationService.register(store, "Globex", "Launch", make_registrant())

def test_register_unknown_event(store):
    """Test NotFound for an unknown event"""
    with pytest.raises(NotFound):
        RegistrationService.register(store, "Acme", "Gala", make_registrant())

@pytest.mark.parametrize("overrides, message", [
    ({"college": ""}, "All fields are required"),
    ({"national_id": None}, "All fields are required"),
    ({"email": "not-an-email"}, "Invalid email format"),
    ({"email": "sam@x"}, "Invalid email format"),
    ({"phone": "12345"}, "Invalid phone number format"),
    ({"phone": "0101234567a"}, "Invalid phone number format"),
])
def test_register_validation(store, overrides, message):
    """Test invalid input is rejected before anything is written"""
    before = store.read_sheet("Acme")

    with pytest.raises(InvalidArgument) as exc_info:
        RegistrationService.register(store, "Acme", "Launch", make_registrant(**overrides))

    assert exc_info.value.message == message
    assert store.read_sheet("Acme") == before

def test_validation_runs_before_store_access():
    """Test that invalid input never touches the store"""
    empty = InMemoryRowStore()

    with pytest.raises(InvalidArgument):
        RegistrationService.register(empty, "Acme", "Launch", make_registrant(email="bad"))

def test_list_registrations_hides_national_id_for_companies(store):
    """Test the National ID column is admin-only"""
    RegistrationService.register(store, "Acme", "Launch", make_registrant())

    as_company = RegistrationService.list_registrations(store, "Acme", "Launch", caller_is_admin=False)
    as_admin = RegistrationService.list_registrations(store, "Acme", "Launch", caller_is_admin=True)

    assert "National ID" not in as_company["headers"]
    assert "National ID" not in as_company["rows"][0]
    assert "National ID" in as_admin["headers"]
    assert as_admin["rows"][0]["National ID"] == "123"

def test_list_registrations_skips_settings(store):
    """Test metadata columns and the settings row stay out of the listing"""
    RegistrationService.register(store, "Acme", "Launch", make_registrant())

    listing = RegistrationService.list_registrations(store, "Acme", "Launch", caller_is_admin=True)

    assert listing["total"] == 1
    for column in ["Image", "EventDescription", "EventDate", "EventStatus"]:
        assert column not in listing["headers"]
    assert listing["rows"][0]["Name"] == "Sam"
