"""
Tests for the company directory
"""

import pytest

from app.core.config import settings
from app.core.errors import Conflict, Forbidden, InvalidArgument, NotFound, Unauthenticated
from app.models.company import COMPANY_HEADERS
from app.services.company_service import CompanyService, new_company_id, verify_password
from app.services.row_store import InMemoryRowStore

@pytest.fixture
def store():
    return InMemoryRowStore()

@pytest.fixture
def acme(store):
    return CompanyService.create_company(store, name="Acme", username="acme", password="pw123456")

class FakeImageHost:
    """Records uploads instead of committing to GitHub"""

    def __init__(self):
        self.uploads = []
        self.deleted = []

    def upload_image(self, file_name, content, folder="images"):
        self.uploads.append((folder, file_name, content))
        return f"https://img.example/{folder}/{file_name}"

    def delete_url(self, url):
        self.deleted.append(url)
        return True

def test_create_company_initializes_directory(store, acme):
    """Test the companies sheet and the company sheet are created"""
    rows = store.read_sheet("companies")

    assert rows[0] == COMPANY_HEADERS
    assert rows[1][:3] == [acme.id, "Acme", "acme"]
    assert rows[1][5] == "enabled"
    assert acme.id.startswith("company_")
    assert store.read_sheet("Acme") == []

def test_password_is_hashed(store, acme):
    """Test the stored password is a verifiable hash, not the plain text"""
    stored = store.read_sheet("companies")[1][3]

    assert stored != "pw123456"
    assert verify_password("pw123456", stored)
    assert not verify_password("wrong", stored)

def test_create_company_requires_fields(store):
    """Test InvalidArgument on missing fields"""
    with pytest.raises(InvalidArgument):
        CompanyService.create_company(store, name="Acme", username="", password="pw")

def test_duplicate_username_conflicts(store, acme):
    """Test usernames are unique"""
    with pytest.raises(Conflict):
        CompanyService.create_company(store, name="Other", username="acme", password="pw")

def test_duplicate_name_conflicts(store, acme):
    """Test display names are unique case-insensitively"""
    with pytest.raises(Conflict):
        CompanyService.create_company(store, name="ACME", username="acme2", password="pw")

def test_create_company_uploads_image(store):
    """Test an image goes to the companies folder and its URL is stored"""
    host = FakeImageHost()
    company = CompanyService.create_company(
        store, name="Acme", username="acme", password="pw", image="data:image/png;base64,AAAA", image_host=host
    )

    assert host.uploads[0][0] == "companies"
    assert company.image.startswith("https://img.example/companies/")
    assert store.read_sheet("companies")[1][4] == company.image

def test_image_ignored_without_host(store):
    """Test that no host configured means no image URL"""
    company = CompanyService.create_company(store, name="Acme", username="acme", password="pw", image="AAAA")
    assert company.image is None

def test_list_companies_hides_hash(store, acme):
    """Test listings only carry public fields"""
    companies = [c.public_dict() for c in CompanyService.list_companies(store)]

    assert companies == [{"id": acme.id, "name": "Acme", "username": "acme", "image": None, "status": "enabled"}]

def test_update_company_partial(store, acme):
    """Test only supplied fields change"""
    updated = CompanyService.update_company(store, acme.id, status="disabled")

    assert updated.name == "Acme"
    assert updated.username == "acme"
    assert updated.password_hash == acme.password_hash
    assert updated.status == "disabled"
    assert store.read_sheet("companies")[1][5] == "disabled"

def test_update_company_rename_renames_sheet(store, acme):
    """Test a new display name renames the company sheet"""
    CompanyService.update_company(store, acme.id, name="Acme Corp")

    assert store.sheet_exists("Acme Corp")
    assert not store.sheet_exists("Acme")
    assert CompanyService.get_by_id(store, acme.id).name == "Acme Corp"

def test_update_company_username_collision(store, acme):
    """Test username changes are checked against other companies"""
    CompanyService.create_company(store, name="Globex", username="globex", password="pw")

    with pytest.raises(Conflict):
        CompanyService.update_company(store, acme.id, username="globex")

def test_update_company_keeps_own_username(store, acme):
    """Test resubmitting the current username is not a collision"""
    updated = CompanyService.update_company(store, acme.id, username="acme", password="newpass1")

    assert verify_password("newpass1", updated.password_hash)

def test_update_unknown_company(store, acme):
    """Test NotFound for an unknown id"""
    with pytest.raises(NotFound):
        CompanyService.update_company(store, "company_0", name="X")

def test_update_company_rejects_bad_status(store, acme):
    """Test status must be enabled or disabled"""
    with pytest.raises(InvalidArgument):
        CompanyService.update_company(store, acme.id, status="archived")

def test_find_by_name_case_insensitive(store, acme):
    """Test lookup falls back to a case-insensitive match"""
    assert CompanyService.find_by_name(store, " acme ").id == acme.id
    assert CompanyService.find_by_name(store, "Globex") is None

def test_authenticate_company(store, acme):
    """Test login with correct and wrong passwords"""
    assert CompanyService.authenticate_company(store, "acme", "pw123456").id == acme.id

    with pytest.raises(Unauthenticated):
        CompanyService.authenticate_company(store, "acme", "wrong")
    with pytest.raises(Unauthenticated):
        CompanyService.authenticate_company(store, "nobody", "pw123456")

def test_authenticate_disabled_company_forbidden(store, acme):
    """Test a disabled company is refused with Forbidden, never NotFound"""
    CompanyService.update_company(store, acme.id, status="disabled")

    with pytest.raises(Forbidden):
        CompanyService.authenticate_company(store, "acme", "pw123456")

def test_authenticate_admin(monkeypatch):
    """Test admin credentials come from settings"""
    monkeypatch.setattr(settings, "ADMIN_USERNAME", "root")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "s3cret")

    assert CompanyService.authenticate_admin("root", "s3cret")
    with pytest.raises(Unauthenticated):
        CompanyService.authenticate_admin("root", "nope")

@pytest.mark.parametrize("name", ["companies", " Companies ", "COMPANIES"])
def test_directory_sheet_name_is_reserved(store, acme, name):
    """Test no company can take the directory sheet's title"""
    with pytest.raises(InvalidArgument):
        CompanyService.create_company(store, name=name, username="other", password="pw")

    assert [c.name for c in CompanyService.list_companies(store)] == ["Acme"]
    assert len(store.read_sheet("companies")) == 2

def test_rename_to_directory_sheet_name_rejected(store, acme):
    """Test renames cannot take the directory sheet's title either"""
    with pytest.raises(InvalidArgument):
        CompanyService.update_company(store, acme.id, name="Companies")

    assert CompanyService.get_by_id(store, acme.id).name == "Acme"
    assert store.sheet_exists("Acme")

def test_sheet_conflict_leaves_directory_untouched(store, acme):
    """Test a taken sheet title saves no directory row and drops the uploaded logo"""
    store.create_sheet("Globex")
    host = FakeImageHost()

    with pytest.raises(Conflict):
        CompanyService.create_company(
            store, name="Globex", username="globex", password="pw", image="AAAA", image_host=host
        )

    assert [c.name for c in CompanyService.list_companies(store)] == ["Acme"]
    assert host.deleted == [f"https://img.example/companies/{host.uploads[0][1]}"]

def test_rename_conflict_leaves_row_unchanged(store, acme):
    """Test a failed sheet rename keeps the directory row on the old name"""
    store.create_sheet("Globex")

    with pytest.raises(Conflict):
        CompanyService.update_company(store, acme.id, name="Globex")

    assert CompanyService.get_by_id(store, acme.id).name == "Acme"
    assert store.sheet_exists("Acme")

def test_create_company_rejects_oversized_image(store, monkeypatch):
    """Test logos above the upload limit are refused before any write"""
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 2)
    host = FakeImageHost()

    with pytest.raises(InvalidArgument):
        CompanyService.create_company(store, name="Acme", username="acme", password="pw", image="AAAA", image_host=host)

    assert host.uploads == []
    assert CompanyService.list_companies(store) == []

def test_company_ids_unique_within_a_millisecond(monkeypatch):
    """Test ids minted at the same instant still differ"""
    monkeypatch.setattr("app.services.company_service.time.time", lambda: 1700000000.0)

    ids = {new_company_id() for _ in range(20)}

    assert len(ids) == 20
    assert all(i.startswith("company_1700000000000_") for i in ids)
