"""
Company directory stored in the flat companies sheet
"""

import logging
import secrets
import time
from typing import List, Optional, Tuple

from passlib.context import CryptContext

from app.core.config import settings
from app.core.errors import Conflict, Forbidden, InvalidArgument, NotFound, Unauthenticated
from app.models.company import COMPANY_HEADERS, Company
from app.models.event import STATUS_ENABLED, STATUSES
from app.models.table import normalize_name
from app.services.image_host import GitHubImageHost, check_image
from app.services.row_store import RowStore
from app.services.table_service import TableService

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Not a recognizable bcrypt hash
        return False


def new_company_id() -> str:
    return f"company_{int(time.time() * 1000)}_{secrets.token_hex(3)}"


class CompanyService:
    """CRUD and credential checks over the companies sheet"""

    @staticmethod
    def _sheet() -> str:
        return settings.COMPANIES_SHEET

    @staticmethod
    def _check_name(name: str) -> None:
        # Sheet titles compare case-insensitively, so the directory's own title is taken
        if normalize_name(name) == normalize_name(CompanyService._sheet()):
            raise InvalidArgument(f'"{name}" is reserved and cannot be used as a company name')

    @staticmethod
    def _ensure_sheet(store: RowStore) -> None:
        if store.sheet_exists(CompanyService._sheet()):
            return
        logger.info("Companies sheet does not exist, creating it")
        store.create_sheet(CompanyService._sheet())
        store.append_rows(CompanyService._sheet(), [COMPANY_HEADERS])

    @staticmethod
    def _load(store: RowStore) -> List[Company]:
        try:
            rows = store.read_sheet(CompanyService._sheet())
        except NotFound:
            return []
        # Skip header row and blank rows left behind by manual edits
        return [Company.from_row(row) for row in rows[1:] if any(str(c).strip() for c in row)]

    @staticmethod
    def _load_indexed(store: RowStore) -> List[Tuple[int, Company]]:
        """Companies with their absolute row index in the sheet"""
        rows = store.read_sheet(CompanyService._sheet())
        return [
            (index, Company.from_row(row))
            for index, row in enumerate(rows)
            if index > 0 and any(str(c).strip() for c in row)
        ]

    @staticmethod
    def list_companies(store: RowStore) -> List[Company]:
        return CompanyService._load(store)

    @staticmethod
    def get_by_id(store: RowStore, company_id: str) -> Company:
        company = next((c for c in CompanyService._load(store) if c.id == company_id), None)
        if company is None:
            raise NotFound("Company not found")
        return company

    @staticmethod
    def find_by_name(store: RowStore, name: str) -> Optional[Company]:
        """Exact display-name match first, then trimmed case-insensitive"""
        companies = CompanyService._load(store)
        exact = next((c for c in companies if c.name == name), None)
        if exact:
            return exact
        key = normalize_name(name)
        return next((c for c in companies if normalize_name(c.name) == key), None)

    @staticmethod
    def get_by_name(store: RowStore, name: str) -> Company:
        company = CompanyService.find_by_name(store, name)
        if company is None:
            raise NotFound("Company not found")
        return company

    @staticmethod
    def get_enabled(store: RowStore, name: str) -> Company:
        company = CompanyService.get_by_name(store, name)
        if not company.enabled:
            raise Forbidden("Company is disabled")
        return company

    @staticmethod
    def create_company(
        store: RowStore,
        name: str,
        username: str,
        password: str,
        image: Optional[str] = None,
        image_host: Optional[GitHubImageHost] = None,
    ) -> Company:
        name = (name or "").strip()
        username = (username or "").strip()
        if not name or not username or not password:
            raise InvalidArgument("Name, username, and password are required")

        CompanyService._check_name(name)
        if image:
            check_image(image, settings.MAX_UPLOAD_SIZE)

        CompanyService._ensure_sheet(store)
        existing = CompanyService._load(store)
        if any(c.username == username for c in existing):
            raise Conflict("Username already exists")
        # The display name doubles as the company's sheet title
        if any(normalize_name(c.name) == normalize_name(name) for c in existing):
            raise Conflict("Company name already exists")

        company_id = new_company_id()
        company = Company(
            id=company_id,
            name=name,
            username=username,
            password_hash=hash_password(password),
            image=CompanyService._upload_image(company_id, image, image_host),
            status=STATUS_ENABLED,
        )

        # Sheet first: a directory row must never point at a sheet it does not own
        try:
            store.create_sheet(company.name)
        except Conflict:
            if company.image and image_host is not None:
                image_host.delete_url(company.image)
            raise
        store.append_rows(CompanyService._sheet(), [company.to_row()])

        logger.info(f"Created company {company.name} ({company.id})")
        return company

    @staticmethod
    def update_company(
        store: RowStore,
        company_id: str,
        name: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        image: Optional[str] = None,
        status: Optional[str] = None,
        image_host: Optional[GitHubImageHost] = None,
    ) -> Company:
        """Overwrite only the supplied fields; a new name also renames the company sheet"""
        if not company_id:
            raise InvalidArgument("Company ID is required")
        if status and status not in STATUSES:
            raise InvalidArgument('Status must be either "enabled" or "disabled"')

        indexed = CompanyService._load_indexed(store)
        match = next(((i, c) for i, c in indexed if c.id == company_id), None)
        if match is None:
            raise NotFound("Company not found")
        row_index, current = match
        others = [c for _, c in indexed if c.id != company_id]

        new_name = (name or "").strip() or current.name
        new_username = (username or "").strip() or current.username

        if new_username != current.username and any(c.username == new_username for c in others):
            raise Conflict("Username already exists")
        if new_name != current.name:
            CompanyService._check_name(new_name)
            if any(normalize_name(c.name) == normalize_name(new_name) for c in others):
                raise Conflict("Company name already exists")
        if image:
            check_image(image, settings.MAX_UPLOAD_SIZE)

        updated = Company(
            id=current.id,
            name=new_name,
            username=new_username,
            password_hash=hash_password(password) if password else current.password_hash,
            image=CompanyService._upload_image(current.id, image, image_host) if image else current.image,
            status=status or current.status,
        )
        if new_name != current.name:
            TableService.rename_sheet(store, current.name, new_name)
        store.update_row(CompanyService._sheet(), row_index, updated.to_row())

        logger.info(f"Updated company {updated.name} ({updated.id})")
        return updated

    @staticmethod
    def authenticate_company(store: RowStore, username: str, password: str) -> Company:
        company = next((c for c in CompanyService._load(store) if c.username == username), None)
        if company is None:
            raise Unauthenticated("Invalid username or password")
        if not company.enabled:
            logger.info(f"Company {company.name} is disabled, login rejected")
            raise Forbidden("Company is disabled")
        if not verify_password(password, company.password_hash):
            raise Unauthenticated("Invalid username or password")
        return company

    @staticmethod
    def authenticate_admin(username: str, password: str) -> bool:
        user_ok = secrets.compare_digest(username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8"))
        password_ok = secrets.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))
        if not (user_ok and password_ok):
            raise Unauthenticated("Invalid username or password")
        return True

    @staticmethod
    def _upload_image(
        company_id: str,
        image: Optional[str],
        image_host: Optional[GitHubImageHost],
    ) -> Optional[str]:
        if not image:
            return None
        if image_host is None:
            logger.warning(f"Image supplied for {company_id} but no image host is configured")
            return None
        file_name = f"company_{company_id}_{int(time.time() * 1000)}.jpg"
        return image_host.upload_image(file_name, image, "companies")
