"""
Admin API routes - company directory, admin token required
"""

from fastapi import APIRouter, Depends

from app.core.store import get_image_host, get_store
from app.schemas.company import CompanyCreate, CompanyUpdate
from app.services.company_service import CompanyService
from app.services.row_store import RowStore
from app.utils.responses import success_response
from app.utils.security import Principal, require_admin

router = APIRouter()

@router.get("/companies")
def list_companies(
    store: RowStore = Depends(get_store),
    admin: Principal = Depends(require_admin)
):
    """List every company without password hashes"""
    companies = CompanyService.list_companies(store)

    return success_response(
        message="Companies retrieved successfully",
        data={"companies": [company.public_dict() for company in companies]}
    )

@router.post("/companies")
def create_company(
    company_data: CompanyCreate,
    store: RowStore = Depends(get_store),
    image_host=Depends(get_image_host),
    admin: Principal = Depends(require_admin)
):
    """Create a company and its sheet"""
    company = CompanyService.create_company(
        store,
        name=company_data.name,
        username=company_data.username,
        password=company_data.password,
        image=company_data.image,
        image_host=image_host
    )

    return success_response(
        message="Company created successfully",
        data={"company": company.public_dict()},
        status_code=201
    )

@router.put("/companies/{company_id}")
def update_company(
    company_id: str,
    company_update: CompanyUpdate,
    store: RowStore = Depends(get_store),
    image_host=Depends(get_image_host),
    admin: Principal = Depends(require_admin)
):
    """Update the supplied company fields"""
    company = CompanyService.update_company(
        store,
        company_id,
        name=company_update.name,
        username=company_update.username,
        password=company_update.password,
        image=company_update.image,
        status=company_update.status,
        image_host=image_host
    )

    return success_response(
        message="Company updated successfully",
        data={"company": company.public_dict()}
    )
