from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import ensure_admin
from jobly.schemas.company import (
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyNew,
    CompanyUpdate,
)
from jobly.services import company_service

router = APIRouter(prefix="/companies", tags=["companies"])

FILTER_PARAMS = {"nameLike", "minEmployees", "maxEmployees"}


@router.post("", response_model=CompanyEnvelope, status_code=201, dependencies=[Depends(ensure_admin)])
async def create_company(req: CompanyNew, db: Session = Depends(get_db)):
    company = company_service.create(db, req.model_dump(mode="json", by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    request: Request,
    name_like: str | None = Query(None, alias="nameLike", min_length=1),
    min_employees: int | None = Query(None, alias="minEmployees", ge=0),
    max_employees: int | None = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db),
):
    filters = {
        key: value
        for key, value in (
            ("nameLike", name_like),
            ("minEmployees", min_employees),
            ("maxEmployees", max_employees),
        )
        if value is not None
    }
    for key in request.query_params.keys():
        if key not in FILTER_PARAMS:
            filters[key] = request.query_params[key]

    return {"companies": company_service.find_all(db, filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
async def get_company(handle: str, db: Session = Depends(get_db)):
    return {"company": company_service.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(ensure_admin)])
async def update_company(handle: str, req: CompanyUpdate, db: Session = Depends(get_db)):
    data = req.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return {"company": company_service.update(db, handle, data)}


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
async def delete_company(handle: str, db: Session = Depends(get_db)):
    company_service.remove(db, handle)
    return {"deleted": handle}
