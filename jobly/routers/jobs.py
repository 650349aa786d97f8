from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import ensure_admin
from jobly.schemas.job import JobEnvelope, JobListResponse, JobNew, JobUpdate
from jobly.services import job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])

FILTER_PARAMS = {"title", "minSalary", "hasEquity"}


@router.post("", response_model=JobEnvelope, status_code=201, dependencies=[Depends(ensure_admin)])
async def create_job(req: JobNew, db: Session = Depends(get_db)):
    job = job_service.create(db, req.model_dump(mode="json", by_alias=True))
    return {"job": job}


@router.get("", response_model=JobListResponse)
async def list_jobs(
    request: Request,
    title: str | None = Query(None, min_length=1),
    min_salary: int | None = Query(None, alias="minSalary", ge=0),
    has_equity: bool | None = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """All jobs, or the jobs matching ``title``, ``minSalary`` and ``hasEquity``."""
    if not request.query_params:
        return {"jobs": job_service.find_all(db)}

    filters = {
        key: value
        for key, value in (("title", title), ("minSalary", min_salary), ("hasEquity", has_equity))
        if value is not None
    }
    # Unknown keys go through so the filter builder rejects them.
    for key in request.query_params.keys():
        if key not in FILTER_PARAMS:
            filters[key] = request.query_params[key]

    return {"jobs": job_service.find_filtered(db, filters)}


@router.get("/{job_id}", response_model=JobEnvelope)
async def get_job(job_id: int, db: Session = Depends(get_db)):
    return {"job": job_service.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
async def update_job(job_id: int, req: JobUpdate, db: Session = Depends(get_db)):
    data = req.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return {"job": job_service.update(db, job_id, data)}


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
async def delete_job(job_id: int, db: Session = Depends(get_db)):
    job_service.remove(db, job_id)
    return {"deleted": f"Job {job_id}"}
