import logging
from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.orm import Session

from jobly.errors import BadRequestError, NotFoundError
from jobly.services import job_service
from jobly.utils.sql import COMPANY_FILTERS, bind_params, sql_for_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = "handle, name, description, num_employees, logo_url"

COLUMN_MAP = {"numEmployees": "num_employees", "logoUrl": "logo_url"}
UPDATABLE_COLUMNS = {"name", "description", "num_employees", "logo_url"}


def create(db: Session, data: Mapping[str, Any]) -> dict:
    handle = data["handle"]
    duplicate = db.execute(
        text("SELECT handle, name FROM companies WHERE handle = :handle OR name = :name"),
        {"handle": handle, "name": data["name"]},
    ).first()
    if duplicate is not None:
        if duplicate.handle == handle:
            raise BadRequestError(f"Duplicate company: {handle}")
        raise BadRequestError(f"Duplicate company name: {data['name']}")

    row = db.execute(
        text(
            f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES (:handle, :name, :description, :num_employees, :logo_url)
            RETURNING {COMPANY_COLUMNS}
            """
        ),
        {
            "handle": handle,
            "name": data["name"],
            "description": data["description"],
            "num_employees": data.get("numEmployees"),
            "logo_url": data.get("logoUrl"),
        },
    ).mappings().one()
    db.commit()
    logger.info("Created company %s", handle)
    return dict(row)


def find_all(db: Session, filters: Mapping[str, Any] | None = None) -> list[dict]:
    """Companies ordered by name, optionally filtered.

    Unlike the job search, an empty result is a normal empty list.
    """
    filters = filters or {}
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    clauses, values = sql_for_filters(filters, COMPANY_FILTERS)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    rows = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies {where} ORDER BY name"),
        bind_params(values),
    ).mappings().all()
    return [dict(r) for r in rows]


def get(db: Session, handle: str) -> dict:
    """A company plus its jobs as ``{..., "jobs": [...]}``."""
    row = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = :handle"),
        {"handle": handle},
    ).mappings().first()
    if row is None:
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    company["jobs"] = job_service.find_for_company(db, handle)
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> dict:
    set_cols, values = sql_for_partial_update(data, COLUMN_MAP, UPDATABLE_COLUMNS)
    handle_param = f"p{len(values) + 1}"

    row = db.execute(
        text(
            f"UPDATE companies SET {set_cols} WHERE handle = :{handle_param} "
            f"RETURNING {COMPANY_COLUMNS}"
        ),
        {**bind_params(values), handle_param: handle},
    ).mappings().first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")
    db.commit()
    return dict(row)


def remove(db: Session, handle: str) -> None:
    row = db.execute(
        text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
        {"handle": handle},
    ).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")
    db.commit()
    logger.info("Deleted company %s", handle)
