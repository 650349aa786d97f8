"""Data access for the ``jobs`` table.

Functions take the request's Session and camelCase data as it arrives from
the API (``companyHandle``), and return rows as plain dicts with
snake_case keys.
"""

import logging
from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.orm import Session

from jobly.errors import NotFoundError
from jobly.utils.sql import JOB_FILTERS, bind_params, sql_for_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = "id, title, salary, equity, company_handle"

UPDATABLE_COLUMNS = {"title", "salary", "equity"}


def create(db: Session, data: Mapping[str, Any]) -> dict:
    handle = data["companyHandle"]
    company = db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": handle},
    ).first()
    if company is None:
        raise NotFoundError(f"Company {handle} not found")

    row = db.execute(
        text(
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES (:title, :salary, :equity, :company_handle)
            RETURNING {JOB_COLUMNS}
            """
        ),
        {
            "title": data["title"],
            "salary": data.get("salary"),
            "equity": data.get("equity"),
            "company_handle": handle,
        },
    ).mappings().one()
    db.commit()
    logger.info("Created job %s for company %s", row["id"], handle)
    return dict(row)


def find_all(db: Session) -> list[dict]:
    rows = db.execute(text(f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY id")).mappings().all()
    return [dict(r) for r in rows]


def find_filtered(db: Session, filters: Mapping[str, Any]) -> list[dict]:
    """Jobs matching every filter, ordered by id.

    Raises NotFoundError when nothing matches; a filtered search with no
    hits is reported to the client as 404 rather than an empty list.
    """
    clauses, values = sql_for_filters(filters, JOB_FILTERS)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    rows = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs {where} ORDER BY id"),
        bind_params(values),
    ).mappings().all()

    if not rows:
        raise NotFoundError("No matching jobs found")
    return [dict(r) for r in rows]


def find_for_company(db: Session, handle: str) -> list[dict]:
    rows = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE company_handle = :handle ORDER BY id"),
        {"handle": handle},
    ).mappings().all()
    return [dict(r) for r in rows]


def get(db: Session, job_id: int) -> dict:
    row = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :id"),
        {"id": job_id},
    ).mappings().first()
    if row is None:
        raise NotFoundError(f"No job: {job_id}")
    return dict(row)


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> dict:
    """Partial update of title, salary and equity."""
    set_cols, values = sql_for_partial_update(data, {}, UPDATABLE_COLUMNS)
    id_param = f"p{len(values) + 1}"

    row = db.execute(
        text(f"UPDATE jobs SET {set_cols} WHERE id = :{id_param} RETURNING {JOB_COLUMNS}"),
        {**bind_params(values), id_param: job_id},
    ).mappings().first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")
    db.commit()
    return dict(row)


def remove(db: Session, job_id: int) -> None:
    row = db.execute(
        text("DELETE FROM jobs WHERE id = :id RETURNING id"),
        {"id": job_id},
    ).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")
    db.commit()
    logger.info("Deleted job %s", job_id)
