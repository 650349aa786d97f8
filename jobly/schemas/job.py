from decimal import Decimal

from pydantic import Field, field_serializer

from jobly.schemas.base import CamelInput, CamelModel


def canonical_equity(value: Decimal | None) -> str | None:
    """Plain decimal text without exponent or trailing zeros: 1E-7 -> "0.0000001"."""
    if value is None:
        return None
    return format(value.normalize(), "f")


class JobNew(CamelInput):
    title: str = Field(min_length=1)
    salary: int | None = Field(None, ge=0)
    equity: Decimal | None = Field(None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)

    @field_serializer("equity")
    def _serialize_equity(self, value: Decimal | None) -> str | None:
        return canonical_equity(value)


class JobUpdate(CamelInput):
    # id and companyHandle are immutable, so they are not accepted here.
    title: str = Field(None, min_length=1)
    salary: int | None = Field(None, ge=0)
    equity: Decimal | None = Field(None, ge=0, le=1)

    @field_serializer("equity")
    def _serialize_equity(self, value: Decimal | None) -> str | None:
        return canonical_equity(value)


class JobResponse(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: str | None
    company_handle: str


class JobEnvelope(CamelModel):
    job: JobResponse


class JobListResponse(CamelModel):
    jobs: list[JobResponse]
