from pydantic import Field

from jobly.schemas.base import CamelInput, CamelModel

URL_PATTERN = r"^https?://\S+$"


class CompanyNew(CamelInput):
    handle: str = Field(min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(None, ge=0)
    logo_url: str | None = Field(None, pattern=URL_PATTERN)


class CompanyUpdate(CamelInput):
    name: str = Field(None, min_length=1)
    description: str = Field(None)
    num_employees: int | None = Field(None, ge=0)
    logo_url: str | None = Field(None, pattern=URL_PATTERN)


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: int | None
    logo_url: str | None


class CompanyJob(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: str | None


class CompanyDetail(CompanyResponse):
    jobs: list[CompanyJob] = []


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetail


class CompanyListResponse(CamelModel):
    companies: list[CompanyResponse]
