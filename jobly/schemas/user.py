from pydantic import Field

from jobly.schemas.base import CamelInput, CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class UserRegister(CamelInput):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=128)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60, pattern=EMAIL_PATTERN)


class UserNew(UserRegister):
    is_admin: bool = False


class UserUpdate(CamelInput):
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    password: str = Field(None, min_length=5, max_length=128)
    email: str = Field(None, min_length=6, max_length=60, pattern=EMAIL_PATTERN)


class UserResponse(CamelModel):
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserEnvelope(CamelModel):
    user: UserResponse


class UserTokenEnvelope(CamelModel):
    user: UserResponse
    token: str


class UserListResponse(CamelModel):
    users: list[UserResponse]
