from pydantic import BaseModel, ConfigDict, Field


class CurrentUser(BaseModel):
    username: str
    is_admin: bool = False


class TokenRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1, max_length=128)


class TokenResponse(BaseModel):
    token: str
