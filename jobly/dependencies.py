from fastapi import Depends, Header, Request

from jobly.errors import UnauthorizedError
from jobly.schemas.auth import CurrentUser
from jobly.utils.security import TokenService


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


async def authenticate(
    authorization: str | None = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> CurrentUser | None:
    """Identity for this request, or None for anonymous.

    A missing, malformed or unverifiable token is anonymous, not an error.
    FastAPI caches the result, so the token is decoded once per request.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return tokens.decode(token.strip())


async def ensure_logged_in(user: CurrentUser | None = Depends(authenticate)) -> CurrentUser:
    if user is None:
        raise UnauthorizedError()
    return user


async def ensure_admin(user: CurrentUser | None = Depends(authenticate)) -> CurrentUser:
    if user is None or not user.is_admin:
        raise UnauthorizedError()
    return user


async def ensure_correct_user_or_admin(
    username: str,
    user: CurrentUser | None = Depends(authenticate),
) -> CurrentUser:
    """Admins, or the user named by the ``username`` path parameter."""
    if user is None or not (user.is_admin or user.username == username):
        raise UnauthorizedError()
    return user
