from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import ensure_logged_in, get_token_service
from jobly.schemas.auth import CurrentUser, TokenRequest, TokenResponse
from jobly.schemas.user import UserEnvelope, UserRegister
from jobly.services import user_service
from jobly.utils.security import TokenService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def login(
    req: TokenRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = user_service.authenticate(db, req.username, req.password)
    return TokenResponse(token=tokens.create_token(user["username"], user["is_admin"]))


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    req: UserRegister,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Self-service signup; new users are never admins."""
    user = user_service.register(db, req.model_dump(by_alias=True))
    return TokenResponse(token=tokens.create_token(user["username"], False))


@router.get("/me", response_model=UserEnvelope)
async def me(user: CurrentUser = Depends(ensure_logged_in), db: Session = Depends(get_db)):
    return {"user": user_service.get(db, user.username)}
