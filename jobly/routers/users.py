from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import ensure_admin, ensure_correct_user_or_admin, get_token_service
from jobly.schemas.user import (
    UserEnvelope,
    UserListResponse,
    UserNew,
    UserTokenEnvelope,
    UserUpdate,
)
from jobly.services import user_service
from jobly.utils.security import TokenService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserTokenEnvelope, status_code=201, dependencies=[Depends(ensure_admin)])
async def create_user(
    req: UserNew,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Admin-only signup, which may create other admins."""
    user = user_service.register(db, req.model_dump(by_alias=True))
    return {"user": user, "token": tokens.create_token(user["username"], user["is_admin"])}


@router.get("", response_model=UserListResponse, dependencies=[Depends(ensure_admin)])
async def list_users(db: Session = Depends(get_db)):
    return {"users": user_service.find_all(db)}


@router.get("/{username}", response_model=UserEnvelope, dependencies=[Depends(ensure_correct_user_or_admin)])
async def get_user(username: str, db: Session = Depends(get_db)):
    return {"user": user_service.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope, dependencies=[Depends(ensure_correct_user_or_admin)])
async def update_user(username: str, req: UserUpdate, db: Session = Depends(get_db)):
    data = req.model_dump(by_alias=True, exclude_unset=True)
    return {"user": user_service.update(db, username, data)}


@router.delete("/{username}", dependencies=[Depends(ensure_correct_user_or_admin)])
async def delete_user(username: str, db: Session = Depends(get_db)):
    user_service.remove(db, username)
    return {"deleted": username}
