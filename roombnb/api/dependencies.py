"""FastAPI dependencies for authentication, repositories and the image host."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from roombnb.database import get_db
from roombnb.exceptions import Unauthorized
from roombnb.models.account import Account
from roombnb.services.accounts import AccountRepository
from roombnb.services.image_store import ImageStore
from roombnb.services.rooms import RoomRepository

security = HTTPBearer(auto_error=False)


def get_account_repository(db: Annotated[Session, Depends(get_db)]) -> AccountRepository:
    """Get account repository bound to the request session."""
    return AccountRepository(db)


def get_room_repository(db: Annotated[Session, Depends(get_db)]) -> RoomRepository:
    """Get room repository bound to the request session."""
    return RoomRepository(db)


def get_image_store(request: Request) -> ImageStore:
    """Get the image store created at startup."""
    return request.app.state.image_store


def get_current_account(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
) -> Account:
    """Resolve the bearer token to the authenticated account."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized(headers={"WWW-Authenticate": "Bearer"})

    account = accounts.find_by_token(credentials.credentials)
    if account is None:
        raise Unauthorized(headers={"WWW-Authenticate": "Bearer"})

    return account
