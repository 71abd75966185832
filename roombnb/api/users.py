"""Account API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from roombnb.api.dependencies import (
    get_account_repository,
    get_current_account,
    get_image_store,
    get_room_repository,
)
from roombnb.api.helpers import body_of, provided_fields, read_photo, require_fields
from roombnb.database import get_db
from roombnb.exceptions import MissingParameter, NotFound, Unauthorized
from roombnb.models.account import Account
from roombnb.schemas.account import (
    AccountLogin,
    AccountPublic,
    AccountResponse,
    AccountSignup,
    AccountUpdate,
    AuthResponse,
)
from roombnb.schemas.room import RoomResponse
from roombnb.services.accounts import AccountRepository
from roombnb.services.credentials import verify_password
from roombnb.services.image_store import ImageStore, discard_images
from roombnb.services.rooms import RoomRepository

router = APIRouter(tags=["users"])


def get_own_account(account_id: int, current: Account, accounts: AccountRepository) -> Account:
    """Return the account at ``account_id`` if it belongs to the caller."""
    account = accounts.find_by_id(account_id)
    if account is None:
        raise NotFound("User not found")
    if account.id != current.id:
        raise Unauthorized()
    return account


@router.post("/user/signup", response_model=AuthResponse)
async def signup(
    user_data: Annotated[AccountSignup, Depends(body_of(AccountSignup))],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create an account and return its bearer token."""
    require_fields(user_data, "email", "username", "password", "confirm_password")
    if user_data.password != user_data.confirm_password:
        raise MissingParameter("Passwords don't match")

    account = accounts.create(
        email=user_data.email,
        username=user_data.username,
        password=user_data.password,
        name=user_data.name,
        description=user_data.description,
    )
    db.commit()
    db.refresh(account)

    return AuthResponse.from_model(account)


@router.post("/user/login", response_model=AuthResponse)
async def login(
    credentials: Annotated[AccountLogin, Depends(body_of(AccountLogin))],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
):
    """Login with email and password."""
    require_fields(credentials, "email", "password")

    account = accounts.find_by_email(credentials.email)
    if account is None:
        raise NotFound("This account does not exist")
    if not verify_password(credentials.password, account.salt, account.hash):
        raise Unauthorized()

    return AuthResponse.from_model(account)


@router.get("/users/{account_id}", response_model=AccountPublic)
async def get_account(
    account_id: int,
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
):
    """Get a public profile with the ids of the account's rooms."""
    account = accounts.find_by_id(account_id)
    if account is None:
        raise NotFound("User not found")
    return AccountPublic.from_model(account)


@router.get("/user/rooms/{account_id}", response_model=list[RoomResponse])
async def get_account_rooms(
    account_id: int,
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
):
    """Get the rooms published by an account, in publication order."""
    account = accounts.find_by_id(account_id)
    if account is None:
        raise NotFound("User not found")
    return [RoomResponse.from_model(room) for room in rooms.find_by_ids(account.room_ids)]


@router.put("/user/upload_picture/{account_id}", response_model=AccountResponse)
async def upload_picture(
    account_id: int,
    current_account: Annotated[Account, Depends(get_current_account)],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
    db: Annotated[Session, Depends(get_db)],
    photo: Annotated[UploadFile | None, File()] = None,
):
    """Set the account photo, replacing the previous one in place."""
    account = get_own_account(account_id, current_account, accounts)
    content = await read_photo(photo)

    existing_id = account.photo["picture_id"] if account.photo else None
    uploaded = await image_store.upload(
        content,
        filename=photo.filename or "photo",
        folder=image_store.folder("users", account.id),
        asset_id=existing_id,
    )
    accounts.set_photo(account, uploaded.as_photo())
    db.commit()

    return AccountResponse.from_model(account)


@router.put("/user/delete_picture/{account_id}", response_model=AccountResponse)
async def delete_picture(
    account_id: int,
    current_account: Annotated[Account, Depends(get_current_account)],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove the account photo."""
    account = get_own_account(account_id, current_account, accounts)
    if not account.photo:
        raise NotFound("Picture not found")

    await image_store.delete(account.photo["picture_id"])
    accounts.set_photo(account, None)
    db.commit()

    return AccountResponse.from_model(account)


@router.put("/user/update/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: int,
    current_account: Annotated[Account, Depends(get_current_account)],
    user_data: Annotated[AccountUpdate, Depends(body_of(AccountUpdate))],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update profile fields; at least one must be given."""
    account = get_own_account(account_id, current_account, accounts)
    accounts.update(account, provided_fields(user_data))
    db.commit()

    return AccountResponse.from_model(account)


@router.delete("/user/delete/{account_id}")
async def delete_account(
    account_id: int,
    current_account: Annotated[Account, Depends(get_current_account)],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete the account together with every room it published."""
    account = get_own_account(account_id, current_account, accounts)

    owned_rooms = rooms.find_by_owner(account.id)
    asset_ids = [photo["picture_id"] for room in owned_rooms for photo in room.photos]
    if account.photo:
        asset_ids.append(account.photo["picture_id"])

    for room in owned_rooms:
        rooms.delete(room)
    accounts.delete(account)
    db.commit()

    await discard_images(image_store, asset_ids)
    return {"message": "Account deleted"}
