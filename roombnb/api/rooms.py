"""Room API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from roombnb.api.dependencies import (
    get_account_repository,
    get_current_account,
    get_image_store,
    get_room_repository,
)
from roombnb.api.helpers import body_of, provided_fields, read_photo, require_fields
from roombnb.database import get_db
from roombnb.exceptions import LimitExceeded, MissingParameter, NotFound, Unauthorized
from roombnb.models.account import Account
from roombnb.models.room import MAX_PHOTOS, Room
from roombnb.schemas.room import PictureDelete, RoomCreate, RoomResponse, RoomSummary, RoomUpdate
from roombnb.services.accounts import AccountRepository
from roombnb.services.image_store import ImageStore, discard_images
from roombnb.services.rooms import RoomFilters, RoomRepository

router = APIRouter(tags=["rooms"])


def get_owned_room(room_id: int, current: Account, rooms: RoomRepository) -> Room:
    """Get a room that the caller owns."""
    room = rooms.find_by_id(room_id)
    if room is None:
        raise NotFound("Room not found")
    if room.user_id != current.id:
        raise Unauthorized()
    return room


@router.post("/room/publish", response_model=RoomResponse)
async def publish_room(
    current_account: Annotated[Account, Depends(get_current_account)],
    room_data: Annotated[RoomCreate, Depends(body_of(RoomCreate))],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
    db: Annotated[Session, Depends(get_db)],
):
    """Publish a new room owned by the caller."""
    require_fields(room_data, "title", "location", "price", "description")

    room = rooms.create(
        owner=current_account,
        title=room_data.title,
        description=room_data.description,
        price=room_data.price,
        location=room_data.location.model_dump(),
    )
    accounts.append_room(current_account, room.id)
    db.commit()

    return RoomResponse.from_model(room)


@router.get("/rooms", response_model=list[RoomSummary])
async def search_rooms(
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
    page: Annotated[int | None, Query()] = None,
    title: Annotated[str | None, Query()] = None,
    price_min: Annotated[float | None, Query(alias="priceMin")] = None,
    price_max: Annotated[float | None, Query(alias="priceMax")] = None,
    sort: Annotated[str | None, Query()] = None,
):
    """Search rooms by title and price range, five per page."""
    filters = RoomFilters(title=title, price_min=price_min, price_max=price_max)
    return [RoomSummary.from_model(room) for room in rooms.find(filters, page=page, sort=sort)]


@router.get("/rooms/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: int,
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
):
    """Get a room with its description."""
    room = rooms.find_by_id(room_id)
    if room is None:
        raise NotFound("Room not found")
    return RoomResponse.from_model(room)


@router.put("/room/update/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: int,
    current_account: Annotated[Account, Depends(get_current_account)],
    room_data: Annotated[RoomUpdate, Depends(body_of(RoomUpdate))],
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a room; at least one field must be given."""
    room = get_owned_room(room_id, current_account, rooms)
    rooms.update(room, provided_fields(room_data))
    db.commit()

    return RoomResponse.from_model(room)


@router.delete("/room/delete/{room_id}")
async def delete_room(
    room_id: int,
    current_account: Annotated[Account, Depends(get_current_account)],
    accounts: Annotated[AccountRepository, Depends(get_account_repository)],
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a room and drop it from the owner's rooms."""
    room = get_owned_room(room_id, current_account, rooms)
    asset_ids = [photo["picture_id"] for photo in room.photos]

    rooms.delete(room)
    accounts.remove_room(current_account, room_id)
    db.commit()

    await discard_images(image_store, asset_ids)
    return {"message": "Room deleted"}


@router.put("/room/upload_picture/{room_id}", response_model=RoomResponse)
async def upload_room_picture(
    room_id: int,
    current_account: Annotated[Account, Depends(get_current_account)],
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
    db: Annotated[Session, Depends(get_db)],
    photo: Annotated[UploadFile | None, File()] = None,
):
    """Add a photo to a room."""
    room = get_owned_room(room_id, current_account, rooms)
    content = await read_photo(photo)

    # Checked before uploading so a rejected photo never reaches the image host
    if not rooms.has_photo_capacity(room):
        raise LimitExceeded(f"Can't add more than {MAX_PHOTOS} pictures")

    uploaded = await image_store.upload(
        content,
        filename=photo.filename or "photo",
        folder=image_store.folder("rooms", room.id),
    )
    rooms.add_photo(room, uploaded.as_photo())
    db.commit()

    return RoomResponse.from_model(room)


@router.put("/room/delete_picture/{room_id}")
async def delete_room_picture(
    room_id: int,
    current_account: Annotated[Account, Depends(get_current_account)],
    picture: Annotated[PictureDelete, Depends(body_of(PictureDelete))],
    rooms: Annotated[RoomRepository, Depends(get_room_repository)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove one photo from a room and from the image host."""
    room = get_owned_room(room_id, current_account, rooms)
    if not picture.picture_id:
        raise MissingParameter()
    if rooms.find_photo(room, picture.picture_id) is None:
        raise NotFound("Picture not found")

    await image_store.delete(picture.picture_id)
    rooms.remove_photo(room, picture.picture_id)
    db.commit()

    return {"message": "Picture deleted"}
