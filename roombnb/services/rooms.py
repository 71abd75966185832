"""Room repository and listing query builder."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Query, Session

from roombnb.exceptions import LimitExceeded, MissingParameter, NotFound
from roombnb.models.account import Account
from roombnb.models.room import MAX_PHOTOS, Room

logger = logging.getLogger(__name__)

PAGE_SIZE = 5
SORT_PRICE_ASC = "price-asc"

UPDATABLE_FIELDS = ("title", "description", "price", "location")


@dataclass
class RoomFilters:
    """Search criteria for the room listing."""

    title: str | None = None
    price_min: float | None = None
    price_max: float | None = None


def page_offset(page: int | None) -> int:
    """Map a 1-based page number to a row offset. Pages <= 1 start at 0."""
    if page is None or page <= 1:
        return 0
    return (page - 1) * PAGE_SIZE


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class RoomRepository:
    """Persistence for rooms. Methods stage changes on the session; the caller commits."""

    def __init__(self, db: Session):
        self.db = db

    def build_query(self, filters: RoomFilters, sort: str | None = None) -> Query:
        """Build the filtered, sorted listing query (no pagination)."""
        query = self.db.query(Room)

        if filters.title:
            query = query.filter(Room.title.ilike(f"%{escape_like(filters.title)}%", escape="\\"))
        if filters.price_min is not None:
            query = query.filter(Room.price >= filters.price_min)
        if filters.price_max is not None:
            query = query.filter(Room.price <= filters.price_max)

        if sort == SORT_PRICE_ASC:
            query = query.order_by(Room.price.asc(), Room.id.asc())
        elif sort:
            query = query.order_by(Room.price.desc(), Room.id.asc())
        else:
            # Insertion order
            query = query.order_by(Room.id.asc())
        return query

    def find(
        self,
        filters: RoomFilters,
        page: int | None = None,
        sort: str | None = None,
    ) -> list[Room]:
        """Return one page of rooms matching ``filters``."""
        query = self.build_query(filters, sort)
        return query.offset(page_offset(page)).limit(PAGE_SIZE).all()

    def find_by_id(self, room_id: int) -> Room | None:
        return self.db.get(Room, room_id)

    def find_by_ids(self, room_ids: list[int]) -> list[Room]:
        """Load rooms keeping the order of ``room_ids``; unknown ids are skipped."""
        if not room_ids:
            return []
        rooms = self.db.query(Room).filter(Room.id.in_(room_ids)).all()
        by_id = {room.id: room for room in rooms}
        return [by_id[room_id] for room_id in room_ids if room_id in by_id]

    def find_by_owner(self, owner_id: int) -> list[Room]:
        return self.db.query(Room).filter(Room.user_id == owner_id).order_by(Room.id).all()

    def create(
        self,
        owner: Account,
        title: str,
        description: str,
        price: float,
        location: dict[str, float],
    ) -> Room:
        """Create a room. The caller appends its id to the owner's rooms."""
        room = Room(
            user_id=owner.id,
            title=title,
            description=description,
            price=price,
            latitude=location["lat"],
            longitude=location["lng"],
            photos=[],
        )
        self.db.add(room)
        self.db.flush()
        logger.info(f"Account {owner.id} published room {room.id}")
        return room

    def update(self, room: Room, changes: dict[str, Any]) -> Room:
        """Apply the given changes; at least one field is required."""
        changes = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        if not changes:
            raise MissingParameter("You need to modify at least one element")

        for key, value in changes.items():
            if key == "location":
                room.latitude = value["lat"]
                room.longitude = value["lng"]
            else:
                setattr(room, key, value)
        self.db.flush()
        return room

    def delete(self, room: Room) -> None:
        """Delete a room. The caller removes its id from the owner's rooms."""
        self.db.delete(room)
        self.db.flush()
        logger.info(f"Deleted room {room.id}")

    def has_photo_capacity(self, room: Room) -> bool:
        return len(room.photos) < MAX_PHOTOS

    def add_photo(self, room: Room, photo: dict[str, str]) -> Room:
        if not self.has_photo_capacity(room):
            raise LimitExceeded(f"Can't add more than {MAX_PHOTOS} pictures")
        room.photos = [*room.photos, photo]
        self.db.flush()
        return room

    def find_photo(self, room: Room, picture_id: str) -> dict[str, str] | None:
        for photo in room.photos:
            if photo.get("picture_id") == picture_id:
                return photo
        return None

    def remove_photo(self, room: Room, picture_id: str) -> dict[str, str]:
        """Remove the first photo with ``picture_id`` and return it."""
        photos = list(room.photos)
        for index, photo in enumerate(photos):
            if photo.get("picture_id") == picture_id:
                del photos[index]
                room.photos = photos
                self.db.flush()
                return photo
        raise NotFound("Picture not found")
