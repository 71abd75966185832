"""Room schemas."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roombnb.models.room import Room
from roombnb.schemas.account import AccountSummary, Photo


class Location(BaseModel):
    """Coordinates of a room."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class RoomFields(BaseModel):
    """Editable room fields, all optional."""

    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    price: float | None = Field(None, ge=0)
    location: Location | None = None

    @field_validator("location", mode="before")
    @classmethod
    def parse_form_location(cls, value: Any) -> Any:
        # Form bodies carry the location as a JSON object string
        if isinstance(value, str):
            return json.loads(value) if value.strip() else None
        return value


class RoomCreate(RoomFields):
    """Publish a room. Presence of required fields is checked by the route."""


class RoomUpdate(RoomFields):
    """Update a room."""


class PictureDelete(BaseModel):
    """Remove one photo from a room."""

    picture_id: str | None = None


class RoomSummary(BaseModel):
    """Room as shown in search results, without its description."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    price: float
    rating_value: float | None = Field(None, alias="ratingValue")
    reviews: int | None = None
    photos: list[Photo] = []
    location: list[float]
    user: AccountSummary

    @classmethod
    def fields_from_model(cls, room: Room) -> dict:
        return {
            "id": room.id,
            "title": room.title,
            "price": room.price,
            "rating_value": room.rating_value,
            "reviews": room.reviews,
            "photos": room.photos,
            "location": room.location,
            "user": AccountSummary.from_model(room.owner),
        }

    @classmethod
    def from_model(cls, room: Room) -> "RoomSummary":
        return cls(**cls.fields_from_model(room))


class RoomResponse(RoomSummary):
    """Full room detail."""

    description: str | None = None

    @classmethod
    def from_model(cls, room: Room) -> "RoomResponse":
        return cls(**cls.fields_from_model(room), description=room.description)
