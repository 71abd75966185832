"""Pydantic schemas for API requests and responses."""

from roombnb.schemas.account import (
    AccountLogin,
    AccountProfile,
    AccountPublic,
    AccountResponse,
    AccountSignup,
    AccountSummary,
    AccountUpdate,
    AuthResponse,
    Photo,
)
from roombnb.schemas.room import (
    Location,
    PictureDelete,
    RoomCreate,
    RoomResponse,
    RoomSummary,
    RoomUpdate,
)

__all__ = [
    "AccountSignup",
    "AccountLogin",
    "AccountUpdate",
    "AccountProfile",
    "AccountSummary",
    "AccountPublic",
    "AccountResponse",
    "AuthResponse",
    "Photo",
    "Location",
    "RoomCreate",
    "RoomUpdate",
    "PictureDelete",
    "RoomSummary",
    "RoomResponse",
]
