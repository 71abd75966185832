"""SQLAlchemy models."""

from roombnb.models.account import Account
from roombnb.models.room import MAX_PHOTOS, Room

__all__ = [
    "Account",
    "Room",
    "MAX_PHOTOS",
]
