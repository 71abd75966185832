"""Account model."""

from sqlalchemy import JSON, Column, Integer, String, Text

from roombnb.database import Base
from roombnb.models.mixins import TimestampMixin


class Account(Base, TimestampMixin):
    """Registered user: credentials, public profile and owned room ids."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    photo = Column(JSON, nullable=True)  # {"url": ..., "picture_id": ...}

    token = Column(String(64), unique=True, nullable=False, index=True)
    hash = Column(String(255), nullable=False)
    salt = Column(String(64), nullable=False)

    # Denormalized, ordered ids of the rooms this account published
    room_ids = Column(JSON, nullable=False, default=list)
