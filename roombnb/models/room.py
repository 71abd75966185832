"""Room model."""

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from roombnb.database import Base
from roombnb.models.mixins import TimestampMixin

MAX_PHOTOS = 5


class Room(Base, TimestampMixin):
    """Room listing published by exactly one account."""

    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, index=True)
    rating_value = Column(Float, nullable=True)
    reviews = Column(Integer, nullable=True)
    photos = Column(JSON, nullable=False, default=list)  # [{"url": ..., "picture_id": ...}]
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # Relationships
    owner = relationship("Account", lazy="joined")

    @property
    def location(self) -> list[float]:
        return [self.latitude, self.longitude]
