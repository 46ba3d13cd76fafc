from sqlalchemy import Column, String, DateTime, Integer, Numeric, JSON, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from datetime import date, datetime, timezone
from typing import FrozenSet, Iterable
import enum
from app.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VenueStatus(str, enum.Enum):
    ACTIVE = "active"
    RETIRED = "retired"


class Venue(Base):
    __tablename__ = "venues"

    id = Column(String(36), primary_key=True, index=True)

    name = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False, index=True)
    capacity = Column(Integer, nullable=False, comment="Maximum capacity of venue")
    price_per_hour = Column(Numeric(10, 2), nullable=False)
    created_by = Column(String(255), nullable=False, comment="Owner who listed the venue")

    status = Column(
        SQLEnum(VenueStatus),
        nullable=False,
        default=VenueStatus.ACTIVE,
        index=True
    )

    unavailable_dates = Column(
        JSON,
        nullable=False,
        default=list,
        comment="Sorted ISO dates on which the venue cannot be booked"
    )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )

    bookings = relationship("Booking", back_populates="venue", lazy="dynamic")

    @property
    def is_active(self) -> bool:
        return self.status == VenueStatus.ACTIVE

    @property
    def blocked_dates(self) -> FrozenSet[date]:
        """The availability calendar as an immutable set of dates."""
        return frozenset(date.fromisoformat(d) for d in (self.unavailable_dates or []))

    def replace_blocked_dates(self, dates: Iterable[date]) -> None:
        # Assign a new list so the JSON column is flagged dirty
        self.unavailable_dates = sorted({d.isoformat() for d in dates})

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name={self.name}, location={self.location}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "capacity": self.capacity,
            "pricePerHour": float(self.price_per_hour) if self.price_per_hour is not None else None,
            "createdBy": self.created_by,
            "status": self.status.value if self.status else None,
            "isActive": self.is_active,
            "unavailableDates": list(self.unavailable_dates or []),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
