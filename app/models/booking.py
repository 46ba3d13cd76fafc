from sqlalchemy import (
    Column, String, DateTime, Date, Integer, Numeric, ForeignKey, Index, CheckConstraint,
    Enum as SQLEnum, text
)
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
from app.core.database import Base


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Booking(Base):
    """
    A customer's reservation of a venue for a single calendar date.

    At most one CONFIRMED booking may exist per (venue, date); the partial
    unique index below enforces this in the database even if the
    application-level checks in BookingService are bypassed.
    """
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, index=True)

    venue_id = Column(String(36), ForeignKey("venues.id"), nullable=False, index=True)

    user_name = Column(String(255), nullable=False)
    user_email = Column(String(255), nullable=False, index=True)

    booking_date = Column(Date, nullable=False, index=True)
    hours_booked = Column(Integer, nullable=False)

    price_per_hour = Column(
        Numeric(10, 2),
        nullable=False,
        comment="Venue rate captured when the booking was made"
    )
    total_cost = Column(Numeric(12, 2), nullable=False)

    status = Column(
        SQLEnum(BookingStatus),
        nullable=False,
        default=BookingStatus.CONFIRMED,
        index=True
    )

    # Python-side default keeps sub-second ordering for "recent" listings
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    venue = relationship("Venue", back_populates="bookings")

    __table_args__ = (
        Index(
            "uq_confirmed_booking_per_venue_date",
            "venue_id",
            "booking_date",
            unique=True,
            sqlite_where=text("status = 'CONFIRMED'"),
            postgresql_where=text("status = 'CONFIRMED'"),
        ),
        CheckConstraint("hours_booked > 0", name="check_booking_hours_positive"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, venue_id={self.venue_id}, date={self.booking_date}, status={self.status})>"

    def to_dict(self, include_venue: bool = False) -> dict:
        booking_dict = {
            "id": self.id,
            "venueId": self.venue_id,
            "userName": self.user_name,
            "userEmail": self.user_email,
            "bookingDate": self.booking_date.isoformat() if self.booking_date else None,
            "hoursBooked": self.hours_booked,
            "pricePerHour": float(self.price_per_hour) if self.price_per_hour is not None else None,
            "totalCost": float(self.total_cost) if self.total_cost is not None else None,
            "status": self.status.value if self.status else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "cancelledAt": self.cancelled_at.isoformat() if self.cancelled_at else None,
        }

        if include_venue and self.venue:
            booking_dict["venue"] = {
                "id": self.venue.id,
                "name": self.venue.name,
                "location": self.venue.location,
            }

        return booking_dict
