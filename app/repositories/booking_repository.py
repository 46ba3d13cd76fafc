from typing import Optional, List
from decimal import Decimal
from sqlalchemy.orm import Session, joinedload
from datetime import date, datetime, timezone
from app.models.booking import Booking, BookingStatus
import uuid


class BookingRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, booking_id: str, include_relations: bool = True) -> Optional[Booking]:
        query = self.db.query(Booking).filter(Booking.id == booking_id)
        if include_relations:
            query = query.options(joinedload(Booking.venue))
        return query.first()

    def get_all(self) -> List[Booking]:
        return self.db.query(Booking).order_by(Booking.created_at.desc()).all()

    def get_recent(self, limit: int = 10) -> List[Booking]:
        return self.db.query(Booking).options(
            joinedload(Booking.venue)
        ).order_by(Booking.created_at.desc()).limit(limit).all()

    def get_confirmed_by_venue_and_date(
        self,
        venue_id: str,
        booking_date: date
    ) -> Optional[Booking]:
        return self.db.query(Booking).filter(
            Booking.venue_id == venue_id,
            Booking.booking_date == booking_date,
            Booking.status == BookingStatus.CONFIRMED
        ).first()

    def get_venue_bookings(
        self,
        venue_id: str,
        status: Optional[BookingStatus] = None
    ) -> List[Booking]:
        query = self.db.query(Booking).filter(Booking.venue_id == venue_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.created_at.desc()).all()

    def get_by_email(self, user_email: str) -> List[Booking]:
        return self.db.query(Booking).filter(
            Booking.user_email == user_email
        ).options(
            joinedload(Booking.venue)
        ).order_by(Booking.created_at.desc()).all()

    def get_by_date_range(self, start_date: date, end_date: date) -> List[Booking]:
        return self.db.query(Booking).filter(
            Booking.booking_date.between(start_date, end_date)
        ).order_by(Booking.booking_date, Booking.created_at).all()

    def count_confirmed(self) -> int:
        return self.db.query(Booking).filter(
            Booking.status == BookingStatus.CONFIRMED
        ).count()

    def add(
        self,
        venue_id: str,
        user_name: str,
        user_email: str,
        booking_date: date,
        hours_booked: int,
        price_per_hour: Decimal,
        total_cost: Decimal
    ) -> Booking:
        """
        Stage a new CONFIRMED booking in the current transaction.

        The caller owns the commit so the booking and the venue calendar
        update land together.
        """
        booking = Booking(
            id=str(uuid.uuid4()),
            venue_id=venue_id,
            user_name=user_name,
            user_email=user_email,
            booking_date=booking_date,
            hours_booked=hours_booked,
            price_per_hour=price_per_hour,
            total_cost=total_cost,
            status=BookingStatus.CONFIRMED
        )
        self.db.add(booking)
        self.db.flush()
        return booking

    def update(self, booking: Booking, **kwargs) -> Booking:
        for key, value in kwargs.items():
            if hasattr(booking, key) and key not in ('id', 'venue_id', 'booking_date'):
                setattr(booking, key, value)

        self.db.commit()
        self.db.refresh(booking)
        return booking

    def mark_cancelled(self, booking: Booking) -> Booking:
        booking.status = BookingStatus.CANCELLED
        booking.cancelled_at = datetime.now(timezone.utc)
        self.db.flush()
        return booking

    def delete(self, booking: Booking) -> None:
        self.db.delete(booking)
        self.db.commit()
