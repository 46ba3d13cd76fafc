from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional, List
from datetime import date
from decimal import Decimal
import logging

from app.core.config import settings
from app.core.exceptions import (
    BookingNotFoundError,
    DoubleBookingError,
    InvalidRequestError,
    VenueNotFoundError,
    VenueUnavailableError,
)
from app.core.locks import venue_locks
from app.models.booking import Booking, BookingStatus
from app.repositories.booking_repository import BookingRepository
from app.repositories.venue_repository import VenueRepository
from app.services.availability_calendar import AvailabilityCalendar, to_calendar_date

logger = logging.getLogger(__name__)

class BookingService:
    """
    Creates and manages bookings while guarding against double-booking.

    create_booking runs its checks and writes inside a single transaction
    held under the venue lock: either the booking row and the venue calendar
    update are both committed, or nothing is.
    """

    def __init__(self, db: Session):
        self.db = db
        self.booking_repo = BookingRepository(db)
        self.venue_repo = VenueRepository(db)
        self.calendar = AvailabilityCalendar()

    def create_booking(
        self,
        venue_id: str,
        user_name: str,
        user_email: str,
        booking_date: date,
        hours_booked: int
    ) -> Booking:
        if hours_booked is None or hours_booked <= 0:
            raise InvalidRequestError("Hours booked must be a positive number")

        booking_date = to_calendar_date(booking_date)

        # The partial unique index on bookings covers writers in other processes
        with venue_locks.hold(venue_id):
            try:
                venue = self.venue_repo.get_by_id(venue_id, for_update=True)
                if not venue:
                    raise VenueNotFoundError(venue_id)

                existing = self.booking_repo.get_confirmed_by_venue_and_date(
                    venue_id=venue_id,
                    booking_date=booking_date
                )

                # A confirmed booking also blocks its date; report it as the conflict
                if existing and venue.is_active:
                    logger.info(f"Double booking rejected for venue {venue_id} on {booking_date}")
                    raise DoubleBookingError(venue_id, booking_date)

                if not self.calendar.is_available(venue, booking_date):
                    raise VenueUnavailableError(venue_id, booking_date)

                price_per_hour = Decimal(str(venue.price_per_hour))
                booking = self.booking_repo.add(
                    venue_id=venue.id,
                    user_name=user_name,
                    user_email=user_email,
                    booking_date=booking_date,
                    hours_booked=hours_booked,
                    price_per_hour=price_per_hour,
                    total_cost=price_per_hour * hours_booked
                )

                self.calendar.block(venue, booking_date)
                self.venue_repo.save(venue)

                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                logger.warning(f"Unique index rejected booking for venue {venue_id} on {booking_date}")
                raise DoubleBookingError(venue_id, booking_date) from exc
            except Exception:
                self.db.rollback()
                raise

        self.db.refresh(booking)
        logger.info(
            f"Booking {booking.id} confirmed for venue {venue_id} on {booking_date} "
            f"({hours_booked}h, total {booking.total_cost})"
        )
        return booking

    def get_all_bookings(self) -> List[Booking]:
        return self.booking_repo.get_all()

    def list_recent_bookings(self, limit: Optional[int] = None) -> List[Booking]:
        if limit is None:
            limit = settings.RECENT_BOOKINGS_LIMIT

        if limit < 1 or limit > settings.MAX_RECENT_BOOKINGS_LIMIT:
            raise InvalidRequestError(
                f"Limit must be between 1 and {settings.MAX_RECENT_BOOKINGS_LIMIT}"
            )

        bookings = self.booking_repo.get_recent(limit)
        logger.debug(f"Found {len(bookings)} recent bookings")
        return bookings

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.booking_repo.get_by_id(booking_id)
        if not booking:
            raise BookingNotFoundError(booking_id)
        return booking

    def update_booking(
        self,
        booking_id: str,
        user_name: Optional[str] = None,
        user_email: Optional[str] = None,
        hours_booked: Optional[int] = None
    ) -> Booking:
        """
        Update the customer details or duration of a booking.

        Venue and date are fixed for the life of a booking. A new duration is
        priced at the rate captured when the booking was made.
        """
        booking = self.get_booking(booking_id)

        changes = {}
        if user_name is not None:
            changes["user_name"] = user_name
        if user_email is not None:
            changes["user_email"] = user_email
        if hours_booked is not None:
            if hours_booked <= 0:
                raise InvalidRequestError("Hours booked must be a positive number")
            changes["hours_booked"] = hours_booked
            changes["total_cost"] = Decimal(str(booking.price_per_hour)) * hours_booked

        if not changes:
            return booking

        return self.booking_repo.update(booking, **changes)

    def cancel_booking(self, booking_id: str) -> Booking:
        booking = self.get_booking(booking_id)

        with venue_locks.hold(booking.venue_id):
            try:
                self.db.refresh(booking)
                if booking.status == BookingStatus.CANCELLED:
                    raise InvalidRequestError("Booking is already cancelled")

                self.booking_repo.mark_cancelled(booking)

                venue = self.venue_repo.get_by_id(booking.venue_id, for_update=True)
                if venue:
                    self.calendar.unblock(venue, booking.booking_date)
                    self.venue_repo.save(venue)

                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        self.db.refresh(booking)
        logger.info(f"Booking {booking.id} cancelled; released {booking.booking_date} for venue {booking.venue_id}")
        return booking

    def delete_booking(self, booking_id: str) -> None:
        booking = self.get_booking(booking_id)
        self.booking_repo.delete(booking)
        logger.info(f"Booking {booking_id} deleted")

    def get_venue_bookings(self, venue_id: str) -> List[Booking]:
        if not self.venue_repo.get_by_id(venue_id):
            raise VenueNotFoundError(venue_id)
        return self.booking_repo.get_venue_bookings(venue_id)

    def get_bookings_by_email(self, user_email: str) -> List[Booking]:
        return self.booking_repo.get_by_email(user_email)

    def get_bookings_by_date_range(self, start_date: date, end_date: date) -> List[Booking]:
        if start_date > end_date:
            raise InvalidRequestError("start_date must be on or before end_date")
        return self.booking_repo.get_by_date_range(start_date, end_date)

    def count_confirmed_bookings(self) -> int:
        return self.booking_repo.count_confirmed()
