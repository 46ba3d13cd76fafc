from sqlalchemy.orm import Session
from typing import Optional, List, Iterable
from datetime import date
from decimal import Decimal
import logging

from app.core.exceptions import InvalidRequestError, VenueNotFoundError
from app.core.locks import venue_locks
from app.models.venue import Venue
from app.repositories.venue_repository import VenueRepository
from app.services.availability_calendar import AvailabilityCalendar

logger = logging.getLogger(__name__)


class VenueService:

    def __init__(self, db: Session):
        self.db = db
        self.venue_repo = VenueRepository(db)
        self.calendar = AvailabilityCalendar()

    def list_active_venues(self) -> List[Venue]:
        return self.venue_repo.get_all(active_only=True)

    def get_venue(self, venue_id: str, include_retired: bool = False) -> Venue:
        """
        Return a venue by id.

        Retired venues are hidden unless include_retired is set, which is how
        historical bookings resolve the venue they reference.

        Raises:
            VenueNotFoundError: If no matching venue exists.
        """
        venue = self.venue_repo.get_by_id(venue_id)
        if not venue or (not include_retired and not venue.is_active):
            raise VenueNotFoundError(venue_id)
        return venue

    def create_venue(
        self,
        name: str,
        location: str,
        capacity: int,
        price_per_hour: Decimal,
        created_by: str,
        unavailable_dates: Optional[Iterable[date]] = None
    ) -> Venue:
        if price_per_hour is None or price_per_hour <= 0:
            raise InvalidRequestError("Price per hour must be positive")
        if capacity is None or capacity <= 0:
            raise InvalidRequestError("Capacity must be positive")

        initial_dates = sorted({d.isoformat() for d in unavailable_dates}) if unavailable_dates else []

        venue = self.venue_repo.create(
            name=name,
            location=location,
            capacity=capacity,
            price_per_hour=price_per_hour,
            created_by=created_by,
            unavailable_dates=initial_dates
        )
        logger.info(f"Venue {venue.id} '{venue.name}' listed by {venue.created_by}")
        return venue

    def update_venue(
        self,
        venue_id: str,
        name: Optional[str] = None,
        location: Optional[str] = None,
        capacity: Optional[int] = None,
        price_per_hour: Optional[Decimal] = None
    ) -> Venue:
        """Update core venue details. Existing bookings keep the price they were made at."""
        venue = self.venue_repo.get_by_id(venue_id)
        if not venue:
            raise VenueNotFoundError(venue_id)

        if price_per_hour is not None and price_per_hour <= 0:
            raise InvalidRequestError("Price per hour must be positive")
        if capacity is not None and capacity <= 0:
            raise InvalidRequestError("Capacity must be positive")

        changes = {
            key: value for key, value in {
                "name": name,
                "location": location,
                "capacity": capacity,
                "price_per_hour": price_per_hour,
            }.items() if value is not None
        }
        return self.venue_repo.update(venue, **changes)

    def retire_venue(self, venue_id: str) -> Venue:
        venue = self.venue_repo.get_by_id(venue_id)
        if not venue:
            raise VenueNotFoundError(venue_id)

        if not venue.is_active:
            return venue

        venue = self.venue_repo.retire(venue)
        logger.info(f"Venue {venue.id} retired")
        return venue

    def update_availability(
        self,
        venue_id: str,
        block_dates: Optional[Iterable[date]] = None,
        unblock_dates: Optional[Iterable[date]] = None
    ) -> Venue:
        """
        Block and unblock dates on a venue's calendar in one update.

        Confirmed bookings on newly blocked dates are left as they are.
        """
        block_dates = list(block_dates or [])
        unblock_dates = list(unblock_dates or [])

        with venue_locks.hold(venue_id):
            try:
                venue = self.venue_repo.get_by_id(venue_id, for_update=True)
                if not venue:
                    raise VenueNotFoundError(venue_id)

                self.calendar.bulk_update(venue, block_dates, unblock_dates)
                self.venue_repo.save(venue)
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        self.db.refresh(venue)
        if block_dates:
            logger.info(f"Blocked {len(block_dates)} date(s) for venue {venue.name}")
        if unblock_dates:
            logger.info(f"Unblocked {len(unblock_dates)} date(s) for venue {venue.name}")
        return venue

    def is_venue_available(self, venue_id: str, on_date: date) -> bool:
        venue = self.venue_repo.get_by_id(venue_id)
        return venue is not None and self.calendar.is_available(venue, on_date)

    def search_venues(
        self,
        location: Optional[str] = None,
        min_capacity: Optional[int] = None,
        max_capacity: Optional[int] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None
    ) -> List[Venue]:
        """
        Filter active venues by exactly one criterion: location, capacity
        range or price range.
        """
        if location:
            return self.venue_repo.get_by_location(location)

        if min_capacity is not None or max_capacity is not None:
            low = min_capacity if min_capacity is not None else 0
            high = max_capacity if max_capacity is not None else 2 ** 31 - 1
            if low > high:
                raise InvalidRequestError("min_capacity must not exceed max_capacity")
            return self.venue_repo.get_by_capacity_range(low, high)

        if min_price is not None or max_price is not None:
            low = min_price if min_price is not None else Decimal("0")
            high = max_price if max_price is not None else Decimal("99999999.99")
            if low > high:
                raise InvalidRequestError("min_price must not exceed max_price")
            return self.venue_repo.get_by_price_range(low, high)

        return self.list_active_venues()

    def get_owner_venues(self, created_by: str) -> List[Venue]:
        return self.venue_repo.get_by_owner(created_by)

    def count_active_venues(self) -> int:
        return self.venue_repo.count_active()
