from typing import Optional, List
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.models.venue import Venue, VenueStatus
import uuid


class VenueRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, venue_id: str, for_update: bool = False) -> Optional[Venue]:
        query = self.db.query(Venue).filter(Venue.id == venue_id)
        if for_update:
            # Overwrite any copy already in the session with the committed row
            query = query.with_for_update().populate_existing()
        return query.first()

    def get_all(self, active_only: bool = True) -> List[Venue]:
        query = self.db.query(Venue)
        if active_only:
            query = query.filter(Venue.status == VenueStatus.ACTIVE)
        return query.order_by(Venue.created_at.desc()).all()

    def get_by_location(self, location: str) -> List[Venue]:
        return self.db.query(Venue).filter(
            Venue.status == VenueStatus.ACTIVE,
            Venue.location.ilike(f"%{location}%")
        ).order_by(Venue.name).all()

    def get_by_capacity_range(self, min_capacity: int, max_capacity: int) -> List[Venue]:
        return self.db.query(Venue).filter(
            Venue.status == VenueStatus.ACTIVE,
            Venue.capacity.between(min_capacity, max_capacity)
        ).order_by(Venue.capacity).all()

    def get_by_price_range(self, min_price: Decimal, max_price: Decimal) -> List[Venue]:
        return self.db.query(Venue).filter(
            Venue.status == VenueStatus.ACTIVE,
            Venue.price_per_hour.between(min_price, max_price)
        ).order_by(Venue.price_per_hour).all()

    def get_by_owner(self, created_by: str) -> List[Venue]:
        return self.db.query(Venue).filter(
            Venue.created_by == created_by
        ).order_by(Venue.created_at.desc()).all()

    def count_active(self) -> int:
        return self.db.query(Venue).filter(Venue.status == VenueStatus.ACTIVE).count()

    def create(
        self,
        name: str,
        location: str,
        capacity: int,
        price_per_hour: Decimal,
        created_by: str,
        unavailable_dates: Optional[List[str]] = None
    ) -> Venue:
        venue_id = str(uuid.uuid4())

        venue = Venue(
            id=venue_id,
            name=name,
            location=location,
            capacity=capacity,
            price_per_hour=price_per_hour,
            created_by=created_by,
            status=VenueStatus.ACTIVE,
            unavailable_dates=unavailable_dates if unavailable_dates else []
        )

        try:
            self.db.add(venue)
            self.db.commit()
            self.db.refresh(venue)
            return venue
        except IntegrityError:
            self.db.rollback()
            raise

    def update(self, venue: Venue, **kwargs) -> Venue:
        for key, value in kwargs.items():
            if hasattr(venue, key) and key != 'id':
                setattr(venue, key, value)

        self.db.commit()
        self.db.refresh(venue)
        return venue

    def save(self, venue: Venue) -> Venue:
        """Stage pending changes on the venue without committing."""
        self.db.add(venue)
        self.db.flush()
        return venue

    def retire(self, venue: Venue) -> Venue:
        venue.status = VenueStatus.RETIRED
        self.db.commit()
        self.db.refresh(venue)
        return venue
