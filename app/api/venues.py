from typing import Optional
from datetime import date
from decimal import Decimal
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.schemas.venue import (
    AvailabilityCheckResponse,
    AvailabilityUpdate,
    VenueCreate,
    VenueDetailResponse,
    VenueUpdate,
    VenuesResponse,
)
from app.schemas.booking import BookingsListResponse
from app.services.booking_service import BookingService
from app.services.venue_service import VenueService

router = APIRouter(prefix="/api/venues", tags=["venues"])


@router.get("/health")
def health_check():
    return {
        "status": "healthy",
        "service": "EasyVenue Venues API",
        "version": settings.VERSION,
    }


@router.get("", response_model=VenuesResponse)
def list_venues(db: Session = Depends(get_db)):
    """List active venues, newest first."""
    venues = VenueService(db).list_active_venues()
    return {"success": True, "venues": [v.to_dict() for v in venues]}


@router.post("", response_model=VenueDetailResponse, status_code=status.HTTP_201_CREATED)
def create_venue(venue_data: VenueCreate, db: Session = Depends(get_db)):
    venue = VenueService(db).create_venue(
        name=venue_data.name,
        location=venue_data.location,
        capacity=venue_data.capacity,
        price_per_hour=venue_data.pricePerHour,
        created_by=venue_data.createdBy,
        unavailable_dates=venue_data.unavailableDates
    )
    return {"success": True, "venue": venue.to_dict()}


@router.get("/search", response_model=VenuesResponse)
def search_venues(
    location: Optional[str] = None,
    min_capacity: Optional[int] = Query(None, ge=0),
    max_capacity: Optional[int] = Query(None, ge=0),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    owner: Optional[str] = None,
    db: Session = Depends(get_db)
):
    service = VenueService(db)
    if owner:
        venues = service.get_owner_venues(owner)
    else:
        venues = service.search_venues(
            location=location,
            min_capacity=min_capacity,
            max_capacity=max_capacity,
            min_price=min_price,
            max_price=max_price
        )
    return {"success": True, "venues": [v.to_dict() for v in venues]}


@router.get("/{venue_id}", response_model=VenueDetailResponse)
def get_venue(venue_id: str, db: Session = Depends(get_db)):
    venue = VenueService(db).get_venue(venue_id)
    return {"success": True, "venue": venue.to_dict()}


@router.put("/{venue_id}", response_model=VenueDetailResponse)
def update_venue(venue_id: str, venue_data: VenueUpdate, db: Session = Depends(get_db)):
    venue = VenueService(db).update_venue(
        venue_id,
        name=venue_data.name,
        location=venue_data.location,
        capacity=venue_data.capacity,
        price_per_hour=venue_data.pricePerHour
    )
    return {"success": True, "venue": venue.to_dict()}


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
def retire_venue(venue_id: str, db: Session = Depends(get_db)):
    VenueService(db).retire_venue(venue_id)


@router.put("/{venue_id}/availability", response_model=VenueDetailResponse)
def update_availability(
    venue_id: str,
    availability: AvailabilityUpdate,
    db: Session = Depends(get_db)
):
    venue = VenueService(db).update_availability(
        venue_id,
        block_dates=availability.blockDates,
        unblock_dates=availability.unblockDates
    )
    return {"success": True, "venue": venue.to_dict()}


@router.get("/{venue_id}/availability", response_model=AvailabilityCheckResponse)
def check_availability(
    venue_id: str,
    on_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db)
):
    available = VenueService(db).is_venue_available(venue_id, on_date)
    return {
        "success": True,
        "venueId": venue_id,
        "date": on_date.isoformat(),
        "available": available,
    }


@router.get("/{venue_id}/bookings", response_model=BookingsListResponse)
def list_venue_bookings(venue_id: str, db: Session = Depends(get_db)):
    bookings = BookingService(db).get_venue_bookings(venue_id)
    return {"success": True, "bookings": [b.to_dict() for b in bookings]}
