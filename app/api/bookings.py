from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.schemas.booking import (
    BookingCreate,
    BookingCreateResponse,
    BookingDetailResponse,
    BookingUpdate,
    BookingsListResponse,
)
from app.services.booking_service import BookingService

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get("/health")
def health_check():
    return {
        "status": "healthy",
        "service": "EasyVenue Bookings API",
        "version": settings.VERSION,
    }


@router.get("", response_model=BookingsListResponse)
def list_bookings(
    email: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """
    List bookings.

    Filters by customer email, or by booking date range when both
    start_date and end_date are given.
    """
    service = BookingService(db)
    if email:
        bookings = service.get_bookings_by_email(email)
    elif start_date and end_date:
        bookings = service.get_bookings_by_date_range(start_date, end_date)
    else:
        bookings = service.get_all_bookings()
    return {"success": True, "bookings": [b.to_dict() for b in bookings]}


@router.post("", response_model=BookingCreateResponse, status_code=status.HTTP_201_CREATED)
def create_booking(booking_data: BookingCreate, db: Session = Depends(get_db)):
    booking = BookingService(db).create_booking(
        venue_id=booking_data.venueId,
        user_name=booking_data.userName,
        user_email=booking_data.userEmail,
        booking_date=booking_data.bookingDate,
        hours_booked=booking_data.hoursBooked
    )
    return {
        "success": True,
        "message": "Booking confirmed successfully",
        "booking": booking.to_dict(include_venue=True),
    }


@router.get("/recent", response_model=BookingsListResponse)
def list_recent_bookings(
    limit: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    bookings = BookingService(db).list_recent_bookings(limit)
    return {"success": True, "bookings": [b.to_dict(include_venue=True) for b in bookings]}


@router.get("/{booking_id}", response_model=BookingDetailResponse)
def get_booking(booking_id: str, db: Session = Depends(get_db)):
    booking = BookingService(db).get_booking(booking_id)
    return {"success": True, "booking": booking.to_dict(include_venue=True)}


@router.put("/{booking_id}", response_model=BookingDetailResponse)
def update_booking(booking_id: str, booking_data: BookingUpdate, db: Session = Depends(get_db)):
    booking = BookingService(db).update_booking(
        booking_id,
        user_name=booking_data.userName,
        user_email=booking_data.userEmail,
        hours_booked=booking_data.hoursBooked
    )
    return {"success": True, "booking": booking.to_dict(include_venue=True)}


@router.post("/{booking_id}/cancel", response_model=BookingDetailResponse)
def cancel_booking(booking_id: str, db: Session = Depends(get_db)):
    booking = BookingService(db).cancel_booking(booking_id)
    return {"success": True, "booking": booking.to_dict(include_venue=True)}


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(booking_id: str, db: Session = Depends(get_db)):
    BookingService(db).delete_booking(booking_id)
