from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import date


class BookingCreate(BaseModel):
    venueId: str
    userName: str = Field(..., min_length=1, max_length=255)
    userEmail: EmailStr
    bookingDate: date
    hoursBooked: int = Field(..., ge=1, le=24, description="Whole hours on the booking date")


class BookingUpdate(BaseModel):
    userName: Optional[str] = Field(None, min_length=1, max_length=255)
    userEmail: Optional[EmailStr] = None
    hoursBooked: Optional[int] = Field(None, ge=1, le=24)


class VenueBasicInfo(BaseModel):
    id: str
    name: str
    location: str


class BookingResponse(BaseModel):
    id: str
    venueId: str
    userName: str
    userEmail: str
    bookingDate: str
    hoursBooked: int
    pricePerHour: float
    totalCost: float
    status: str
    createdAt: Optional[str] = None
    cancelledAt: Optional[str] = None
    venue: Optional[VenueBasicInfo] = None

    class Config:
        from_attributes = True


class BookingCreateResponse(BaseModel):
    success: bool = True
    message: str = "Booking confirmed successfully"
    booking: BookingResponse


class BookingDetailResponse(BaseModel):
    success: bool = True
    booking: BookingResponse


class BookingsListResponse(BaseModel):
    success: bool = True
    bookings: List[BookingResponse]
