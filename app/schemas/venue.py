from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date
from decimal import Decimal


class VenueBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    location: str = Field(..., min_length=2, max_length=255)
    capacity: int = Field(..., ge=1, description="Maximum capacity")
    pricePerHour: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    createdBy: str = Field(..., min_length=1, max_length=255)


class VenueCreate(VenueBase):
    unavailableDates: Optional[List[date]] = Field(default_factory=list)


class VenueUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    location: Optional[str] = Field(None, min_length=2, max_length=255)
    capacity: Optional[int] = Field(None, ge=1)
    pricePerHour: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)


class AvailabilityUpdate(BaseModel):
    blockDates: Optional[List[date]] = Field(default_factory=list)
    unblockDates: Optional[List[date]] = Field(default_factory=list)


class VenueResponse(BaseModel):
    id: str
    name: str
    location: str
    capacity: int
    pricePerHour: float
    createdBy: str
    status: str
    isActive: bool
    unavailableDates: List[str] = []
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    class Config:
        from_attributes = True


class VenueDetailResponse(BaseModel):
    success: bool = True
    venue: VenueResponse


class VenuesResponse(BaseModel):
    success: bool = True
    venues: List[VenueResponse]


class AvailabilityCheckResponse(BaseModel):
    success: bool = True
    venueId: str
    date: str
    available: bool
