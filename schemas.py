"""
Data Schemas for the Turf Booking Ledger

Each Pydantic model represents one in-memory collection. Collection name = lowercase class name.

- Turf -> turf
- User -> user
- Booking -> booking
- Review -> review
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Role(str, Enum):
    PLAYER = "player"
    ADMIN = "admin"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    BLOCKED = "blocked"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    NOT_APPLICABLE = "N/A"


# Statuses that keep a (turf, date, time slot) out of the available list
HOLDING_STATUSES = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.BLOCKED}
)

DEFAULT_BLOCK_NOTES = "Maintenance"


class Turf(BaseModel):
    id: str = Field(..., description="Turf id")
    name: str = Field(..., description="Turf name")
    location: str = Field(..., description="Street address")
    pricePerHour: float = Field(..., gt=0, description="Hourly price")
    availableHours: List[str] = Field(default_factory=list, description="Bookable start times (HH:MM), in order")
    description: str = Field("", description="Short description")
    imageUrl: Optional[str] = Field(None, description="Cover image URL")


class User(BaseModel):
    id: str = Field(..., description="User id")
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email used for sign-in")
    contactNo: str = Field(..., description="Contact number used for sign-in")
    dob: str = Field(..., description="Date of birth (DD/MM/YYYY)")
    role: Role = Field(Role.PLAYER, description="player | admin")


class Booking(BaseModel):
    id: str = Field(..., description="Booking id")
    turfId: str = Field(..., description="Turf id")
    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    timeSlot: str = Field(..., description="Start time (HH:MM)")
    userId: str = Field(..., description="Requesting player, or the admin for blocks")
    status: BookingStatus = Field(BookingStatus.PENDING, description="pending | confirmed | rejected | blocked")
    paymentStatus: PaymentStatus = Field(PaymentStatus.UNPAID, description="unpaid | paid | N/A")
    notes: Optional[str] = None

    @property
    def holds_slot(self) -> bool:
        return self.status in HOLDING_STATUSES


class Review(BaseModel):
    id: str = Field(..., description="Review id")
    turfId: str = Field(..., description="Turf id")
    userId: str = Field(..., description="Author id")
    rating: int = Field(..., ge=1, le=5, description="Star rating")
    comment: str = Field(..., description="Review text")
    date: str = Field(..., description="ISO date the review was submitted")
