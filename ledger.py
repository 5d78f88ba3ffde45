"""
Booking ledger: slot availability and the booking state machine.

A slot is a (turf, date, time slot) triple. It is free until a pending,
confirmed or blocked booking holds it. Rejected bookings stay in the
collection but release the slot; blocked bookings are deleted on unblock.
"""

import logging
import threading
from datetime import datetime, timezone
from functools import wraps
from typing import Iterable, List, Optional

from database import InMemoryDatabase, new_id
from errors import (
    BookingNotFound,
    DuplicateUser,
    InvalidSlot,
    InvalidTransition,
    PermissionDenied,
    SlotUnavailable,
    TurfNotFound,
    UserNotFound,
)
from schemas import (
    DEFAULT_BLOCK_NOTES,
    HOLDING_STATUSES,
    Booking,
    BookingStatus,
    PaymentStatus,
    Review,
    Role,
    Turf,
    User,
)

logger = logging.getLogger(__name__)

# Decisions an admin can take on a pending request
DECISIONS = frozenset({BookingStatus.CONFIRMED, BookingStatus.REJECTED})


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def get_available_slots(turf: Turf, date: str, bookings: Iterable[Booking]) -> List[str]:
    """Time slots of `turf` on `date` not held by a pending, confirmed or blocked booking.

    Keeps the turf's declared order. Pure: reads `bookings`, changes nothing.
    """
    if turf is None:
        raise ValueError("turf is required")
    held = {
        b.timeSlot
        for b in bookings
        if b.turfId == turf.id and b.date == date and b.status in HOLDING_STATUSES
    }
    return [slot for slot in turf.availableHours if slot not in held]


def synchronized(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class TurfLedger:
    """Owns the turf, user, booking and review collections and the operations over them.

    Every public operation runs under one re-entrant lock, so operations never interleave
    even when called from a thread pool.
    """

    def __init__(self, db: Optional[InMemoryDatabase] = None):
        self.db = db if db is not None else InMemoryDatabase()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Catalog and directory lookups
    # ------------------------------------------------------------------
    @synchronized
    def list_turfs(self) -> List[Turf]:
        return [Turf(**doc) for doc in self.db.get_documents("turf")]

    @synchronized
    def get_turf(self, turf_id: str) -> Turf:
        doc = self.db.find_document("turf", {"id": turf_id})
        if doc is None:
            raise TurfNotFound(turf_id)
        return Turf(**doc)

    @synchronized
    def get_user(self, user_id: str) -> User:
        doc = self.db.find_document("user", {"id": user_id})
        if doc is None:
            raise UserNotFound(user_id)
        return User(**doc)

    @synchronized
    def list_users(self, role: Optional[Role] = None) -> List[User]:
        filt = {"role": role} if role is not None else None
        return [User(**doc) for doc in self.db.get_documents("user", filt)]

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------
    @synchronized
    def list_bookings(
        self,
        turf_id: Optional[str] = None,
        user_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        filt = {}
        if turf_id:
            filt["turfId"] = turf_id
        if user_id:
            filt["userId"] = user_id
        if status is not None:
            filt["status"] = status
        return [Booking(**doc) for doc in self.db.get_documents("booking", filt)]

    def player_bookings(self, user_id: str) -> List[Booking]:
        return [b for b in self.list_bookings(user_id=user_id) if b.status != BookingStatus.BLOCKED]

    def pending_bookings(self) -> List[Booking]:
        return self.list_bookings(status=BookingStatus.PENDING)

    def blocked_slots(self) -> List[Booking]:
        return self.list_bookings(status=BookingStatus.BLOCKED)

    @synchronized
    def available_slots(self, turf_id: str, date: str) -> List[str]:
        turf = self.get_turf(turf_id)
        return get_available_slots(turf, date, self.list_bookings(turf_id=turf_id))

    def _slot_holder(self, turf_id: str, date: str, time_slot: str) -> Optional[Booking]:
        for booking in self.list_bookings(turf_id=turf_id):
            if booking.date == date and booking.timeSlot == time_slot and booking.holds_slot:
                return booking
        return None

    def _check_slot(self, turf: Turf, time_slot: str) -> None:
        if time_slot not in turf.availableHours:
            raise InvalidSlot(f"{time_slot} is not a bookable hour for {turf.name}")

    @synchronized
    def create_booking(self, turf_id: str, date: str, time_slot: str, user_id: str) -> Booking:
        """Request a slot for a player. The new booking is pending and unpaid."""
        turf = self.get_turf(turf_id)
        user = self.get_user(user_id)
        if user.role != Role.PLAYER:
            logger.warning("Refused booking by non-player %s", user_id)
            raise PermissionDenied("Admins cannot book slots as players. Block the slot instead.")
        self._check_slot(turf, time_slot)
        if self._slot_holder(turf_id, date, time_slot) is not None:
            logger.warning("Refused booking for held slot %s %s %s", turf_id, date, time_slot)
            raise SlotUnavailable(turf_id, date, time_slot)

        doc = {
            "turfId": turf_id,
            "date": date,
            "timeSlot": time_slot,
            "userId": user_id,
            "status": BookingStatus.PENDING.value,
            "paymentStatus": PaymentStatus.UNPAID.value,
        }
        doc["id"] = self.db.create_document("booking", doc)
        logger.info("Booking %s requested: %s %s %s by %s", doc["id"], turf_id, date, time_slot, user_id)
        return Booking(**doc)

    @synchronized
    def update_booking_status(self, booking_id: str, new_status: BookingStatus) -> Booking:
        """Confirm or reject a pending booking. Only the status changes."""
        try:
            new_status = BookingStatus(new_status)
        except ValueError:
            raise InvalidTransition(f"Unknown booking status: {new_status}") from None
        if new_status not in DECISIONS:
            raise InvalidTransition(f"Bookings can only be confirmed or rejected, not {new_status.value}")
        doc = self.db.find_document("booking", {"id": booking_id})
        if doc is None:
            raise BookingNotFound(booking_id)
        booking = Booking(**doc)
        if booking.status != BookingStatus.PENDING:
            raise InvalidTransition(
                f"Booking {booking_id} is {booking.status.value}; only pending bookings can be decided"
            )

        self.db.update_document("booking", booking_id, {"status": new_status.value})
        logger.info("Booking %s %s", booking_id, new_status.value)
        return Booking(**self.db.find_document("booking", {"id": booking_id}))

    @synchronized
    def block_slot(
        self, turf_id: str, date: str, time_slot: str, user_id: str, notes: Optional[str] = None
    ) -> Optional[Booking]:
        """Take a slot out of service. Returns None if it is already blocked."""
        turf = self.get_turf(turf_id)
        self.get_user(user_id)
        self._check_slot(turf, time_slot)
        holder = self._slot_holder(turf_id, date, time_slot)
        if holder is not None:
            if holder.status == BookingStatus.BLOCKED:
                logger.info("Slot already blocked: %s %s %s", turf_id, date, time_slot)
                return None
            raise SlotUnavailable(turf_id, date, time_slot)

        doc = {
            "turfId": turf_id,
            "date": date,
            "timeSlot": time_slot,
            "userId": user_id,
            "status": BookingStatus.BLOCKED.value,
            "paymentStatus": PaymentStatus.NOT_APPLICABLE.value,
            "notes": notes if notes is not None else DEFAULT_BLOCK_NOTES,
        }
        doc["id"] = self.db.create_document("booking", doc)
        logger.info("Slot blocked: %s %s %s (%s)", turf_id, date, time_slot, doc["notes"])
        return Booking(**doc)

    @synchronized
    def unblock_slot(self, turf_id: str, date: str, time_slot: str) -> int:
        """Delete the blocked booking(s) for a slot. Returns how many were removed."""
        removed = self.db.delete_documents(
            "booking",
            {"turfId": turf_id, "date": date, "timeSlot": time_slot, "status": BookingStatus.BLOCKED.value},
        )
        if removed:
            logger.info("Slot unblocked: %s %s %s", turf_id, date, time_slot)
        return removed

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------
    @synchronized
    def add_review(self, turf_id: str, user_id: str, rating: int, comment: str) -> Review:
        review = Review(
            id=new_id(), turfId=turf_id, userId=user_id, rating=rating, comment=comment, date=today_iso()
        )
        self.db.create_document("review", review)
        logger.info("Review %s added for %s", review.id, turf_id)
        return review

    @synchronized
    def reviews_for_turf(self, turf_id: str) -> List[Review]:
        return [Review(**doc) for doc in self.db.get_documents("review", {"turfId": turf_id})]

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    @synchronized
    def register_user(self, name: str, email: str, contact_no: str, dob: str) -> User:
        """Add a player. Registration never grants any other role."""
        if self.db.find_document("user", {"email": email, "contactNo": contact_no}) is not None:
            raise DuplicateUser("A user with this email and contact number already exists")
        doc = {"name": name, "email": email, "contactNo": contact_no, "dob": dob, "role": Role.PLAYER.value}
        doc["id"] = self.db.create_document("user", doc)
        logger.info("User %s registered", doc["id"])
        return User(**doc)

    @synchronized
    def sign_in_user(self, email: str, contact_no: str) -> Optional[User]:
        doc = self.db.find_document("user", {"email": email, "contactNo": contact_no})
        return User(**doc) if doc is not None else None

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------
    @synchronized
    def collection_counts(self) -> dict:
        return {name: self.db.count_documents(name) for name in self.db.list_collection_names()}

    @synchronized
    def summary(self) -> dict:
        return {
            "users": self.db.count_documents("user"),
            "turfs": self.db.count_documents("turf"),
            "bookings": self.db.count_documents("booking"),
            "reviews": self.db.count_documents("review"),
            "pending": self.db.count_documents("booking", {"status": BookingStatus.PENDING.value}),
            "blocked": self.db.count_documents("booking", {"status": BookingStatus.BLOCKED.value}),
        }
