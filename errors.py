"""Errors raised by the booking ledger. Each carries the HTTP status the API answers with."""


class LedgerError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(LedgerError):
    status_code = 404


class TurfNotFound(NotFound):
    def __init__(self, turf_id: str):
        super().__init__(f"Turf not found: {turf_id}")


class UserNotFound(NotFound):
    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")


class BookingNotFound(NotFound):
    def __init__(self, booking_id: str):
        super().__init__(f"Booking not found: {booking_id}")


class PermissionDenied(LedgerError):
    status_code = 403


class InvalidSlot(LedgerError):
    pass


class InvalidTransition(LedgerError):
    pass


class SlotUnavailable(LedgerError):
    status_code = 409

    def __init__(self, turf_id: str, date: str, time_slot: str):
        super().__init__(f"Time slot not available: {turf_id} {date} {time_slot}")


class DuplicateUser(LedgerError):
    status_code = 409
