"""
Reservation engine error kinds.

Every error raised by the models layer derives from BookingError so callers
can catch the whole family, while each kind stays individually catchable.
The HTTP layer maps kinds to status codes in app.register_error_handlers.
"""


class BookingError(Exception):
    """Base class for all booking domain errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(BookingError):
    """A required field is missing or malformed."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class InvalidDateRange(ValidationError):
    """Check-out is not strictly after check-in."""

    def __init__(self, check_in, check_out):
        self.check_in = check_in
        self.check_out = check_out
        super().__init__(
            f"Check-out date ({check_out}) must be after check-in date ({check_in})",
            field='check_out'
        )


class InvalidStatusTransition(ValidationError):
    """Status change rejected by the transition table."""

    def __init__(self, old_status: str, new_status: str, allowed: list):
        self.old_status = old_status
        self.new_status = new_status
        self.allowed = allowed
        allowed_text = ', '.join(allowed) if allowed else 'none'
        super().__init__(
            f"Cannot change status from '{old_status}' to '{new_status}'. "
            f"Allowed: {allowed_text}",
            field='status'
        )


class RoomNotFound(BookingError):
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")


class HotelNotFound(BookingError):
    def __init__(self, hotel_id):
        self.hotel_id = hotel_id
        super().__init__(f"Hotel {hotel_id} not found")


class ReservationNotFound(BookingError):
    def __init__(self, reservation_id):
        self.reservation_id = reservation_id
        super().__init__(f"Reservation {reservation_id} not found")


class UserNotFound(BookingError):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class NoAvailability(BookingError):
    """Creation attempted against a fully booked range."""

    def __init__(self, room_id, check_in, check_out, free_units: int):
        self.room_id = room_id
        self.check_in = check_in
        self.check_out = check_out
        self.free_units = free_units
        super().__init__(
            f"No rooms available for room {room_id} between {check_in} and {check_out}"
        )


class Unauthorized(BookingError):
    """The current user may not act on the resource."""

    def __init__(self, message: str = 'Access denied'):
        super().__init__(message)
