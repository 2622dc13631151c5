"""
Room availability checking.
Overlap predicate, active-reservation queries, and free-unit calculation.

Ranges are half-open: [check_in, check_out). A guest leaving on the day
another arrives does not conflict.
"""

from datetime import date

from database import get_db
from utils.exceptions import RoomNotFound
from utils.validators import parse_date_range, format_date


# =============================================================================
# OVERLAP PREDICATE
# =============================================================================

def _as_iso(value) -> str:
    if isinstance(value, date):
        return format_date(value)
    return value


def ranges_overlap(check_in_a, check_out_a, check_in_b, check_out_b) -> bool:
    """
    Decide whether two stays share at least one night.

    Accepts YYYY-MM-DD strings or date objects. Fixed-width ISO strings
    order the same way as the dates they encode.

    Returns:
        True iff check_in_a < check_out_b and check_in_b < check_out_a
    """
    in_a, out_a = _as_iso(check_in_a), _as_iso(check_out_a)
    in_b, out_b = _as_iso(check_in_b), _as_iso(check_out_b)
    return in_a < out_b and in_b < out_a


# =============================================================================
# QUERIES
# =============================================================================

def list_active_reservations(
    room_id: int,
    range_start=None,
    range_end=None
) -> list:
    """
    Get active reservations for a room, optionally limited to a date range.

    Args:
        room_id: Room ID
        range_start: Only reservations ending after this date (optional)
        range_end: Only reservations starting before this date (optional)

    Returns:
        list: Reservation dicts ordered by check_in
    """
    db = get_db()
    cursor = db.cursor()

    query = '''
        SELECT id, user_id, hotel_id, room_id, check_in, check_out,
               guests, total_price, status
        FROM reservations
        WHERE room_id = ?
          AND status = 'active'
    '''
    params = [room_id]

    # Same predicate as ranges_overlap, evaluated by SQLite
    if range_end is not None:
        query += ' AND check_in < ?'
        params.append(_as_iso(range_end))

    if range_start is not None:
        query += ' AND check_out > ?'
        params.append(_as_iso(range_start))

    query += ' ORDER BY check_in, id'

    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]


def get_conflicting_reservations(room_id: int, check_in, check_out) -> list:
    """
    Get active reservations overlapping a requested stay.
    Useful for showing what's blocking availability.

    Args:
        room_id: Room ID
        check_in: Requested check-in (YYYY-MM-DD)
        check_out: Requested check-out (YYYY-MM-DD)

    Returns:
        list: Conflicting reservations
    """
    start, end = parse_date_range(check_in, check_out)
    return list_active_reservations(room_id, start, end)


def count_overlapping_reservations(room_id: int, check_in, check_out) -> int:
    """Count active reservations on a room that overlap [check_in, check_out)."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT COUNT(*) as count FROM reservations
        WHERE room_id = ?
          AND status = 'active'
          AND check_in < ?
          AND check_out > ?
    ''', (room_id, _as_iso(check_out), _as_iso(check_in)))
    return cursor.fetchone()['count']


# =============================================================================
# AVAILABILITY CALCULATOR
# =============================================================================

def check_room_availability(room_id: int, check_in, check_out) -> int:
    """
    Compute the free units of a room for a date range.

    The result is not clamped: zero means fully booked and a negative value
    means the room is over-booked. Callers treat <= 0 as unavailable.

    Args:
        room_id: Room ID
        check_in: Requested check-in (YYYY-MM-DD)
        check_out: Requested check-out (YYYY-MM-DD)

    Returns:
        int: room.available_rooms - overlapping active reservations

    Raises:
        ValidationError: If a date is missing or malformed
        InvalidDateRange: If check_out is not after check_in
        RoomNotFound: If the room does not exist
    """
    from models.room import get_room_by_id

    start, end = parse_date_range(check_in, check_out)

    room = get_room_by_id(room_id)
    if not room:
        raise RoomNotFound(room_id)

    overlap_count = count_overlapping_reservations(room_id, start, end)
    return room['available_rooms'] - overlap_count


def get_room_availability_summary(room_id: int, check_in, check_out) -> dict:
    """
    Availability in the shape returned to API callers.

    Returns:
        dict: {'available': bool, 'availableRooms': int}
    """
    free_units = check_room_availability(room_id, check_in, check_out)
    return {
        'available': free_units > 0,
        'availableRooms': free_units
    }
