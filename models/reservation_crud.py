"""
Reservation CRUD operations.
Handles create, read and delete for reservations.
"""

import logging

from database import get_db
from .reservation_availability import check_room_availability
from .reservation_state import STATUS_ACTIVE
from utils.exceptions import RoomNotFound, ReservationNotFound, NoAvailability, ValidationError
from utils.validators import (
    parse_date_range, parse_positive_int, parse_positive_number, format_date
)

logger = logging.getLogger(__name__)

RESERVATION_DETAIL_QUERY = '''
    SELECT r.*, h.name as hotel_name, h.location, h.image_url,
           ro.type as room_type
    FROM reservations r
    JOIN hotels h ON r.hotel_id = h.id
    JOIN rooms ro ON r.room_id = ro.id
'''


# =============================================================================
# CREATE
# =============================================================================

def create_reservation(
    user_id: int,
    hotel_id: int,
    room_id: int,
    check_in: str,
    check_out: str,
    guests: int,
    total_price: float,
    created_by: str = None
) -> dict:
    """
    Create an active reservation after re-checking availability.

    The availability check and the insert run in one BEGIN IMMEDIATE
    transaction. SQLite grants a single writer at a time, so two requests
    for the last unit cannot both pass the check.

    Args:
        user_id: Booking user ID
        hotel_id: Hotel ID (must own the room)
        room_id: Room ID
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD), after check_in
        guests: Number of guests (1..room capacity)
        total_price: Total price (> 0)
        created_by: Username recorded in status history

    Returns:
        dict: Persisted reservation joined with hotel/room display fields

    Raises:
        ValidationError: If a field is missing or out of range
        InvalidDateRange: If check_out is not after check_in
        RoomNotFound: If the room does not exist
        NoAvailability: If the room has no free unit for the range
    """
    user_id = parse_positive_int(user_id, 'user_id')
    hotel_id = parse_positive_int(hotel_id, 'hotel_id')
    room_id = parse_positive_int(room_id, 'room_id')
    start, end = parse_date_range(check_in, check_out)
    guests = parse_positive_int(guests, 'guests')
    total_price = parse_positive_number(total_price, 'total_price')

    from models.room import get_room_by_id

    db = get_db()
    cursor = db.cursor()

    try:
        if not db.in_transaction:
            cursor.execute('BEGIN IMMEDIATE')

        room = get_room_by_id(room_id)
        if not room:
            raise RoomNotFound(room_id)

        if room['hotel_id'] != hotel_id:
            raise ValidationError(
                f'Room {room_id} does not belong to hotel {hotel_id}', field='room_id'
            )

        if guests > room['capacity']:
            raise ValidationError(
                f"Room capacity is {room['capacity']} guests", field='guests'
            )

        free_units = check_room_availability(room_id, start, end)
        if free_units <= 0:
            raise NoAvailability(room_id, format_date(start), format_date(end), free_units)

        cursor.execute('''
            INSERT INTO reservations (
                user_id, hotel_id, room_id, check_in, check_out,
                guests, total_price, status
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        ''', (
            user_id, hotel_id, room_id, format_date(start), format_date(end),
            guests, total_price, STATUS_ACTIVE
        ))
        reservation_id = cursor.lastrowid

        cursor.execute('''
            INSERT INTO reservation_status_history
            (reservation_id, old_status, new_status, changed_by, reason)
            VALUES (?, NULL, ?, ?, ?)
        ''', (reservation_id, STATUS_ACTIVE, created_by, 'Reservation created'))

        db.commit()

    except NoAvailability as e:
        db.rollback()
        logger.warning(f"[Reservations] Rejected room={room_id} {e.check_in}..{e.check_out}: free_units={e.free_units}")
        raise

    except Exception:
        db.rollback()
        raise

    logger.info(f"[Reservations] Created #{reservation_id} room={room_id} user={user_id} {format_date(start)}..{format_date(end)}")
    return get_reservation_by_id(reservation_id)


# =============================================================================
# READ
# =============================================================================

def get_reservation_by_id(reservation_id: int) -> dict:
    """
    Get reservation with hotel/room display fields.

    Args:
        reservation_id: Reservation ID

    Returns:
        dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute(RESERVATION_DETAIL_QUERY + ' WHERE r.id = ?', (reservation_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_reservations_by_user(user_id: int) -> list:
    """Get a user's reservations, newest first."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute(
        RESERVATION_DETAIL_QUERY + ' WHERE r.user_id = ? ORDER BY r.created_at DESC, r.id DESC',
        (user_id,)
    )
    return [dict(row) for row in cursor.fetchall()]


def get_reservations_by_hotel(hotel_id: int, status: str = None) -> list:
    """
    Get reservations of a hotel with guest details, newest first.

    Args:
        hotel_id: Hotel ID
        status: Filter by status (optional)
    """
    query = '''
        SELECT r.*, h.name as hotel_name, h.location, ro.type as room_type,
               u.username as user_name, u.email as user_email
        FROM reservations r
        JOIN hotels h ON r.hotel_id = h.id
        JOIN rooms ro ON r.room_id = ro.id
        JOIN users u ON r.user_id = u.id
        WHERE r.hotel_id = ?
    '''
    params = [hotel_id]

    if status:
        query += ' AND r.status = ?'
        params.append(status)

    query += ' ORDER BY r.created_at DESC, r.id DESC'

    db = get_db()
    cursor = db.cursor()
    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]


def get_all_reservations(status: str = None) -> list:
    """Get every reservation with hotel, room and user fields, newest first."""
    query = '''
        SELECT r.*, h.name as hotel_name, h.location, ro.type as room_type,
               u.username as user_name, u.email as user_email
        FROM reservations r
        JOIN hotels h ON r.hotel_id = h.id
        JOIN rooms ro ON r.room_id = ro.id
        JOIN users u ON r.user_id = u.id
    '''
    params = []

    if status:
        query += ' WHERE r.status = ?'
        params.append(status)

    query += ' ORDER BY r.created_at DESC, r.id DESC'

    db = get_db()
    cursor = db.cursor()
    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]


# =============================================================================
# DELETE
# =============================================================================

def delete_reservation(reservation_id: int) -> None:
    """
    Hard delete a reservation regardless of status.

    Args:
        reservation_id: Reservation ID

    Raises:
        ReservationNotFound: If the reservation does not exist
    """
    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('DELETE FROM reservations WHERE id = ?', (reservation_id,))
        if cursor.rowcount == 0:
            raise ReservationNotFound(reservation_id)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"[Reservations] Deleted #{reservation_id}")
