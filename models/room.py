"""
Room data access functions.
Handles room CRUD and inventory-aware room search.

available_rooms is the number of physical units of a room type. It is set
by management only; bookings never decrement it.
"""

from database import get_db
from utils.exceptions import HotelNotFound, RoomNotFound, ValidationError
from utils.validators import (
    parse_date_range, parse_positive_int, parse_positive_number, format_date
)


# =============================================================================
# READ
# =============================================================================

def get_room_by_id(room_id: int) -> dict:
    """
    Get room by ID.

    Args:
        room_id: Room ID

    Returns:
        Room dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM rooms WHERE id = ?', (room_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_all_rooms() -> list:
    """Get all rooms."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM rooms ORDER BY hotel_id, id')
    return [dict(row) for row in cursor.fetchall()]


def get_rooms_by_hotel(hotel_id: int) -> list:
    """Get rooms belonging to a hotel."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT * FROM rooms WHERE hotel_id = ?
        ORDER BY price_per_night, id
    ''', (hotel_id,))
    return [dict(row) for row in cursor.fetchall()]


def search_available_rooms(
    check_in,
    check_out,
    location: str = None,
    guests: int = None
) -> list:
    """
    Find rooms with at least one free unit for a date range.

    Args:
        check_in: Requested check-in (YYYY-MM-DD)
        check_out: Requested check-out (YYYY-MM-DD)
        location: Hotel location substring (optional)
        guests: Minimum room capacity (optional)

    Returns:
        List of room dicts with hotel fields and available_count

    Raises:
        ValidationError: If dates are malformed or the range is empty
    """
    start, end = parse_date_range(check_in, check_out)

    query = '''
        SELECT * FROM (
            SELECT r.*, h.name as hotel_name, h.location, h.rating, h.image_url,
                r.available_rooms - (
                    SELECT COUNT(*) FROM reservations res
                    WHERE res.room_id = r.id
                      AND res.status = 'active'
                      AND res.check_in < ?
                      AND res.check_out > ?
                ) as available_count
            FROM rooms r
            JOIN hotels h ON r.hotel_id = h.id
            WHERE 1=1
    '''
    params = [format_date(end), format_date(start)]

    if location:
        query += ' AND h.location LIKE ?'
        params.append(f'%{location}%')

    if guests:
        query += ' AND r.capacity >= ?'
        params.append(parse_positive_int(guests, 'guests'))

    query += '''
        )
        WHERE available_count > 0
        ORDER BY price_per_night, id
    '''

    db = get_db()
    cursor = db.cursor()
    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]


# =============================================================================
# CREATE / UPDATE / DELETE
# =============================================================================

def create_room(
    hotel_id: int,
    type: str,
    price_per_night,
    capacity,
    available_rooms=1
) -> dict:
    """
    Create a room type for a hotel.

    Returns:
        The created room dict

    Raises:
        HotelNotFound: If the hotel does not exist
        ValidationError: If any field is missing or out of range
    """
    from models.hotel import get_hotel_by_id

    if not type:
        raise ValidationError('type is required', field='type')
    price_per_night = parse_positive_number(price_per_night, 'price_per_night')
    capacity = parse_positive_int(capacity, 'capacity')
    available_rooms = _parse_inventory(available_rooms)

    if not get_hotel_by_id(hotel_id):
        raise HotelNotFound(hotel_id)

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO rooms (hotel_id, type, price_per_night, capacity, available_rooms)
        VALUES (?, ?, ?, ?, ?)
    ''', (hotel_id, type, price_per_night, capacity, available_rooms))
    db.commit()

    return get_room_by_id(cursor.lastrowid)


def update_room(room_id: int, **kwargs) -> dict:
    """
    Update room fields (type, price_per_night, capacity, available_rooms).

    Raises:
        RoomNotFound: If the room does not exist
        ValidationError: If a value is out of range
    """
    if not get_room_by_id(room_id):
        raise RoomNotFound(room_id)

    parsers = {
        'type': lambda v: v,
        'price_per_night': lambda v: parse_positive_number(v, 'price_per_night'),
        'capacity': lambda v: parse_positive_int(v, 'capacity'),
        'available_rooms': _parse_inventory,
    }
    updates = []
    values = []

    for field, parse in parsers.items():
        if kwargs.get(field) is not None:
            updates.append(f'{field} = ?')
            values.append(parse(kwargs[field]))

    if updates:
        values.append(room_id)
        db = get_db()
        db.execute(f'UPDATE rooms SET {", ".join(updates)} WHERE id = ?', values)
        db.commit()

    return get_room_by_id(room_id)


def delete_room(room_id: int) -> None:
    """
    Delete a room; its reservations cascade.

    Raises:
        RoomNotFound: If the room does not exist
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('DELETE FROM rooms WHERE id = ?', (room_id,))
    db.commit()
    if cursor.rowcount == 0:
        raise RoomNotFound(room_id)


def _parse_inventory(value) -> int:
    if value is None or value == '':
        return 1
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ValidationError('available_rooms must be an integer', field='available_rooms')
    if count < 0:
        raise ValidationError('available_rooms cannot be negative', field='available_rooms')
    return count
