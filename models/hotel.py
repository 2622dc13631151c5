"""
Hotel data access functions.
Handles hotel CRUD, search, and hotel-manager assignments.
"""

import json
import sqlite3

from database import get_db
from utils.exceptions import HotelNotFound, UserNotFound, ValidationError


def _row_to_hotel(row) -> dict:
    """Convert a hotel row, decoding the amenities JSON column."""
    hotel = dict(row)
    try:
        hotel['amenities'] = json.loads(hotel.get('amenities') or '[]')
    except (TypeError, ValueError):
        hotel['amenities'] = []
    return hotel


# =============================================================================
# READ
# =============================================================================

def get_hotel_by_id(hotel_id: int) -> dict:
    """
    Get hotel by ID.

    Args:
        hotel_id: Hotel ID

    Returns:
        Hotel dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM hotels WHERE id = ?', (hotel_id,))
    row = cursor.fetchone()
    return _row_to_hotel(row) if row else None


def search_hotels(location: str = None, rating: float = None) -> list:
    """
    Search hotels by location substring and minimum rating.

    Args:
        location: Case-insensitive substring of the hotel location
        rating: Minimum rating (inclusive)

    Returns:
        List of hotel dicts
    """
    db = get_db()
    cursor = db.cursor()

    query = 'SELECT * FROM hotels WHERE 1=1'
    params = []

    if location:
        query += ' AND location LIKE ?'
        params.append(f'%{location}%')

    if rating is not None:
        query += ' AND rating >= ?'
        params.append(rating)

    query += ' ORDER BY rating DESC, name'

    cursor.execute(query, params)
    return [_row_to_hotel(row) for row in cursor.fetchall()]


# =============================================================================
# CREATE / UPDATE / DELETE
# =============================================================================

def create_hotel(
    name: str,
    location: str,
    description: str = '',
    image_url: str = '',
    rating: float = 0,
    amenities: list = None
) -> dict:
    """
    Create a hotel.

    Returns:
        The created hotel dict

    Raises:
        ValidationError: If name/location are missing or rating is out of range
    """
    if not name or not location:
        raise ValidationError('Hotel name and location are required')
    rating = _parse_rating(rating)

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO hotels (name, description, location, image_url, rating, amenities)
        VALUES (?, ?, ?, ?, ?, ?)
    ''', (name, description or '', location, image_url or '', rating,
          json.dumps(amenities or [])))
    db.commit()

    return get_hotel_by_id(cursor.lastrowid)


def update_hotel(hotel_id: int, **kwargs) -> dict:
    """
    Update hotel fields.

    Args:
        hotel_id: Hotel ID
        **kwargs: Fields to update (name, description, location, image_url,
            rating, amenities)

    Returns:
        The updated hotel dict

    Raises:
        HotelNotFound: If the hotel does not exist
        ValidationError: If rating is out of range
    """
    if not get_hotel_by_id(hotel_id):
        raise HotelNotFound(hotel_id)

    allowed_fields = ['name', 'description', 'location', 'image_url', 'rating', 'amenities']
    updates = []
    values = []

    for field in allowed_fields:
        if field in kwargs and kwargs[field] is not None:
            value = kwargs[field]
            if field == 'rating':
                value = _parse_rating(value)
            elif field == 'amenities':
                value = json.dumps(value)
            updates.append(f'{field} = ?')
            values.append(value)

    if updates:
        values.append(hotel_id)
        db = get_db()
        db.execute(f'UPDATE hotels SET {", ".join(updates)} WHERE id = ?', values)
        db.commit()

    return get_hotel_by_id(hotel_id)


def delete_hotel(hotel_id: int) -> None:
    """
    Delete a hotel; rooms, reservations and manager assignments cascade.

    Raises:
        HotelNotFound: If the hotel does not exist
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('DELETE FROM hotels WHERE id = ?', (hotel_id,))
    db.commit()
    if cursor.rowcount == 0:
        raise HotelNotFound(hotel_id)


def _parse_rating(rating) -> float:
    try:
        rating = float(rating or 0)
    except (TypeError, ValueError):
        raise ValidationError('rating must be a number', field='rating')
    if rating < 0 or rating > 5:
        raise ValidationError('rating must be between 0 and 5', field='rating')
    return rating


# =============================================================================
# HOTEL MANAGERS
# =============================================================================

def is_hotel_manager(user_id: int, hotel_id: int) -> bool:
    """Check whether a user is assigned as manager of a hotel."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT 1 FROM hotel_managers
        WHERE user_id = ? AND hotel_id = ?
    ''', (user_id, hotel_id))
    return cursor.fetchone() is not None


def assign_hotel_manager(user_id: int, hotel_id: int) -> int:
    """
    Assign a hotel_manager user to a hotel.

    Returns:
        Assignment ID

    Raises:
        UserNotFound / HotelNotFound: If either side is missing
        ValidationError: If the user is not a hotel manager or already assigned
    """
    from models.user import get_user_by_id

    user = get_user_by_id(user_id)
    if not user:
        raise UserNotFound(user_id)
    if user.get('role_name') != 'hotel_manager':
        raise ValidationError('User must have hotel_manager role', field='user_id')
    if not get_hotel_by_id(hotel_id):
        raise HotelNotFound(hotel_id)

    db = get_db()
    cursor = db.cursor()
    try:
        cursor.execute('''
            INSERT INTO hotel_managers (user_id, hotel_id)
            VALUES (?, ?)
        ''', (user_id, hotel_id))
    except sqlite3.IntegrityError:
        db.rollback()
        raise ValidationError('Manager already assigned to this hotel')
    db.commit()
    return cursor.lastrowid


def remove_hotel_manager(user_id: int, hotel_id: int) -> bool:
    """
    Remove a manager assignment.

    Returns:
        True if an assignment was removed
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        DELETE FROM hotel_managers WHERE user_id = ? AND hotel_id = ?
    ''', (user_id, hotel_id))
    db.commit()
    return cursor.rowcount > 0


def get_hotel_managers(hotel_id: int) -> list:
    """List managers assigned to a hotel."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT u.id, u.username, u.full_name, u.email, hm.created_at as assigned_at
        FROM hotel_managers hm
        JOIN users u ON hm.user_id = u.id
        WHERE hm.hotel_id = ?
        ORDER BY u.username
    ''', (hotel_id,))
    return [dict(row) for row in cursor.fetchall()]


def get_managed_hotels(user_id: int) -> list:
    """List hotels a manager is assigned to."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT h.id, h.name, h.location, hm.created_at as assigned_at
        FROM hotel_managers hm
        JOIN hotels h ON hm.hotel_id = h.id
        WHERE hm.user_id = ?
        ORDER BY h.name
    ''', (user_id,))
    return [dict(row) for row in cursor.fetchall()]
