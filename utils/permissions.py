"""
Permission checking and caching utilities.
Provides role permissions and hotel-scoped access checks.
"""

from database import get_db
from models.role import get_role_permissions
from utils.exceptions import Unauthorized


def load_user_permissions(user_id: int) -> set:
    """
    Load all permissions for a user based on their role.

    Args:
        user_id: User ID

    Returns:
        Set of permission codes
    """
    db = get_db()
    cursor = db.cursor()

    # Get user's role
    cursor.execute('SELECT role_id FROM users WHERE id = ?', (user_id,))
    row = cursor.fetchone()

    if not row or not row['role_id']:
        return set()

    # Get all permissions for the role
    permissions = get_role_permissions(row['role_id'])

    return {perm['code'] for perm in permissions}


def can_manage_hotel(user, hotel_id: int) -> bool:
    """Admins manage every hotel; hotel managers only their assigned ones."""
    from models.hotel import is_hotel_manager

    if user.is_admin:
        return True
    if user.is_hotel_manager:
        return is_hotel_manager(user.id, hotel_id)
    return False


def can_access_reservation(user, reservation: dict) -> bool:
    """
    Check whether a user may view or change a reservation.

    Allowed: the owner, an admin, or a manager assigned to the hotel.
    """
    if reservation['user_id'] == user.id:
        return True
    return can_manage_hotel(user, reservation['hotel_id'])


def ensure_reservation_access(user, reservation: dict) -> None:
    """
    Raises:
        Unauthorized: If the user may not act on the reservation
    """
    if not can_access_reservation(user, reservation):
        raise Unauthorized('Access denied')


def ensure_hotel_access(user, hotel_id: int) -> None:
    """
    Raises:
        Unauthorized: If the user may not manage the hotel
    """
    if not can_manage_hotel(user, hotel_id):
        raise Unauthorized('You do not have permission to manage this hotel')
