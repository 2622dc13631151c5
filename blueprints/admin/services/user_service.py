"""
Business logic for admin operations.
Provides validation and business rules for user management.
"""

from models.user import count_admins, get_user_by_id, get_user_by_username, get_user_by_email
from models.role import ROLE_NAMES
from utils.exceptions import UserNotFound
from utils.messages import MESSAGES
from utils.validators import validate_email, validate_password


def validate_user_creation(username: str, email: str, password: str, role: str = 'user') -> tuple:
    """
    Validate user creation data.

    Args:
        username: Username to check
        email: Email to check
        password: Password to validate
        role: Role name to assign

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not username or not email or not password or not role:
        return False, MESSAGES['fields_required']

    if role not in ROLE_NAMES:
        return False, MESSAGES['invalid_role']

    # Check username exists
    if get_user_by_username(username):
        return False, MESSAGES['username_taken']

    if not validate_email(email):
        return False, 'Invalid email address'

    # Check email exists
    if get_user_by_email(email):
        return False, MESSAGES['email_taken']

    return validate_password(password)


def can_delete_user(user_id: int, current_user_id: int) -> tuple:
    """
    Check if user can be deleted.

    Args:
        user_id: User ID to delete
        current_user_id: Current logged-in user ID

    Returns:
        Tuple of (can_delete, error_message)

    Raises:
        UserNotFound: If the user does not exist
    """
    # Cannot delete self
    if user_id == current_user_id:
        return False, MESSAGES['cannot_delete_self']

    user = get_user_by_id(user_id)
    if not user:
        raise UserNotFound(user_id)

    # Keep at least one admin
    if user.get('role_name') == 'admin' and count_admins() <= 1:
        return False, MESSAGES['last_admin']

    return True, ''
