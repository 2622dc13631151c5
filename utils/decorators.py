"""
Route decorators for authentication and authorization.
Provides permission-based access control for routes.
"""

from functools import wraps
from flask import g, request
from flask_login import login_required, current_user

from utils.exceptions import Unauthorized, ValidationError
from utils.messages import MESSAGES


def permission_required(permission_code: str):
    """
    Decorator to require specific permission for a route.

    Usage:
        @api_bp.route('/hotels', methods=['POST'])
        @login_required
        @permission_required('hotels.manage')
        def create_hotel():
            ...

    Args:
        permission_code: Permission code required (e.g., 'rooms.manage')

    Returns:
        Decorator function
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # Check if user has permission
            if not hasattr(g, 'user_permissions'):
                # Load permissions if not cached
                from utils.permissions import load_user_permissions
                g.user_permissions = load_user_permissions(current_user.id)

            if permission_code not in g.user_permissions:
                raise Unauthorized(MESSAGES['permission_denied'])

            return func(*args, **kwargs)
        return wrapper
    return decorator


def json_required(func):
    """Reject requests whose body is not a JSON object."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError(MESSAGES['json_required'])
        return func(*args, **kwargs)
    return wrapper


# Re-export login_required for convenience
__all__ = ['login_required', 'permission_required', 'json_required']
