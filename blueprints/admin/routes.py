"""
Admin routes for user management and hotel-manager assignments.
"""

from flask import request, Blueprint
from flask_login import login_required, current_user

from utils.api_response import api_success, api_error
from utils.decorators import permission_required, json_required
from utils.exceptions import HotelNotFound, UserNotFound, ValidationError
from utils.messages import MESSAGES
from models.user import (get_all_users, get_user_by_id, create_user, delete_user,
                         update_user_role, public_user)
from models.role import get_role_by_name
from models.hotel import (get_hotel_by_id, assign_hotel_manager, remove_hotel_manager,
                          get_hotel_managers, get_managed_hotels)
from blueprints.admin.services import validate_user_creation, can_delete_user

admin_bp = Blueprint('admin', __name__)


# =============================================================================
# USERS
# =============================================================================

@admin_bp.route('/users')
@login_required
@permission_required('admin.users.view')
def users():
    """
    List users.

    Query params:
        role: Filter by role name (optional)
        active: 'all' to include inactive users (optional)
    """
    role_filter = request.args.get('role', '')
    active_only = request.args.get('active', '') != 'all'

    users_list = get_all_users(active_only=active_only)
    if role_filter:
        users_list = [u for u in users_list if u.get('role_name') == role_filter]

    return api_success(data=users_list, count=len(users_list))


@admin_bp.route('/users', methods=['POST'])
@login_required
@permission_required('admin.users.manage')
@json_required
def user_create():
    """Create a user with any role."""
    data = request.get_json()
    username = data.get('username')
    email = data.get('email')
    password = data.get('password')
    role = data.get('role', 'user')

    is_valid, error = validate_user_creation(username, email, password, role)
    if not is_valid:
        raise ValidationError(error)

    user_id = create_user(
        username=username,
        email=email,
        password=password,
        full_name=data.get('full_name'),
        role_id=get_role_by_name(role)['id']
    )
    return api_success(data=public_user(get_user_by_id(user_id)), status=201)


@admin_bp.route('/users/<int:user_id>/role', methods=['PUT'])
@login_required
@permission_required('admin.users.manage')
@json_required
def user_update_role(user_id):
    """Change a user's role."""
    data = request.get_json()
    user = update_user_role(user_id, data.get('role'))
    return api_success(data=user, message=MESSAGES['user_role_updated'])


@admin_bp.route('/users/<int:user_id>', methods=['DELETE'])
@login_required
@permission_required('admin.users.manage')
def user_delete(user_id):
    """Delete a user and their reservations."""
    allowed, error = can_delete_user(user_id, current_user.id)
    if not allowed:
        return api_error(error, status=400)

    delete_user(user_id)
    return api_success(message=MESSAGES['user_deleted'])


# =============================================================================
# HOTEL MANAGERS
# =============================================================================

@admin_bp.route('/hotel-managers/assign', methods=['POST'])
@login_required
@permission_required('admin.managers.assign')
@json_required
def manager_assign():
    """Assign a hotel_manager user to a hotel."""
    data = request.get_json()
    user_id = data.get('user_id')
    hotel_id = data.get('hotel_id')

    if not user_id or not hotel_id:
        raise ValidationError('User ID and Hotel ID are required')

    assign_hotel_manager(user_id, hotel_id)
    return api_success(message=MESSAGES['manager_assigned'], status=201)


@admin_bp.route('/hotel-managers/remove', methods=['POST'])
@login_required
@permission_required('admin.managers.assign')
@json_required
def manager_remove():
    """Remove a manager assignment."""
    data = request.get_json()
    user_id = data.get('user_id')
    hotel_id = data.get('hotel_id')

    if not user_id or not hotel_id:
        raise ValidationError('User ID and Hotel ID are required')

    if not remove_hotel_manager(user_id, hotel_id):
        return api_error(MESSAGES['assignment_not_found'], status=404)

    return api_success(message=MESSAGES['manager_removed'])


@admin_bp.route('/hotel-managers/<int:hotel_id>')
@login_required
@permission_required('admin.managers.assign')
def managers_for_hotel(hotel_id):
    """Managers assigned to a hotel."""
    if not get_hotel_by_id(hotel_id):
        raise HotelNotFound(hotel_id)
    return api_success(data=get_hotel_managers(hotel_id))


@admin_bp.route('/users/<int:user_id>/hotels')
@login_required
@permission_required('admin.managers.assign')
def hotels_for_user(user_id):
    """Hotels a user manages."""
    if not get_user_by_id(user_id):
        raise UserNotFound(user_id)
    return api_success(data=get_managed_hotels(user_id))
