"""
Centralized UI messages.
All user-facing text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome {name}',
    'logout_success': 'Logged out successfully',
    'register_success': 'Account created successfully',
    'reservation_created': 'Reservation created successfully',
    'reservation_status_updated': 'Reservation status updated successfully',
    'reservation_deleted': 'Reservation deleted successfully',
    'hotel_created': 'Hotel created successfully',
    'hotel_updated': 'Hotel updated successfully',
    'hotel_deleted': 'Hotel deleted successfully',
    'room_created': 'Room created successfully',
    'room_updated': 'Room updated successfully',
    'room_deleted': 'Room deleted successfully',
    'user_deleted': 'User deleted successfully',
    'user_role_updated': 'User role updated successfully',
    'manager_assigned': 'Hotel manager assigned successfully',
    'manager_removed': 'Hotel manager removed successfully',

    # Error messages
    'invalid_credentials': 'Invalid username or password',
    'account_disabled': 'Your account has been disabled',
    'login_required': 'Authentication required',
    'permission_denied': 'You do not have permission for this action',
    'json_required': 'A JSON request body is required',
    'fields_required': 'All fields are required',
    'email_taken': 'Email already registered',
    'username_taken': 'Username already taken',
    'invalid_role': 'Invalid role',
    'cannot_delete_self': 'Cannot delete your own account',
    'last_admin': 'Cannot remove the last administrator',
    'manager_role_required': 'User must have hotel_manager role',
    'manager_already_assigned': 'Manager already assigned to this hotel',
    'assignment_not_found': 'Assignment not found',
    'internal_error': 'Internal server error',
}
