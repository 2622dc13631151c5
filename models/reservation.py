"""
Reservation data access functions.
Handles reservation CRUD, status management and availability checking.

This module re-exports all functions from the split modules:
- reservation_availability.py: Overlap predicate and free-unit calculation
- reservation_suggestions.py: Alternative date search
- reservation_crud.py: Create, read, delete operations
- reservation_state.py: Status changes and history
"""

# =============================================================================
# RE-EXPORTS
# =============================================================================

# Availability
from .reservation_availability import (
    ranges_overlap,
    list_active_reservations,
    get_conflicting_reservations,
    count_overlapping_reservations,
    check_room_availability,
    get_room_availability_summary,
)

# Alternative suggestions
from .reservation_suggestions import (
    DEFAULT_DAYS_RANGE,
    MAX_DAYS_RANGE,
    MAX_SUGGESTIONS,
    find_alternative_dates,
)

# CRUD operations
from .reservation_crud import (
    create_reservation,
    get_reservation_by_id,
    get_reservations_by_user,
    get_reservations_by_hotel,
    get_all_reservations,
    delete_reservation,
)

# Status management
from .reservation_state import (
    RESERVATION_STATUSES,
    VALID_TRANSITIONS,
    validate_status,
    validate_status_transition,
    update_reservation_status,
    cancel_reservation,
    complete_reservation,
    get_status_history,
)

__all__ = [
    'ranges_overlap',
    'list_active_reservations',
    'get_conflicting_reservations',
    'count_overlapping_reservations',
    'check_room_availability',
    'get_room_availability_summary',
    'DEFAULT_DAYS_RANGE',
    'MAX_DAYS_RANGE',
    'MAX_SUGGESTIONS',
    'find_alternative_dates',
    'create_reservation',
    'get_reservation_by_id',
    'get_reservations_by_user',
    'get_reservations_by_hotel',
    'get_all_reservations',
    'delete_reservation',
    'RESERVATION_STATUSES',
    'VALID_TRANSITIONS',
    'validate_status',
    'validate_status_transition',
    'update_reservation_status',
    'cancel_reservation',
    'complete_reservation',
    'get_status_history',
]
