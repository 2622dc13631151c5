"""
Reservation status management.
Handles status changes, the optional transition table, and history.
"""

import logging

from flask import current_app

from database import get_db
from utils.exceptions import ReservationNotFound, ValidationError, InvalidStatusTransition

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

STATUS_ACTIVE = 'active'
STATUS_CANCELLED = 'cancelled'
STATUS_COMPLETED = 'completed'

RESERVATION_STATUSES = (STATUS_ACTIVE, STATUS_CANCELLED, STATUS_COMPLETED)

# Strict lifecycle: cancelled and completed are terminal.
# Only enforced when bypass_validation=False or STRICT_STATUS_TRANSITIONS is on.
VALID_TRANSITIONS = {
    STATUS_ACTIVE: [STATUS_CANCELLED, STATUS_COMPLETED],
    STATUS_CANCELLED: [],
    STATUS_COMPLETED: [],
}


# =============================================================================
# TRANSITION VALIDATION
# =============================================================================

def validate_status(status: str) -> str:
    """
    Check that a status belongs to the reservation status set.

    Raises:
        ValidationError: If the status is missing or unknown
    """
    if not status or status not in RESERVATION_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'. Expected one of: {', '.join(RESERVATION_STATUSES)}",
            field='status'
        )
    return status


def validate_status_transition(old_status: str, new_status: str, bypass_validation: bool = True) -> None:
    """
    Validate a status change against VALID_TRANSITIONS.

    By default the check is bypassed and any status may follow any other.

    Args:
        old_status: Current status (may be None for new reservations)
        new_status: Requested status
        bypass_validation: Skip the transition table

    Raises:
        ValidationError: If new_status is not a known status
        InvalidStatusTransition: If enforcement is on and the change is not allowed
    """
    validate_status(new_status)

    if bypass_validation or not old_status or old_status == new_status:
        return

    allowed = VALID_TRANSITIONS.get(old_status, [])
    if new_status not in allowed:
        raise InvalidStatusTransition(old_status, new_status, allowed)


# =============================================================================
# STATUS CHANGES
# =============================================================================

def update_reservation_status(
    reservation_id: int,
    status: str,
    changed_by: str = None,
    reason: str = '',
    strict: bool = None
) -> dict:
    """
    Change the status of a reservation and record it in history.

    Args:
        reservation_id: Reservation ID
        status: New status (active, cancelled, completed)
        changed_by: Username making the change
        reason: Optional note stored in history
        strict: Enforce VALID_TRANSITIONS; defaults to the
            STRICT_STATUS_TRANSITIONS config value

    Returns:
        dict: Updated reservation with hotel/room display fields

    Raises:
        ValidationError: If the status is unknown
        ReservationNotFound: If the reservation does not exist
        InvalidStatusTransition: If strict mode rejects the change
    """
    from .reservation_crud import get_reservation_by_id

    validate_status(status)
    if strict is None:
        strict = current_app.config.get('STRICT_STATUS_TRANSITIONS', False)

    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('SELECT status FROM reservations WHERE id = ?', (reservation_id,))
        row = cursor.fetchone()
        if not row:
            raise ReservationNotFound(reservation_id)

        old_status = row['status']
        validate_status_transition(old_status, status, bypass_validation=not strict)

        cursor.execute('''
            UPDATE reservations
            SET status = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (status, reservation_id))

        cursor.execute('''
            INSERT INTO reservation_status_history
            (reservation_id, old_status, new_status, changed_by, reason)
            VALUES (?, ?, ?, ?, ?)
        ''', (reservation_id, old_status, status, changed_by, reason))

        db.commit()

    except Exception:
        db.rollback()
        raise

    logger.info(f"[Reservations] #{reservation_id} status {old_status} -> {status} by {changed_by or 'system'}")
    return get_reservation_by_id(reservation_id)


def cancel_reservation(reservation_id: int, cancelled_by: str = None, reason: str = '') -> dict:
    """Shortcut to set status 'cancelled'."""
    return update_reservation_status(reservation_id, STATUS_CANCELLED, cancelled_by, reason)


def complete_reservation(reservation_id: int, completed_by: str = None, reason: str = '') -> dict:
    """Shortcut to set status 'completed'."""
    return update_reservation_status(reservation_id, STATUS_COMPLETED, completed_by, reason)


# =============================================================================
# HISTORY
# =============================================================================

def get_status_history(reservation_id: int) -> list:
    """
    Get status change history for a reservation, oldest first.

    Args:
        reservation_id: Reservation ID

    Returns:
        list: History entries
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT id, reservation_id, old_status, new_status, changed_by, reason, created_at
        FROM reservation_status_history
        WHERE reservation_id = ?
        ORDER BY id
    ''', (reservation_id,))
    return [dict(row) for row in cursor.fetchall()]
