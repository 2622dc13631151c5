"""
Reservation API routes: booking, status changes, deletion, and history.
"""

from flask import request
from flask_login import login_required, current_user

from models.reservation import (
    create_reservation, get_reservation_by_id, get_reservations_by_user,
    get_all_reservations, update_reservation_status, delete_reservation,
    get_status_history, validate_status
)
from utils.api_response import api_success
from utils.decorators import permission_required, json_required
from utils.exceptions import ReservationNotFound, ValidationError
from utils.messages import MESSAGES
from utils.permissions import ensure_reservation_access

REQUIRED_FIELDS = ('hotel_id', 'room_id', 'check_in', 'check_out', 'guests', 'total_price')


def _get_accessible_reservation(reservation_id: int) -> dict:
    """Load a reservation the current user may act on."""
    reservation = get_reservation_by_id(reservation_id)
    if not reservation:
        raise ReservationNotFound(reservation_id)
    ensure_reservation_access(current_user, reservation)
    return reservation


def register_routes(bp):
    """Register reservation API routes on the blueprint."""

    # ============================================================================
    # LISTING
    # ============================================================================

    @bp.route('/reservations')
    @login_required
    @permission_required('reservations.view_all')
    def reservations_list():
        """
        All reservations (admin).

        Query params:
            status: Filter by status (optional)
        """
        status = request.args.get('status')
        if status:
            validate_status(status)

        reservations = get_all_reservations(status=status)
        return api_success(data=reservations, count=len(reservations))

    @bp.route('/reservations/mine')
    @login_required
    def reservations_mine():
        """Reservations of the current user."""
        reservations = get_reservations_by_user(current_user.id)
        return api_success(data=reservations, count=len(reservations))

    @bp.route('/reservations/<int:reservation_id>')
    @login_required
    def reservation_detail(reservation_id):
        """Get reservation details."""
        reservation = _get_accessible_reservation(reservation_id)
        return api_success(data=reservation)

    @bp.route('/reservations/<int:reservation_id>/history')
    @login_required
    def reservation_history(reservation_id):
        """Get reservation status change history."""
        _get_accessible_reservation(reservation_id)
        return api_success(data=get_status_history(reservation_id))

    # ============================================================================
    # LIFECYCLE
    # ============================================================================

    @bp.route('/reservations', methods=['POST'])
    @login_required
    @permission_required('reservations.create')
    @json_required
    def reservation_create():
        """
        Book a room for the current user.

        Body:
            hotel_id, room_id, check_in, check_out, guests, total_price
        """
        data = request.get_json()

        missing = [field for field in REQUIRED_FIELDS if data.get(field) in (None, '')]
        if missing:
            raise ValidationError(MESSAGES['fields_required'], field=missing[0])

        reservation = create_reservation(
            user_id=current_user.id,
            hotel_id=data['hotel_id'],
            room_id=data['room_id'],
            check_in=data['check_in'],
            check_out=data['check_out'],
            guests=data['guests'],
            total_price=data['total_price'],
            created_by=current_user.username
        )

        return api_success(
            data=reservation,
            message=MESSAGES['reservation_created'],
            status=201
        )

    @bp.route('/reservations/<int:reservation_id>/status', methods=['PATCH'])
    @login_required
    @json_required
    def reservation_update_status(reservation_id):
        """
        Change reservation status.

        Body:
            status: active | cancelled | completed
            reason: Optional note
        """
        data = request.get_json()
        status = data.get('status')
        validate_status(status)

        _get_accessible_reservation(reservation_id)

        reservation = update_reservation_status(
            reservation_id, status,
            changed_by=current_user.username,
            reason=data.get('reason', '')
        )
        return api_success(data=reservation, message=MESSAGES['reservation_status_updated'])

    @bp.route('/reservations/<int:reservation_id>', methods=['DELETE'])
    @login_required
    def reservation_delete(reservation_id):
        """Permanently delete a reservation."""
        _get_accessible_reservation(reservation_id)
        delete_reservation(reservation_id)
        return api_success(message=MESSAGES['reservation_deleted'])
