"""
Room API routes including availability and alternative dates.
"""

from flask import current_app, request
from flask_login import login_required

from models.room import (
    get_room_by_id, get_all_rooms, search_available_rooms,
    create_room, update_room, delete_room
)
from models.reservation import get_room_availability_summary, find_alternative_dates
from utils.api_response import api_success
from utils.decorators import permission_required, json_required
from utils.exceptions import RoomNotFound, ValidationError
from utils.messages import MESSAGES

ROOM_FIELDS = ('type', 'price_per_night', 'capacity', 'available_rooms')


def register_routes(bp):
    """Register room API routes on the blueprint."""

    # ============================================================================
    # BROWSING
    # ============================================================================

    @bp.route('/rooms')
    def rooms_list():
        """List all rooms."""
        rooms = get_all_rooms()
        return api_success(data=rooms, count=len(rooms))

    @bp.route('/rooms/<int:room_id>')
    def room_detail(room_id):
        """Get room details."""
        room = get_room_by_id(room_id)
        if not room:
            raise RoomNotFound(room_id)
        return api_success(data=room)

    @bp.route('/rooms/search')
    def rooms_search():
        """
        Rooms with at least one free unit for a stay.

        Query params:
            check_in, check_out: Stay dates (YYYY-MM-DD, required)
            location: Hotel location substring (optional)
            guests: Minimum capacity (optional)
        """
        rooms = search_available_rooms(
            request.args.get('check_in'),
            request.args.get('check_out'),
            location=request.args.get('location'),
            guests=request.args.get('guests')
        )
        return api_success(data=rooms, count=len(rooms))

    # ============================================================================
    # AVAILABILITY
    # ============================================================================

    @bp.route('/rooms/availability')
    def room_availability():
        """
        Check free units of a room for a stay.

        Query params:
            room_id, check_in, check_out (all required)

        Returns:
            JSON with available (bool) and availableRooms (int)
        """
        room_id = request.args.get('room_id', type=int)
        check_in = request.args.get('check_in')
        check_out = request.args.get('check_out')

        if not room_id or not check_in or not check_out:
            raise ValidationError('Room ID, check-in, and check-out dates are required')

        summary = get_room_availability_summary(room_id, check_in, check_out)
        return api_success(**summary)

    @bp.route('/rooms/<int:room_id>/alternatives')
    def room_alternatives(room_id):
        """
        Check a stay and suggest nearby dates of the same length.

        Query params:
            check_in, check_out: Requested stay (required)
            days_range: Search radius in days (optional, positive integer)
        """
        days_range = request.args.get('days_range') or \
            current_app.config.get('ALTERNATIVES_DEFAULT_DAYS_RANGE', 7)

        result = find_alternative_dates(
            room_id,
            request.args.get('check_in'),
            request.args.get('check_out'),
            days_range
        )
        return api_success(data=result)

    # ============================================================================
    # MANAGEMENT
    # ============================================================================

    @bp.route('/rooms', methods=['POST'])
    @login_required
    @permission_required('rooms.manage')
    @json_required
    def room_create():
        """Create a room type for a hotel."""
        data = request.get_json()
        if not data.get('hotel_id'):
            raise ValidationError(MESSAGES['fields_required'], field='hotel_id')

        room = create_room(
            hotel_id=data.get('hotel_id'),
            type=data.get('type'),
            price_per_night=data.get('price_per_night'),
            capacity=data.get('capacity'),
            available_rooms=data.get('available_rooms', 1)
        )
        return api_success(data=room, message=MESSAGES['room_created'], status=201)

    @bp.route('/rooms/<int:room_id>', methods=['PUT'])
    @login_required
    @permission_required('rooms.manage')
    @json_required
    def room_update(room_id):
        """Update a room (inventory count included)."""
        data = request.get_json()
        fields = {k: data[k] for k in ROOM_FIELDS if k in data}
        room = update_room(room_id, **fields)
        return api_success(data=room, message=MESSAGES['room_updated'])

    @bp.route('/rooms/<int:room_id>', methods=['DELETE'])
    @login_required
    @permission_required('rooms.manage')
    def room_delete(room_id):
        """Delete a room and its reservations."""
        delete_room(room_id)
        return api_success(message=MESSAGES['room_deleted'])
