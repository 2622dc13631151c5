"""
Hotel API routes: browsing, search, management, and manager views.
"""

from flask import request
from flask_login import login_required, current_user

from models.hotel import (
    get_hotel_by_id, search_hotels, create_hotel, update_hotel, delete_hotel,
    get_managed_hotels
)
from models.room import get_rooms_by_hotel
from models.reservation import get_reservations_by_hotel, validate_status
from utils.api_response import api_success
from utils.decorators import permission_required, json_required
from utils.exceptions import HotelNotFound
from utils.messages import MESSAGES
from utils.permissions import ensure_hotel_access

HOTEL_FIELDS = ('name', 'description', 'location', 'image_url', 'rating', 'amenities')


def register_routes(bp):
    """Register hotel API routes on the blueprint."""

    # ============================================================================
    # PUBLIC BROWSING
    # ============================================================================

    @bp.route('/hotels')
    def hotels_list():
        """
        List hotels.

        Query params:
            location: Location substring (optional)
            rating: Minimum rating (optional)
        """
        location = request.args.get('location')
        rating = request.args.get('rating', type=float)

        hotels = search_hotels(location=location, rating=rating)
        return api_success(data=hotels, count=len(hotels))

    @bp.route('/hotels/<int:hotel_id>')
    def hotel_detail(hotel_id):
        """Get hotel details with its rooms."""
        hotel = get_hotel_by_id(hotel_id)
        if not hotel:
            raise HotelNotFound(hotel_id)

        hotel['rooms'] = get_rooms_by_hotel(hotel_id)
        return api_success(data=hotel)

    @bp.route('/hotels/<int:hotel_id>/rooms')
    def hotel_rooms(hotel_id):
        """List rooms of a hotel."""
        if not get_hotel_by_id(hotel_id):
            raise HotelNotFound(hotel_id)

        rooms = get_rooms_by_hotel(hotel_id)
        return api_success(data=rooms, count=len(rooms))

    # ============================================================================
    # MANAGER VIEWS
    # ============================================================================

    @bp.route('/hotels/managed')
    @login_required
    def hotels_managed():
        """Hotels assigned to the current manager."""
        return api_success(data=get_managed_hotels(current_user.id))

    @bp.route('/hotels/<int:hotel_id>/reservations')
    @login_required
    @permission_required('reservations.view_hotel')
    def hotel_reservations(hotel_id):
        """
        Reservations of a hotel (admin or assigned manager).

        Query params:
            status: Filter by status (optional)
        """
        if not get_hotel_by_id(hotel_id):
            raise HotelNotFound(hotel_id)
        ensure_hotel_access(current_user, hotel_id)

        status = request.args.get('status')
        if status:
            validate_status(status)

        reservations = get_reservations_by_hotel(hotel_id, status=status)
        return api_success(data=reservations, count=len(reservations))

    # ============================================================================
    # MANAGEMENT
    # ============================================================================

    @bp.route('/hotels', methods=['POST'])
    @login_required
    @permission_required('hotels.manage')
    @json_required
    def hotel_create():
        """Create a hotel."""
        data = request.get_json()
        hotel = create_hotel(
            name=data.get('name'),
            location=data.get('location'),
            description=data.get('description', ''),
            image_url=data.get('image_url', ''),
            rating=data.get('rating', 0),
            amenities=data.get('amenities') or []
        )
        return api_success(data=hotel, message=MESSAGES['hotel_created'], status=201)

    @bp.route('/hotels/<int:hotel_id>', methods=['PUT'])
    @login_required
    @permission_required('hotels.manage')
    @json_required
    def hotel_update(hotel_id):
        """Update a hotel."""
        data = request.get_json()
        fields = {k: data[k] for k in HOTEL_FIELDS if k in data}
        hotel = update_hotel(hotel_id, **fields)
        return api_success(data=hotel, message=MESSAGES['hotel_updated'])

    @bp.route('/hotels/<int:hotel_id>', methods=['DELETE'])
    @login_required
    @permission_required('hotels.manage')
    def hotel_delete(hotel_id):
        """Delete a hotel and everything under it."""
        delete_hotel(hotel_id)
        return api_success(message=MESSAGES['hotel_deleted'])
