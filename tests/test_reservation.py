"""
Reservation lifecycle tests.
Covers creation with availability re-check, reads, deletion and history.
"""

import pytest

from conftest import make_hotel, make_room, make_user, insert_reservation
from utils.exceptions import (
    InvalidDateRange, NoAvailability, ReservationNotFound, RoomNotFound, ValidationError
)


def _book(data, check_in='2025-06-10', check_out='2025-06-12', **overrides):
    from models.reservation import create_reservation

    params = {
        'user_id': data['user_id'],
        'hotel_id': data['hotel_id'],
        'room_id': data['room_id'],
        'check_in': check_in,
        'check_out': check_out,
        'guests': 2,
        'total_price': 200,
        'created_by': 'guest',
    }
    params.update(overrides)
    return create_reservation(**params)


def _count_reservations():
    from database import get_db

    return get_db().execute('SELECT COUNT(*) FROM reservations').fetchone()[0]


class TestCreateReservation:

    def test_create_success(self, app, booking_data):
        with app.app_context():
            reservation = _book(booking_data)

        assert reservation['status'] == 'active'
        assert reservation['check_in'] == '2025-06-10'
        assert reservation['check_out'] == '2025-06-12'
        assert reservation['guests'] == 2
        assert reservation['total_price'] == 200
        assert reservation['hotel_name'] == 'Seaside Inn'
        assert reservation['location'] == 'Lisbon'
        assert reservation['room_type'] == 'Double'

    def test_create_records_history(self, app, booking_data):
        from models.reservation import get_status_history

        with app.app_context():
            reservation = _book(booking_data)
            history = get_status_history(reservation['id'])

        assert len(history) == 1
        assert history[0]['old_status'] is None
        assert history[0]['new_status'] == 'active'
        assert history[0]['changed_by'] == 'guest'

    def test_last_unit_then_no_availability(self, app, booking_data):
        with app.app_context():
            _book(booking_data)

            with pytest.raises(NoAvailability) as exc:
                _book(booking_data, check_in='2025-06-11', check_out='2025-06-13')

            assert exc.value.free_units == 0
            assert _count_reservations() == 1

    def test_back_to_back_booking_allowed(self, app, booking_data):
        with app.app_context():
            _book(booking_data, check_in='2025-06-10', check_out='2025-06-12')
            second = _book(booking_data, check_in='2025-06-12', check_out='2025-06-14')

        assert second['check_in'] == '2025-06-12'

    def test_multi_unit_room(self, app):
        hotel_id = make_hotel(app)
        room_id = make_room(app, hotel_id, available_rooms=2)
        user_id = make_user(app, 'guest')
        data = {'hotel_id': hotel_id, 'room_id': room_id, 'user_id': user_id}

        with app.app_context():
            _book(data)
            _book(data)
            with pytest.raises(NoAvailability):
                _book(data)

    def test_overbooked_room_rejected(self, app, booking_data):
        for _ in range(2):
            insert_reservation(app, booking_data['user_id'], booking_data['hotel_id'],
                               booking_data['room_id'], '2025-06-10', '2025-06-12')

        with app.app_context():
            with pytest.raises(NoAvailability) as exc:
                _book(booking_data)
            assert exc.value.free_units == -1

    def test_cancelled_reservation_frees_unit(self, app, booking_data):
        from models.reservation import cancel_reservation

        with app.app_context():
            first = _book(booking_data)
            cancel_reservation(first['id'], 'guest')
            second = _book(booking_data)

        assert second['id'] != first['id']

    @pytest.mark.parametrize('overrides', [
        {'guests': 0},
        {'guests': 'many'},
        {'total_price': 0},
        {'total_price': -50},
        {'room_id': None},
        {'hotel_id': ''},
        {'check_in': '2025/06/10'},
        {'check_out': None},
    ])
    def test_validation_errors(self, app, booking_data, overrides):
        with app.app_context():
            with pytest.raises(ValidationError):
                _book(booking_data, **overrides)
            assert _count_reservations() == 0

    def test_invalid_date_range(self, app, booking_data):
        with app.app_context():
            with pytest.raises(InvalidDateRange):
                _book(booking_data, check_in='2025-06-12', check_out='2025-06-12')

    def test_unknown_room(self, app, booking_data):
        with app.app_context():
            with pytest.raises(RoomNotFound):
                _book(booking_data, room_id=999)

    def test_room_must_belong_to_hotel(self, app, booking_data):
        other_hotel = make_hotel(app, name='Harbour', location='Porto')

        with app.app_context():
            with pytest.raises(ValidationError) as exc:
                _book(booking_data, hotel_id=other_hotel)
            assert exc.value.field == 'room_id'

    def test_guests_over_capacity(self, app, booking_data):
        with app.app_context():
            with pytest.raises(ValidationError) as exc:
                _book(booking_data, guests=3)
            assert exc.value.field == 'guests'

    def test_connection_usable_after_rejection(self, app, booking_data):
        with app.app_context():
            _book(booking_data)
            with pytest.raises(NoAvailability):
                _book(booking_data)
            # Rolled back, so a new write transaction can start
            third = _book(booking_data, check_in='2025-07-01', check_out='2025-07-03')
            assert third['status'] == 'active'


class TestReadAndDelete:

    def test_listings(self, app, booking_data):
        from models.reservation import (
            get_reservations_by_user, get_reservations_by_hotel, get_all_reservations,
            cancel_reservation
        )

        with app.app_context():
            first = _book(booking_data)
            second = _book(booking_data, check_in='2025-07-01', check_out='2025-07-03')
            cancel_reservation(first['id'])

            mine = get_reservations_by_user(booking_data['user_id'])
            assert {r['id'] for r in mine} == {first['id'], second['id']}

            hotel = get_reservations_by_hotel(booking_data['hotel_id'], status='active')
            assert [r['id'] for r in hotel] == [second['id']]
            assert hotel[0]['user_name'] == 'guest'

            everything = get_all_reservations()
            assert len(everything) == 2
            assert everything[0]['user_email'] == 'guest@example.com'

    def test_delete(self, app, booking_data):
        from models.reservation import delete_reservation, get_reservation_by_id

        with app.app_context():
            reservation = _book(booking_data)
            delete_reservation(reservation['id'])
            assert get_reservation_by_id(reservation['id']) is None

            with pytest.raises(ReservationNotFound):
                delete_reservation(reservation['id'])
