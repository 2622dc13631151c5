"""
Alternative date suggestion tests.
"""

import pytest

from conftest import make_hotel, make_room, make_user, insert_reservation
from utils.exceptions import InvalidDateRange, RoomNotFound, ValidationError


@pytest.fixture
def blocked_room(app):
    """Single-unit room booked 2025-06-10..2025-06-15."""
    hotel_id = make_hotel(app)
    room_id = make_room(app, hotel_id, available_rooms=1)
    user_id = make_user(app, 'guest')
    reservation_id = insert_reservation(app, user_id, hotel_id, room_id, '2025-06-10', '2025-06-15')
    return {'hotel_id': hotel_id, 'room_id': room_id, 'user_id': user_id,
            'reservation_id': reservation_id}


class TestFindAlternativeDates:

    def test_conflict_scenario(self, app, blocked_room):
        from models.reservation import find_alternative_dates, check_room_availability

        with app.app_context():
            room_id = blocked_room['room_id']
            assert check_room_availability(room_id, '2025-06-12', '2025-06-16') <= 0

            result = find_alternative_dates(room_id, '2025-06-12', '2025-06-16', 7)

        assert result['available'] is False
        assert result['stay_duration'] == 4
        assert [r['id'] for r in result['conflicting_reservations']] == [blocked_room['reservation_id']]

        offsets = [s['day_offset'] for s in result['suggestions']]
        # Offsets -5..+2 intersect the booking; ties keep the earlier date first
        assert offsets == [3, 4, 5, -6, 6]

        first = result['suggestions'][0]
        assert first == {
            'check_in': '2025-06-15',
            'check_out': '2025-06-19',
            'day_offset': 3,
            'days_difference': 3
        }
        earlier = result['suggestions'][3]
        assert (earlier['check_in'], earlier['check_out']) == ('2025-06-06', '2025-06-10')

    def test_suggestions_never_overlap_reservations(self, app, blocked_room):
        from models.reservation import find_alternative_dates, ranges_overlap

        insert_reservation(app, blocked_room['user_id'], blocked_room['hotel_id'],
                           blocked_room['room_id'], '2025-06-18', '2025-06-20')

        with app.app_context():
            result = find_alternative_dates(blocked_room['room_id'], '2025-06-12', '2025-06-16', 10)

        assert result['suggestions']
        for suggestion in result['suggestions']:
            assert not ranges_overlap(suggestion['check_in'], suggestion['check_out'],
                                      '2025-06-10', '2025-06-15')
            assert not ranges_overlap(suggestion['check_in'], suggestion['check_out'],
                                      '2025-06-18', '2025-06-20')

    def test_ordered_capped_and_distance_matches_offset(self, app, blocked_room):
        from models.reservation import find_alternative_dates

        with app.app_context():
            result = find_alternative_dates(blocked_room['room_id'], '2025-06-12', '2025-06-13', 30)

        suggestions = result['suggestions']
        assert len(suggestions) == 5
        distances = [s['days_difference'] for s in suggestions]
        assert distances == sorted(distances)
        for s in suggestions:
            assert s['days_difference'] == abs(s['day_offset'])
            assert s['day_offset'] != 0

    def test_available_range_returns_early(self, app, blocked_room):
        from models.reservation import find_alternative_dates

        with app.app_context():
            result = find_alternative_dates(blocked_room['room_id'], '2025-06-15', '2025-06-17', 7)

        assert result == {
            'available': True,
            'stay_duration': 2,
            'conflicting_reservations': [],
            'suggestions': []
        }

    def test_no_candidates_in_window(self, app, blocked_room):
        from models.reservation import find_alternative_dates

        with app.app_context():
            result = find_alternative_dates(blocked_room['room_id'], '2025-06-12', '2025-06-13', 1)

        assert result['available'] is False
        assert result['suggestions'] == []

    def test_any_overlap_blocks_multi_unit_room(self, app):
        from models.reservation import find_alternative_dates, check_room_availability

        hotel_id = make_hotel(app)
        room_id = make_room(app, hotel_id, available_rooms=2)
        user_id = make_user(app, 'guest')
        insert_reservation(app, user_id, hotel_id, room_id, '2025-06-10', '2025-06-15')

        with app.app_context():
            assert check_room_availability(room_id, '2025-06-12', '2025-06-16') == 1
            result = find_alternative_dates(room_id, '2025-06-12', '2025-06-16', 7)

        assert result['available'] is False

    def test_cancelled_reservations_ignored(self, app, blocked_room):
        from models.reservation import find_alternative_dates, cancel_reservation

        with app.app_context():
            cancel_reservation(blocked_room['reservation_id'])
            result = find_alternative_dates(blocked_room['room_id'], '2025-06-12', '2025-06-16', 7)

        assert result['available'] is True

    def test_single_reservation_query(self, app, blocked_room):
        from database import get_db
        from models.reservation import find_alternative_dates

        statements = []
        with app.app_context():
            db = get_db()
            db.set_trace_callback(statements.append)
            find_alternative_dates(blocked_room['room_id'], '2025-06-12', '2025-06-16', 7)
            db.set_trace_callback(None)

        reservation_queries = [s for s in statements if 'FROM reservations' in s]
        assert len(reservation_queries) == 1

    @pytest.mark.parametrize('days_range', [0, -3, 'abc', 366])
    def test_invalid_days_range(self, app, blocked_room, days_range):
        from models.reservation import find_alternative_dates

        with app.app_context():
            with pytest.raises(ValidationError):
                find_alternative_dates(blocked_room['room_id'], '2025-06-12', '2025-06-16', days_range)

    def test_invalid_dates_and_room(self, app, blocked_room):
        from models.reservation import find_alternative_dates

        with app.app_context():
            with pytest.raises(InvalidDateRange):
                find_alternative_dates(blocked_room['room_id'], '2025-06-16', '2025-06-12')
            with pytest.raises(RoomNotFound):
                find_alternative_dates(999, '2025-06-12', '2025-06-16')


class TestCalendarLimits:

    def test_window_near_date_max(self, app, blocked_room):
        from models.reservation import find_alternative_dates

        insert_reservation(app, blocked_room['user_id'], blocked_room['hotel_id'],
                           blocked_room['room_id'], '9999-12-20', '9999-12-30')

        with app.app_context():
            result = find_alternative_dates(blocked_room['room_id'], '9999-12-28', '9999-12-30', 7)

        assert result['available'] is False
        # +1 still overlaps and +2 would check out past 9999-12-31
        assert result['suggestions'] == []

    def test_window_near_date_min(self, app, blocked_room):
        from models.reservation import find_alternative_dates

        insert_reservation(app, blocked_room['user_id'], blocked_room['hotel_id'],
                           blocked_room['room_id'], '0001-01-02', '0001-01-04')

        with app.app_context():
            result = find_alternative_dates(blocked_room['room_id'], '0001-01-02', '0001-01-04', 7)

        assert result['available'] is False
        offsets = [s['day_offset'] for s in result['suggestions']]
        assert offsets == [2, 3, 4, 5, 6]
        assert all(s['day_offset'] > -2 for s in result['suggestions'])
        assert result['suggestions'][0]['check_in'] == '0001-01-04'

    def test_build_candidate_outside_calendar(self):
        from datetime import date
        from models.reservation_suggestions import build_candidate

        assert build_candidate(date(1, 1, 2), 2, -2) is None
        assert build_candidate(date(9999, 12, 28), 2, 3) is None
        assert build_candidate(date(1, 1, 2), 2, -1)['check_in'] == '0001-01-01'


class TestRankSuggestions:

    def test_stable_sort_and_cap(self):
        from models.reservation_suggestions import rank_suggestions

        candidates = [{'day_offset': d, 'days_difference': abs(d)} for d in (-3, -1, 1, 2, 3, 4)]
        ranked = rank_suggestions(candidates)

        assert [c['day_offset'] for c in ranked] == [-1, 1, 2, -3, 3]

    def test_iter_day_offsets_skips_zero(self):
        from models.reservation_suggestions import iter_day_offsets

        assert list(iter_day_offsets(2)) == [-2, -1, 1, 2]
