"""
Tests for reservation status changes.

The VALID_TRANSITIONS table is only enforced when strict mode is on
(bypass_validation=False or STRICT_STATUS_TRANSITIONS). By default any
status may follow any other.
"""

import pytest

from conftest import insert_reservation
from utils.exceptions import InvalidStatusTransition, ReservationNotFound, ValidationError


@pytest.fixture
def reservation_id(app, booking_data):
    return insert_reservation(app, booking_data['user_id'], booking_data['hotel_id'],
                              booking_data['room_id'], '2025-06-10', '2025-06-12')


class TestValidateStatusTransition:

    def test_bypassed_by_default(self):
        from models.reservation import validate_status_transition

        validate_status_transition('cancelled', 'active')
        validate_status_transition('completed', 'cancelled')

    def test_enforced_when_requested(self):
        from models.reservation import validate_status_transition

        validate_status_transition('active', 'cancelled', bypass_validation=False)
        validate_status_transition('active', 'completed', bypass_validation=False)

        with pytest.raises(InvalidStatusTransition) as exc:
            validate_status_transition('cancelled', 'active', bypass_validation=False)
        assert exc.value.allowed == []

    def test_same_status_always_allowed(self):
        from models.reservation import validate_status_transition

        validate_status_transition('completed', 'completed', bypass_validation=False)

    def test_unknown_status_rejected(self):
        from models.reservation import validate_status_transition

        with pytest.raises(ValidationError):
            validate_status_transition('active', 'pending')

    def test_terminal_states_have_no_transitions(self):
        from models.reservation import VALID_TRANSITIONS

        assert VALID_TRANSITIONS['cancelled'] == []
        assert VALID_TRANSITIONS['completed'] == []


class TestUpdateReservationStatus:

    def test_cancel_and_reactivate(self, app, reservation_id):
        from models.reservation import update_reservation_status, get_status_history

        with app.app_context():
            cancelled = update_reservation_status(reservation_id, 'cancelled', 'admin', 'Guest request')
            assert cancelled['status'] == 'cancelled'

            reactivated = update_reservation_status(reservation_id, 'active', 'admin')
            assert reactivated['status'] == 'active'

            history = get_status_history(reservation_id)

        assert [(h['old_status'], h['new_status']) for h in history] == [
            ('active', 'cancelled'),
            ('cancelled', 'active'),
        ]
        assert history[0]['reason'] == 'Guest request'

    def test_strict_mode_from_config(self, app, reservation_id):
        from models.reservation import complete_reservation, update_reservation_status

        app.config['STRICT_STATUS_TRANSITIONS'] = True
        with app.app_context():
            complete_reservation(reservation_id, 'admin')
            with pytest.raises(InvalidStatusTransition):
                update_reservation_status(reservation_id, 'active', 'admin')

            from models.reservation import get_reservation_by_id
            assert get_reservation_by_id(reservation_id)['status'] == 'completed'

    def test_strict_argument_overrides_config(self, app, reservation_id):
        from models.reservation import update_reservation_status

        with app.app_context():
            update_reservation_status(reservation_id, 'cancelled', strict=True)
            with pytest.raises(InvalidStatusTransition):
                update_reservation_status(reservation_id, 'completed', strict=True)

    def test_unknown_reservation(self, ctx):
        from models.reservation import update_reservation_status

        with pytest.raises(ReservationNotFound):
            update_reservation_status(999, 'cancelled')

    def test_invalid_status(self, app, reservation_id):
        from models.reservation import update_reservation_status

        with app.app_context():
            with pytest.raises(ValidationError):
                update_reservation_status(reservation_id, 'archived')
