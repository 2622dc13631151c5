"""
Database tests.
Checks schema creation, constraints and seed data.
"""

import sqlite3

import pytest

from conftest import make_hotel, make_room, make_user, insert_reservation


EXPECTED_TABLES = [
    'roles', 'users', 'permissions', 'role_permissions',
    'hotels', 'rooms', 'hotel_managers',
    'reservations', 'reservation_status_history'
]


def test_all_tables_created(ctx):
    from database import get_db

    db = get_db()
    rows = db.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    tables = {row['name'] for row in rows}

    for table in EXPECTED_TABLES:
        assert table in tables, f"Missing table {table}"


def test_seed_roles_and_admin(ctx):
    from models.role import get_all_roles
    from models.user import get_user_by_username, check_password

    role_names = [role['name'] for role in get_all_roles()]
    assert role_names == ['admin', 'hotel_manager', 'user']

    admin = get_user_by_username('admin')
    assert admin is not None
    assert admin['role_name'] == 'admin'
    assert check_password(admin, 'admin123')


def test_role_permissions(ctx):
    from models.role import get_role_by_name, get_role_permissions

    def codes(role):
        return {p['code'] for p in get_role_permissions(get_role_by_name(role)['id'])}

    assert 'admin.users.manage' in codes('admin')
    assert codes('user') == {'reservations.create'}
    assert codes('hotel_manager') == {'reservations.create', 'reservations.view_hotel'}


def test_reservation_date_check_constraint(app, booking_data):
    with pytest.raises(sqlite3.IntegrityError):
        insert_reservation(
            app, booking_data['user_id'], booking_data['hotel_id'],
            booking_data['room_id'], '2025-06-10', '2025-06-10'
        )


def test_reservation_status_check_constraint(app, booking_data):
    with pytest.raises(sqlite3.IntegrityError):
        insert_reservation(
            app, booking_data['user_id'], booking_data['hotel_id'],
            booking_data['room_id'], '2025-06-10', '2025-06-12', status='pending'
        )


def test_delete_hotel_cascades(app):
    from models.hotel import delete_hotel
    from models.room import get_room_by_id
    from models.reservation import get_reservation_by_id

    hotel_id = make_hotel(app)
    room_id = make_room(app, hotel_id)
    user_id = make_user(app, 'cascade')
    reservation_id = insert_reservation(app, user_id, hotel_id, room_id, '2025-06-10', '2025-06-12')

    with app.app_context():
        delete_hotel(hotel_id)
        assert get_room_by_id(room_id) is None
        assert get_reservation_by_id(reservation_id) is None
