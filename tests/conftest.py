"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
import tempfile

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'hotel_booking_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'

    yield

    # Cleanup: remove test database after all tests
    for suffix in ('', '-wal', '-shm'):
        path = TEST_DB_PATH + suffix
        if os.path.exists(path):
            try:
                os.remove(path)
            except PermissionError:
                pass  # Windows may have file locked


@pytest.fixture
def app(tmp_path):
    """Create test application with a fresh database file per test."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = str(tmp_path / 'hotel_booking_test.db')

    with app.app_context():
        init_db()

    yield app


@pytest.fixture
def ctx(app):
    """Application context for model-level tests."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def login(client, username, password):
    """Log a test client in through the JSON auth endpoint."""
    return client.post('/api/auth/login', json={
        'username': username,
        'password': password
    })


@pytest.fixture
def authenticated_client(app, client):
    """Create test client logged in as the seeded admin."""
    response = login(client, 'admin', 'admin123')
    assert response.status_code == 200
    return client


# =============================================================================
# DATA HELPERS
# =============================================================================

def make_user(app, username, role='user', password='secret123'):
    """Insert a user with the given role and return its ID."""
    from models.user import create_user
    from models.role import get_role_by_name

    with app.app_context():
        return create_user(
            username=username,
            email=f'{username}@example.com',
            password=password,
            full_name=username.title(),
            role_id=get_role_by_name(role)['id']
        )


def make_hotel(app, name='Seaside Inn', location='Lisbon', rating=4.5):
    """Insert a hotel and return its ID."""
    from models.hotel import create_hotel

    with app.app_context():
        return create_hotel(name=name, location=location, rating=rating)['id']


def make_room(app, hotel_id, available_rooms=1, capacity=2, price=100.0, room_type='Double'):
    """Insert a room type and return its ID."""
    from models.room import create_room

    with app.app_context():
        return create_room(
            hotel_id=hotel_id,
            type=room_type,
            price_per_night=price,
            capacity=capacity,
            available_rooms=available_rooms
        )['id']


def insert_reservation(app, user_id, hotel_id, room_id, check_in, check_out, status='active'):
    """
    Insert a reservation row directly, bypassing the availability check.
    Used to build over-booked and historical fixtures.
    """
    from database import get_db

    with app.app_context():
        db = get_db()
        cursor = db.cursor()
        cursor.execute('''
            INSERT INTO reservations (
                user_id, hotel_id, room_id, check_in, check_out,
                guests, total_price, status
            ) VALUES (?, ?, ?, ?, ?, 1, 100, ?)
        ''', (user_id, hotel_id, room_id, check_in, check_out, status))
        db.commit()
        return cursor.lastrowid


@pytest.fixture
def booking_data(app):
    """A hotel with one single-unit room and a guest user."""
    hotel_id = make_hotel(app)
    room_id = make_room(app, hotel_id, available_rooms=1)
    user_id = make_user(app, 'guest')
    return {'hotel_id': hotel_id, 'room_id': room_id, 'user_id': user_id}
