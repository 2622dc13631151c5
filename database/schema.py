"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'reservation_status_history',
        'reservations',
        'hotel_managers',
        'rooms',
        'hotels',
        'role_permissions',
        'permissions',
        'users',
        'roles'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Users & Auth Tables
    db.execute('''
        CREATE TABLE roles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT UNIQUE NOT NULL,
            display_name TEXT NOT NULL,
            description TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT UNIQUE NOT NULL,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            full_name TEXT,
            role_id INTEGER REFERENCES roles(id),
            active INTEGER DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            last_login TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE permissions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            code TEXT UNIQUE NOT NULL,
            name TEXT NOT NULL,
            description TEXT,
            module TEXT NOT NULL
        )
    ''')

    db.execute('''
        CREATE TABLE role_permissions (
            role_id INTEGER REFERENCES roles(id) ON DELETE CASCADE,
            permission_id INTEGER REFERENCES permissions(id) ON DELETE CASCADE,
            PRIMARY KEY (role_id, permission_id)
        )
    ''')

    # 2. Hotel Inventory Tables
    db.execute('''
        CREATE TABLE hotels (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            location TEXT NOT NULL,
            image_url TEXT NOT NULL DEFAULT '',
            rating REAL DEFAULT 0 CHECK (rating >= 0 AND rating <= 5),
            amenities TEXT DEFAULT '[]',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE rooms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            hotel_id INTEGER NOT NULL REFERENCES hotels(id) ON DELETE CASCADE,
            type TEXT NOT NULL,
            price_per_night REAL NOT NULL CHECK (price_per_night > 0),
            capacity INTEGER NOT NULL CHECK (capacity > 0),
            available_rooms INTEGER NOT NULL DEFAULT 1 CHECK (available_rooms >= 0),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE hotel_managers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            hotel_id INTEGER NOT NULL REFERENCES hotels(id) ON DELETE CASCADE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE (user_id, hotel_id)
        )
    ''')

    # 3. Reservation Tables
    # check_in / check_out are TEXT (YYYY-MM-DD) so they compare lexicographically
    db.execute('''
        CREATE TABLE reservations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            hotel_id INTEGER NOT NULL REFERENCES hotels(id) ON DELETE CASCADE,
            room_id INTEGER NOT NULL REFERENCES rooms(id) ON DELETE CASCADE,
            check_in TEXT NOT NULL,
            check_out TEXT NOT NULL,
            guests INTEGER NOT NULL CHECK (guests > 0),
            total_price REAL NOT NULL CHECK (total_price > 0),
            status TEXT NOT NULL DEFAULT 'active'
                CHECK (status IN ('active', 'cancelled', 'completed')),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            CHECK (check_out > check_in)
        )
    ''')

    db.execute('''
        CREATE TABLE reservation_status_history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            reservation_id INTEGER NOT NULL REFERENCES reservations(id) ON DELETE CASCADE,
            old_status TEXT,
            new_status TEXT NOT NULL,
            changed_by TEXT,
            reason TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create performance indexes."""

    # Room indexes
    db.execute('CREATE INDEX idx_rooms_hotel ON rooms(hotel_id)')

    # Reservation indexes
    db.execute('CREATE INDEX idx_reservations_room_dates ON reservations(room_id, status, check_in, check_out)')
    db.execute('CREATE INDEX idx_reservations_user ON reservations(user_id)')
    db.execute('CREATE INDEX idx_reservations_hotel ON reservations(hotel_id)')
    db.execute('CREATE INDEX idx_reservations_status ON reservations(status)')

    # Status history indexes
    db.execute('CREATE INDEX idx_status_history_reservation ON reservation_status_history(reservation_id)')

    # Permission indexes
    db.execute('CREATE INDEX idx_permissions_code ON permissions(code)')
    db.execute('CREATE INDEX idx_role_perms ON role_permissions(role_id, permission_id)')

    # Manager assignment indexes
    db.execute('CREATE INDEX idx_hotel_managers_hotel ON hotel_managers(hotel_id)')
