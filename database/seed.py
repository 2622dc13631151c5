"""
Database seed data.
Initial data population for fresh database installations.
"""

from werkzeug.security import generate_password_hash


PERMISSIONS = [
    # (code, name, module)
    ('hotels.manage', 'Manage hotels', 'hotels'),
    ('rooms.manage', 'Manage rooms', 'rooms'),
    ('reservations.create', 'Create reservations', 'reservations'),
    ('reservations.view_all', 'View all reservations', 'reservations'),
    ('reservations.view_hotel', 'View hotel reservations', 'reservations'),
    ('admin.users.view', 'View users', 'admin'),
    ('admin.users.manage', 'Manage users', 'admin'),
    ('admin.managers.assign', 'Assign hotel managers', 'admin'),
]

ROLE_PERMISSIONS = {
    'admin': [code for code, _, _ in PERMISSIONS],
    'hotel_manager': ['reservations.create', 'reservations.view_hotel'],
    'user': ['reservations.create'],
}


def seed_database(db):
    """Insert initial seed data."""

    # 1. Create Roles
    roles_data = [
        ('admin', 'Administrator', 'Full system access'),
        ('hotel_manager', 'Hotel Manager', 'Manages reservations of assigned hotels'),
        ('user', 'User', 'Books rooms and manages own reservations')
    ]

    for name, display_name, description in roles_data:
        db.execute('''
            INSERT INTO roles (name, display_name, description)
            VALUES (?, ?, ?)
        ''', (name, display_name, description))

    # 2. Create Permissions
    for code, name, module in PERMISSIONS:
        db.execute('''
            INSERT INTO permissions (code, name, module)
            VALUES (?, ?, ?)
        ''', (code, name, module))

    # 3. Grant permissions to roles
    for role_name, codes in ROLE_PERMISSIONS.items():
        role_id = db.execute('SELECT id FROM roles WHERE name = ?', (role_name,)).fetchone()[0]
        for code in codes:
            permission_id = db.execute('SELECT id FROM permissions WHERE code = ?', (code,)).fetchone()[0]
            db.execute('''
                INSERT INTO role_permissions (role_id, permission_id)
                VALUES (?, ?)
            ''', (role_id, permission_id))

    # 4. Create default admin user
    admin_role_id = db.execute('SELECT id FROM roles WHERE name = ?', ('admin',)).fetchone()[0]
    db.execute('''
        INSERT INTO users (username, email, password_hash, full_name, role_id)
        VALUES (?, ?, ?, ?, ?)
    ''', ('admin', 'admin@hotelbooking.local', generate_password_hash('admin123'),
          'Administrator', admin_role_id))
