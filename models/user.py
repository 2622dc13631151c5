"""
User model and data access functions.
Handles user authentication, CRUD operations, and Flask-Login integration.
"""

from werkzeug.security import generate_password_hash, check_password_hash
from database import get_db
from utils.exceptions import UserNotFound, ValidationError


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        """
        Initialize User from database row.

        Args:
            user_dict: Dictionary with user data from database
        """
        self.id = user_dict['id']
        self.username = user_dict['username']
        self.email = user_dict['email']
        self.full_name = user_dict['full_name']
        self.role_id = user_dict['role_id']
        self.role_name = user_dict.get('role_name')
        self.active = user_dict['active']
        self.created_at = user_dict['created_at']
        self.last_login = user_dict.get('last_login')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return self.active == 1

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    @property
    def is_admin(self):
        return self.role_name == 'admin'

    @property
    def is_hotel_manager(self):
        return self.role_name == 'hotel_manager'

    def get_id(self):
        """Required by Flask-Login. Returns user ID as unicode string."""
        return str(self.id)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'full_name': self.full_name,
            'role': self.role_name,
        }


def public_user(user_dict: dict) -> dict:
    """Strip the password hash from a user row."""
    if not user_dict:
        return user_dict
    return {k: v for k, v in user_dict.items() if k != 'password_hash'}


def get_user_by_id(user_id: int) -> dict:
    """
    Get user by ID.

    Args:
        user_id: User ID

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT u.*, r.name as role_name, r.display_name as role_display_name
        FROM users u
        LEFT JOIN roles r ON u.role_id = r.id
        WHERE u.id = ?
    ''', (user_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_user_by_username(username: str) -> dict:
    """
    Get user by username.

    Args:
        username: Username to search for

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT u.*, r.name as role_name, r.display_name as role_display_name
        FROM users u
        LEFT JOIN roles r ON u.role_id = r.id
        WHERE u.username = ?
    ''', (username,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_user_by_email(email: str) -> dict:
    """
    Get user by email.

    Args:
        email: Email to search for

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT u.*, r.name as role_name, r.display_name as role_display_name
        FROM users u
        LEFT JOIN roles r ON u.role_id = r.id
        WHERE u.email = ?
    ''', (email,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_all_users(active_only: bool = True) -> list:
    """
    Get all users.

    Args:
        active_only: If True, only return active users

    Returns:
        List of user dicts (without password hashes)
    """
    db = get_db()
    cursor = db.cursor()

    query = '''
        SELECT u.*, r.name as role_name, r.display_name as role_display_name
        FROM users u
        LEFT JOIN roles r ON u.role_id = r.id
    '''

    if active_only:
        query += ' WHERE u.active = 1'

    query += ' ORDER BY u.created_at DESC, u.id DESC'

    cursor.execute(query)
    return [public_user(dict(row)) for row in cursor.fetchall()]


def create_user(username: str, email: str, password: str, full_name: str = None, role_id: int = None) -> int:
    """
    Create new user with hashed password.

    Args:
        username: Unique username
        email: Unique email
        password: Plain text password (will be hashed)
        full_name: User's full name
        role_id: Role ID to assign

    Returns:
        New user ID

    Raises:
        sqlite3.IntegrityError if username or email already exists
    """
    db = get_db()
    password_hash = generate_password_hash(password)

    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO users (username, email, password_hash, full_name, role_id)
        VALUES (?, ?, ?, ?, ?)
    ''', (username, email, password_hash, full_name, role_id))

    db.commit()
    return cursor.lastrowid


def count_admins() -> int:
    """Count active users holding the admin role."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT COUNT(*) as count FROM users u
        JOIN roles r ON u.role_id = r.id
        WHERE r.name = 'admin' AND u.active = 1
    ''')
    return cursor.fetchone()['count']


def update_user_role(user_id: int, role_name: str) -> dict:
    """
    Change the role of a user.

    Raises:
        ValidationError: If the role does not exist or the change would
            leave no active administrator
        UserNotFound: If the user does not exist
    """
    from models.role import get_role_by_name

    role = get_role_by_name(role_name)
    if not role:
        raise ValidationError(f"Invalid role '{role_name}'", field='role')

    user = get_user_by_id(user_id)
    if not user:
        raise UserNotFound(user_id)

    # Keep at least one active admin
    if user['role_name'] == 'admin' and role_name != 'admin' and count_admins() <= 1:
        raise ValidationError('Cannot remove the last administrator', field='role')

    db = get_db()
    db.execute('''
        UPDATE users SET role_id = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (role['id'], user_id))
    db.commit()

    return public_user(get_user_by_id(user_id))


def delete_user(user_id: int) -> bool:
    """
    Hard delete a user; their reservations cascade.

    Args:
        user_id: User ID to delete

    Returns:
        True if a row was removed
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('DELETE FROM users WHERE id = ?', (user_id,))
    db.commit()
    return cursor.rowcount > 0


def update_last_login(user_id: int) -> None:
    """Record the login timestamp for a user."""
    db = get_db()
    db.execute('''
        UPDATE users SET last_login = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (user_id,))
    db.commit()


def check_password(user_dict: dict, password: str) -> bool:
    """
    Verify password against stored hash.

    Args:
        user_dict: User dictionary with password_hash
        password: Plain text password to check

    Returns:
        True if password matches
    """
    return check_password_hash(user_dict['password_hash'], password)
