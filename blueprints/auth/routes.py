"""
Authentication routes: login, logout, registration, current user.
Session-based authentication through Flask-Login.
"""

import sqlite3

from flask import request, Blueprint, current_app
from flask_login import login_user, logout_user, login_required, current_user

from models.user import (
    User, get_user_by_username, get_user_by_email, get_user_by_id,
    create_user, update_last_login, check_password, public_user
)
from models.role import get_role_by_name
from utils.api_response import api_success, api_error
from utils.decorators import json_required
from utils.exceptions import ValidationError
from utils.messages import MESSAGES
from utils.validators import validate_email, validate_password, sanitize_input

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
@json_required
def login():
    """
    Log a user in.

    Body:
        username or email, password, remember (optional)
    """
    data = request.get_json()
    identifier = sanitize_input(data.get('username') or data.get('email') or '')
    password = data.get('password') or ''

    if not identifier or not password:
        raise ValidationError(MESSAGES['fields_required'])

    user_dict = get_user_by_username(identifier) or get_user_by_email(identifier)

    # Check credentials
    if user_dict is None or not check_password(user_dict, password):
        current_app.logger.warning(f'Failed login for {identifier}')
        return api_error(MESSAGES['invalid_credentials'], status=401)

    # Check if user is active
    if not user_dict.get('active'):
        return api_error(MESSAGES['account_disabled'], status=403)

    user = User(user_dict)
    login_user(user, remember=bool(data.get('remember')))
    update_last_login(user.id)

    return api_success(
        data=user.to_dict(),
        message=MESSAGES['login_success'].format(name=user.full_name or user.username)
    )


@auth_bp.route('/register', methods=['POST'])
@json_required
def register():
    """
    Create a user account with the 'user' role and log it in.

    Body:
        username, email, password, full_name (optional)
    """
    data = request.get_json()
    username = sanitize_input(data.get('username'), max_length=50)
    email = sanitize_input(data.get('email'), max_length=120)
    password = data.get('password') or ''

    if not username or not email:
        raise ValidationError(MESSAGES['fields_required'])
    if not validate_email(email):
        raise ValidationError('Invalid email address', field='email')
    is_valid, error = validate_password(password)
    if not is_valid:
        raise ValidationError(error, field='password')

    if get_user_by_email(email):
        raise ValidationError(MESSAGES['email_taken'], field='email')
    if get_user_by_username(username):
        raise ValidationError(MESSAGES['username_taken'], field='username')

    role = get_role_by_name('user')
    try:
        user_id = create_user(
            username=username,
            email=email,
            password=password,
            full_name=sanitize_input(data.get('full_name'), max_length=120) or None,
            role_id=role['id']
        )
    except sqlite3.IntegrityError:
        raise ValidationError(MESSAGES['email_taken'], field='email')

    user = User(get_user_by_id(user_id))
    login_user(user)

    return api_success(data=user.to_dict(), message=MESSAGES['register_success'], status=201)


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user."""
    logout_user()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/me')
@login_required
def me():
    """Current user profile."""
    return api_success(data=public_user(get_user_by_id(current_user.id)))
