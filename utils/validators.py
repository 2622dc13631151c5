"""
Input validation helper functions.
Provides validation and parsing for common input types.
"""

import math
import re
from datetime import date, datetime

from utils.exceptions import ValidationError, InvalidDateRange

DATE_FORMAT = '%Y-%m-%d'
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_password(password: str, min_length: int = 6) -> tuple:
    """
    Validate password strength.

    Args:
        password: Password to validate
        min_length: Minimum password length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, 'Password is required'

    if len(password) < min_length:
        return False, f'Password must be at least {min_length} characters'

    return True, ''


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is in fixed-width YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    if not isinstance(date_str, str) or not DATE_PATTERN.match(date_str):
        return False
    try:
        datetime.strptime(date_str, DATE_FORMAT)
        return True
    except ValueError:
        return False


def parse_date(value, field: str = 'date') -> date:
    """
    Parse a calendar date from an ISO string or date object.

    Raises:
        ValidationError: If the value is missing or malformed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f'{field} is required', field=field)
    if not validate_date_format(value):
        raise ValidationError(f'{field} must be a date in YYYY-MM-DD format', field=field)
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_date_range(check_in, check_out) -> tuple:
    """
    Parse and validate a check-in/check-out pair.

    Returns:
        Tuple of (check_in, check_out) as date objects

    Raises:
        ValidationError: If either date is missing or malformed
        InvalidDateRange: If check_out is not after check_in
    """
    start = parse_date(check_in, 'check_in')
    end = parse_date(check_out, 'check_out')
    if end <= start:
        raise InvalidDateRange(start.isoformat(), end.isoformat())
    return start, end


def format_date(value: date) -> str:
    """Format a date for storage and the wire (YYYY-MM-DD, zero-padded year)."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def days_between(start: date, end: date) -> int:
    """Whole days from start to end, rounded up."""
    if isinstance(start, date) and not isinstance(start, datetime):
        start = datetime.combine(start, datetime.min.time())
    if isinstance(end, date) and not isinstance(end, datetime):
        end = datetime.combine(end, datetime.min.time())
    return math.ceil((end - start).total_seconds() / 86400)


def parse_positive_int(value, field: str) -> int:
    """
    Parse a strictly positive integer.

    Raises:
        ValidationError: If missing, not an integer, or <= 0
    """
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationError(f'{field} is required', field=field)
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f'{field} must be an integer', field=field)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer', field=field)
    if number <= 0:
        raise ValidationError(f'{field} must be greater than 0', field=field)
    return number


def parse_positive_number(value, field: str) -> float:
    """
    Parse a strictly positive number.

    Raises:
        ValidationError: If missing, not numeric, or <= 0
    """
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationError(f'{field} is required', field=field)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a number', field=field)
    if math.isnan(number) or math.isinf(number) or number <= 0:
        raise ValidationError(f'{field} must be greater than 0', field=field)
    return number


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    # Strip whitespace
    sanitized = text.strip()

    # Limit length if specified
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
