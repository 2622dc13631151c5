"""
Validator tests.
"""

from datetime import date

import pytest

from utils.exceptions import InvalidDateRange, ValidationError
from utils.validators import (
    validate_email, validate_password, validate_date_format,
    parse_date, parse_date_range, days_between, parse_positive_int,
    parse_positive_number, sanitize_input
)


def test_validate_email():
    assert validate_email('guest@example.com')
    assert not validate_email('guest@')
    assert not validate_email('')


def test_validate_password():
    assert validate_password('secret123') == (True, '')
    is_valid, error = validate_password('abc')
    assert not is_valid
    assert '6' in error


@pytest.mark.parametrize('value,expected', [
    ('2025-06-10', True),
    ('2025-6-10', False),
    ('2025-02-30', False),
    ('10/06/2025', False),
    (None, False),
])
def test_validate_date_format(value, expected):
    assert validate_date_format(value) is expected


def test_parse_date_accepts_date_objects():
    assert parse_date(date(2025, 6, 10)) == date(2025, 6, 10)
    assert parse_date('2025-06-10') == date(2025, 6, 10)


def test_parse_date_missing_names_field():
    with pytest.raises(ValidationError) as exc:
        parse_date('', 'check_in')
    assert exc.value.field == 'check_in'


def test_parse_date_range_rejects_empty_stay():
    with pytest.raises(InvalidDateRange):
        parse_date_range('2025-06-10', '2025-06-10')
    with pytest.raises(InvalidDateRange):
        parse_date_range('2025-06-12', '2025-06-10')


def test_invalid_date_range_is_a_validation_error():
    with pytest.raises(ValidationError):
        parse_date_range('2025-06-12', '2025-06-10')


def test_days_between():
    assert days_between(date(2025, 6, 12), date(2025, 6, 16)) == 4
    assert days_between(date(2025, 2, 27), date(2025, 3, 1)) == 2


def test_parse_positive_int():
    assert parse_positive_int('3', 'guests') == 3
    assert parse_positive_int(2.0, 'guests') == 2
    for bad in (0, -1, 'two', None, True, 1.5):
        with pytest.raises(ValidationError):
            parse_positive_int(bad, 'guests')


def test_parse_positive_number():
    assert parse_positive_number('99.5', 'total_price') == 99.5
    for bad in (0, -10, 'free', float('nan')):
        with pytest.raises(ValidationError):
            parse_positive_number(bad, 'total_price')


def test_sanitize_input():
    assert sanitize_input('  guest  ') == 'guest'
    assert sanitize_input('abcdef', max_length=3) == 'abc'
    assert sanitize_input(None) == ''


def test_format_date_pads_year():
    from utils.validators import format_date

    assert format_date(date(1, 1, 2)) == '0001-01-02'
    assert format_date(date(2025, 6, 10)) == '2025-06-10'
