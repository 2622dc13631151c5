"""
Alternative date suggestions for unavailable stays.

When a requested range conflicts with existing bookings, scan check-in
shifts of -R..+R days (skipping 0) that keep the same stay length and
propose the nearest conflict-free ranges.

The scan is pessimistic: any overlapping active reservation blocks a
candidate, even when the room has more than one unit.
"""

import logging
from datetime import date, timedelta

from .reservation_availability import list_active_reservations, ranges_overlap
from utils.exceptions import RoomNotFound, ValidationError
from utils.validators import parse_date_range, parse_positive_int, days_between, format_date

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_DAYS_RANGE = 7
MAX_DAYS_RANGE = 365
MAX_SUGGESTIONS = 5


# =============================================================================
# CANDIDATE GENERATION
# =============================================================================

def iter_day_offsets(days_range: int):
    """Yield offsets -days_range..-1, 1..days_range in ascending order."""
    for offset in range(-days_range, days_range + 1):
        if offset == 0:
            continue
        yield offset


def shift_date(value: date, days: int):
    """Shift a date by days, or None when the result leaves the calendar."""
    try:
        return value + timedelta(days=days)
    except OverflowError:
        return None


def build_candidate(check_in, stay_duration: int, offset: int):
    """
    Build a candidate stay shifted by offset days.

    Returns:
        dict: {'check_in', 'check_out', 'day_offset', 'days_difference'},
        or None if the shifted stay falls outside date.min..date.max
    """
    alt_check_in = shift_date(check_in, offset)
    alt_check_out = shift_date(check_in, offset + stay_duration)
    if alt_check_in is None or alt_check_out is None:
        return None
    return {
        'check_in': format_date(alt_check_in),
        'check_out': format_date(alt_check_out),
        'day_offset': offset,
        'days_difference': abs(offset)
    }


def rank_suggestions(candidates: list, limit: int = MAX_SUGGESTIONS) -> list:
    """
    Order candidates by distance from the requested check-in and cap them.

    The sort is stable, so equal distances keep enumeration order
    (the earlier date first).
    """
    ranked = sorted(candidates, key=lambda c: c['days_difference'])
    return ranked[:limit]


# =============================================================================
# MAIN SEARCH
# =============================================================================

def find_alternative_dates(
    room_id: int,
    check_in,
    check_out,
    days_range: int = DEFAULT_DAYS_RANGE
) -> dict:
    """
    Check a requested stay and propose same-length alternatives nearby.

    Args:
        room_id: Room ID
        check_in: Requested check-in (YYYY-MM-DD)
        check_out: Requested check-out (YYYY-MM-DD)
        days_range: Search radius in days around the requested check-in

    Returns:
        dict: {
            'available': bool,
            'stay_duration': int,
            'conflicting_reservations': [reservation dicts],
            'suggestions': [
                {'check_in': str, 'check_out': str,
                 'day_offset': int, 'days_difference': int}
            ]
        }

    Raises:
        ValidationError: If dates or days_range are invalid
        RoomNotFound: If the room does not exist
    """
    from models.room import get_room_by_id

    start, end = parse_date_range(check_in, check_out)
    days_range = parse_positive_int(days_range, 'days_range')
    if days_range > MAX_DAYS_RANGE:
        raise ValidationError(
            f'days_range cannot exceed {MAX_DAYS_RANGE}', field='days_range'
        )

    if not get_room_by_id(room_id):
        raise RoomNotFound(room_id)

    stay_duration = days_between(start, end)
    requested_in, requested_out = format_date(start), format_date(end)

    # One bounded query covers the requested stay and every candidate,
    # clamped to the calendar limits
    window_start = shift_date(start, -days_range) or date.min
    window_end = shift_date(start, days_range + stay_duration) or date.max
    reservations = list_active_reservations(room_id, window_start, window_end)

    conflicting = [
        r for r in reservations
        if ranges_overlap(r['check_in'], r['check_out'], requested_in, requested_out)
    ]

    if not conflicting:
        return {
            'available': True,
            'stay_duration': stay_duration,
            'conflicting_reservations': [],
            'suggestions': []
        }

    candidates = []
    for offset in iter_day_offsets(days_range):
        candidate = build_candidate(start, stay_duration, offset)
        if candidate is None:
            continue
        has_conflict = any(
            ranges_overlap(r['check_in'], r['check_out'],
                           candidate['check_in'], candidate['check_out'])
            for r in reservations
        )
        if not has_conflict:
            candidates.append(candidate)

    suggestions = rank_suggestions(candidates)

    logger.info(
        f"[Alternatives] room={room_id} {requested_in}..{requested_out} "
        f"conflicts={len(conflicting)} candidates={len(candidates)} "
        f"returned={len(suggestions)}"
    )

    return {
        'available': False,
        'stay_duration': stay_duration,
        'conflicting_reservations': conflicting,
        'suggestions': suggestions
    }
