"""
Contractor Matching

Attaches a contractor to each media-production event, considering:
- Weekly availability windows (per weekday, campaign timezone)
- Photographer / Videographer capability
- Existing bookings, plus assignments already made in this run

Policy is first fit: contractors are tried in roster order and the first
one that is available, qualified and free gets the job.
"""

import logging
from dataclasses import replace
from datetime import datetime, time
from typing import Dict, List, Optional, Sequence, Tuple

from date_utils import get_timezone, to_local, weekday_code
from errors import InvalidIntervalError
from models import Booking, Contractor, ContractorRef, Event

logger = logging.getLogger(__name__)

PHOTOGRAPHER = "Photographer"
VIDEOGRAPHER = "Videographer"

ELIGIBLE_KEYWORDS = ("photography", "video", "floor plan")

Interval = Tuple[datetime, datetime]


def is_eligible(summary: str) -> bool:
    lowered = (summary or "").lower()
    return any(keyword in lowered for keyword in ELIGIBLE_KEYWORDS)


def required_services(summary: str) -> Dict[str, bool]:
    """
    "photo" covers "photography" too. A floor plan asks for neither, so any
    available contractor can take it.
    """
    lowered = (summary or "").lower()
    return {
        "needs_photo": "photo" in lowered,
        "needs_video": "video" in lowered,
    }


def _parse_clock(value: str) -> time:
    return datetime.strptime(str(value).strip(), "%H:%M").time()


def _check_interval(start: datetime, end: Optional[datetime], label: str) -> None:
    if end is None:
        raise InvalidIntervalError(f"{label} has no end time")
    if end < start:
        raise InvalidIntervalError(f"{label} ends ({end.isoformat()}) before it starts ({start.isoformat()})")


def _between(value: datetime, start: datetime, end: datetime, bounds: str) -> bool:
    """
    Bounds as "[]", "[)", "(]" or "()": bracket means inclusive.
    """
    lower_ok = value >= start if bounds[0] == "[" else value > start
    upper_ok = value <= end if bounds[1] == "]" else value < end
    return lower_ok and upper_ok


def is_available(contractor: Contractor, start: datetime, end: datetime, tz) -> bool:
    """
    Both ends of the event must sit inside the contractor's window for the
    event's local weekday (inclusive).
    """
    day_availability = contractor.availability.get(weekday_code(start.date()))
    if not day_availability or not day_availability.available:
        return False

    window_start = tz.localize(datetime.combine(start.date(), _parse_clock(day_availability.start_time)))
    window_end = tz.localize(datetime.combine(start.date(), _parse_clock(day_availability.end_time)))

    return _between(start, window_start, window_end, "[]") and _between(end, window_start, window_end, "[]")


def provides_services(contractor: Contractor, needs_photo: bool, needs_video: bool) -> bool:
    services = set(contractor.services or [])
    if needs_photo and PHOTOGRAPHER not in services:
        return False
    if needs_video and VIDEOGRAPHER not in services:
        return False
    return True


def overlaps(event_start: datetime, event_end: datetime, busy_start: datetime, busy_end: datetime) -> bool:
    """
    Four-way check so that neither interval needs to contain the other.
    Touching intervals (one ends as the other starts) don't conflict.
    """
    return (
        _between(busy_start, event_start, event_end, "[)")
        or _between(busy_end, event_start, event_end, "(]")
        or _between(event_start, busy_start, busy_end, "[)")
        or _between(event_end, busy_start, busy_end, "(]")
    )


def has_conflict(busy: Sequence[Interval], start: datetime, end: datetime) -> bool:
    return any(overlaps(start, end, busy_start, busy_end) for busy_start, busy_end in busy)


def build_busy_map(bookings: Sequence[Booking], tz) -> Dict[str, List[Interval]]:
    """Booked intervals per contractor id, normalised to the campaign timezone."""
    busy: Dict[str, List[Interval]] = {}
    for booking in bookings:
        start = to_local(booking.start_time, tz)
        end = to_local(booking.end_time, tz)
        _check_interval(start, end, f"Booking for contractor {booking.contractor_id}")
        busy.setdefault(str(booking.contractor_id), []).append((start, end))
    return busy


def find_contractor(
    event: Event,
    contractors: Sequence[Contractor],
    busy: Dict[str, List[Interval]],
    tz,
) -> Optional[Contractor]:
    """First contractor in roster order that can take the event, or None."""
    start = to_local(event.start, tz)
    end = to_local(event.end, tz)
    needs = required_services(event.summary)

    for contractor in contractors:
        if not is_available(contractor, start, end, tz):
            continue
        if not provides_services(contractor, **needs):
            continue
        if has_conflict(busy.get(str(contractor.id), []), start, end):
            logger.debug(
                "Contractor %s is not available for %s due to a conflicting booking",
                contractor.name,
                event.summary,
            )
            continue
        return contractor

    return None


def assign_contractors(
    events: Sequence[Event],
    contractors: Sequence[Contractor],
    bookings: Sequence[Booking],
    tz_name: Optional[str] = None,
) -> List[Event]:
    """
    Returns a new event list with `contractor` set on every media event
    someone could take. Events nobody can take are returned unassigned;
    non-media events pass through untouched.

    Raises InvalidIntervalError for a booking or media event that ends
    before it starts.
    """
    tz = get_timezone(tz_name)
    busy = build_busy_map(bookings, tz)

    result: List[Event] = []
    for event in events:
        if not is_eligible(event.summary):
            result.append(event)
            continue

        _check_interval(event.start, event.end, f"Event {event.summary!r}")

        contractor = find_contractor(event, contractors, busy, tz)
        if contractor is None:
            logger.info("No contractor available for %s on %s", event.summary, event.start.isoformat())
            result.append(event)
            continue

        logger.debug("Contractor available for %s on %s: %s", event.summary, event.start.isoformat(), contractor.name)
        # Hold the slot so later events in this run can't double-book them
        busy.setdefault(str(contractor.id), []).append(
            (to_local(event.start, tz), to_local(event.end, tz))
        )
        result.append(replace(event, contractor=ContractorRef.from_contractor(contractor)))

    return result
