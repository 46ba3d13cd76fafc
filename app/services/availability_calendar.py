"""
Availability calendar for venues.

A venue's calendar is the set of dates on which it cannot be booked,
independent of booking records. Every mutation builds a new set and assigns
it to the venue in one step, so readers never observe a half-applied update.
"""
from datetime import date, datetime
from typing import Iterable, Optional, FrozenSet
from app.models.venue import Venue


def to_calendar_date(value) -> date:
    # Calendar-date equality only; drop any time-of-day component
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def _as_date_set(values: Optional[Iterable]) -> FrozenSet[date]:
    if not values:
        return frozenset()
    return frozenset(to_calendar_date(v) for v in values)


class AvailabilityCalendar:

    def is_available(self, venue: Venue, on_date) -> bool:
        return venue.is_active and to_calendar_date(on_date) not in venue.blocked_dates

    def block(self, venue: Venue, on_date) -> Venue:
        blocked = venue.blocked_dates
        day = to_calendar_date(on_date)
        if day not in blocked:
            venue.replace_blocked_dates(blocked | {day})
        return venue

    def unblock(self, venue: Venue, on_date) -> Venue:
        blocked = venue.blocked_dates
        day = to_calendar_date(on_date)
        if day in blocked:
            venue.replace_blocked_dates(blocked - {day})
        return venue

    def bulk_update(
        self,
        venue: Venue,
        block_dates: Optional[Iterable] = None,
        unblock_dates: Optional[Iterable] = None
    ) -> Venue:
        """
        Apply blocks then unblocks as a single replacement of the calendar.

        A date present in both lists ends up unblocked.
        """
        updated = (venue.blocked_dates | _as_date_set(block_dates)) - _as_date_set(unblock_dates)
        venue.replace_blocked_dates(updated)
        return venue
