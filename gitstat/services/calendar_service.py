import logging
from collections.abc import Callable
from collections.abc import Iterable
from datetime import date
from datetime import timedelta

from gitstat.core.errors import InvalidWindowError
from gitstat.schemas.contributions import CalendarCell
from gitstat.schemas.contributions import ContributionRecord
from gitstat.schemas.contributions import NormalizedCalendar
from gitstat.schemas.contributions import Statistics
from gitstat.schemas.contributions import Tier
from gitstat.schemas.contributions import WeekColumn


logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def contribution_tier(count: int) -> Tier:
    """Map daily contribution count to a tier."""

    if count <= 0:
        return Tier.NONE
    if count <= 2:
        return Tier.LOW
    if count <= 5:
        return Tier.MEDIUM
    if count <= 10:
        return Tier.HIGH
    return Tier.VERY_HIGH


def sunday_index(day: date) -> int:
    """Return the weekday with Sunday as 0 and Saturday as 6."""

    return (day.weekday() + 1) % DAYS_PER_WEEK


def window_bounds(
    window_days: int,
    window_end: date | None = None,
    clock: Callable[[], date] = date.today,
) -> tuple[date, date]:
    """Return the first and last day of a trailing window.

    Raises:
        InvalidWindowError: If `window_days` is not positive.
    """

    if window_days <= 0:
        raise InvalidWindowError(
            f"window must span at least one day, got {window_days}"
        )

    end = window_end if window_end is not None else clock()
    return end - timedelta(days=window_days - 1), end


def build_calendar(
    records: Iterable[ContributionRecord],
    window_days: int = 365,
    window_end: date | None = None,
    clock: Callable[[], date] = date.today,
) -> NormalizedCalendar:
    """Fill the window with one record per day, zero where data is missing."""

    start, end = window_bounds(window_days, window_end, clock)

    counts_by_date: dict[date, int] = {}
    skipped = 0
    for record in records:
        if start <= record.date <= end:
            counts_by_date[record.date] = record.count
        else:
            skipped += 1

    if skipped:
        logger.debug("Ignored %d records outside %s..%s", skipped, start, end)

    return [
        ContributionRecord(
            date=start + timedelta(days=offset),
            count=counts_by_date.get(start + timedelta(days=offset), 0),
        )
        for offset in range(window_days)
    ]


def layout_weeks(
    calendar: NormalizedCalendar,
    classify: Callable[[int], Tier] = contribution_tier,
) -> list[WeekColumn]:
    """Group calendar days into Sunday-first week columns.

    Slots before the first day and after the last day are `None`
    placeholders, so every column holds exactly seven slots.
    """

    if not calendar:
        return []

    weeks: list[WeekColumn] = []
    column: WeekColumn = [None] * sunday_index(calendar[0].date)

    for record in calendar:
        weekday = sunday_index(record.date)
        if weekday == 0 and column:
            weeks.append(column)
            column = []
        column.append(
            CalendarCell(
                date=record.date,
                count=record.count,
                tier=classify(record.count),
                week_index=len(weeks),
                day_of_week=weekday,
            )
        )

    column.extend([None] * (DAYS_PER_WEEK - len(column)))
    weeks.append(column)
    return weeks


def aggregate_statistics(calendar: NormalizedCalendar) -> Statistics:
    """Compute summary values, averaging over every day of the window."""

    counts = [record.count for record in calendar]
    total = sum(counts)

    return Statistics(
        active_days=sum(1 for count in counts if count > 0),
        max_count=max(counts, default=0),
        average=total / len(counts) if counts else 0.0,
        total=total,
    )
