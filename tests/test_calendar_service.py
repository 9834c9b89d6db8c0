from datetime import date
from datetime import timedelta

import pytest

from gitstat.core.errors import InvalidWindowError
from gitstat.schemas.contributions import ContributionRecord
from gitstat.schemas.contributions import Statistics
from gitstat.schemas.contributions import Tier
from gitstat.services.calendar_service import aggregate_statistics
from gitstat.services.calendar_service import build_calendar
from gitstat.services.calendar_service import contribution_tier
from gitstat.services.calendar_service import layout_weeks
from gitstat.services.calendar_service import window_bounds


@pytest.mark.parametrize(
    ("count", "tier"),
    [
        (0, Tier.NONE),
        (1, Tier.LOW),
        (2, Tier.LOW),
        (3, Tier.MEDIUM),
        (5, Tier.MEDIUM),
        (6, Tier.HIGH),
        (10, Tier.HIGH),
        (11, Tier.VERY_HIGH),
        (500, Tier.VERY_HIGH),
    ],
)
def test_contribution_tier_boundaries(count: int, tier: Tier) -> None:
    assert contribution_tier(count) is tier


def test_contribution_tier_is_monotonic() -> None:
    tiers = [contribution_tier(count) for count in range(0, 200)]

    assert tiers == sorted(tiers)
    assert set(tiers) == set(Tier)


def test_build_calendar_fills_missing_days_with_zero() -> None:
    records = {
        ContributionRecord(date=date(2026, 2, 19), count=2),
        ContributionRecord(date=date(2026, 2, 21), count=1),
    }

    calendar = build_calendar(records, window_days=4, window_end=date(2026, 2, 21))

    assert [(record.date.isoformat(), record.count) for record in calendar] == [
        ("2026-02-18", 0),
        ("2026-02-19", 2),
        ("2026-02-20", 0),
        ("2026-02-21", 1),
    ]


@pytest.mark.parametrize("window_days", [1, 7, 31, 365, 366])
def test_build_calendar_returns_contiguous_window(window_days: int) -> None:
    window_end = date(2024, 12, 31)

    calendar = build_calendar([], window_days=window_days, window_end=window_end)

    assert len(calendar) == window_days
    assert len({record.date for record in calendar}) == window_days
    assert calendar[-1].date == window_end
    for previous, current in zip(calendar, calendar[1:]):
        assert current.date - previous.date == timedelta(days=1)


def test_build_calendar_ignores_records_outside_window() -> None:
    records = [
        ContributionRecord(date=date(2026, 2, 10), count=9),
        ContributionRecord(date=date(2026, 2, 20), count=3),
        ContributionRecord(date=date(2026, 3, 1), count=9),
    ]

    calendar = build_calendar(records, window_days=3, window_end=date(2026, 2, 21))

    assert [record.count for record in calendar] == [0, 3, 0]


def test_build_calendar_uses_injected_clock() -> None:
    calendar = build_calendar([], window_days=2, clock=lambda: date(2026, 1, 1))

    assert [record.date for record in calendar] == [date(2025, 12, 31), date(2026, 1, 1)]


@pytest.mark.parametrize("window_days", [0, -1, -365])
def test_build_calendar_rejects_non_positive_window(window_days: int) -> None:
    with pytest.raises(InvalidWindowError):
        build_calendar([], window_days=window_days, window_end=date(2026, 1, 1))


def test_window_bounds_returns_inclusive_range() -> None:
    assert window_bounds(365, date(2025, 12, 31)) == (date(2025, 1, 1), date(2025, 12, 31))


def test_layout_weeks_pads_first_week_with_placeholders() -> None:
    # 2026-02-18 is a Wednesday, 2026-02-28 a Saturday.
    calendar = build_calendar([], window_days=11, window_end=date(2026, 2, 28))

    weeks = layout_weeks(calendar)

    assert len(weeks) == 2
    assert weeks[0][:3] == [None, None, None]
    assert [cell.date.day for cell in weeks[0][3:]] == [18, 19, 20, 21]
    assert [cell.date.day for cell in weeks[1]] == [22, 23, 24, 25, 26, 27, 28]
    assert [cell.day_of_week for cell in weeks[1]] == list(range(7))
    assert {cell.week_index for cell in weeks[1]} == {1}


def test_layout_weeks_pads_last_week_and_keeps_every_day() -> None:
    # A 2025 calendar year starts and ends on a Wednesday.
    calendar = build_calendar([], window_days=365, window_end=date(2025, 12, 31))

    weeks = layout_weeks(calendar)
    cells = [cell for week in weeks for cell in week if cell is not None]

    assert len(weeks) == 53
    assert all(len(week) == 7 for week in weeks)
    assert weeks[-1][4:] == [None, None, None]
    assert len(cells) == 365
    assert [cell.date for cell in cells] == [record.date for record in calendar]


def test_layout_weeks_classifies_cells_at_layout_time() -> None:
    calendar = [ContributionRecord(date=date(2026, 2, 22), count=4)]

    default_weeks = layout_weeks(calendar)
    custom_weeks = layout_weeks(calendar, classify=lambda count: Tier.VERY_HIGH)

    assert default_weeks[0][0].tier is Tier.MEDIUM
    assert custom_weeks[0][0].tier is Tier.VERY_HIGH


def test_layout_weeks_of_empty_calendar_is_empty() -> None:
    assert layout_weeks([]) == []


def test_statistics_for_empty_week() -> None:
    calendar = build_calendar([], window_days=7, window_end=date(2026, 2, 28))

    statistics = aggregate_statistics(calendar)

    assert [record.count for record in calendar] == [0] * 7
    assert statistics == Statistics(active_days=0, max_count=0, average=0.0, total=0)


def test_statistics_average_covers_full_window() -> None:
    window_end = date(2026, 2, 28)
    records = [ContributionRecord(date=window_end, count=11)]
    calendar = build_calendar(records, window_days=5, window_end=window_end)

    weeks = layout_weeks(calendar)
    statistics = aggregate_statistics(calendar)

    assert weeks[-1][6].date == window_end
    assert weeks[-1][6].tier is Tier.VERY_HIGH
    assert statistics.active_days == 1
    assert statistics.max_count == 11
    assert statistics.total == 11
    assert statistics.average == pytest.approx(2.2)


def test_statistics_are_idempotent_and_consistent() -> None:
    window_end = date(2025, 12, 31)
    records = [
        ContributionRecord(date=window_end - timedelta(days=offset), count=offset % 13)
        for offset in range(0, 365, 3)
    ]
    calendar = build_calendar(records, window_days=365, window_end=window_end)

    first = aggregate_statistics(calendar)
    second = aggregate_statistics(calendar)

    assert first == second
    assert first.average * len(calendar) == pytest.approx(first.total)
    assert first.max_count == 12


def test_statistics_of_empty_calendar_floor_to_zero() -> None:
    assert aggregate_statistics([]) == Statistics(
        active_days=0, max_count=0, average=0.0, total=0
    )


def test_contribution_record_rejects_negative_count() -> None:
    with pytest.raises(ValueError):
        ContributionRecord(date=date(2026, 1, 1), count=-1)
