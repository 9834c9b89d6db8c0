from datetime import date
from enum import IntEnum

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class Tier(IntEnum):
    """Ordered intensity buckets used to pick a cell colour."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    VERY_HIGH = 4


class ContributionRecord(BaseModel):
    """Contribution count for a single calendar day."""

    model_config = ConfigDict(frozen=True)

    date: date
    count: int = Field(ge=0)


NormalizedCalendar = list[ContributionRecord]


class CalendarCell(BaseModel):
    """Day slot placed in the week grid."""

    model_config = ConfigDict(frozen=True)

    date: date
    count: int
    tier: Tier
    week_index: int
    day_of_week: int = Field(ge=0, le=6)


WeekColumn = list[CalendarCell | None]


class Statistics(BaseModel):
    """Summary values derived from a normalized calendar."""

    model_config = ConfigDict(frozen=True)

    active_days: int
    max_count: int
    average: float
    total: int


class GitHubUser(BaseModel):
    """Public profile fields shown above the calendar."""

    model_config = ConfigDict(frozen=True)

    login: str
    name: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
