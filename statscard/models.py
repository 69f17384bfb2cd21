from datetime import datetime
from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


Point = tuple[float, float]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ContributionDay(_Frozen):
    """Single calendar day as returned by the GitHub contribution calendar."""

    date: str
    count: int = Field(default=0, ge=0, alias="contributionCount")
    color: str = ""


class ContributionWeek(_Frozen):
    """Week column of days ordered by weekday index."""

    days: list[ContributionDay] = Field(default_factory=list, alias="contributionDays")


class ContributionCalendar(_Frozen):
    """Chronologically ordered weeks plus the calendar total."""

    total_contributions: int = Field(default=0, alias="totalContributions")
    weeks: list[ContributionWeek] = Field(default_factory=list)


class CalendarStats(_Frozen):
    current_streak_days: int = 0
    best_streak_days: int = 0
    highest_in_day: int = 0
    average_per_day: float = 0.0


class IsometricLayout(_Frozen):
    origin_x: float
    origin_y: float
    tile_width: float
    tile_height: float
    height_step: float
    max_height: float
    stroke_width: float = 0.6


class GitHubUserInfo(_Frozen):
    login: str
    name: str | None = None
    avatar_url: str | None = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    created_at: datetime | None = None


class GitHubTotals(_Frozen):
    total_commits: int = 0
    total_pull_request_reviews: int = 0
    total_pull_requests: int = 0
    total_issues: int = 0
    total_organizations: int = 0
    total_starred_repos: int = 0
    total_sponsors: int = 0
    total_watching: int = 0
    total_repositories: int = 0
    total_stargazers: int = 0
    total_forks: int = 0
    total_watchers: int = 0


class LanguageBytes(_Frozen):
    """Language byte count for one repository."""

    name: str
    color: str | None = None
    size: int = 0


class LanguageStat(_Frozen):
    name: str
    color: str
    size: int
    percentage: float


class CardData(_Frozen):
    """Everything fetched from GitHub that the card layout needs."""

    user: GitHubUserInfo
    totals: GitHubTotals
    languages: list[LanguageStat] = Field(default_factory=list)
    calendar: ContributionCalendar | None = None


class Polygon(_Frozen):
    kind: Literal["polygon"] = "polygon"
    points: list[Point]
    fill: str
    stroke: str | None = None
    stroke_width: float | None = None


class Line(_Frozen):
    kind: Literal["line"] = "line"
    start: Point
    end: Point
    stroke: str
    stroke_width: float


class Text(_Frozen):
    kind: Literal["text"] = "text"
    x: float
    y: float
    content: str
    fill: str
    style: str
    anchor: str | None = None


class Rect(_Frozen):
    kind: Literal["rect"] = "rect"
    x: float
    y: float
    width: float
    height: float
    fill: str
    rx: float | None = None


class Circle(_Frozen):
    kind: Literal["circle"] = "circle"
    cx: float
    cy: float
    r: float
    fill: str


class Image(_Frozen):
    kind: Literal["image"] = "image"
    x: float
    y: float
    width: float
    height: float
    href: str


DrawPrimitive = Annotated[
    Polygon | Line | Text | Rect | Circle | Image, Field(discriminator="kind")
]
