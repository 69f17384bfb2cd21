from pydantic import BaseModel


class CalendarStatsResponse(BaseModel):
    """Streak and per-day statistics for the authenticated user's calendar."""

    username: str
    total: int
    current_streak_days: int
    best_streak_days: int
    highest_in_day: int
    average_per_day: float


class ThemesResponse(BaseModel):
    """Colour profiles accepted by the `theme` query parameter."""

    themes: list[str]
