from datetime import date
from datetime import timedelta

from statscard.models import CalendarStats
from statscard.models import ContributionCalendar


def collect_contribution_counts(calendar: ContributionCalendar) -> dict[date, int]:
    """Build a date to count map for every parseable day in the calendar.

    Days with a malformed date are skipped. When a date appears more than
    once, the last occurrence wins.
    """

    counts: dict[date, int] = {}
    for week in calendar.weeks:
        for day in week.days:
            try:
                parsed_day = date.fromisoformat(day.date)
            except ValueError:
                continue
            counts[parsed_day] = day.count
    return counts


def current_streak(counts: dict[date, int]) -> int:
    if not counts:
        return 0

    streak = 0
    day = max(counts)
    while counts.get(day, 0) > 0:
        streak += 1
        day -= timedelta(days=1)
    return streak


def best_streak(counts: dict[date, int]) -> int:
    best = 0
    running = 0
    previous: date | None = None
    for day in sorted(counts):
        if previous is not None and day != previous + timedelta(days=1):
            running = 0
        if counts[day] > 0:
            running += 1
            best = max(best, running)
        else:
            running = 0
        previous = day
    return best


def average_per_day(total: int, days: int) -> float:
    if days <= 0:
        return 0.0
    return total / days


def compute_calendar_stats(calendar: ContributionCalendar | None) -> CalendarStats:
    """Derive streak, maximum and average statistics from a calendar."""

    if calendar is None:
        return CalendarStats()

    counts = collect_contribution_counts(calendar)
    if not counts:
        return CalendarStats()

    return CalendarStats(
        current_streak_days=current_streak(counts),
        best_streak_days=best_streak(counts),
        highest_in_day=max(counts.values()),
        average_per_day=average_per_day(calendar.total_contributions, len(counts)),
    )
