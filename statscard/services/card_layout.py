import calendar as month_calendar
from datetime import date
from datetime import datetime
from datetime import UTC

from statscard.colour_profiles import ColourProfile
from statscard.models import CalendarStats
from statscard.models import CardData
from statscard.models import Circle
from statscard.models import ContributionCalendar
from statscard.models import ContributionDay
from statscard.models import DrawPrimitive
from statscard.models import GitHubTotals
from statscard.models import GitHubUserInfo
from statscard.models import Image
from statscard.models import LanguageStat
from statscard.models import Rect
from statscard.models import Text
from statscard.services.calendar_stats import compute_calendar_stats
from statscard.services.isometric import DAYS_PER_WEEK
from statscard.services.isometric import build_isometric_layout
from statscard.services.isometric import render_isometric_calendar


CARD_WIDTH = 1000
CARD_HEIGHT = 380

FONT_STYLE_13PX = "font-family: -apple-system, BlinkMacSystemFont, Segoe UI; font-size: 13px;"
FONT_STYLE_HEADER_15PX = (
    "font-family: -apple-system, BlinkMacSystemFont, Segoe UI; "
    "font-size: 15px; font-weight: 600;"
)
FONT_STYLE_NAME_18PX = (
    "font-family: -apple-system, BlinkMacSystemFont, Segoe UI; "
    "font-size: 18px; font-weight: 600;"
)
FONT_STYLE_12PX = "font-family: -apple-system, BlinkMacSystemFont, Segoe UI; font-size: 12px;"
FONT_STYLE_HEADER_12PX = (
    "font-family: -apple-system, BlinkMacSystemFont, Segoe UI; "
    "font-size: 12px; font-weight: 600;"
)

MARGIN_LEFT = 20.0
NOTES_X = 700.0
NOTES_GAP = 40.0
GRAPH_RIGHT_PADDING = 15.0
CALENDAR_ORIGIN_Y = 360.0


def _header(content: str, x: float, y: float, profile: ColourProfile) -> Text:
    return Text(
        x=x, y=y, content=content, fill=profile.accent_primary, style=FONT_STYLE_HEADER_15PX
    )


def _line(content: str, x: float, y: float, profile: ColourProfile) -> Text:
    return Text(x=x, y=y, content=content, fill=profile.text_primary, style=FONT_STYLE_13PX)


def years_on_github(created_at: datetime | None, now: datetime) -> float:
    if created_at is None:
        return 0.0
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return max((now - created_at).total_seconds(), 0.0) / 86400 / 365


def profile_section(
    user: GitHubUserInfo, profile: ColourProfile, now: datetime
) -> list[DrawPrimitive]:
    primitives: list[DrawPrimitive] = []
    if user.avatar_url:
        primitives.append(Image(x=18, y=28, width=24, height=24, href=user.avatar_url))

    primitives.extend(
        [
            Text(
                x=50,
                y=45,
                content=user.name or user.login,
                fill=profile.text_primary,
                style=FONT_STYLE_NAME_18PX,
            ),
            Text(
                x=MARGIN_LEFT,
                y=70,
                content=f"⏰ Joined GitHub {years_on_github(user.created_at, now):.0f} years ago",
                fill=profile.text_secondary,
                style=FONT_STYLE_13PX,
            ),
            Text(
                x=MARGIN_LEFT,
                y=88,
                content=f"👥 Followed by {user.followers} users",
                fill=profile.text_secondary,
                style=FONT_STYLE_13PX,
            ),
        ]
    )
    return primitives


def stats_row(
    user: GitHubUserInfo, totals: GitHubTotals, profile: ColourProfile
) -> list[DrawPrimitive]:
    activity_x = 20.0
    community_x = 250.0
    repositories_x = 480.0
    headers_y = 115.0
    rows_y = [133.0 + 16.0 * index for index in range(4)]

    columns = [
        (
            activity_x,
            "📈 Activity",
            [
                f"💻 {totals.total_commits} Commits",
                f"📋 {totals.total_pull_request_reviews} Pull requests reviewed",
                f"🔀 {totals.total_pull_requests} Pull requests opened",
                f"❗ {totals.total_issues} Issues opened",
            ],
        ),
        (
            community_x,
            "👥 Community stats",
            [
                f"🏢 Member of {totals.total_organizations} organizations",
                f"👤 Following {user.following} users",
                f"⭐ Starred {totals.total_starred_repos} repositories",
                f"👀 Watching {totals.total_watching} repositories",
            ],
        ),
        (
            repositories_x,
            f"📚 {totals.total_repositories} Repositories",
            [
                f"💖 {totals.total_sponsors} Sponsors",
                f"⭐ {totals.total_stargazers} Stargazers",
                f"🍴 {totals.total_forks} Forkers",
                f"👁️ {totals.total_watchers} Watchers",
            ],
        ),
    ]

    primitives: list[DrawPrimitive] = []
    for x, title, lines in columns:
        primitives.append(_header(title, x, headers_y, profile))
        primitives.extend(_line(content, x, y, profile) for content, y in zip(lines, rows_y))
    return primitives


def month_contributions(
    calendar: ContributionCalendar, year: int, month: int
) -> list[ContributionDay]:
    days: list[ContributionDay] = []
    for week in calendar.weeks:
        for day in week.days:
            try:
                parsed_day = date.fromisoformat(day.date)
            except ValueError:
                continue
            if parsed_day.year == year and parsed_day.month == month:
                days.append(day)
    return days


def month_squares(
    calendar: ContributionCalendar, profile: ColourProfile, today: date
) -> list[DrawPrimitive]:
    """Current month as rows of seven squares next to the stats row."""

    square_size = 11
    square_gap = 2
    start_x = 650
    start_y = 125

    days_in_month = month_calendar.monthrange(today.year, today.month)[1]
    days = month_contributions(calendar, today.year, today.month)

    squares: list[DrawPrimitive] = [
        _header("📚 Contributions", 630, 115, profile),
        Text(
            x=630,
            y=210,
            content=f"{calendar.total_contributions} contributions in the last year",
            fill=profile.text_secondary,
            style=FONT_STYLE_13PX,
        ),
    ]
    for index in range(days_in_month):
        row, column = divmod(index, DAYS_PER_WEEK)
        colour = profile.level_0
        if index < len(days) and days[index].color:
            colour = profile.contribution_colour(days[index].color)
        squares.append(
            Rect(
                x=start_x + column * (square_size + square_gap),
                y=start_y + row * (square_size + square_gap),
                width=square_size,
                height=square_size,
                fill=colour,
                rx=2,
            )
        )
    return squares


def languages_section(
    languages: list[LanguageStat], profile: ColourProfile
) -> list[DrawPrimitive]:
    if not languages:
        return []

    bar_width = CARD_WIDTH - 2 * MARGIN_LEFT
    label_spacing = 80.0
    label_y = 290.0
    dot_radius = 4.0
    dot_gap = 6.0

    primitives: list[DrawPrimitive] = [
        _header(f"🗣️ {len(languages)} Languages", MARGIN_LEFT, 220, profile),
        Text(
            x=400,
            y=240,
            content="Most used languages",
            fill=profile.accent_primary,
            style=FONT_STYLE_HEADER_12PX,
        ),
    ]

    current_x = MARGIN_LEFT
    for language in languages:
        segment_width = language.percentage / 100.0 * bar_width
        primitives.append(
            Rect(x=current_x, y=260, width=segment_width, height=8, fill=language.color)
        )
        current_x += segment_width

    start_label_x = (CARD_WIDTH - (len(languages) - 1) * label_spacing) / 2
    for index, language in enumerate(languages):
        label_x = start_label_x + index * label_spacing
        # Text width is estimated at 6px per character.
        text_start_x = label_x - len(language.name) * 6.0 / 2
        primitives.append(
            Circle(
                cx=text_start_x - dot_radius - dot_gap,
                cy=label_y - 4,
                r=dot_radius,
                fill=language.color,
            )
        )
        primitives.append(
            Text(
                x=label_x,
                y=label_y,
                content=language.name,
                fill=profile.text_primary,
                style=FONT_STYLE_12PX,
                anchor="middle",
            )
        )
    return primitives


def calendar_notes(
    stats: CalendarStats,
    profile: ColourProfile,
    notes_x: float = NOTES_X,
    start_y: float = 330.0,
    line_gap: float = 18.0,
) -> list[DrawPrimitive]:
    return [
        _header("📌 Commits streaks", notes_x, start_y, profile),
        _line(f"🔥 Current streak {stats.current_streak_days} days", notes_x, start_y + line_gap, profile),
        _line(f"✨ Best streak {stats.best_streak_days} days", notes_x, start_y + line_gap * 2, profile),
        _header("📈 Commits per day", notes_x, start_y + line_gap * 4, profile),
        _line(f"🏆 Highest in a day {stats.highest_in_day}", notes_x, start_y + line_gap * 5, profile),
        _line(f"📊 Average per day ~{stats.average_per_day:.2f}", notes_x, start_y + line_gap * 6, profile),
    ]


def calendar_section(
    calendar: ContributionCalendar | None, profile: ColourProfile
) -> list[DrawPrimitive]:
    """Isometric year calendar with the streak notes panel on its right."""

    if calendar is None or not calendar.weeks:
        return []

    layout = build_isometric_layout(
        columns=len(calendar.weeks),
        rows=DAYS_PER_WEEK,
        available_width=NOTES_X - NOTES_GAP,
        origin_y=CALENDAR_ORIGIN_Y,
        margin_left=MARGIN_LEFT,
        right_padding=GRAPH_RIGHT_PADDING,
    )

    primitives: list[DrawPrimitive] = [
        _header("🗓️ Contributions calendar", MARGIN_LEFT, 320, profile)
    ]
    primitives.extend(render_isometric_calendar(calendar.weeks, layout, profile))
    primitives.extend(calendar_notes(compute_calendar_stats(calendar), profile))
    return primitives


def build_card(
    card_data: CardData, profile: ColourProfile, now: datetime | None = None
) -> list[DrawPrimitive]:
    """Lay out the whole stats card as an ordered list of draw primitives."""

    now = now or datetime.now(UTC)
    primitives = profile_section(card_data.user, profile, now)
    primitives.extend(stats_row(card_data.user, card_data.totals, profile))
    if card_data.calendar is not None:
        primitives.extend(month_squares(card_data.calendar, profile, now.date()))
    primitives.extend(languages_section(card_data.languages, profile))
    primitives.extend(calendar_section(card_data.calendar, profile))
    return primitives
