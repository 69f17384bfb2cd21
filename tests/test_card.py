from datetime import datetime
from datetime import UTC

import httpx
import pytest

from statscard.colour_profiles import COLOUR_PROFILES
from statscard.models import CardData
from statscard.models import Circle
from statscard.models import ContributionCalendar
from statscard.models import ContributionDay
from statscard.models import ContributionWeek
from statscard.models import GitHubTotals
from statscard.models import GitHubUserInfo
from statscard.models import LanguageStat
from statscard.models import Rect
from statscard.models import Text
from statscard.services.card_layout import build_card
from statscard.services.card_layout import calendar_section
from statscard.services.card_layout import years_on_github
from statscard.services.card_service import GitHubAPIError
from statscard.services.card_service import InvalidGitHubTokenError
from statscard.services.card_service import fetch_card_data
from statscard.services.card_service import render_card_svg
from statscard.settings import Settings


NOW = datetime(2024, 2, 10, 12, 0, tzinfo=UTC)
DARK = COLOUR_PROFILES["dark"]


def make_card_data() -> CardData:
    days = [
        ContributionDay(date=f"2024-02-0{day}", count=day, color="#40c463")
        for day in range(1, 8)
    ]
    return CardData(
        user=GitHubUserInfo(
            login="octocat",
            name="The Octocat",
            avatar_url="https://avatars.githubusercontent.com/u/583231",
            followers=12,
            following=3,
            created_at=datetime(2014, 2, 10, tzinfo=UTC),
        ),
        totals=GitHubTotals(total_commits=120, total_repositories=8),
        languages=[
            LanguageStat(name="Python", color="#3572A5", size=75, percentage=75.0),
            LanguageStat(name="Go", color="#00ADD8", size=25, percentage=25.0),
        ],
        calendar=ContributionCalendar(
            total_contributions=28, weeks=[ContributionWeek(days=days)]
        ),
    )


def texts(primitives) -> list[str]:
    return [item.content for item in primitives if isinstance(item, Text)]


def test_years_on_github_counts_elapsed_years() -> None:
    assert years_on_github(datetime(2014, 2, 10, tzinfo=UTC), NOW) == pytest.approx(10.0, abs=0.01)
    assert years_on_github(None, NOW) == 0.0


def test_build_card_contains_every_section() -> None:
    primitives = build_card(make_card_data(), DARK, NOW)
    content = texts(primitives)

    assert "The Octocat" in content
    assert "⏰ Joined GitHub 10 years ago" in content
    assert "💻 120 Commits" in content
    assert "📚 8 Repositories" in content
    assert "28 contributions in the last year" in content
    assert "🗣️ 2 Languages" in content
    assert "🔥 Current streak 7 days" in content
    assert "🏆 Highest in a day 7" in content
    assert "📊 Average per day ~4.00" in content


def test_month_squares_cover_every_day_of_current_month() -> None:
    primitives = build_card(make_card_data(), DARK, NOW)

    squares = [item for item in primitives if isinstance(item, Rect) and item.width == 11]

    assert len(squares) == 29
    assert [square.fill for square in squares[:7]] == [DARK.level_2] * 7
    assert squares[7].fill == DARK.level_0


def test_language_bar_segments_span_card_width() -> None:
    primitives = build_card(make_card_data(), DARK, NOW)

    segments = [item for item in primitives if isinstance(item, Rect) and item.height == 8]
    dots = [item for item in primitives if isinstance(item, Circle)]

    assert [segment.width for segment in segments] == pytest.approx([720.0, 240.0])
    assert segments[1].x == pytest.approx(segments[0].x + segments[0].width)
    assert [dot.fill for dot in dots] == ["#3572A5", "#00ADD8"]


def test_calendar_section_is_empty_without_weeks() -> None:
    assert calendar_section(None, DARK) == []
    assert calendar_section(ContributionCalendar(total_contributions=0, weeks=[]), DARK) == []


def test_build_card_without_calendar_skips_calendar_sections() -> None:
    card_data = make_card_data().model_copy(update={"calendar": None})

    content = texts(build_card(card_data, DARK, NOW))

    assert "📚 Contributions" not in content
    assert "📌 Commits streaks" not in content


def test_render_card_svg_uses_theme_background() -> None:
    svg_content = render_card_svg(make_card_data(), "dark", NOW)

    assert svg_content.startswith("<svg")
    assert 'fill="#0d1117"' in svg_content
    assert "The Octocat - GitHub Stats" in svg_content


def github_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/user":
        return httpx.Response(200, json={"id": 1, "login": "octocat"})
    if request.url.path == "/users/octocat":
        return httpx.Response(200, json={"login": "octocat", "followers": 4})

    query = request.read().decode()
    if "contributionCalendar" in query:
        user = {
            "contributionsCollection": {
                "contributionCalendar": {
                    "totalContributions": 2,
                    "weeks": [
                        {"contributionDays": [{"date": "2024-02-01", "contributionCount": 2, "color": "#9be9a8"}]}
                    ],
                }
            }
        }
    elif "languages" in query:
        user = {
            "repositories": {
                "nodes": [
                    {"languages": {"edges": [{"size": 10, "node": {"name": "Python", "color": "#3572A5"}}]}}
                ]
            }
        }
    else:
        user = {"contributionsCollection": {"totalCommitContributions": 5}}
    return httpx.Response(200, json={"data": {"user": user}})


def test_fetch_card_data_resolves_login_from_token() -> None:
    with httpx.Client(transport=httpx.MockTransport(github_handler)) as client:
        card_data = fetch_card_data("secret", Settings(), client=client)

    assert card_data.user.login == "octocat"
    assert card_data.user.followers == 4
    assert card_data.totals.total_commits == 5
    assert [language.name for language in card_data.languages] == ["Python"]
    assert card_data.languages[0].percentage == pytest.approx(100.0)
    assert card_data.calendar is not None
    assert card_data.calendar.total_contributions == 2


@pytest.mark.parametrize(
    ("status_code", "expected_error"),
    [(401, InvalidGitHubTokenError), (403, InvalidGitHubTokenError), (500, GitHubAPIError)],
)
def test_fetch_card_data_translates_http_errors(status_code: int, expected_error) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"message": "nope"})

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(expected_error):
            fetch_card_data("secret", Settings(), login="octocat", client=client)


def test_fetch_card_data_wraps_malformed_payloads() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["unexpected"])

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(GitHubAPIError):
            fetch_card_data("secret", Settings(), login="octocat", client=client)
