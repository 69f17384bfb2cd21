from datetime import datetime
from datetime import UTC

import pytest
from fastapi.testclient import TestClient

from statscard.main import create_app
from statscard.models import CardData
from statscard.models import ContributionCalendar
from statscard.models import ContributionDay
from statscard.models import ContributionWeek
from statscard.models import GitHubTotals
from statscard.models import GitHubUserInfo
from statscard.services.card_service import GitHubAPIError
from statscard.services.card_service import InvalidGitHubTokenError
from statscard.settings import Settings


AUTH_HEADERS = {"Authorization": "Bearer gho_example"}


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def fake_card_data() -> CardData:
    return CardData(
        user=GitHubUserInfo(
            login="octocat", name="The Octocat", created_at=datetime(2015, 1, 1, tzinfo=UTC)
        ),
        totals=GitHubTotals(total_commits=3),
        calendar=ContributionCalendar(
            total_contributions=5,
            weeks=[
                ContributionWeek(
                    days=[
                        ContributionDay(date="2026-02-19", count=2, color="#9be9a8"),
                        ContributionDay(date="2026-02-20", count=3, color="#40c463"),
                    ]
                )
            ],
        ),
    )


def test_read_root_returns_hello_world(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Hello World"}


def test_health_live_returns_ok(client: TestClient) -> None:
    response = client.get("/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_themes_lists_colour_profiles(client: TestClient) -> None:
    response = client.get("/themes")

    assert response.json() == {"themes": ["dark", "default", "ocean", "sunset"]}


def test_settings_reads_colour_profile_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("COLOUR_PROFILE", "ocean")

    assert Settings().colour_profile == "ocean"


def test_card_requires_bearer_token(client: TestClient) -> None:
    response = client.get("/card/me")

    assert response.status_code == 401


def test_card_returns_svg_for_authenticated_user(
    monkeypatch: pytest.MonkeyPatch, client: TestClient
) -> None:
    def fake_fetch_card_data(token: str, settings: Settings) -> CardData:
        assert token == "gho_example"
        return fake_card_data()

    monkeypatch.setattr("statscard.api.routes.card.fetch_card_data", fake_fetch_card_data)

    response = client.get("/card/me?theme=dark", headers=AUTH_HEADERS)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.text.startswith("<svg")
    assert "#0d1117" in response.text


def test_stats_returns_calendar_statistics(
    monkeypatch: pytest.MonkeyPatch, client: TestClient
) -> None:
    monkeypatch.setattr(
        "statscard.api.routes.card.fetch_card_data",
        lambda token, settings: fake_card_data(),
    )

    response = client.get("/stats/me", headers=AUTH_HEADERS)

    assert response.status_code == 200
    assert response.json() == {
        "username": "octocat",
        "total": 5,
        "current_streak_days": 2,
        "best_streak_days": 2,
        "highest_in_day": 3,
        "average_per_day": 2.5,
    }


@pytest.mark.parametrize(
    ("error", "status_code", "detail"),
    [
        (InvalidGitHubTokenError(), 401, "GitHub token is invalid"),
        (GitHubAPIError(), 502, "GitHub API request failed"),
    ],
)
def test_card_maps_github_failures(
    monkeypatch: pytest.MonkeyPatch,
    client: TestClient,
    error: Exception,
    status_code: int,
    detail: str,
) -> None:
    def failing_fetch_card_data(token: str, settings: Settings) -> CardData:
        raise error

    monkeypatch.setattr("statscard.api.routes.card.fetch_card_data", failing_fetch_card_data)

    response = client.get("/card/me", headers=AUTH_HEADERS)

    assert response.status_code == status_code
    assert response.json() == {"detail": detail}
