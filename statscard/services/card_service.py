import logging
from collections.abc import Callable
from datetime import datetime
from datetime import UTC
from typing import TypeVar

import httpx

from statscard.clients.github_client import build_client
from statscard.clients.github_client import fetch_authenticated_user
from statscard.clients.github_client import fetch_contribution_calendar
from statscard.clients.github_client import fetch_repository_languages
from statscard.clients.github_client import fetch_totals
from statscard.clients.github_client import fetch_user_info
from statscard.colour_profiles import get_colour_profile
from statscard.models import CardData
from statscard.services.card_layout import CARD_HEIGHT
from statscard.services.card_layout import CARD_WIDTH
from statscard.services.card_layout import build_card
from statscard.services.language_stats import aggregate_languages
from statscard.settings import Settings
from statscard.svg import render_svg


logger = logging.getLogger(__name__)

T = TypeVar("T")

CARD_TITLE = "GitHub Stats"
CARD_DESC = "GitHub profile statistics visualization"


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


def _call_github(request: Callable[[], T]) -> T:
    try:
        return request()
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError from exc
        raise GitHubAPIError from exc
    except Exception as exc:
        raise GitHubAPIError from exc


def fetch_card_data(
    token: str,
    settings: Settings,
    login: str | None = None,
    client: httpx.Client | None = None,
) -> CardData:
    """Collect everything the card needs for ``login`` or the token owner."""

    owns_client = client is None
    http = client or build_client(settings)
    try:
        if not login:
            login = _call_github(
                lambda: fetch_authenticated_user(token, settings.github_api_url, http)
            )
        logger.info("Fetching GitHub stats for %s", login)

        user = _call_github(
            lambda: fetch_user_info(login, token, settings.github_api_url, http)
        )
        totals = _call_github(
            lambda: fetch_totals(login, token, settings.github_graphql_url, http)
        )
        language_entries = _call_github(
            lambda: fetch_repository_languages(
                login, token, settings.github_graphql_url, http
            )
        )
        calendar = _call_github(
            lambda: fetch_contribution_calendar(
                login, token, settings.github_graphql_url, http
            )
        )
    finally:
        if owns_client:
            http.close()

    return CardData(
        user=user,
        totals=totals,
        languages=aggregate_languages(language_entries),
        calendar=calendar,
    )


def render_card_svg(
    card_data: CardData,
    profile_name: str | None,
    now: datetime | None = None,
) -> str:
    """Render fetched card data into SVG markup using the named colour profile."""

    profile = get_colour_profile(profile_name)
    primitives = build_card(card_data, profile, now or datetime.now(UTC))
    return render_svg(
        primitives,
        width=CARD_WIDTH,
        height=CARD_HEIGHT,
        background=profile.background,
        title=f"{card_data.user.name or card_data.user.login} - {CARD_TITLE}",
        desc=CARD_DESC,
    )
