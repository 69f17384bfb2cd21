import logging
from collections.abc import Mapping
from datetime import date
from datetime import timedelta
from typing import Any

import httpx

from statscard.models import ContributionCalendar
from statscard.models import ContributionDay
from statscard.models import ContributionWeek
from statscard.models import GitHubTotals
from statscard.models import GitHubUserInfo
from statscard.models import LanguageBytes
from statscard.settings import Settings


logger = logging.getLogger(__name__)

USER_AGENT = "statscard"

CALENDAR_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
            color
          }
        }
      }
    }
  }
}
"""

TOTALS_QUERY = """
query($login: String!) {
  user(login: $login) {
    contributionsCollection {
      totalCommitContributions
      totalPullRequestReviewContributions
      totalPullRequestContributions
      totalIssueContributions
    }
    organizations { totalCount }
    starredRepositories { totalCount }
    sponsors { totalCount }
    watching { totalCount }
    repositories(first: 100, ownerAffiliations: OWNER, isFork: false) {
      totalCount
      nodes {
        stargazerCount
        forkCount
        watchers { totalCount }
      }
    }
  }
}
"""

LANGUAGES_QUERY = """
query($login: String!) {
  user(login: $login) {
    repositories(first: 100, ownerAffiliations: OWNER, isFork: false) {
      nodes {
        languages(first: 10, orderBy: {field: SIZE, direction: DESC}) {
          edges {
            size
            node { name color }
          }
        }
      }
    }
  }
}
"""


def build_client(settings: Settings) -> httpx.Client:
    """HTTP client with connection retries and the configured timeout."""

    return httpx.Client(
        transport=httpx.HTTPTransport(retries=settings.github_request_retries),
        timeout=settings.github_timeout_seconds,
        headers={"User-Agent": USER_AGENT},
    )


def _rest_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": USER_AGENT,
    }


def _get_json(client: httpx.Client, url: str, token: str) -> Mapping[str, Any]:
    response = client.get(url, headers=_rest_headers(token))
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub REST response is invalid")
    return payload


def _graphql_user(
    client: httpx.Client,
    graphql_url: str,
    token: str,
    query: str,
    variables: dict[str, str],
) -> Mapping[str, Any]:
    """Run a GraphQL query and return its ``user`` object."""

    if not token:
        raise ValueError("GITHUB_TOKEN is required for GraphQL requests")

    response = client.post(
        graphql_url,
        json={"query": query, "variables": variables},
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        },
    )
    response.raise_for_status()

    payload = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        messages = "; ".join(
            str(error.get("message")) for error in errors if isinstance(error, Mapping)
        )
        raise ValueError(f"GitHub GraphQL returned errors: {messages}")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ValueError("GitHub user not found")
    return user


def _total_count(container: Mapping[str, Any], key: str) -> int:
    value = container.get(key)
    if not isinstance(value, Mapping):
        return 0
    count = value.get("totalCount")
    return count if isinstance(count, int) else 0


def _int_field(container: Mapping[str, Any], key: str) -> int:
    value = container.get(key)
    return value if isinstance(value, int) else 0


def fetch_authenticated_user(token: str, api_url: str, client: httpx.Client) -> str:
    """Return the login of the token owner from GitHub REST API."""

    payload = _get_json(client, f"{api_url.rstrip('/')}/user", token)

    raw_login = payload.get("login")
    if not isinstance(raw_login, str) or not raw_login:
        raise ValueError("GitHub user response is missing required fields")
    return raw_login


def fetch_user_info(
    login: str, token: str, api_url: str, client: httpx.Client
) -> GitHubUserInfo:
    """Fetch public profile data for ``login`` from GitHub REST API."""

    payload = _get_json(client, f"{api_url.rstrip('/')}/users/{login}", token)

    raw_login = payload.get("login")
    if not isinstance(raw_login, str) or not raw_login:
        raise ValueError("GitHub user response is missing required fields")

    return GitHubUserInfo(
        login=raw_login,
        name=payload.get("name") or None,
        avatar_url=payload.get("avatar_url") or None,
        followers=_int_field(payload, "followers"),
        following=_int_field(payload, "following"),
        public_repos=_int_field(payload, "public_repos"),
        created_at=payload.get("created_at") or None,
    )


def fetch_contribution_calendar(
    login: str,
    token: str,
    graphql_url: str,
    client: httpx.Client,
    today: date | None = None,
) -> ContributionCalendar:
    """Fetch the one-year contribution calendar for a user from GitHub GraphQL API."""

    to_day = today or date.today()
    from_day = to_day - timedelta(days=364)

    user = _graphql_user(
        client,
        graphql_url,
        token,
        CALENDAR_QUERY,
        {
            "login": login,
            "from": f"{from_day.isoformat()}T00:00:00Z",
            "to": f"{to_day.isoformat()}T23:59:59Z",
        },
    )

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    return ContributionCalendar(
        total_contributions=_int_field(calendar, "totalContributions"),
        weeks=[
            ContributionWeek(days=_contribution_days(week))
            for week in weeks
            if isinstance(week, Mapping)
        ],
    )


def _contribution_days(week: Mapping[str, Any]) -> list[ContributionDay]:
    days = week.get("contributionDays")
    if not isinstance(days, list):
        return []

    parsed: list[ContributionDay] = []
    for item in days:
        if not isinstance(item, Mapping):
            continue

        raw_date = item.get("date")
        raw_count = item.get("contributionCount")
        if not isinstance(raw_date, str) or isinstance(raw_count, bool):
            continue
        if not isinstance(raw_count, int) or raw_count < 0:
            continue

        raw_colour = item.get("color")
        parsed.append(
            ContributionDay(
                date=raw_date,
                count=raw_count,
                color=raw_colour if isinstance(raw_colour, str) else "",
            )
        )

    skipped = len(days) - len(parsed)
    if skipped:
        logger.warning("Skipped %s malformed contribution day records", skipped)
    return parsed


def fetch_totals(
    login: str, token: str, graphql_url: str, client: httpx.Client
) -> GitHubTotals:
    """Fetch activity, community and repository totals for a user."""

    user = _graphql_user(client, graphql_url, token, TOTALS_QUERY, {"login": login})

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        collection = {}

    repositories = user.get("repositories")
    if not isinstance(repositories, Mapping):
        repositories = {}
    nodes = repositories.get("nodes")
    repository_nodes = [node for node in nodes or [] if isinstance(node, Mapping)]

    return GitHubTotals(
        total_commits=_int_field(collection, "totalCommitContributions"),
        total_pull_request_reviews=_int_field(
            collection, "totalPullRequestReviewContributions"
        ),
        total_pull_requests=_int_field(collection, "totalPullRequestContributions"),
        total_issues=_int_field(collection, "totalIssueContributions"),
        total_organizations=_total_count(user, "organizations"),
        total_starred_repos=_total_count(user, "starredRepositories"),
        total_sponsors=_total_count(user, "sponsors"),
        total_watching=_total_count(user, "watching"),
        total_repositories=_int_field(repositories, "totalCount"),
        total_stargazers=sum(_int_field(node, "stargazerCount") for node in repository_nodes),
        total_forks=sum(_int_field(node, "forkCount") for node in repository_nodes),
        total_watchers=sum(_total_count(node, "watchers") for node in repository_nodes),
    )


def fetch_repository_languages(
    login: str, token: str, graphql_url: str, client: httpx.Client
) -> list[LanguageBytes]:
    """Fetch per-repository language bytes for the user's own repositories."""

    user = _graphql_user(client, graphql_url, token, LANGUAGES_QUERY, {"login": login})

    repositories = user.get("repositories")
    if not isinstance(repositories, Mapping):
        raise ValueError("GitHub repositories are missing")

    entries: list[LanguageBytes] = []
    for repository in repositories.get("nodes") or []:
        if not isinstance(repository, Mapping):
            continue
        languages = repository.get("languages")
        if not isinstance(languages, Mapping):
            continue
        for edge in languages.get("edges") or []:
            if not isinstance(edge, Mapping):
                continue
            node = edge.get("node")
            size = edge.get("size")
            if not isinstance(node, Mapping) or not isinstance(size, int):
                continue
            name = node.get("name")
            if not isinstance(name, str) or not name:
                continue
            colour = node.get("color")
            entries.append(
                LanguageBytes(
                    name=name,
                    color=colour if isinstance(colour, str) else None,
                    size=size,
                )
            )

    logger.debug("Fetched %d language entries for %s", len(entries), login)
    return entries
