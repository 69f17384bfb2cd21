from fastapi import APIRouter
from fastapi import HTTPException
from fastapi import Query
from fastapi import Response
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials

from statscard.api.schemas.card import CalendarStatsResponse
from statscard.api.schemas.card import ThemesResponse
from statscard.colour_profiles import available_profiles
from statscard.core.security import bearer_scheme
from statscard.core.security import extract_github_token
from statscard.models import CardData
from statscard.services.calendar_stats import compute_calendar_stats
from statscard.services.card_service import GitHubAPIError
from statscard.services.card_service import InvalidGitHubTokenError
from statscard.services.card_service import fetch_card_data
from statscard.services.card_service import render_card_svg
from statscard.settings import Settings


router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"


def _load_card_data(credentials: HTTPAuthorizationCredentials | None) -> CardData:
    token = extract_github_token(credentials)

    try:
        return fetch_card_data(token=token, settings=Settings())
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Hello World"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/themes")
def list_themes() -> ThemesResponse:
    return ThemesResponse(themes=available_profiles())


@router.get("/card/me")
def get_authenticated_user_card(
    theme: str | None = Query(default=None),
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> Response:
    """Return the SVG stats card for the authenticated GitHub user."""

    card_data = _load_card_data(credentials)
    svg_content = render_card_svg(card_data, theme or Settings().colour_profile)
    return Response(
        content=svg_content,
        media_type=SVG_MEDIA_TYPE,
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/stats/me")
def get_authenticated_user_stats(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> CalendarStatsResponse:
    """Return contribution calendar statistics for the authenticated GitHub user."""

    card_data = _load_card_data(credentials)
    stats = compute_calendar_stats(card_data.calendar)
    total = card_data.calendar.total_contributions if card_data.calendar else 0
    return CalendarStatsResponse(
        username=card_data.user.login,
        total=total,
        current_streak_days=stats.current_streak_days,
        best_streak_days=stats.best_streak_days,
        highest_in_day=stats.highest_in_day,
        average_per_day=stats.average_per_day,
    )
