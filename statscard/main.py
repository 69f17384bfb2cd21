from fastapi import FastAPI

from statscard.api.routes.card import router
from statscard.core.middleware import GitHubFetchRateLimitMiddleware
from statscard.core.observability import init_logging
from statscard.core.observability import init_sentry
from statscard.settings import Settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application with logging, Sentry and rate limiting."""

    app_settings = settings or Settings()
    init_logging(app_settings)
    init_sentry(app_settings)

    app = FastAPI(title="statscard")
    app.add_middleware(
        GitHubFetchRateLimitMiddleware,
        requests_per_window=app_settings.rate_limit_per_minute,
        window_seconds=app_settings.rate_limit_window_seconds,
        trust_forwarded_for=app_settings.rate_limit_trust_forwarded_for,
    )
    app.include_router(router)
    return app


app = create_app()
