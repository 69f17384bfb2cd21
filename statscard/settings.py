from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    github_token: str | None = None
    github_login: str | None = None
    github_api_url: str = "https://api.github.com"
    github_graphql_url: str = "https://api.github.com/graphql"
    github_timeout_seconds: float = 20.0
    github_request_retries: int = 2
    colour_profile: str = "default"
    output_path: str = "output.svg"
    github_step_summary: str | None = None
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60
    rate_limit_trust_forwarded_for: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
