from pydantic import AliasChoices
from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values use the `GITSTAT_` prefix, except the token which is read from
    the conventional `GITHUB_TOKEN` variable. No config files are read.
    """

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("github_token", "GITHUB_TOKEN"),
    )
    github_graphql_url: str = "https://api.github.com/graphql"
    window_days: int = 365
    request_timeout: float = 20.0
    log_level: str = "WARNING"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.0

    model_config = SettingsConfigDict(env_prefix="GITSTAT_", extra="ignore")
