"""Application configuration contract."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from module_ratings.errors import ConfigError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")
    log_json: bool | None = Field(alias="LOG_JSON", default=None)

    codecov_api_base_url: str = Field(alias="CODECOV_API_BASE_URL", default="https://codecov.io")
    scrutinizer_api_base_url: str = Field(
        alias="SCRUTINIZER_API_BASE_URL", default="https://scrutinizer-ci.com"
    )
    http_timeout_seconds: float = Field(alias="HTTP_TIMEOUT_SECONDS", default=10.0)
    http_user_agent: str = Field(
        alias="HTTP_USER_AGENT",
        default="module-ratings/0.1 (+https://github.com)",
    )

    # Percent thresholds for the coverage tiers
    coverage_good_threshold: int = Field(alias="COVERAGE_GOOD_THRESHOLD", default=40)
    coverage_great_threshold: int = Field(alias="COVERAGE_GREAT_THRESHOLD", default=75)


def validate_settings_for_env(settings: Settings) -> None:
    import logging as _logging
    import warnings

    _logger = _logging.getLogger(__name__)

    if settings.coverage_good_threshold > settings.coverage_great_threshold:
        msg = (
            "COVERAGE_GOOD_THRESHOLD is above COVERAGE_GREAT_THRESHOLD; "
            "a repository can pass the great tier while failing the good tier."
        )
        _logger.warning(msg)
        warnings.warn(msg, stacklevel=2)

    if settings.app_env != "prod":
        return

    problems: list[str] = []
    base_urls = {
        "CODECOV_API_BASE_URL": settings.codecov_api_base_url,
        "SCRUTINIZER_API_BASE_URL": settings.scrutinizer_api_base_url,
    }
    for key, value in base_urls.items():
        if not value.strip():
            problems.append(key)
        elif not value.strip().startswith("https://"):
            problems.append(f"{key}(https required)")
    if settings.http_timeout_seconds <= 0:
        problems.append("HTTP_TIMEOUT_SECONDS(must be > 0)")

    if problems:
        keys = ", ".join(sorted(set(problems)))
        raise ConfigError(f"invalid production configuration: {keys}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
