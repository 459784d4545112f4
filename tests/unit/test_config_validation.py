import pytest

from module_ratings.config import get_settings, validate_settings_for_env
from module_ratings.errors import ConfigError


def test_defaults() -> None:
    settings = get_settings()
    assert settings.codecov_api_base_url == "https://codecov.io"
    assert settings.scrutinizer_api_base_url == "https://scrutinizer-ci.com"
    assert settings.coverage_good_threshold == 40
    assert settings.coverage_great_threshold == 75
    assert settings.log_json is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LOG_JSON", "true")
    settings = get_settings()
    assert settings.http_timeout_seconds == 2.5
    assert settings.log_json is True


def test_validate_settings_dev_accepts_defaults() -> None:
    validate_settings_for_env(get_settings())


def test_validate_settings_prod_rejects_plain_http(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("CODECOV_API_BASE_URL", "http://codecov.internal")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "0")
    with pytest.raises(ConfigError) as exc_info:
        validate_settings_for_env(get_settings())
    message = str(exc_info.value)
    assert "CODECOV_API_BASE_URL(https required)" in message
    assert "HTTP_TIMEOUT_SECONDS" in message
    assert "SCRUTINIZER_API_BASE_URL" not in message


def test_validate_settings_prod_accepts_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    validate_settings_for_env(get_settings())


def test_validate_settings_warns_on_inverted_thresholds(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("COVERAGE_GOOD_THRESHOLD", "90")
    monkeypatch.setenv("COVERAGE_GREAT_THRESHOLD", "50")
    with pytest.warns(UserWarning, match="COVERAGE_GOOD_THRESHOLD"):
        validate_settings_for_env(get_settings())
