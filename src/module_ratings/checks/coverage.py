"""Code coverage checks with codecov.io primary and Scrutinizer fallback."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from module_ratings.checks.base import CheckContext, CheckResult
from module_ratings.config import get_settings
from module_ratings.fetch import fetch_json

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "master"
SCRUTINIZER_QUALITY_METRIC = "scrutinizer.quality"


def _dig(payload: Mapping[str, Any], *keys: str) -> Any:
    """Walk nested mappings, returning None when any key is missing."""
    current: Any = payload
    for key in keys:
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def _as_number(value: Any) -> float | int | None:
    """Coerce a provider value to a finite number, or None."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value) if isinstance(value, int | float) else float(str(value).strip())
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return value if isinstance(value, int) else number


def _status_ok(payload: Mapping[str, Any]) -> bool:
    status = _dig(payload, "meta", "status")
    if status is None:
        return True
    try:
        return int(status) == 200
    except (TypeError, ValueError, OverflowError):
        return False


class CodeCoverageCheck:
    """Looks up a repository's coverage percentage and compares it to a threshold."""

    key = "code_coverage"
    description = "Code coverage is reported"
    points = 0

    def __init__(
        self,
        threshold: int = 0,
        *,
        codecov_base_url: str | None = None,
        scrutinizer_base_url: str | None = None,
    ) -> None:
        settings = get_settings()
        self._threshold = threshold
        self._codecov_base_url = (codecov_base_url or settings.codecov_api_base_url).rstrip("/")
        self._scrutinizer_base_url = (
            scrutinizer_base_url or settings.scrutinizer_api_base_url
        ).rstrip("/")

    def get_threshold(self) -> int:
        return self._threshold

    def set_threshold(self, threshold: int) -> CodeCoverageCheck:
        self._threshold = threshold
        return self

    def get_coverage(self, context: CheckContext) -> float | int:
        """Coverage percentage from codecov.io, else Scrutinizer, else 0."""
        slug = context.get_repository_slug()
        if not slug:
            return 0

        memo_key = f"coverage:{self._codecov_base_url}|{self._scrutinizer_base_url}|{slug}"
        if memo_key in context.memo:
            return context.memo[memo_key]

        coverage = self.get_codecov_coverage(context)
        if coverage is None:
            coverage = self.get_scrutinizer_coverage(context)
        if coverage is None:
            coverage = 0
        context.memo[memo_key] = coverage
        return coverage

    def get_codecov_coverage(self, context: CheckContext) -> float | int | None:
        """Coverage from codecov.io, or None when the repository has no usable data."""
        slug = context.get_repository_slug()
        base = f"{self._codecov_base_url}/api/gh/{slug}"

        branches = fetch_json(context.client, f"{base}/branches", context.get_logger())
        if branches.payload is None:
            return None
        # Not set up (404)
        if not _status_ok(branches.payload):
            return None

        default_branch = _dig(branches.payload, "repo", "branch")
        if default_branch is None:
            default_branch = DEFAULT_BRANCH

        detail = fetch_json(context.client, f"{base}/branch/{default_branch}", context.get_logger())
        if detail.payload is None:
            return None
        if not _status_ok(detail.payload):
            return None

        value = _dig(detail.payload, "commit", "totals", "c")
        if value is None:
            return 0
        return _as_number(value)

    def get_scrutinizer_coverage(self, context: CheckContext) -> float | int | None:
        """Quality score from Scrutinizer as a percentage, or None when unavailable."""
        slug = context.get_repository_slug()
        url = f"{self._scrutinizer_base_url}/api/repositories/g/{slug}"

        result = fetch_json(context.client, url, context.get_logger())
        if result.payload is None:
            return None

        default_branch = result.payload.get("default_branch")
        if default_branch is None:
            default_branch = DEFAULT_BRANCH
        metrics = _dig(
            result.payload,
            "applications",
            str(default_branch),
            "index",
            "_embedded",
            "project",
            "metric_values",
        )
        if not isinstance(metrics, Mapping):
            return None

        if metrics.get(SCRUTINIZER_QUALITY_METRIC) is None:
            return 0
        quality = _as_number(metrics[SCRUTINIZER_QUALITY_METRIC])
        if quality is None:
            return None
        return round(quality * 100, 2)

    def run(self, context: CheckContext) -> CheckResult:
        if not context.get_repository_slug():
            return CheckResult(
                key=self.key,
                description=self.description,
                passed=False,
                points=self.points,
                message="no repository slug provided",
                value=0,
            )
        coverage = self.get_coverage(context)
        passed = coverage >= self._threshold
        logger.debug("%s: coverage=%s threshold=%s", self.key, coverage, self._threshold)
        return CheckResult(
            key=self.key,
            description=self.description,
            passed=passed,
            points=self.points,
            message=f"{coverage:g}% (threshold {self._threshold}%)",
            value=coverage,
        )


class GoodCodeCoverageCheck(CodeCoverageCheck):
    key = "good_code_coverage"
    description = "Has good code coverage"
    points = 5

    def __init__(self, threshold: int | None = None, **kwargs: str | None) -> None:
        if threshold is None:
            threshold = get_settings().coverage_good_threshold
        super().__init__(threshold, **kwargs)


class GreatCodeCoverageCheck(CodeCoverageCheck):
    key = "great_code_coverage"
    description = "Has great code coverage"
    points = 5

    def __init__(self, threshold: int | None = None, **kwargs: str | None) -> None:
        if threshold is None:
            threshold = get_settings().coverage_great_threshold
        super().__init__(threshold, **kwargs)
