"""Rating suite: runs a list of checks against one repository and scores it."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from module_ratings.checks import (
    Check,
    CheckContext,
    CheckResult,
    CIConfigCheck,
    GoodCodeCoverageCheck,
    GreatCodeCoverageCheck,
    LicenseCheck,
    ReadmeCheck,
)
from module_ratings.config import Settings, get_settings
from module_ratings.fetch import HttpxRequestClient, RequestClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SuiteResult:
    results: list[CheckResult]

    @property
    def score(self) -> int:
        return sum(r.points for r in self.results if r.passed)

    @property
    def max_score(self) -> int:
        return sum(r.points for r in self.results)

    @property
    def percent(self) -> float:
        if self.max_score == 0:
            return 0.0
        return round(self.score / self.max_score * 100, 1)

    def as_dict(self) -> dict[str, object]:
        return {
            "score": self.score,
            "max_score": self.max_score,
            "percent": self.percent,
            "checks": [
                {
                    "key": r.key,
                    "description": r.description,
                    "passed": r.passed,
                    "points": r.points,
                    "message": r.message,
                    "value": r.value,
                }
                for r in self.results
            ],
        }


def default_checks(settings: Settings | None = None) -> list[Check]:
    settings = settings or get_settings()
    return [
        GoodCodeCoverageCheck(settings.coverage_good_threshold),
        GreatCodeCoverageCheck(settings.coverage_great_threshold),
        LicenseCheck(),
        CIConfigCheck(),
        ReadmeCheck(),
    ]


class Suite:
    def __init__(
        self,
        checks: Sequence[Check],
        *,
        slug: str | None = None,
        directory: Path | None = None,
        client: RequestClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._checks = list(checks)
        self._slug = slug.strip() if slug else None
        self._directory = directory
        self._client = client
        self._logger = logger

    def get_repository_slug(self) -> str | None:
        return self._slug

    def get_logger(self) -> logging.Logger | None:
        return self._logger

    def get_checks(self) -> list[Check]:
        return list(self._checks)

    def run(self) -> SuiteResult:
        owned_client: HttpxRequestClient | None = None
        client = self._client
        if client is None:
            settings = get_settings()
            owned_client = HttpxRequestClient(
                timeout_s=settings.http_timeout_seconds,
                user_agent=settings.http_user_agent,
            )
            client = owned_client

        context = CheckContext(
            client=client,
            slug=self._slug,
            directory=self._directory,
            logger=self._logger,
        )
        results: list[CheckResult] = []
        try:
            for check in self._checks:
                results.append(self._run_check(check, context))
        finally:
            if owned_client is not None:
                owned_client.close()
        return SuiteResult(results=results)

    def _run_check(self, check: Check, context: CheckContext) -> CheckResult:
        try:
            return check.run(context)
        except Exception as exc:
            logger.warning("check %s failed: %s", check.key, exc)
            return CheckResult(
                key=check.key,
                description=getattr(check, "description", check.key),
                passed=False,
                points=check.points,
                message=f"error: {exc}",
            )
