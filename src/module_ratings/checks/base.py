"""Check contract shared by every rating check."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from module_ratings.fetch import RequestClient


@dataclass(frozen=True, slots=True)
class CheckResult:
    key: str
    description: str
    passed: bool
    points: int
    message: str = ""
    value: float | None = None


@dataclass(slots=True)
class CheckContext:
    """Context passed to every check in a rating run."""

    client: RequestClient
    slug: str | None = None
    directory: Path | None = None
    logger: logging.Logger | None = None
    # Values computed by one check and reused by others in the same run,
    # e.g. the coverage percentage shared by the coverage tiers.
    memo: dict[str, float] = field(default_factory=dict)

    def get_repository_slug(self) -> str | None:
        return self.slug

    def get_logger(self) -> logging.Logger | None:
        return self.logger


@runtime_checkable
class Check(Protocol):
    """Protocol that all checks must implement."""

    @property
    def key(self) -> str:
        """Stable identifier, e.g. 'good_code_coverage'."""
        ...

    @property
    def points(self) -> int:
        """Points awarded to the score when the check passes."""
        ...

    def run(self, context: CheckContext) -> CheckResult:
        """Evaluate the check against the repository in ``context``."""
        ...
