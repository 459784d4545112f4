"""Rating checks."""

from module_ratings.checks.base import Check, CheckContext, CheckResult
from module_ratings.checks.coverage import (
    CodeCoverageCheck,
    GoodCodeCoverageCheck,
    GreatCodeCoverageCheck,
)
from module_ratings.checks.repository import CIConfigCheck, LicenseCheck, ReadmeCheck

__all__ = [
    "CIConfigCheck",
    "Check",
    "CheckContext",
    "CheckResult",
    "CodeCoverageCheck",
    "GoodCodeCoverageCheck",
    "GreatCodeCoverageCheck",
    "LicenseCheck",
    "ReadmeCheck",
]
