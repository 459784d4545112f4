"""Checks that inspect files in a local checkout of the repository."""

from __future__ import annotations

from pathlib import Path

from module_ratings.checks.base import CheckContext, CheckResult

LICENSE_FILES = ("LICENSE", "LICENSE.md", "LICENSE.txt", "license", "license.md", "COPYING")
CI_PATTERNS = (
    ".travis.yml",
    ".github/workflows/*.yml",
    ".github/workflows/*.yaml",
    ".gitlab-ci.yml",
    ".circleci/config.yml",
    "Jenkinsfile",
)


class _FilePresenceCheck:
    key = ""
    description = ""
    points = 5
    missing_message = "not found"

    def find(self, directory: Path) -> list[Path]:
        raise NotImplementedError

    def run(self, context: CheckContext) -> CheckResult:
        directory = context.directory
        if directory is None or not directory.is_dir():
            return CheckResult(
                key=self.key,
                description=self.description,
                passed=False,
                points=self.points,
                message="no directory provided",
            )
        found = self.find(directory)
        if not found:
            return CheckResult(
                key=self.key,
                description=self.description,
                passed=False,
                points=self.points,
                message=self.missing_message,
            )
        names = ", ".join(str(path.relative_to(directory)) for path in found[:3])
        return CheckResult(
            key=self.key,
            description=self.description,
            passed=True,
            points=self.points,
            message=names,
        )


class LicenseCheck(_FilePresenceCheck):
    key = "has_license"
    description = "Has a license file"
    missing_message = "no license file found"

    def find(self, directory: Path) -> list[Path]:
        return [directory / name for name in LICENSE_FILES if (directory / name).is_file()]


class CIConfigCheck(_FilePresenceCheck):
    key = "has_ci"
    description = "Has continuous integration configured"
    missing_message = "no CI configuration found"

    def find(self, directory: Path) -> list[Path]:
        found: list[Path] = []
        for pattern in CI_PATTERNS:
            found.extend(sorted(path for path in directory.glob(pattern) if path.is_file()))
        return found


class ReadmeCheck(_FilePresenceCheck):
    key = "has_readme"
    description = "Has a README"
    missing_message = "no README found"

    def find(self, directory: Path) -> list[Path]:
        return sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and path.stem.upper() == "README"
        )
