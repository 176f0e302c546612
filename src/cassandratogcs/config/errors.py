"""Configuration error types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IssueKind(str, Enum):
    """Kinds of constraint violation found while resolving a property bag.

    ``ENUM_RESOLUTION_FAILURE`` means a value passed its allowed-set pattern
    but has no matching enum member. That is a defect in this package, not
    bad user input.
    """

    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    PATTERN_MISMATCH = "PatternMismatch"
    ENUM_RESOLUTION_FAILURE = "EnumResolutionFailure"


@dataclass(frozen=True)
class ConfigIssue:
    """A single violated constraint, reported against its canonical key."""

    key: str
    kind: IssueKind
    message: str

    def __str__(self) -> str:
        return f"{self.key}: {self.message} ({self.kind.value})"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigFileNotFoundError(ConfigError):
    """Raised when configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when configuration file or override cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when a property bag fails validation.

    Carries every violated constraint, not just the first one.
    """

    def __init__(self, message: str, issues: list[ConfigIssue] | None = None):
        super().__init__(message)
        self.issues = issues or []

    @classmethod
    def from_issues(cls, issues: list[ConfigIssue]) -> ConfigValidationError:
        lines = [f"  - {issue}" for issue in issues]
        return cls("Configuration validation failed:\n" + "\n".join(lines), issues=issues)

    def for_key(self, key: str) -> list[ConfigIssue]:
        """Issues reported against ``key``."""
        return [issue for issue in self.issues if issue.key == key]

    def kinds(self) -> dict[str, IssueKind]:
        """Map of offending key to the kind of its first issue."""
        result: dict[str, IssueKind] = {}
        for issue in self.issues:
            result.setdefault(issue.key, issue.kind)
        return result
