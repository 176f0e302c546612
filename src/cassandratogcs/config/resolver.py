"""Resolve a raw property bag into a validated JobConfig.

Resolution is a single pure pass: recognized keys are picked out of the
bag, empty values are treated as absent, and the result is validated by
``JobConfig``. Every violated constraint is collected into one
``ConfigValidationError`` so the whole bag can be fixed in one go.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from cassandratogcs._constants import OUTPUT_FORMAT, OUTPUT_SAVE_MODE, PROPERTY_KEYS

from .errors import ConfigIssue, ConfigValidationError, IssueKind
from .schema import JobConfig, OutputFormat, SaveMode

logger = logging.getLogger(__name__)

# pydantic error types that mean "no usable value was given"
_MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short"})
_ENUM_RESOLUTION_ERROR_TYPE = "enum_resolution"

_ALLOWED_VALUES: dict[str, tuple[str, ...]] = {
    OUTPUT_FORMAT: tuple(f.value for f in OutputFormat),
    OUTPUT_SAVE_MODE: tuple(m.value for m in SaveMode),
}


def _build_key_index() -> dict[str, str]:
    """Map both field names and aliases to the canonical property key."""
    index: dict[str, str] = {}
    for name, field in JobConfig.model_fields.items():
        key = field.alias or name
        index[name] = key
        index[key] = key
    return index


_KEY_BY_LOC = _build_key_index()


class ConfigResolver:
    """Turns a property bag into a ``JobConfig`` or a full list of problems.

    Holds no mutable state; one instance can be shared across threads.
    """

    keys: tuple[str, ...] = PROPERTY_KEYS

    def resolve(self, properties: Mapping[str, Any]) -> JobConfig:
        """Validate ``properties`` and build a ``JobConfig``.

        Args:
            properties: Property bag keyed by canonical property keys.
                Unrecognized keys are ignored.

        Returns:
            Validated, frozen JobConfig

        Raises:
            ConfigValidationError: With one issue per violated constraint
        """
        data = self.extract(properties)
        ignored = sum(1 for key in properties if key not in self.keys)
        if ignored:
            logger.debug("Ignoring %d unrecognized properties", ignored)

        try:
            config = JobConfig.model_validate(data)
        except ValidationError as e:
            issues = self._issues_from(e)
            logger.debug("Configuration rejected with %d issue(s)", len(issues))
            raise ConfigValidationError.from_issues(issues) from None

        logger.debug("Resolved %s", config)
        return config

    def extract(self, properties: Mapping[str, Any]) -> dict[str, Any]:
        """Pick the recognized, non-empty entries out of ``properties``."""
        data: dict[str, Any] = {}
        for key in self.keys:
            value = properties.get(key)
            if value is None or value == "":
                continue
            data[key] = value
        return data

    def _issues_from(self, error: ValidationError) -> list[ConfigIssue]:
        issues = [self._issue_from(err) for err in error.errors()]
        order = {key: i for i, key in enumerate(self.keys)}
        return sorted(issues, key=lambda issue: order.get(issue.key, len(order)))

    def _issue_from(self, err: Any) -> ConfigIssue:
        loc = err.get("loc") or ()
        key = _KEY_BY_LOC.get(str(loc[0]), str(loc[0])) if loc else ""
        error_type = err.get("type", "")

        if error_type in _MISSING_ERROR_TYPES:
            return ConfigIssue(
                key, IssueKind.MISSING_REQUIRED_FIELD, "Required property is missing or empty"
            )
        if error_type == _ENUM_RESOLUTION_ERROR_TYPE:
            return ConfigIssue(key, IssueKind.ENUM_RESOLUTION_FAILURE, err["msg"])

        allowed = _ALLOWED_VALUES.get(key)
        if allowed:
            message = f"Invalid value {err.get('input')!r}, expected one of: {', '.join(allowed)}"
        else:
            message = err["msg"]
        return ConfigIssue(key, IssueKind.PATTERN_MISMATCH, message)


_default_resolver = ConfigResolver()


def resolve_config(properties: Mapping[str, Any]) -> JobConfig:
    """Resolve ``properties`` with the shared resolver."""
    return _default_resolver.resolve(properties)
