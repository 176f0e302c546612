"""Property bag loading for cassandratogcs.

Properties can come from a Java-style ``.properties`` file, a YAML file,
``CASSANDRATOGCS_*`` environment variables and ``key=value`` overrides.
Later sources win: file < environment < overrides.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import javaproperties
import yaml

from cassandratogcs._constants import (
    DEFAULT_CATALOG,
    ENV_PREFIX,
    GCS_SCHEME_PREFIX,
    INPUT_CATALOG,
    INPUT_HOST,
    INPUT_KEYSPACE,
    INPUT_QUERY,
    INPUT_TABLE,
    OUTPUT_FORMAT,
    OUTPUT_PATH,
    OUTPUT_SAVE_MODE,
    PROPERTY_KEYS,
)

from .errors import ConfigFileNotFoundError, ConfigParseError
from .resolver import resolve_config
from .schema import JobConfig

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def env_var_name(key: str) -> str:
    """Environment variable carrying ``key``.

    >>> env_var_name("cassandratogcs.input.catalog.name")
    'CASSANDRATOGCS_INPUT_CATALOG_NAME'
    """
    return key.upper().replace(".", "_")


def load_properties_file(path: str | Path) -> dict[str, str]:
    """Load a Java-style ``.properties`` file.

    Follows ``java.util.Properties`` rules: ``=``, ``:`` or whitespace
    separators, ``#`` and ``!`` comments, backslash continuations and
    escapes such as ``gs\\://`` or ``\\u00e9``.

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If an escape sequence is malformed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigFileNotFoundError(f"Configuration file not found: {path}")

    try:
        return dict(javaproperties.loads(path.read_text()))
    except ValueError as e:
        raise ConfigParseError(f"Failed to parse {path}: {e}")  # noqa: B904


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, full_key))
        elif value is None:
            flat[full_key] = ""
        elif isinstance(value, (list, tuple, set)):
            raise ConfigParseError(f"{full_key}: expected a single value, got a list")
        elif isinstance(value, bool):
            flat[full_key] = str(value).lower()
        else:
            flat[full_key] = str(value)
    return flat


def load_yaml_properties(path: str | Path) -> dict[str, str]:
    """Load a YAML file as a property bag.

    Nested mappings are flattened into dotted keys, so both
    ``cassandratogcs.input.host: h`` and the nested form are accepted.

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If YAML parsing fails, the top level is not a mapping,
            or a value is a list
    """
    path = Path(path)
    if not path.exists():
        raise ConfigFileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path) as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to parse YAML: {e}")  # noqa: B904

    if not content:
        return {}
    if not isinstance(content, Mapping):
        raise ConfigParseError(f"Expected a mapping at the top of {path}")
    return _flatten(content)


def load_file(path: str | Path) -> dict[str, str]:
    """Load a properties or YAML file, chosen by suffix."""
    path = Path(path)
    if path.suffix.lower() in _YAML_SUFFIXES:
        return load_yaml_properties(path)
    return load_properties_file(path)


def parse_overrides(overrides: Iterable[str]) -> dict[str, str]:
    """Parse ``key=value`` overrides as given on the command line.

    Raises:
        ConfigParseError: If an override has no ``=`` or an empty key
    """
    properties: dict[str, str] = {}
    for item in overrides:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigParseError(f"Invalid override {item!r}, expected KEY=VALUE")
        properties[key] = value
    return properties


def properties_from_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect recognized properties from ``CASSANDRATOGCS_*`` variables."""
    environ = os.environ if environ is None else environ
    properties: dict[str, str] = {}
    for key in PROPERTY_KEYS:
        name = env_var_name(key)
        if name in environ:
            properties[key] = environ[name]
    return properties


def load_properties(
    path: str | Path | None = None,
    overrides: Iterable[str] = (),
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Merge every property source into one bag.

    Args:
        path: Optional properties or YAML file
        overrides: ``key=value`` strings, applied last
        environ: Environment to read ``CASSANDRATOGCS_*`` variables from.
            ``None`` skips the environment entirely.

    Returns:
        Merged property bag
    """
    properties: dict[str, str] = {}
    if path is not None:
        properties.update(load_file(path))
        logger.debug("Loaded %d properties from %s", len(properties), path)
    if environ is not None:
        from_env = properties_from_env(environ)
        if from_env:
            logger.debug("Loaded %d properties from %s* variables", len(from_env), ENV_PREFIX)
        properties.update(from_env)
    properties.update(parse_overrides(overrides))
    return properties


def load_config(
    path: str | Path | None = None,
    overrides: Iterable[str] = (),
    environ: Mapping[str, str] | None = None,
) -> JobConfig:
    """Load every property source and resolve it into a JobConfig.

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If the file or an override cannot be parsed
        ConfigValidationError: If validation fails
    """
    return resolve_config(load_properties(path, overrides, environ))


def save_properties(config: JobConfig, path: str | Path) -> None:
    """Save configuration as a ``.properties`` file with canonical keys.

    Values are escaped so multi-line queries and backslashes load back intact.
    """
    path = Path(path)
    path.write_text(javaproperties.dumps(config.to_properties(), timestamp=False))


def generate_example_properties() -> str:
    """Generate an example properties file with comments.

    Returns:
        String containing a commented properties file
    """
    return f"""# Cassandra to GCS export configuration
# ======================================
# Every key is required unless marked optional.
# Any key can also be set with a {ENV_PREFIX}* environment variable
# (e.g. {env_var_name(INPUT_HOST)}) or with --set KEY=VALUE.

## Source
{INPUT_HOST}=127.0.0.1
{INPUT_KEYSPACE}=my_keyspace
{INPUT_TABLE}=my_table
{INPUT_QUERY}=SELECT * FROM casscon.my_keyspace.my_table
# Optional, defaults to {DEFAULT_CATALOG}
# {INPUT_CATALOG}={DEFAULT_CATALOG}

## Destination
# avro | parquet | orc | csv
{OUTPUT_FORMAT}=parquet
# Overwrite | ErrorIfExists | Append | Ignore
{OUTPUT_SAVE_MODE}=ErrorIfExists
# Must start with {GCS_SCHEME_PREFIX}
{OUTPUT_PATH}={GCS_SCHEME_PREFIX}my-bucket/exports/my_table
"""
