"""cassandratogcs configuration module."""

from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigIssue,
    ConfigParseError,
    ConfigValidationError,
    IssueKind,
)
from .loader import (
    env_var_name,
    generate_example_properties,
    load_config,
    load_file,
    load_properties,
    load_properties_file,
    load_yaml_properties,
    parse_overrides,
    properties_from_env,
    save_properties,
)
from .resolver import ConfigResolver, resolve_config
from .schema import JobConfig, OutputFormat, SaveMode

__all__ = [
    # Config classes
    "JobConfig",
    "ConfigResolver",
    "resolve_config",
    # Enums
    "OutputFormat",
    "SaveMode",
    "IssueKind",
    # Loader functions
    "env_var_name",
    "load_config",
    "load_file",
    "load_properties",
    "load_properties_file",
    "load_yaml_properties",
    "parse_overrides",
    "properties_from_env",
    "save_properties",
    "generate_example_properties",
    # Exceptions
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigIssue",
    "ConfigParseError",
    "ConfigValidationError",
]
