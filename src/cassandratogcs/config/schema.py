"""Pydantic models for the Cassandra-to-GCS export job configuration.

A ``JobConfig`` is the validated, immutable form of the flat property bag
the export job is launched with. Fields are declared with their canonical
property keys as aliases, so a bag can be validated as-is.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from cassandratogcs._constants import (
    DEFAULT_CATALOG,
    GCS_SCHEME_PREFIX,
    INPUT_CATALOG,
    INPUT_HOST,
    INPUT_KEYSPACE,
    INPUT_QUERY,
    INPUT_TABLE,
    OUTPUT_FORMAT,
    OUTPUT_FORMAT_PATTERN,
    OUTPUT_PATH,
    OUTPUT_SAVE_MODE,
    SAVE_MODE_PATTERN,
)

# =============================================================================
# Enums
# =============================================================================


class OutputFormat(str, Enum):
    """File formats the export can write to GCS."""

    AVRO = "avro"
    PARQUET = "parquet"
    ORC = "orc"
    CSV = "csv"


class SaveMode(str, Enum):
    """Write mode applied when the output path already holds data."""

    OVERWRITE = "Overwrite"
    ERROR_IF_EXISTS = "ErrorIfExists"
    APPEND = "Append"
    IGNORE = "Ignore"

    @classmethod
    def resolve(cls, name: str) -> SaveMode:
        """Look up a save mode by its exact, case-sensitive name.

        Raises:
            ValueError: If ``name`` is not one of the known save modes
        """
        try:
            return _SAVE_MODES_BY_NAME[name]
        except KeyError:
            raise ValueError(f"Unknown save mode: {name!r}") from None

    @property
    def spark_mode(self) -> str:
        """Mode string accepted by Spark's ``DataFrameWriter.mode()``."""
        return _SPARK_MODES[self]


_SAVE_MODES_BY_NAME: dict[str, SaveMode] = {
    "Overwrite": SaveMode.OVERWRITE,
    "ErrorIfExists": SaveMode.ERROR_IF_EXISTS,
    "Append": SaveMode.APPEND,
    "Ignore": SaveMode.IGNORE,
}

_SPARK_MODES: dict[SaveMode, str] = {
    SaveMode.OVERWRITE: "overwrite",
    SaveMode.ERROR_IF_EXISTS: "errorifexists",
    SaveMode.APPEND: "append",
    SaveMode.IGNORE: "ignore",
}


# =============================================================================
# Job Configuration
# =============================================================================


class JobConfig(BaseModel):
    """Validated configuration for one Cassandra-to-GCS export run.

    Instances are frozen. The save mode is kept as the raw string it was
    given in (``save_mode_string``) and exposed resolved via ``save_mode``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    keyspace: str = Field(alias=INPUT_KEYSPACE, min_length=1)
    input_table: str = Field(alias=INPUT_TABLE, min_length=1)
    host: str = Field(alias=INPUT_HOST, min_length=1)
    output_format: str = Field(alias=OUTPUT_FORMAT, min_length=1, pattern=OUTPUT_FORMAT_PATTERN)
    save_mode_string: str = Field(alias=OUTPUT_SAVE_MODE, min_length=1, pattern=SAVE_MODE_PATTERN)
    output_path: str = Field(alias=OUTPUT_PATH, min_length=1)
    catalog_name: str = Field(default=DEFAULT_CATALOG, alias=INPUT_CATALOG, min_length=1)
    query: str = Field(alias=INPUT_QUERY, min_length=1)

    @field_validator("save_mode_string")
    @classmethod
    def validate_save_mode(cls, value: str) -> str:
        """Resolve the save mode in the same pass as the pattern check."""
        try:
            SaveMode.resolve(value)
        except ValueError as e:
            raise PydanticCustomError("enum_resolution", "{error}", {"error": str(e)}) from e
        return value

    @field_validator("output_path")
    @classmethod
    def validate_output_path(cls, value: str) -> str:
        """Only the scheme prefix is checked; the rest of the URI is not parsed."""
        if not value.startswith(GCS_SCHEME_PREFIX):
            raise PydanticCustomError(
                "scheme_mismatch",
                "Output path must start with '{prefix}'",
                {"prefix": GCS_SCHEME_PREFIX},
            )
        return value

    @property
    def save_mode(self) -> SaveMode:
        """Resolved write mode for the storage writer."""
        return SaveMode.resolve(self.save_mode_string)

    @property
    def file_format(self) -> OutputFormat:
        return OutputFormat(self.output_format)

    @classmethod
    def model_construct(cls, _fields_set: set[str] | None = None, **values: Any) -> JobConfig:
        """Build through full validation; frozen configs have no unchecked path."""
        return cls.model_validate(values)

    def model_copy(
        self, *, update: Mapping[str, Any] | None = None, deep: bool = False
    ) -> JobConfig:
        """Copy with ``update`` applied, re-validating the result."""
        return self.model_validate({**self.model_dump(), **(update or {})})

    def to_properties(self) -> dict[str, str]:
        """Return the configuration as a canonical-key property bag."""
        return self.model_dump(by_alias=True)

    def summary(self) -> str:
        """Human-readable one-line rendering, for logs only."""
        fields = [
            ("inputTable", self.input_table),
            ("keyspace", self.keyspace),
            ("outputFormat", self.output_format),
            ("outputPath", self.output_path),
            ("catalog", self.catalog_name),
            ("saveMode", self.save_mode_string),
            ("host", self.host),
            ("query", self.query),
        ]
        return "JobConfig{" + ", ".join(f"{name}={value}" for name, value in fields) + "}"

    def __str__(self) -> str:
        return self.summary()
