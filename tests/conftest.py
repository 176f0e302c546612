"""Shared fixtures for the cassandratogcs test suite."""

from __future__ import annotations

import pytest

from cassandratogcs._constants import (
    INPUT_HOST,
    INPUT_KEYSPACE,
    INPUT_QUERY,
    INPUT_TABLE,
    OUTPUT_FORMAT,
    OUTPUT_PATH,
    OUTPUT_SAVE_MODE,
)


def make_properties(overrides: dict | None = None, drop: tuple[str, ...] = ()) -> dict[str, str]:
    """Create a valid property bag for testing.

    This is the canonical property factory for tests. Prefer this over
    hand-building dicts so that new required keys are handled in one place.
    """
    base = {
        INPUT_KEYSPACE: "ks1",
        INPUT_TABLE: "t1",
        INPUT_HOST: "10.0.0.1",
        OUTPUT_FORMAT: "parquet",
        OUTPUT_SAVE_MODE: "Append",
        OUTPUT_PATH: "gs://bucket/out",
        INPUT_QUERY: "SELECT * FROM t1",
    }
    base.update(overrides or {})
    for key in drop:
        base.pop(key, None)
    return base


def write_properties(path, properties: dict[str, str]) -> None:
    """Write a property bag as a .properties file."""
    path.write_text("".join(f"{key}={value}\n" for key, value in properties.items()))


@pytest.fixture
def valid_properties() -> dict[str, str]:
    """A complete, valid property bag with the catalog key omitted."""
    return make_properties()


@pytest.fixture
def properties_file(tmp_path, valid_properties):
    """A valid .properties file on disk."""
    path = tmp_path / "job.properties"
    write_properties(path, valid_properties)
    return path
