"""Validated configuration for Cassandra to GCS export jobs."""

__version__ = "0.1.0"
