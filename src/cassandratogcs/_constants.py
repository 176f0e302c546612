"""Shared constants for cassandratogcs."""

# Prefix shared by every recognized property key
PROPERTY_NAMESPACE = "cassandratogcs"

INPUT_KEYSPACE = "cassandratogcs.input.keyspace"
INPUT_TABLE = "cassandratogcs.input.table"
INPUT_HOST = "cassandratogcs.input.host"
OUTPUT_FORMAT = "cassandratogcs.output.format"
OUTPUT_SAVE_MODE = "cassandratogcs.output.savemode"
OUTPUT_PATH = "cassandratogcs.output.path"
INPUT_CATALOG = "cassandratogcs.input.catalog.name"
INPUT_QUERY = "cassandratogcs.input.query"

# Canonical key order. Validation issues are reported in this order.
PROPERTY_KEYS = (
    INPUT_KEYSPACE,
    INPUT_TABLE,
    INPUT_HOST,
    OUTPUT_FORMAT,
    OUTPUT_SAVE_MODE,
    OUTPUT_PATH,
    INPUT_CATALOG,
    INPUT_QUERY,
)

# Spark Cassandra connector catalog registered by the export job
DEFAULT_CATALOG = "casscon"

GCS_SCHEME_PREFIX = "gs://"

# Full-match patterns. Keep in lockstep with OutputFormat / SaveMode.
OUTPUT_FORMAT_PATTERN = r"^(?:avro|parquet|orc|csv)$"
SAVE_MODE_PATTERN = r"^(?:Overwrite|ErrorIfExists|Append|Ignore)$"

# Default properties file picked up by the CLI
DEFAULT_CONFIG = "cassandratogcs.properties"

# Environment variables carrying properties, e.g. CASSANDRATOGCS_INPUT_HOST
ENV_PREFIX = "CASSANDRATOGCS_"
