"""Canonical field names for structured logs and error payloads.

The error keys are also the log JSON contract; gateways and log pipelines
parse them by name.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"

# Correlation.
TRACE_ID = "trace_id"

# Error payload.
ERROR = "error"
SERVICE = "service"
CODE = "code"
FIELDS = "fields"

# Common service-level fields.
ENVIRONMENT = "environment"
