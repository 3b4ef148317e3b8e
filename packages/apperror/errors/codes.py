"""Shared error code constants.

Codes are unique within one service. The ``common`` service owns the generic
codes below. Services should define their own codes next to their templates
rather than extending this module.
"""

# Decode fallback identity for statuses without a structured detail.
UNKNOWN_SERVICE = "unknown"
UNKNOWN_CODE = "00000"

COMMON_SERVICE = "common"

# Common
INTERNAL = "00100"
INVALID_INPUT = "00101"
NOT_FOUND = "00102"
PERMISSION_DENIED = "00103"
TIMEOUT = "00104"
UNAVAILABLE = "00105"

# Field keys attached by normalization.
EXCEPTION_TYPE_FIELD = "exception_type"
