import os

from typed_http_client.utils.environment import (
    safe_float,
    safe_positive_int,
    str2bool,
)

# Timeout (seconds) applied by sessions when a request does not carry its own
DEFAULT_TIMEOUT = safe_float(os.getenv("HTTP_CLIENT_DEFAULT_TIMEOUT", ""), 30.0)

# Worker threads used by sessions backed by blocking HTTP libraries
THREAD_POOL_SIZE = safe_positive_int(os.getenv("HTTP_CLIENT_THREAD_POOL_SIZE", ""), 8)

LOG_LEVEL = os.getenv("HTTP_CLIENT_LOG_LEVEL", "WARNING").upper()

WARNINGS_DISABLED = str2bool(os.getenv("HTTP_CLIENT_WARNINGS_DISABLED", "False"))


class TypedHTTPClientWarning(Warning):
    """Class used for warnings emitted by the typed HTTP client"""

    pass
