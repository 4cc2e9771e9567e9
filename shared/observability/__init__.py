from .setup import setup_observability, configure_logging
from .metrics import (
    zwitch_upstream_requests_total,
    zwitch_upstream_duration_seconds,
    zwitch_token_log_writes_total,
)
