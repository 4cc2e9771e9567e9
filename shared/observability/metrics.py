from prometheus_client import Counter, Histogram

# Upstream gateway calls
zwitch_upstream_requests_total = Counter(
    "zwitch_upstream_requests_total",
    "Total calls made to the Zwitch gateway",
    ["operation", "mode", "status"]  # status: HTTP code, or 'transport_error'
)

zwitch_upstream_duration_seconds = Histogram(
    "zwitch_upstream_duration_seconds",
    "Zwitch gateway call duration in seconds",
    ["operation"]
)

# Token log persistence
zwitch_token_log_writes_total = Counter(
    "zwitch_token_log_writes_total",
    "Payment token log appends",
    ["result"]  # Labels: 'success', 'failed'
)
