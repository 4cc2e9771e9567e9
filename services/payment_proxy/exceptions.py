class PaymentProxyError(Exception):
    """Base class for errors raised by the proxy layer."""


class GatewayConfigurationError(PaymentProxyError):
    def __init__(self, message: str = "Server missing PG_ACCESS/PG_SECRET environment variables"):
        super().__init__(message)


class GatewayTransportError(PaymentProxyError):
    """The gateway could not be reached (connection refused, DNS, timeout...)."""

    def __init__(self, operation: str, url: str, cause: Exception):
        self.operation = operation
        self.url = url
        self.cause = cause
        super().__init__(str(cause) or cause.__class__.__name__)


class TokenLogReadError(PaymentProxyError):
    def __init__(self, message: str = "Failed to read payment tokens file"):
        super().__init__(message)
