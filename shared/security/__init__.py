from .rate_limiter import limiter, client_ip, create_token_limit

__all__ = [
    "limiter",
    "client_ip",
    "create_token_limit",
]
