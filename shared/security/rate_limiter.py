from slowapi import Limiter
from slowapi.util import get_remote_address

from shared.config.settings import get_settings


def client_ip(request) -> str:
    """
    Key function for SlowAPI.
    Every token creation spends the server's gateway credential, so callers
    are limited per client address (X-Forwarded-For is honoured by Uvicorn
    when run with --proxy-headers).
    """
    return f"ip:{get_remote_address(request)}"


def create_token_limit() -> str:
    return get_settings().create_token_rate_limit


limiter = Limiter(key_func=client_ip, enabled=get_settings().rate_limit_enabled)
