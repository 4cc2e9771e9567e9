"""FastAPI dependency providers. Override any of these in tests via app.dependency_overrides."""
import httpx
from fastapi import Depends, Request

from shared.config.settings import Settings, get_settings

from .client import ZwitchClient
from .repository import TokenLogRepository
from .service import PaymentProxyService, TokenLogRecorder


def get_http_client(request: Request) -> httpx.AsyncClient:
    # Created and closed by the app lifespan
    return request.app.state.http_client


def get_gateway_client(
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> ZwitchClient:
    return ZwitchClient(settings.credential, http_client)


def get_proxy_service(
    settings: Settings = Depends(get_settings),
    client: ZwitchClient = Depends(get_gateway_client),
) -> PaymentProxyService:
    return PaymentProxyService(client, debug_responses=settings.debug_responses)


def get_token_log(settings: Settings = Depends(get_settings)) -> TokenLogRepository:
    return TokenLogRepository(settings.payment_token_log)


def get_recorder(repository: TokenLogRepository = Depends(get_token_log)) -> TokenLogRecorder:
    return TokenLogRecorder(repository)
