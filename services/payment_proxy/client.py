"""
Async client for the Zwitch payment_token API.

The credential and the httpx.AsyncClient are injected at construction time so
tests (and alternate deployments) can substitute either. Upstream statuses are
never treated as errors: whatever Zwitch answers is handed back verbatim.
"""
import time
from typing import Any

import httpx
import structlog

from shared.config.settings import Credential
from shared.observability import (
    zwitch_upstream_duration_seconds,
    zwitch_upstream_requests_total,
)

from .endpoints import Operation, resolve
from .exceptions import GatewayConfigurationError, GatewayTransportError
from .schemas import ExecutionMode, GatewayResult

logger = structlog.get_logger(__name__)


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


class ZwitchClient:

    def __init__(self, credential: Credential, http_client: httpx.AsyncClient):
        self._credential = credential
        self._http = http_client

    def _headers(self, with_body: bool = False) -> dict[str, str]:
        if not self._credential.is_configured:
            raise GatewayConfigurationError()
        headers = {
            "Authorization": self._credential.authorization,
            "Accept": "application/json",
        }
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _send(self, operation: Operation, mode: ExecutionMode, method: str, url: str, **kwargs) -> GatewayResult:
        started = time.perf_counter()
        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.RequestError as e:
            zwitch_upstream_requests_total.labels(
                operation=operation.value, mode=mode.value, status="transport_error"
            ).inc()
            logger.error("gateway_unreachable", operation=operation.value, url=url, error=str(e))
            raise GatewayTransportError(operation.value, url, e) from e
        finally:
            zwitch_upstream_duration_seconds.labels(operation=operation.value).observe(
                time.perf_counter() - started
            )

        zwitch_upstream_requests_total.labels(
            operation=operation.value, mode=mode.value, status=str(resp.status_code)
        ).inc()
        logger.info("gateway_response", operation=operation.value, mode=mode.value, status=resp.status_code)
        return GatewayResult(status=resp.status_code, data=_json_or_none(resp))

    async def create_token(self, mode, body: dict[str, Any]) -> GatewayResult:
        """POSTs `body` to the payment_token endpoint of the selected environment."""
        mode = ExecutionMode.parse(mode)
        headers = self._headers(with_body=True)
        url = resolve(mode, Operation.CREATE_TOKEN)
        return await self._send(Operation.CREATE_TOKEN, mode, "POST", url, headers=headers, json=body)

    async def get_status(self, mode, payment_token_id: str) -> GatewayResult:
        """Fetches the payment attached to a payment token."""
        mode = ExecutionMode.parse(mode)
        headers = self._headers()
        url = resolve(mode, Operation.STATUS_LOOKUP, payment_token_id)
        return await self._send(Operation.STATUS_LOOKUP, mode, "GET", url, headers=headers)
