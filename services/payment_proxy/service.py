from typing import Any, Optional

import structlog

from shared.observability import zwitch_token_log_writes_total

from .client import ZwitchClient
from .repository import TokenLogRepository
from .schemas import (
    CreateTokenResponse,
    ExecutionMode,
    PaymentStatusResponse,
    TokenCreationOutcome,
)

logger = structlog.get_logger(__name__)


class TokenLogRecorder:
    """
    Detached unit of work that persists one outcome.
    Runs after the response has been sent; a failure here is logged, counted
    and kept in `last_error`, but never reaches the HTTP caller.
    """

    def __init__(self, repository: TokenLogRepository):
        self.repository = repository
        self.last_error: Optional[Exception] = None

    async def record(self, outcome: TokenCreationOutcome) -> bool:
        try:
            await self.repository.append(outcome)
        except (OSError, ValueError, TypeError) as e:
            self.last_error = e
            zwitch_token_log_writes_total.labels(result="failed").inc()
            logger.error("token_log_write_failed", path=str(self.repository.path), error=str(e))
            return False
        zwitch_token_log_writes_total.labels(result="success").inc()
        return True


class PaymentProxyService:

    def __init__(self, client: ZwitchClient, debug_responses: bool = False):
        self.client = client
        self.debug_responses = debug_responses

    async def create_token(
        self, mode: ExecutionMode, body: dict[str, Any], access_key: Optional[str]
    ) -> tuple[CreateTokenResponse, TokenCreationOutcome]:
        """Returns the client envelope plus the outcome the caller should persist."""
        result = await self.client.create_token(mode, body)
        outcome = TokenCreationOutcome.from_result(mode, access_key, body, result)

        envelope = CreateTokenResponse(status=result.status, data=result.data)
        if self.debug_responses:
            envelope.debug = outcome.debug_view()
        return envelope, outcome

    async def get_status(self, mode: ExecutionMode, payment_token_id: str) -> PaymentStatusResponse:
        result = await self.client.get_status(mode, payment_token_id)
        return PaymentStatusResponse(
            status=result.status,
            data=result.data,
            payment_token_id=payment_token_id,
            mode=mode,
        )
