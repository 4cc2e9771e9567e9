"""
HTTP bridge between the browser UI and the Zwitch gateway.

Every gateway-backed route checks the server credential first, then validates
its input, so a misconfigured server never attempts a network call and a
malformed request never reaches the gateway. Upstream statuses are mirrored
back unchanged.
"""
from typing import Optional

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from shared.config.settings import Settings, get_settings
from shared.security import create_token_limit, limiter

from .dependencies import get_proxy_service, get_recorder, get_token_log
from .exceptions import GatewayConfigurationError, PaymentProxyError
from .repository import TokenLogRepository
from .schemas import CreateTokenRequest, ExecutionMode
from .service import PaymentProxyService, TokenLogRecorder

logger = structlog.get_logger(__name__)

router = APIRouter()
public_router = APIRouter()  # For any public endpoints (e.g. health check)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "payment_proxy", "status": "running"}


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def _internal_error(e: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal server error", "details": str(e)},
    )


def _require_credential(settings: Settings) -> None:
    if not settings.credential.is_configured:
        raise GatewayConfigurationError()


# --- TOKEN CREATION ---
@router.post("/create-payment-token")
@limiter.limit(create_token_limit)
async def create_payment_token(
    request: Request,                        # REQUIRED: slowapi keys the limit on the client address
    background_tasks: BackgroundTasks,
    payload: Optional[CreateTokenRequest] = None,
    settings: Settings = Depends(get_settings),
    service: PaymentProxyService = Depends(get_proxy_service),
    recorder: TokenLogRecorder = Depends(get_recorder),
):
    payload = payload or CreateTokenRequest()
    _require_credential(settings)

    if not isinstance(payload.body, dict):
        return _bad_request("body must be a JSON object")

    mode = ExecutionMode.parse(payload.mode)
    try:
        envelope, outcome = await service.create_token(mode, payload.body, payload.access_key)
    except PaymentProxyError:
        raise
    except Exception as e:
        logger.exception("create_payment_token_failed")
        return _internal_error(e)

    # Persisted after the response is sent; failures stay inside the recorder
    background_tasks.add_task(recorder.record, outcome)

    content = envelope.model_dump(mode="json")
    if envelope.debug is None:
        content.pop("debug")
    return JSONResponse(status_code=envelope.status, content=content)


# --- STATUS LOOKUP ---
async def _lookup_status(
    payment_token_id: Optional[str],
    mode: Optional[str],
    settings: Settings,
    service: PaymentProxyService,
):
    _require_credential(settings)

    if not payment_token_id or not payment_token_id.strip():
        return _bad_request("payment_token_id is required")

    try:
        result = await service.get_status(ExecutionMode.parse(mode), payment_token_id)
    except PaymentProxyError:
        raise
    except Exception as e:
        logger.exception("payment_status_failed", payment_token_id=payment_token_id)
        return _internal_error(e)

    return JSONResponse(status_code=result.status, content=result.model_dump(mode="json"))


@router.get("/payment-status/{payment_token_id}")
async def payment_status(
    payment_token_id: str,
    mode: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
    service: PaymentProxyService = Depends(get_proxy_service),
):
    return await _lookup_status(payment_token_id, mode, settings, service)


@router.get("/payment-status")
async def payment_status_by_query(
    payment_token_id: Optional[str] = Query(default=None),
    mode: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
    service: PaymentProxyService = Depends(get_proxy_service),
):
    """Query-string form: /payment-status?payment_token_id=...&mode=..."""
    return await _lookup_status(payment_token_id, mode, settings, service)


# --- HISTORY ---
@router.get("/payment-tokens")
async def list_payment_tokens(repository: TokenLogRepository = Depends(get_token_log)):
    try:
        return await repository.read_all()
    except PaymentProxyError:
        raise
    except Exception as e:
        logger.exception("list_payment_tokens_failed")
        return _internal_error(e)
