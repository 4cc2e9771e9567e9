"""
Zwitch payment proxy app: token creation, status lookup and token history.

Observability (structured logs, traces, /metrics), CORS for the browser UI and
per-IP rate limiting on token creation are wired here; the routes live in
router.py.
"""
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.settings import get_settings
from shared.observability import setup_observability
from shared.security import limiter

from .exceptions import GatewayConfigurationError, GatewayTransportError, TokenLogReadError
from .router import router, public_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pooled outbound client per process; httpx default timeouts apply
    app.state.http_client = httpx.AsyncClient()
    logger.info("payment_proxy_started", log_file=str(get_settings().payment_token_log))
    try:
        yield
    finally:
        await app.state.http_client.aclose()


settings = get_settings()

proxy_app = FastAPI(
    title="Zwitch Payment Proxy",
    version="1.0.0",
    description="Server-side proxy for Zwitch payment_token creation and status lookup.",
    lifespan=lifespan,
)

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(proxy_app, settings)

# --- SECURITY SETUP ---
proxy_app.state.limiter = limiter
proxy_app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

proxy_app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# --- ERROR ENVELOPES ---
@proxy_app.exception_handler(GatewayConfigurationError)
async def configuration_error_handler(request, exc: GatewayConfigurationError):
    logger.error("gateway_not_configured", path=request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})


@proxy_app.exception_handler(GatewayTransportError)
async def transport_error_handler(request, exc: GatewayTransportError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal server error", "details": str(exc)},
    )


@proxy_app.exception_handler(TokenLogReadError)
async def token_log_error_handler(request, exc: TokenLogReadError):
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})


@proxy_app.exception_handler(RequestValidationError)
async def validation_error_handler(request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid request", "details": jsonable_encoder(exc.errors())},
    )


@proxy_app.exception_handler(StarletteHTTPException)
async def http_error_handler(request, exc: StarletteHTTPException):
    # Keeps headers such as `Allow` on 405 responses
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@proxy_app.exception_handler(Exception)
async def unhandled_error_handler(request, exc: Exception):
    logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal server error", "details": str(exc)},
    )


proxy_app.include_router(public_router)
proxy_app.include_router(router)
