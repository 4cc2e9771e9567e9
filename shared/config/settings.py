"""
Process-wide configuration, read once from the environment (and .env).

PG_ACCESS / PG_SECRET are the only names consulted for the gateway credential.
Client-visible NEXT_PUBLIC_* variants are deliberately never read: the secret
must stay on the server.
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Mapping

import structlog
from dotenv import load_dotenv

logger = structlog.get_logger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Credential:
    access_id: str = ""
    secret: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.access_id and self.secret)

    @property
    def authorization(self) -> str:
        return f"Bearer {self.access_id}:{self.secret}"


def load_credential(environ: Mapping[str, str] | None = None) -> Credential:
    """Reads PG_ACCESS / PG_SECRET. A partial credential is treated as absent."""
    env = os.environ if environ is None else environ
    access_id = (env.get("PG_ACCESS") or "").strip()
    secret = (env.get("PG_SECRET") or "").strip()

    if not access_id or not secret:
        logger.warning(
            "gateway_credential_missing",
            detail="PG_ACCESS or PG_SECRET not set. Server will still run but gateway requests will fail.",
        )
        return Credential()
    return Credential(access_id=access_id, secret=secret)


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    credential: Credential = field(default_factory=Credential)
    port: int = 3000
    payment_token_log: Path = Path("payment_token.json")
    debug_responses: bool = False
    cors_origins: tuple[str, ...] = ("*",)
    rate_limit_enabled: bool = True
    create_token_rate_limit: str = "30/minute"
    otlp_endpoint: str | None = None
    service_name: str = "payment_proxy"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        try:
            port = int(env.get("PORT") or 3000)
        except ValueError:
            logger.warning("invalid_port", value=env.get("PORT"), fallback=3000)
            port = 3000

        origins = tuple(
            o.strip() for o in (env.get("CORS_ORIGINS") or "*").split(",") if o.strip()
        ) or ("*",)

        return cls(
            credential=load_credential(env),
            port=port,
            payment_token_log=Path(env.get("PAYMENT_TOKEN_LOG") or "payment_token.json"),
            debug_responses=_flag(env.get("PROXY_DEBUG"), False),
            cors_origins=origins,
            rate_limit_enabled=_flag(env.get("RATE_LIMIT_ENABLED"), True),
            create_token_rate_limit=env.get("CREATE_TOKEN_RATE_LIMIT") or "30/minute",
            otlp_endpoint=env.get("OTLP_ENDPOINT") or None,
            service_name=env.get("SERVICE_NAME") or "payment_proxy",
        )


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
