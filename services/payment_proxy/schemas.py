from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ExecutionMode(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, raw: Any) -> "ExecutionMode":
        # Exact, case-sensitive match; anything else runs against the sandbox
        if raw == cls.PRODUCTION.value:
            return cls.PRODUCTION
        return cls.SANDBOX


class GatewayResult(BaseModel):
    status: int
    data: Any = None

    @property
    def payment_token_id(self) -> Any:
        # Kept exactly as the gateway sent it
        if isinstance(self.data, dict) and self.data.get("id"):
            return self.data["id"]
        return None


class CreateTokenRequest(BaseModel):
    mode: Any = ExecutionMode.SANDBOX.value
    body: Any = Field(default_factory=dict)
    access_key: Optional[str] = None


class TokenCreationOutcome(BaseModel):
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )
    mode: ExecutionMode
    access_key: Optional[str] = None
    request_body: dict[str, Any]
    response_status: int
    response_data: Any = None
    payment_token_id: Any = None

    @classmethod
    def from_result(
        cls,
        mode: ExecutionMode,
        access_key: Optional[str],
        request_body: dict[str, Any],
        result: GatewayResult,
    ) -> "TokenCreationOutcome":
        return cls(
            mode=mode,
            access_key=access_key,
            request_body=request_body,
            response_status=result.status,
            response_data=result.data,
            payment_token_id=result.payment_token_id,
        )

    def debug_view(self) -> dict[str, Any]:
        """The outcome minus its timestamp, as returned in the debug envelope."""
        return self.model_dump(mode="json", exclude={"timestamp"})


class CreateTokenResponse(BaseModel):
    status: int
    data: Any = None
    debug: Optional[dict[str, Any]] = None


class PaymentStatusResponse(BaseModel):
    status: int
    data: Any = None
    payment_token_id: str
    mode: ExecutionMode
