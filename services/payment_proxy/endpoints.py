"""Maps an execution mode to one of the two fixed Zwitch environments."""
from enum import Enum
from urllib.parse import quote

from .schemas import ExecutionMode

PRODUCTION_TOKEN_URL = "https://api.zwitch.io/v1/pg/payment_token"
SANDBOX_TOKEN_URL = "https://api.zwitch.io/v1/pg/sandbox/payment_token"


class Operation(str, Enum):
    CREATE_TOKEN = "create_token"
    STATUS_LOOKUP = "status_lookup"


def payment_token_url(mode) -> str:
    if ExecutionMode.parse(mode) is ExecutionMode.PRODUCTION:
        return PRODUCTION_TOKEN_URL
    return SANDBOX_TOKEN_URL


def resolve(mode, operation: Operation, payment_token_id: str | None = None) -> str:
    base = payment_token_url(mode)
    if operation is Operation.CREATE_TOKEN:
        return base

    if not payment_token_id or not payment_token_id.strip():
        raise ValueError("payment_token_id is required for a status lookup")
    return f"{base}/{quote(payment_token_id, safe='')}/payment"
