import pytest

from services.payment_proxy.endpoints import (
    PRODUCTION_TOKEN_URL,
    SANDBOX_TOKEN_URL,
    Operation,
    resolve,
)
from services.payment_proxy.schemas import ExecutionMode


def test_production_mode_selects_production_url():
    assert resolve("production", Operation.CREATE_TOKEN) == "https://api.zwitch.io/v1/pg/payment_token"
    assert resolve(ExecutionMode.PRODUCTION, Operation.CREATE_TOKEN) == PRODUCTION_TOKEN_URL


@pytest.mark.parametrize("mode", ["sandbox", None, "", "Production", "PRODUCTION", " production", "production ", "live", 1])
def test_everything_else_falls_back_to_sandbox(mode):
    assert resolve(mode, Operation.CREATE_TOKEN) == "https://api.zwitch.io/v1/pg/sandbox/payment_token"


def test_status_lookup_appends_token_and_payment():
    assert resolve("sandbox", Operation.STATUS_LOOKUP, "pt_abc123") == f"{SANDBOX_TOKEN_URL}/pt_abc123/payment"
    assert resolve("production", Operation.STATUS_LOOKUP, "pt_abc123") == f"{PRODUCTION_TOKEN_URL}/pt_abc123/payment"


def test_status_lookup_escapes_token_as_single_segment():
    assert resolve("sandbox", Operation.STATUS_LOOKUP, "pt/../x") == f"{SANDBOX_TOKEN_URL}/pt%2F..%2Fx/payment"


@pytest.mark.parametrize("token_id", [None, "", "   "])
def test_status_lookup_requires_token(token_id):
    with pytest.raises(ValueError):
        resolve("sandbox", Operation.STATUS_LOOKUP, token_id)
