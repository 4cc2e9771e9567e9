"""
Live smoke run against a running proxy (and, through it, the Zwitch sandbox).

    PG_ACCESS=ak_test_... PG_SECRET=sk_test_... python main.py
    python tests/run_smoke.py [http://localhost:3000]

Not collected by pytest.
"""
import asyncio
import sys
import uuid

import httpx
from termcolor import colored

PROXY_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000"

TOKEN_BODY = {
    "amount": "1",
    "currency": "INR",
    "contact_number": "9999999999",
    "email_id": "smoke@example.com",
    "mtx": f"smoke_{uuid.uuid4().hex[:12]}",
}


def report(name: str, ok: bool, detail: str):
    badge = colored("PASS", "green") if ok else colored("FAIL", "red")
    print(f"   {badge} | {name}: {detail}")
    return ok


async def check_health(client: httpx.AsyncClient) -> bool:
    resp = await client.get("/health")
    return report("health", resp.status_code == 200, str(resp.json()))


async def check_history(client: httpx.AsyncClient) -> bool:
    resp = await client.get("/payment-tokens")
    ok = resp.status_code == 200 and isinstance(resp.json(), list)
    return report("history", ok, f"{len(resp.json()) if ok else resp.text} records")


async def check_create_and_status(client: httpx.AsyncClient) -> bool:
    resp = await client.post("/create-payment-token", json={"mode": "sandbox", "body": TOKEN_BODY})
    envelope = resp.json()
    ok = envelope.get("status") == resp.status_code
    token_id = (envelope.get("data") or {}).get("id")
    report("create token", ok and bool(token_id), f"{resp.status_code} {token_id or envelope}")
    if not token_id:
        return False

    resp = await client.get(f"/payment-status/{token_id}", params={"mode": "sandbox"})
    body = resp.json()
    ok = body.get("payment_token_id") == token_id and body.get("status") == resp.status_code
    return report("payment status", ok, f"{resp.status_code} {body.get('data')}")


async def check_validation(client: httpx.AsyncClient) -> bool:
    bad_body = await client.post("/create-payment-token", json={"body": "not-an-object"})
    wrong_method = await client.get("/create-payment-token")
    ok = bad_body.status_code == 400 and wrong_method.status_code == 405
    return report("validation", ok, f"{bad_body.status_code}/{wrong_method.status_code}")


async def main():
    print(colored(f"🔎 Smoke testing {PROXY_URL}", "cyan"))
    async with httpx.AsyncClient(base_url=PROXY_URL, timeout=30.0) as client:
        results = [
            await check_health(client),
            await check_history(client),
            await check_validation(client),
            await check_create_and_status(client),
        ]
    sys.exit(0 if all(results) else 1)


if __name__ == "__main__":
    asyncio.run(main())
