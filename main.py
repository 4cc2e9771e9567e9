import uvicorn

from shared.config.settings import get_settings
from services.payment_proxy.main import proxy_app

app = proxy_app

if __name__ == "__main__":
    # Honour X-Forwarded-For so rate limits key on the real client address
    uvicorn.run("main:app", host="0.0.0.0", port=get_settings().port, proxy_headers=True)
