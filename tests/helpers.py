"""
Test doubles: an in-memory pump.fun upstream served through
httpx.MockTransport, a notification sink that records messages, and
payload builders.
"""

import httpx

from pumpnotifier.feed.client import LATEST_TOKEN_PATH, LATEST_TRADE_PATH, SOL_PRICE_PATH

DOWN = object()


class FakeUpstream:
    """Mutable route table. Set an attribute to a payload, `DOWN`, or an `httpx.Response`."""

    def __init__(self):
        self.latest_token = None
        self.latest_trade = None
        self.sol_price = None
        self.details: dict = {}
        self.requests: list[httpx.Request] = []

    def count(self, path: str, mint: str | None = None) -> int:
        return sum(
            1
            for r in self.requests
            if r.url.path == path and r.url.params.get("mint") == mint
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        mint = request.url.params.get("mint")

        if path == LATEST_TOKEN_PATH and mint is not None:
            reply = self.details.get(mint, httpx.Response(404))
        elif path == LATEST_TOKEN_PATH:
            reply = self.latest_token
        elif path == LATEST_TRADE_PATH:
            reply = self.latest_trade
        elif path == SOL_PRICE_PATH:
            reply = self.sol_price
        else:
            reply = httpx.Response(404)

        if reply is DOWN:
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(reply, httpx.Response):
            return httpx.Response(
                reply.status_code, headers=reply.headers, content=reply.content
            )
        return httpx.Response(200, json=reply)


class FakeSink:
    def __init__(self, ok: bool = True):
        self.ok = ok
        self.sent = []

    async def send(self, notification) -> bool:
        self.sent.append(notification)
        return self.ok


def token_payload(mint: str, market_cap: float = 0.0, name: str = "Token", symbol: str = "TKN"):
    return {"mint": mint, "name": name, "symbol": symbol, "market_cap": market_cap}


def trade_payload(mint: str, token_amount: float = 1000.0, sol_amount: float = 0.5):
    return {"mint": mint, "token_amount": token_amount, "sol_amount": sol_amount}

