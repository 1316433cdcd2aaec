"""
HTTP client for the pump.fun frontend API.

Example responses:
    GET /coins/latest   -> {"mint": "...", "name": "...", "symbol": "...", "market_cap": 31.5}
    GET /trades/latest  -> {"mint": "...", "token_amount": 1200.0, "sol_amount": 0.4}
                           (sometimes a list of such objects)
    GET /sol-price      -> {"solPrice": 142.17}
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from pumpnotifier.exceptions import FeedContractError, FeedError
from pumpnotifier.models import SolPrice, TokenInfo, TradeInfo

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://frontend-api.pump.fun"

LATEST_TOKEN_PATH = "/coins/latest"
LATEST_TRADE_PATH = "/trades/latest"
SOL_PRICE_PATH = "/sol-price"
TOKEN_DETAIL_PATH = "/coins/latest"


class PumpFunClient:
    """
    Thin async wrapper around the four feed endpoints.

    ## Retry Strategy
    A failed GET (network error, timeout, non-2xx, non-JSON body) is retried
    once after a fixed `retry_delay`. If the retry also fails a `FeedError`
    is raised and the caller abandons its cycle. Shape problems raise
    `FeedContractError` immediately and are never retried.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        retries: int = 1,
        retry_delay: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.retries = retries
        self.retry_delay = retry_delay
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout
        )

    async def __aenter__(self) -> "PumpFunClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, path: str, params: dict | None = None) -> Any:
        last_error: Exception | None = None

        for attempt in range(self.retries + 1):
            if attempt > 0:
                logger.info(f"Retrying {path} in {self.retry_delay} seconds...")
                await asyncio.sleep(self.retry_delay)

            try:
                response = await self._client.get(path, params=params)
                response.raise_for_status()
                return response.json()
            except (httpx.HTTPError, ValueError) as e:
                # ValueError: body is not JSON (maintenance pages, truncated replies)
                last_error = e
                logger.warning(f"GET {path} failed (attempt {attempt + 1}): {e}")

        raise FeedError(
            f"GET {path} failed after {self.retries + 1} attempt(s)"
        ) from last_error

    async def latest_token(self) -> TokenInfo:
        data = await self._get_json(LATEST_TOKEN_PATH)
        return self._parse_token(data, LATEST_TOKEN_PATH)

    async def token_detail(self, mint: str) -> TokenInfo:
        data = await self._get_json(TOKEN_DETAIL_PATH, params={"mint": mint})
        return self._parse_token(data, TOKEN_DETAIL_PATH)

    async def latest_trades(self) -> list[TradeInfo]:
        """
        Fetch the latest trade record(s).

        ## Returns
        - A list of trades; a single-object payload becomes a one-item list

        ## Raises
        - `FeedContractError` when the payload is neither an object nor a
          list of objects, or when a record lacks a `mint`
        """
        data = await self._get_json(LATEST_TRADE_PATH)

        if isinstance(data, dict):
            records = [data]
        elif isinstance(data, list):
            records = data
        else:
            raise FeedContractError(
                f"{LATEST_TRADE_PATH} returned {type(data).__name__}, expected object or list"
            )

        try:
            return [TradeInfo.model_validate(record) for record in records]
        except ValidationError as e:
            raise FeedContractError(f"{LATEST_TRADE_PATH} record invalid: {e}") from e

    async def sol_price(self) -> float:
        data = await self._get_json(SOL_PRICE_PATH)
        try:
            return SolPrice.model_validate(data).sol_price
        except ValidationError as e:
            raise FeedContractError(f"{SOL_PRICE_PATH} payload invalid: {e}") from e

    @staticmethod
    def _parse_token(data: Any, path: str) -> TokenInfo:
        if not isinstance(data, dict):
            raise FeedContractError(
                f"{path} returned {type(data).__name__}, expected object"
            )
        try:
            return TokenInfo.model_validate(data)
        except ValidationError as e:
            raise FeedContractError(f"{path} payload invalid: {e}") from e
