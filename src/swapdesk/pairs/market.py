"""Pair priced from live USD quotes.

Prices come from a CoinGecko-compatible ``/simple/price`` endpoint.
Settlement is delegated to an injected coroutine; this module never
moves funds itself.
"""

import logging
import time
from decimal import Decimal, InvalidOperation
from typing import Awaitable, Callable, Optional

import httpx

from swapdesk.pairs.base import (
    EstimateFailure,
    EstimateRequest,
    ExchangeFailure,
    ExchangeReceipt,
    ExchangeRequest,
    Pair,
    parse_amount,
)

logger = logging.getLogger(__name__)

COINGECKO_API = "https://api.coingecko.com/api/v3"

# Asset id -> CoinGecko coin id
COINGECKO_IDS: dict[str, str] = {
    "eth": "ethereum",
    "dai": "dai",
    "xdai": "xdai",
    "usdc": "usd-coin",
}

# settle(pair, from_asset, to_asset, request, to_amount) -> receipt
Settler = Callable[[Pair, str, str, ExchangeRequest, Decimal], Awaitable[ExchangeReceipt]]


class MarketPair(Pair):
    """Pair converting through USD prices fetched over HTTP."""

    def __init__(
        self,
        asset_a: str,
        asset_b: str,
        price_ids: Optional[dict[str, str]] = None,
        settle: Optional[Settler] = None,
        api_url: str = COINGECKO_API,
        timeout: float = 10.0,
        cache_seconds: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize market pair.

        Args:
            asset_a: First asset id
            asset_b: Second asset id
            price_ids: Asset id -> price API coin id (defaults to COINGECKO_IDS)
            settle: Coroutine that performs the actual exchange
            api_url: Price API base URL
            timeout: Request timeout in seconds
            cache_seconds: Price cache lifetime (0 disables caching)
            transport: Custom httpx transport (used by tests)
            clock: Time source for cache expiry
        """
        super().__init__(asset_a, asset_b)
        self.price_ids = price_ids or COINGECKO_IDS
        self.settle = settle
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.cache_seconds = cache_seconds
        self._transport = transport
        self._clock = clock
        # asset id -> (price, fetched_at)
        self._price_cache: dict[str, tuple[Decimal, float]] = {}

    async def get_price_usd(self, asset_id: str) -> Decimal:
        """Get current USD price for an asset.

        Raises:
            EstimateFailure: If the price cannot be fetched or parsed
        """
        coin_id = self.price_ids.get(asset_id)
        if not coin_id:
            raise EstimateFailure(f"No price source for {asset_id}")

        now = self._clock()
        cached = self._price_cache.get(asset_id)
        if cached is not None and now - cached[1] < self.cache_seconds:
            return cached[0]

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.api_url}/simple/price",
                    params={"ids": coin_id, "vs_currencies": "usd"},
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Price fetch failed for {asset_id}: {e}")
            raise EstimateFailure(f"Price unavailable for {asset_id}") from e

        price = data.get(coin_id, {}).get("usd")
        try:
            price_decimal = Decimal(str(price))
        except InvalidOperation:
            price_decimal = Decimal("0")
        if price is None or not price_decimal.is_finite() or price_decimal <= 0:
            raise EstimateFailure(f"Price unavailable for {asset_id}")

        self._price_cache[asset_id] = (price_decimal, now)
        return price_decimal

    async def _convert(self, from_asset: str, to_asset: str, amount: Decimal) -> Decimal:
        from_price = await self.get_price_usd(from_asset)
        to_price = await self.get_price_usd(to_asset)
        try:
            return (amount * from_price / to_price).quantize(Decimal("0.00000001"))
        except InvalidOperation as e:
            raise EstimateFailure(f"Amount {amount} {from_asset} is out of range") from e

    async def _estimate(self, from_asset: str, to_asset: str, request: EstimateRequest) -> Decimal:
        amount = parse_amount(request.amount)
        to_amount = await self._convert(from_asset, to_asset, amount)
        logger.debug(f"Market estimate: {amount} {from_asset} -> {to_amount} {to_asset}")
        return to_amount

    async def _exchange(
        self, from_asset: str, to_asset: str, request: ExchangeRequest
    ) -> ExchangeReceipt:
        if self.settle is None:
            raise ExchangeFailure("settlement not configured")

        try:
            amount = parse_amount(request.amount)
            to_amount = await self._convert(from_asset, to_asset, amount)
        except (ValueError, EstimateFailure) as e:
            raise ExchangeFailure(str(e)) from e

        logger.info(f"Settling {amount} {from_asset} -> {to_asset} via {self.name}")
        return await self.settle(self, from_asset, to_asset, request, to_amount)

    async def estimate_a_to_b(self, request: EstimateRequest) -> Decimal:
        return await self._estimate(self.asset_a, self.asset_b, request)

    async def estimate_b_to_a(self, request: EstimateRequest) -> Decimal:
        return await self._estimate(self.asset_b, self.asset_a, request)

    async def exchange_a_to_b(self, request: ExchangeRequest) -> ExchangeReceipt:
        return await self._exchange(self.asset_a, self.asset_b, request)

    async def exchange_b_to_a(self, request: ExchangeRequest) -> ExchangeReceipt:
        return await self._exchange(self.asset_b, self.asset_a, request)
