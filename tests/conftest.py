"""Pytest configuration and fixtures."""

import asyncio
import os
from decimal import Decimal
from typing import Optional

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DRY_RUN"] = "true"
os.environ["DEBUG"] = "true"

from swapdesk.assets import Asset, AssetRegistry
from swapdesk.pairs.base import (
    EstimateRequest,
    ExchangeReceipt,
    ExchangeRequest,
    Pair,
    PairCatalog,
)
from swapdesk.pairs.simulated import SimulatedPair

ACCOUNT = "0x1111111111111111111111111111111111111111"


class ControlledPair(Pair):
    """Pair whose estimates resolve only when the test says so.

    Each estimate waits on a future keyed by amount text; ``resolve`` and
    ``fail`` complete it. Every call is recorded.
    """

    def __init__(self, asset_a: str, asset_b: str):
        super().__init__(asset_a, asset_b)
        self.estimate_calls: list[tuple[str, EstimateRequest]] = []
        self.exchange_calls: list[tuple[str, ExchangeRequest]] = []
        self._estimates: dict[str, asyncio.Future] = {}
        self._exchange: Optional[asyncio.Future] = None

    def _future(self, amount: str) -> asyncio.Future:
        if amount not in self._estimates:
            self._estimates[amount] = asyncio.get_running_loop().create_future()
        return self._estimates[amount]

    def resolve(self, amount: str, value: Decimal) -> None:
        self._future(amount).set_result(value)

    def fail(self, amount: str, error: Exception) -> None:
        self._future(amount).set_exception(error)

    def exchange_future(self) -> asyncio.Future:
        if self._exchange is None:
            self._exchange = asyncio.get_running_loop().create_future()
        return self._exchange

    async def _estimate(self, direction: str, request: EstimateRequest) -> Decimal:
        self.estimate_calls.append((direction, request))
        return await self._future(request.amount)

    async def _exchange_call(self, direction: str, request: ExchangeRequest) -> ExchangeReceipt:
        self.exchange_calls.append((direction, request))
        return await self.exchange_future()

    async def estimate_a_to_b(self, request: EstimateRequest) -> Decimal:
        return await self._estimate("a_to_b", request)

    async def estimate_b_to_a(self, request: EstimateRequest) -> Decimal:
        return await self._estimate("b_to_a", request)

    async def exchange_a_to_b(self, request: ExchangeRequest) -> ExchangeReceipt:
        return await self._exchange_call("a_to_b", request)

    async def exchange_b_to_a(self, request: ExchangeRequest) -> ExchangeReceipt:
        return await self._exchange_call("b_to_a", request)


@pytest.fixture
def btc() -> Asset:
    """An asset with no pairs in any test catalog."""
    return Asset(id="btc", name="Bitcoin", symbol="BTC", decimals=8, display_decimals=8)


@pytest.fixture
def registry(btc: Asset) -> AssetRegistry:
    """Default assets plus an unpaired one."""
    registry = AssetRegistry()
    registry.register(btc)
    return registry


@pytest.fixture
def eth(registry: AssetRegistry) -> Asset:
    return registry.get_asset("eth")


@pytest.fixture
def dai(registry: AssetRegistry) -> Asset:
    return registry.get_asset("dai")


@pytest.fixture
def xdai(registry: AssetRegistry) -> Asset:
    return registry.get_asset("xdai")


@pytest.fixture
def usdc(registry: AssetRegistry) -> Asset:
    return registry.get_asset("usdc")


@pytest.fixture
def eth_dai_pair() -> SimulatedPair:
    """Deterministic ETH/DAI pair at 1800 DAI per ETH."""
    return SimulatedPair(
        "eth",
        "dai",
        prices={"eth": Decimal("1800"), "dai": Decimal("1")},
        balances={(ACCOUNT, "eth"): Decimal("2")},
    )


@pytest.fixture
def catalog(eth_dai_pair: SimulatedPair) -> PairCatalog:
    """ETH/DAI, ETH/USDC and DAI/xDai, in that order."""
    return PairCatalog(
        [
            eth_dai_pair,
            SimulatedPair("eth", "usdc", prices={"eth": Decimal("1800"), "usdc": Decimal("1")}),
            SimulatedPair("dai", "xdai", prices={"dai": Decimal("1"), "xdai": Decimal("1")}),
        ]
    )


@pytest.fixture
def controlled_pair() -> ControlledPair:
    """ETH/DAI pair with test-controlled completion."""
    return ControlledPair("eth", "dai")
