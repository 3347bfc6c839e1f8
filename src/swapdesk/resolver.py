"""Pair lookup and call direction."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from swapdesk.assets import Asset, AssetRegistry
from swapdesk.pairs.base import (
    EstimateRequest,
    ExchangeReceipt,
    ExchangeRequest,
    Pair,
    PairCatalog,
)

logger = logging.getLogger(__name__)


class NoPairFoundError(LookupError):
    """Raised when no catalog pair connects two assets."""

    def __init__(self, from_asset: str, to_asset: Optional[str]):
        self.from_asset = from_asset
        self.to_asset = to_asset
        super().__init__(f"Invalid pair: no exchange between {from_asset} and {to_asset}")


class Direction(str, Enum):
    """Which side of the pair the conversion starts from."""

    FORWARD = "a_to_b"
    REVERSE = "b_to_a"


@dataclass(frozen=True)
class ResolvedPair:
    """A pair together with the direction a request must use."""

    pair: Pair
    direction: Direction

    async def estimate(self, request: EstimateRequest) -> Decimal:
        if self.direction is Direction.FORWARD:
            return await self.pair.estimate_a_to_b(request)
        return await self.pair.estimate_b_to_a(request)

    async def exchange(self, request: ExchangeRequest) -> ExchangeReceipt:
        if self.direction is Direction.FORWARD:
            return await self.pair.exchange_a_to_b(request)
        return await self.pair.exchange_b_to_a(request)


class PairResolver:
    """Finds the pair connecting two assets."""

    def __init__(self, catalog: PairCatalog, registry: AssetRegistry):
        self.catalog = catalog
        self.registry = registry

    def find_pair(self, asset_a: Asset, asset_b: Asset) -> Optional[Pair]:
        """Get the first pair joining the two assets, in either order."""
        for pair in self.catalog:
            if pair.connects(asset_a.id, asset_b.id):
                return pair
        return None

    def resolve(self, from_asset: Asset, to_asset: Optional[Asset]) -> ResolvedPair:
        """Find the pair and direction for converting ``from_asset`` to ``to_asset``.

        Raises:
            NoPairFoundError: If the catalog has no pair for the two assets
        """
        pair = self.find_pair(from_asset, to_asset) if to_asset is not None else None
        if pair is None:
            raise NoPairFoundError(from_asset.id, to_asset.id if to_asset else None)

        direction = Direction.FORWARD if pair.asset_a == from_asset.id else Direction.REVERSE
        return ResolvedPair(pair=pair, direction=direction)

    def list_counterparts(self, asset: Asset) -> list[Asset]:
        """Assets reachable from ``asset`` through a single pair.

        Follows catalog order. A pair listed twice contributes twice.
        """
        options = []
        for pair in self.catalog:
            if asset.id in (pair.asset_a, pair.asset_b):
                options.append(self.registry.get_asset(pair.other_side(asset.id)))
        return options
