"""Factory for building the pair catalog.

Creates live market pairs when dry-run is off, otherwise falls back to
simulated pairs.
"""

import logging
from typing import Optional

from swapdesk.config import Settings, get_settings
from swapdesk.pairs.base import Pair, PairCatalog
from swapdesk.pairs.bridge import BridgePair
from swapdesk.pairs.market import MarketPair, Settler
from swapdesk.pairs.simulated import SimulatedPair

logger = logging.getLogger(__name__)

# (asset_a, asset_b) priced through the market
PRICED_PAIRS: list[tuple[str, str]] = [
    ("eth", "dai"),
    ("eth", "usdc"),
]

# (asset_a, asset_b) pegged 1:1
BRIDGED_PAIRS: list[tuple[str, str]] = [
    ("dai", "xdai"),
]


def create_priced_pair(
    asset_a: str,
    asset_b: str,
    settings: Optional[Settings] = None,
    settle: Optional[Settler] = None,
) -> Pair:
    """Create a market pair, or a simulated one in dry-run mode."""
    settings = settings or get_settings()

    if not settings.dry_run:
        return MarketPair(
            asset_a,
            asset_b,
            settle=settle,
            api_url=settings.price_api_url,
            timeout=settings.http_timeout,
            cache_seconds=settings.price_cache_seconds,
        )

    return SimulatedPair(asset_a, asset_b, fee_percent=settings.simulated_fee_percent)


def create_default_catalog(
    settings: Optional[Settings] = None,
    settle: Optional[Settler] = None,
) -> PairCatalog:
    """Create the default catalog: priced pairs first, then bridges."""
    settings = settings or get_settings()

    pairs: list[Pair] = [
        create_priced_pair(asset_a, asset_b, settings=settings, settle=settle)
        for asset_a, asset_b in PRICED_PAIRS
    ]
    pairs.extend(
        BridgePair(asset_a, asset_b, fee_percent=settings.bridge_fee_percent)
        for asset_a, asset_b in BRIDGED_PAIRS
    )

    mode = "dry-run" if settings.dry_run else "live"
    logger.info(f"Created {mode} pair catalog: {', '.join(p.name for p in pairs)}")
    return PairCatalog(pairs)
