"""swapdesk - convert assets through a catalog of trading pairs."""

from swapdesk.app import configure_logging, create_session
from swapdesk.assets import Asset, AssetRegistry, UnknownAssetError
from swapdesk.estimator import QuoteEstimator
from swapdesk.orchestrator import ExchangeOrchestrator, SelectionState
from swapdesk.resolver import Direction, NoPairFoundError, PairResolver, ResolvedPair

__version__ = "0.1.0"

__all__ = [
    "Asset",
    "AssetRegistry",
    "UnknownAssetError",
    "PairResolver",
    "ResolvedPair",
    "Direction",
    "NoPairFoundError",
    "QuoteEstimator",
    "ExchangeOrchestrator",
    "SelectionState",
    "configure_logging",
    "create_session",
]
