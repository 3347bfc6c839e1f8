"""Trading pairs and the catalog that holds them.

Pairs:
- Simulated: fixed USD price table, optional in-memory balances
- Bridge: 1:1 peg between two assets (e.g. DAI <-> xDai)
- Market: live USD prices over HTTP, injected settlement
"""

from swapdesk.pairs.base import (
    EstimateFailure,
    EstimateRequest,
    ExchangeFailure,
    ExchangeReceipt,
    ExchangeRequest,
    InvalidAmountError,
    Pair,
    PairCatalog,
    parse_amount,
)
from swapdesk.pairs.bridge import BridgePair
from swapdesk.pairs.factory import create_default_catalog, create_priced_pair
from swapdesk.pairs.market import MarketPair
from swapdesk.pairs.simulated import SimulatedPair

__all__ = [
    # Base classes
    "Pair",
    "PairCatalog",
    "EstimateRequest",
    "ExchangeRequest",
    "ExchangeReceipt",
    "parse_amount",
    # Errors
    "EstimateFailure",
    "ExchangeFailure",
    "InvalidAmountError",
    # Pairs
    "SimulatedPair",
    "BridgePair",
    "MarketPair",
    # Factory functions
    "create_default_catalog",
    "create_priced_pair",
]
