"""Abstract trading pair interface."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


class EstimateFailure(Exception):
    """Raised when a pair cannot produce an estimate."""

    pass


class ExchangeFailure(Exception):
    """Raised when a pair fails to execute an exchange."""

    pass


class InvalidAmountError(ValueError):
    """Raised when amount text is not a positive number."""

    def __init__(self, amount: str):
        self.amount = amount
        super().__init__(f"Invalid amount: {amount!r}")


def parse_amount(text: str) -> Decimal:
    """Parse user-entered amount text.

    Raises:
        InvalidAmountError: If the text is not a finite positive number
    """
    try:
        amount = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        raise InvalidAmountError(text)

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError(text)
    return amount


@dataclass(frozen=True)
class EstimateRequest:
    """Parameters for an estimate call."""

    amount: str
    account: Optional[str] = None


@dataclass(frozen=True)
class ExchangeRequest:
    """Parameters for an exchange call."""

    account: str
    amount: str


@dataclass
class ExchangeReceipt:
    """Result of a completed exchange."""

    pair: str
    from_asset: str
    to_asset: str
    from_amount: Decimal
    to_amount: Decimal
    account: str
    tx_hash: Optional[str] = None
    is_simulated: bool = False
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging or display."""
        return {
            "pair": self.pair,
            "from_asset": self.from_asset,
            "to_asset": self.to_asset,
            "from_amount": str(self.from_amount),
            "to_amount": str(self.to_amount),
            "account": self.account,
            "tx_hash": self.tx_hash,
            "is_simulated": self.is_simulated,
        }


class Pair(ABC):
    """A bidirectional trading relationship between two assets.

    Subclasses provide the four directional capabilities. ``asset_a`` and
    ``asset_b`` are asset identifiers, fixed at construction.
    """

    def __init__(self, asset_a: str, asset_b: str):
        if asset_a == asset_b:
            raise ValueError(f"A pair needs two different assets, got {asset_a!r} twice")
        self._asset_a = asset_a
        self._asset_b = asset_b

    @property
    def asset_a(self) -> str:
        return self._asset_a

    @property
    def asset_b(self) -> str:
        return self._asset_b

    @property
    def name(self) -> str:
        """Pair name identifier."""
        return f"{self._asset_a}/{self._asset_b}"

    @abstractmethod
    async def estimate_a_to_b(self, request: EstimateRequest) -> Decimal:
        """Estimate how much asset B ``request.amount`` of asset A buys."""
        pass

    @abstractmethod
    async def estimate_b_to_a(self, request: EstimateRequest) -> Decimal:
        """Estimate how much asset A ``request.amount`` of asset B buys."""
        pass

    @abstractmethod
    async def exchange_a_to_b(self, request: ExchangeRequest) -> ExchangeReceipt:
        """Convert ``request.amount`` of asset A into asset B."""
        pass

    @abstractmethod
    async def exchange_b_to_a(self, request: ExchangeRequest) -> ExchangeReceipt:
        """Convert ``request.amount`` of asset B into asset A."""
        pass

    def connects(self, first: str, second: str) -> bool:
        """Check if this pair joins the two assets, in either order."""
        return {self._asset_a, self._asset_b} == {first, second}

    def other_side(self, asset_id: str) -> str:
        """Get the identifier opposite ``asset_id``."""
        if asset_id == self._asset_a:
            return self._asset_b
        if asset_id == self._asset_b:
            return self._asset_a
        raise ValueError(f"{asset_id} is not part of pair {self.name}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._asset_a!r}, {self._asset_b!r})"


class PairCatalog:
    """Immutable, ordered set of trading pairs."""

    def __init__(self, pairs: Iterable[Pair]):
        self._pairs: tuple[Pair, ...] = tuple(pairs)
        logger.debug(f"Pair catalog loaded with {len(self._pairs)} pair(s)")

    def get_pairs(self) -> tuple[Pair, ...]:
        """All pairs in insertion order."""
        return self._pairs

    def first(self) -> Optional[Pair]:
        """The first pair, or None if the catalog is empty."""
        return self._pairs[0] if self._pairs else None

    def __iter__(self) -> Iterator[Pair]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)
