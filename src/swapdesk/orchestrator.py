"""Exchange session state and the operations that drive it.

The orchestrator owns one SelectionState. Every edit mutates the state
before its first suspension point, then refreshes the estimate. An
estimate is applied only if (asset_a, asset_b, amount) still match the
values the request was issued for; late results are dropped, never
cancelled.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from swapdesk.assets import Asset, AssetRegistry
from swapdesk.estimator import QuoteEstimator
from swapdesk.pairs.base import ExchangeReceipt, ExchangeRequest, PairCatalog
from swapdesk.resolver import PairResolver

logger = logging.getLogger(__name__)

# (asset_a id, asset_b id or None, amount)
Snapshot = tuple[str, Optional[str], str]


@dataclass
class SelectionState:
    """The user's current exchange selection."""

    asset_a: Asset
    asset_b: Optional[Asset]
    amount: str = ""
    estimate: Optional[Decimal] = None
    is_exchanging: bool = False
    error: Optional[str] = None

    def snapshot(self) -> Snapshot:
        """The inputs an estimate is valid for."""
        return (
            self.asset_a.id,
            self.asset_b.id if self.asset_b is not None else None,
            self.amount,
        )


class ExchangeOrchestrator:
    """Sequences estimate refreshes and exchange execution.

    Only one exchange should run at a time. The host shell is expected
    to disable its trigger while ``state.is_exchanging`` is set; a second
    call is not rejected here.
    """

    def __init__(
        self,
        catalog: PairCatalog,
        registry: AssetRegistry,
        default_account: str,
        estimator: Optional[QuoteEstimator] = None,
    ):
        first_pair = catalog.first()
        if first_pair is None:
            raise ValueError("Pair catalog is empty")

        self.catalog = catalog
        self.registry = registry
        self.default_account = default_account
        self.resolver = PairResolver(catalog, registry)
        self.estimator = estimator or QuoteEstimator(self.resolver)
        self.state = SelectionState(
            asset_a=registry.get_asset(first_pair.asset_a),
            asset_b=registry.get_asset(first_pair.asset_b),
        )

    # ======================
    # Edits
    # ======================

    async def select_from_asset(self, asset: Asset) -> Optional[Decimal]:
        """Set the asset being sold.

        Asset B is kept if it is still a counterpart, otherwise it moves
        to the first counterpart (or None when there is none).
        """
        self.state.asset_a = asset

        options = self.resolver.list_counterparts(asset)
        if self.state.asset_b not in options:
            self.state.asset_b = options[0] if options else None
            if self.state.asset_b is None:
                logger.info(f"No exchanges available for {asset.name}")

        return await self._refresh_estimate()

    async def select_to_asset(self, asset: Asset) -> Optional[Decimal]:
        """Set the asset being bought. Not checked against counterparts."""
        self.state.asset_b = asset
        return await self._refresh_estimate()

    async def set_amount(self, text: str) -> Optional[Decimal]:
        """Set the amount text verbatim."""
        self.state.amount = text
        return await self._refresh_estimate()

    async def _refresh_estimate(self) -> Optional[Decimal]:
        """Clear the estimate and fetch a new one for the current inputs.

        Returns:
            The estimate if it was applied, None if blank, failed or stale
        """
        self.state.estimate = None
        start = self.state.snapshot()
        asset_a, asset_b, amount = self.state.asset_a, self.state.asset_b, self.state.amount

        if not amount or asset_b is None:
            return None

        estimate = await self.estimator.estimate(
            asset_a, asset_b, amount, account=self.default_account
        )

        # Inputs may have changed while the estimate was fetching
        if self.state.snapshot() != start:
            logger.debug(
                f"Discarding stale estimate for {start}; inputs are now {self.state.snapshot()}"
            )
            return None

        self.state.estimate = estimate
        return estimate

    # ======================
    # Execution
    # ======================

    async def execute_exchange(self) -> Optional[ExchangeReceipt]:
        """Exchange the current amount of asset A into asset B.

        Returns:
            The receipt, or None if the exchange failed (see ``state.error``)

        Raises:
            NoPairFoundError: If no pair connects the selected assets
        """
        asset_a, asset_b, amount = self.state.asset_a, self.state.asset_b, self.state.amount
        resolved = self.resolver.resolve(asset_a, asset_b)
        request = ExchangeRequest(account=self.default_account, amount=amount)

        self.state.is_exchanging = True
        self.state.error = None
        logger.info(
            f"Exchanging {amount} {asset_a.symbol} -> {asset_b.symbol} "
            f"via {resolved.pair.name} for {request.account}"
        )

        receipt = None
        try:
            receipt = await resolved.exchange(request)
            logger.info(f"Exchange complete: {receipt.to_dict()}")
        except Exception as e:
            self.state.error = str(e)
            logger.error(f"Exchange via {resolved.pair.name} failed: {type(e).__name__}: {e}")
        finally:
            self.state.is_exchanging = False

        return receipt

    # ======================
    # Presentation helpers
    # ======================

    def to_options(self) -> list[Asset]:
        """Valid choices for asset B given the current asset A."""
        return self.resolver.list_counterparts(self.state.asset_a)

    @property
    def can_exchange(self) -> bool:
        """Whether the exchange trigger should be enabled."""
        return not self.state.is_exchanging and len(self.to_options()) > 0

    @property
    def display_estimate(self) -> str:
        """The estimate formatted in asset B, or an empty string."""
        if self.state.estimate is None or self.state.asset_b is None:
            return ""
        return self.registry.get_display_value(self.state.asset_b, self.state.estimate)

    @property
    def unavailable_message(self) -> Optional[str]:
        """Message shown in place of the asset B picker, if any."""
        if self.to_options():
            return None
        return f"No exchanges available for {self.state.asset_a.name}"
