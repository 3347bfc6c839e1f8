"""Best-effort estimate fetching.

Estimate failures are never surfaced to the user: every error path is
logged and degrades to "no estimate" (None).
"""

import logging
from decimal import Decimal
from typing import Optional

from swapdesk.assets import Asset
from swapdesk.pairs.base import EstimateFailure, EstimateRequest
from swapdesk.resolver import NoPairFoundError, PairResolver

logger = logging.getLogger(__name__)


class QuoteEstimator:
    """Fetches estimates through the resolved pair."""

    def __init__(self, resolver: PairResolver):
        self.resolver = resolver
        self.requests_issued = 0

    async def estimate(
        self,
        asset_a: Asset,
        asset_b: Optional[Asset],
        amount_text: str,
        account: Optional[str] = None,
    ) -> Optional[Decimal]:
        """Estimate how much ``asset_b`` ``amount_text`` of ``asset_a`` buys.

        Args:
            asset_a: Asset being sold
            asset_b: Asset being bought
            amount_text: Raw amount as entered, passed through unvalidated
            account: Optional account the estimate is for

        Returns:
            The estimated amount, or None on blank input or any failure
        """
        if not amount_text or not amount_text.strip():
            return None

        try:
            resolved = self.resolver.resolve(asset_a, asset_b)
        except NoPairFoundError as e:
            logger.warning(f"Estimate skipped: {e}")
            return None

        self.requests_issued += 1
        logger.debug(
            f"Requesting estimate from {resolved.pair.name} ({resolved.direction.value}): "
            f"{amount_text} {asset_a.symbol}"
        )

        try:
            estimate = await resolved.estimate(
                EstimateRequest(amount=amount_text, account=account)
            )
        except (EstimateFailure, ValueError) as e:
            logger.warning(f"{resolved.pair.name} estimate failed: {e}")
            return None
        except Exception as e:
            logger.error(f"{resolved.pair.name} estimate failed: {type(e).__name__}: {e}")
            return None

        logger.debug(f"Estimate from {resolved.pair.name}: {estimate} {asset_b.symbol}")
        return estimate
