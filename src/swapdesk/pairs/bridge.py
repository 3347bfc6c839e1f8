"""Bridge pair between two assets pegged 1:1 (e.g. DAI <-> xDai)."""

import logging
from decimal import Decimal

from swapdesk.pairs.base import (
    EstimateRequest,
    ExchangeFailure,
    ExchangeReceipt,
    ExchangeRequest,
    Pair,
    parse_amount,
)

logger = logging.getLogger(__name__)


class BridgePair(Pair):
    """1:1 bridge with an optional percentage fee.

    Both directions are symmetric. Execution is simulated; the fund
    movement happens on the bridge itself.
    """

    def __init__(self, asset_a: str, asset_b: str, fee_percent: Decimal = Decimal("0")):
        super().__init__(asset_a, asset_b)
        self.fee_percent = fee_percent

    def _bridged(self, amount: Decimal) -> Decimal:
        fee_amount = amount * (self.fee_percent / Decimal("100"))
        return amount - fee_amount

    async def _estimate(self, request: EstimateRequest) -> Decimal:
        return self._bridged(parse_amount(request.amount))

    async def _exchange(
        self, from_asset: str, to_asset: str, request: ExchangeRequest
    ) -> ExchangeReceipt:
        try:
            amount = parse_amount(request.amount)
        except ValueError as e:
            raise ExchangeFailure(str(e)) from e

        to_amount = self._bridged(amount)
        logger.info(
            f"Bridging {amount} {from_asset} -> {to_amount} {to_asset} for {request.account}"
        )
        return ExchangeReceipt(
            pair=self.name,
            from_asset=from_asset,
            to_asset=to_asset,
            from_amount=amount,
            to_amount=to_amount,
            account=request.account,
            is_simulated=True,
        )

    async def estimate_a_to_b(self, request: EstimateRequest) -> Decimal:
        return await self._estimate(request)

    async def estimate_b_to_a(self, request: EstimateRequest) -> Decimal:
        return await self._estimate(request)

    async def exchange_a_to_b(self, request: ExchangeRequest) -> ExchangeReceipt:
        return await self._exchange(self.asset_a, self.asset_b, request)

    async def exchange_b_to_a(self, request: ExchangeRequest) -> ExchangeReceipt:
        return await self._exchange(self.asset_b, self.asset_a, request)
