"""Simulated pairs for dry-run sessions."""

import hashlib
import logging
import time
from decimal import Decimal, InvalidOperation
from typing import Optional

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

# Simulated market prices in USD, keyed by asset id
# For demonstration only; not live prices
SIMULATED_PRICES: dict[str, Decimal] = {
    "eth": Decimal("1800.00"),
    "dai": Decimal("1.00"),
    "xdai": Decimal("1.00"),
    "usdc": Decimal("1.00"),
}


class SimulatedPair(Pair):
    """Pair priced from a fixed USD table.

    Balances are optional: when given, exchanges debit and credit the
    ``(account, asset_id)`` entries and fail on short balances.
    """

    def __init__(
        self,
        asset_a: str,
        asset_b: str,
        prices: Optional[dict[str, Decimal]] = None,
        fee_percent: Decimal = Decimal("0"),
        balances: Optional[dict[tuple[str, str], Decimal]] = None,
    ):
        super().__init__(asset_a, asset_b)
        self.fee_percent = fee_percent
        self.balances = balances
        self._prices = dict(prices if prices is not None else SIMULATED_PRICES)

    def set_price(self, asset_id: str, price: Decimal) -> None:
        """Set simulated price for an asset."""
        self._prices[asset_id] = price

    def get_price(self, asset_id: str) -> Optional[Decimal]:
        """Get simulated price for an asset."""
        return self._prices.get(asset_id)

    def _convert(self, from_asset: str, to_asset: str, amount: Decimal) -> Decimal:
        from_price = self._prices.get(from_asset)
        to_price = self._prices.get(to_asset)
        if from_price is None or to_price is None:
            raise EstimateFailure(f"No simulated price for {from_asset}->{to_asset}")

        base_to_amount = amount * from_price / to_price
        fee = base_to_amount * self.fee_percent / Decimal("100")
        try:
            return (base_to_amount - fee).quantize(Decimal("0.00000001"))
        except InvalidOperation as e:
            raise EstimateFailure(f"Amount {amount} {from_asset} is out of range") from e

    async def _estimate(self, from_asset: str, to_asset: str, request: EstimateRequest) -> Decimal:
        amount = parse_amount(request.amount)
        to_amount = self._convert(from_asset, to_asset, amount)
        logger.debug(f"Simulated estimate: {amount} {from_asset} -> {to_amount} {to_asset}")
        return to_amount

    async def _exchange(
        self, from_asset: str, to_asset: str, request: ExchangeRequest
    ) -> ExchangeReceipt:
        try:
            amount = parse_amount(request.amount)
            to_amount = self._convert(from_asset, to_asset, amount)
        except (ValueError, EstimateFailure) as e:
            raise ExchangeFailure(str(e)) from e

        if self.balances is not None:
            available = self.balances.get((request.account, from_asset), Decimal("0"))
            if available < amount:
                raise ExchangeFailure("insufficient funds")
            self.balances[(request.account, from_asset)] = available - amount
            self.balances[(request.account, to_asset)] = (
                self.balances.get((request.account, to_asset), Decimal("0")) + to_amount
            )

        tx_data = f"{request.account}{from_asset}{to_asset}{amount}{time.time()}"
        tx_hash = hashlib.sha256(tx_data.encode()).hexdigest()

        return ExchangeReceipt(
            pair=self.name,
            from_asset=from_asset,
            to_asset=to_asset,
            from_amount=amount,
            to_amount=to_amount,
            account=request.account,
            tx_hash=f"0x{tx_hash}",
            is_simulated=True,
        )

    async def estimate_a_to_b(self, request: EstimateRequest) -> Decimal:
        return await self._estimate(self.asset_a, self.asset_b, request)

    async def estimate_b_to_a(self, request: EstimateRequest) -> Decimal:
        return await self._estimate(self.asset_b, self.asset_a, request)

    async def exchange_a_to_b(self, request: ExchangeRequest) -> ExchangeReceipt:
        return await self._exchange(self.asset_a, self.asset_b, request)

    async def exchange_b_to_a(self, request: ExchangeRequest) -> ExchangeReceipt:
        return await self._exchange(self.asset_b, self.asset_a, request)
