"""Asset descriptors and the registry that resolves them by identifier."""

import logging
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, str]


class UnknownAssetError(KeyError):
    """Raised when an asset identifier is not registered."""

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(asset_id)

    def __str__(self) -> str:
        return f"Unknown asset: {self.asset_id}"


@dataclass(frozen=True)
class Asset:
    """A tradable asset."""

    id: str
    name: str
    symbol: str
    decimals: int = 18
    display_decimals: int = 4  # Places shown to the user

    def get_display_value(self, raw: Amount) -> str:
        """Format an amount for display.

        Truncates to ``display_decimals`` places, adds thousands
        separators and drops trailing zeros, e.g. ``1800`` -> ``"1,800"``.
        """
        try:
            value = Decimal(str(raw))
        except InvalidOperation:
            logger.warning(f"Cannot format {raw!r} as {self.symbol}")
            return str(raw)

        quantum = Decimal(1).scaleb(-self.display_decimals)
        text = f"{value.quantize(quantum, rounding=ROUND_DOWN):,f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text


# ======================
# Default Assets
# ======================

DEFAULT_ASSETS: dict[str, Asset] = {
    "eth": Asset(id="eth", name="ETH", symbol="ETH", decimals=18, display_decimals=5),
    "dai": Asset(id="dai", name="Dai", symbol="DAI", decimals=18, display_decimals=2),
    "xdai": Asset(id="xdai", name="xDai", symbol="XDAI", decimals=18, display_decimals=2),
    "usdc": Asset(id="usdc", name="USD Coin", symbol="USDC", decimals=6, display_decimals=2),
}


class AssetRegistry:
    """Resolves asset identifiers to descriptors."""

    def __init__(self, assets: Optional[Iterable[Asset]] = None):
        self._assets: dict[str, Asset] = {}
        for asset in assets if assets is not None else DEFAULT_ASSETS.values():
            self.register(asset)

    def register(self, asset: Asset) -> None:
        """Add an asset, replacing any previous descriptor with the same id."""
        self._assets[asset.id] = asset

    def get_asset(self, asset_id: str) -> Asset:
        """Get the descriptor for an identifier.

        Raises:
            UnknownAssetError: If the identifier is not registered
        """
        asset = self._assets.get(asset_id)
        if asset is None:
            raise UnknownAssetError(asset_id)
        return asset

    def get_display_value(self, asset: Asset, raw: Amount) -> str:
        """Format an amount of ``asset`` for display."""
        return asset.get_display_value(raw)

    def list_assets(self) -> list[Asset]:
        """All registered assets in registration order."""
        return list(self._assets.values())

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._assets

    def __len__(self) -> int:
        return len(self._assets)
