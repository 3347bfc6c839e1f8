"""Session wiring for a host shell.

The shell calls ``create_session()`` once per page and binds its widgets
to the returned orchestrator's state and operations.
"""

import logging
from typing import Optional

from swapdesk.assets import AssetRegistry
from swapdesk.config import Settings, get_settings
from swapdesk.orchestrator import ExchangeOrchestrator
from swapdesk.pairs.base import PairCatalog
from swapdesk.pairs.factory import create_default_catalog
from swapdesk.pairs.market import Settler

logger = logging.getLogger(__name__)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_session(
    settings: Optional[Settings] = None,
    registry: Optional[AssetRegistry] = None,
    catalog: Optional[PairCatalog] = None,
    account: Optional[str] = None,
    settle: Optional[Settler] = None,
) -> ExchangeOrchestrator:
    """Create an orchestrator for one exchange session.

    Args:
        settings: Settings to use (defaults to cached settings)
        registry: Asset registry (defaults to the built-in assets)
        catalog: Pair catalog (defaults to ``create_default_catalog``)
        account: Account supplied by the host shell (defaults to settings)
        settle: Settlement coroutine for live market pairs
    """
    if settings is None:
        settings = get_settings()
    if registry is None:
        registry = AssetRegistry()
    if catalog is None:
        catalog = create_default_catalog(settings, settle=settle)

    orchestrator = ExchangeOrchestrator(
        catalog=catalog,
        registry=registry,
        default_account=account or settings.default_account,
    )
    logger.info(
        f"Exchange session started ({settings.environment}): "
        f"{orchestrator.state.asset_a.symbol} -> "
        f"{orchestrator.state.asset_b.symbol if orchestrator.state.asset_b else '-'}"
    )
    return orchestrator
