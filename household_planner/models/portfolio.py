"""
Portfolio valuation.

Holdings are either valued by hand or priced from a ticker, a quantity and a
unit price. Live prices come from a PriceFeed supplied by the caller, so the
calculators never reach out to a market data service themselves.
"""

import logging
from typing import List, Optional, Protocol

from .household import PortfolioItem

logger = logging.getLogger(__name__)


class PriceFeed(Protocol):
    """
    Provides the latest unit price for a market ticker.

    Implementations may call a quote service, read a cache or return fixed
    prices in tests.
    """

    def get_unit_price(self, ticker: str) -> Optional[float]:
        """
        Get the latest unit price for a ticker.

        Args:
            ticker: Upper-case market ticker, e.g. "VAS.AX"

        Returns:
            Unit price, or None when no price is available
        """
        ...


def resolve_portfolio_items(
    items: List[PortfolioItem], feed: PriceFeed
) -> List[PortfolioItem]:
    """
    Refresh the prices of live holdings.

    Manual holdings and holdings without a ticker or quantity are returned
    unchanged. When the feed has no price for a ticker, the holding keeps its
    previous price and value.

    Args:
        items: Portfolio holdings
        feed: Source of unit prices

    Returns:
        New list of holdings with refreshed price_per_unit and current_value
    """
    resolved = []
    for item in items:
        if item.is_manual or not item.ticker or item.quantity is None:
            resolved.append(item)
            continue

        price = feed.get_unit_price(item.ticker)
        if price is None or price < 0:
            logger.warning(
                f"No price for {item.ticker} ({item.name}), "
                f"keeping value {item.current_value:.2f}"
            )
            resolved.append(item)
            continue

        resolved.append(
            item.model_copy(
                update={
                    "price_per_unit": price,
                    "current_value": round(item.quantity * price, 2),
                }
            )
        )
    return resolved


def total_portfolio_value(items: List[PortfolioItem]) -> float:
    """Sum of the holdings' market values."""
    return sum(item.market_value for item in items)
