"""
Market cap valuation in USD.

The upstream reports caps inconsistently, so the source of the SOL figure is
a configuration choice (`MarketCapSource`).
"""

from pumpnotifier.models import TokenInfo, TradeInfo
from pumpnotifier.monitor.config import MarketCapSource


def to_usd(amount_sol: float, rate: float) -> float:
    """Convert SOL to USD, rounded to cents. An unknown rate (0) yields 0."""
    if rate <= 0 or amount_sol <= 0:
        return 0.0
    return round(amount_sol * rate, 2)


def market_cap_usd(
    token: TokenInfo,
    rate: float,
    source: MarketCapSource = MarketCapSource.REPORTED,
    trade: TradeInfo | None = None,
) -> float:
    """
    Value a token in USD.

    ## Parameters
    - `token`: Token record (discovery or enriched detail)
    - `rate`: Current SOL/USD rate
    - `source`: Which SOL figure to use
    - `trade`: Trade that triggered the evaluation, if any

    ## Returns
    USD value rounded to cents. With `MarketCapSource.TRADE` and no trade,
    falls back to the reported cap.
    """
    if source is MarketCapSource.TRADE and trade is not None:
        return to_usd(trade.sol_amount, rate)
    return to_usd(token.market_cap, rate)


def clears_threshold(value_usd: float, threshold_usd: float) -> bool:
    return value_usd >= threshold_usd
