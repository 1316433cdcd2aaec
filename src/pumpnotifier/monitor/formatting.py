"""
Message formatting for token and trade notifications.
"""

from html import escape

from pumpnotifier.models import Notification, TokenInfo, TradeInfo

_SUFFIXES = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "k"),
)


def format_market_cap(amount_usd: float) -> str:
    """
    Format a USD amount with a magnitude suffix.

    >>> format_market_cap(1500)
    '$1.50k'
    """
    # Rounding first keeps 999.999 from rendering as "$1000.00"; adding 0.0 drops -0.0
    amount = round(float(amount_usd), 2) + 0.0

    for divisor, suffix in _SUFFIXES:
        if amount >= divisor:
            return f"${amount / divisor:.2f}{suffix}"
    return f"${amount:.2f}"


def explorer_link(explorer_url: str, mint: str) -> str:
    return explorer_url.format(mint=mint)


def _token_label(token: TokenInfo) -> str:
    return escape(token.label)


def build_new_token_notification(
    token: TokenInfo, market_cap_usd: float, explorer_url: str
) -> Notification:
    text = (
        f"🚀 New Token: {_token_label(token)} has reached a market cap of "
        f"{format_market_cap(market_cap_usd)}!"
    )
    return Notification(
        text=text,
        link_url=explorer_link(explorer_url, token.mint),
        link_label="View on pump.fun",
    )


def build_trade_notification(
    token: TokenInfo,
    market_cap_usd: float,
    explorer_url: str,
    trade: TradeInfo | None = None,
) -> Notification:
    lines = [
        "🛒 Trade Alert:",
        f"Token: {_token_label(token)}",
        f"Market Cap: {format_market_cap(market_cap_usd)}",
    ]
    if trade is not None:
        lines.append(f"Amount Sold: {trade.token_amount:,.2f}")
        lines.append(f"SOL Amount: {trade.sol_amount:,.4f}")

    return Notification(
        text="\n".join(lines),
        link_url=explorer_link(explorer_url, token.mint),
        link_label="View on pump.fun",
    )
