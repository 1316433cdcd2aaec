from pumpnotifier.feed.client import PumpFunClient
from pumpnotifier.monitor.formatting import format_market_cap

__version__ = "1.0.0"
__all__ = ["PumpFunClient", "format_market_cap", "__version__"]
