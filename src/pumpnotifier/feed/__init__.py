from pumpnotifier.feed.client import PumpFunClient

__all__ = ["PumpFunClient"]
