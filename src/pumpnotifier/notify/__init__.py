from pumpnotifier.notify.telegram import NotificationSink, TelegramNotifier

__all__ = ["NotificationSink", "TelegramNotifier"]
