"""Push notification delivery via Expo."""
from .push import (
    ExpoPushClient,
    PushNotificationService,
    PushResult,
    PushTokenRegistry,
)

__all__ = [
    "ExpoPushClient",
    "PushNotificationService",
    "PushResult",
    "PushTokenRegistry",
]
