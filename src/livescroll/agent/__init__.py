from .core import CaptionSource, LiveScrollService
from .throttle import RoundLease, ThrottleState, TriggerThrottle

__all__ = [
    "CaptionSource",
    "LiveScrollService",
    "RoundLease",
    "ThrottleState",
    "TriggerThrottle",
]
