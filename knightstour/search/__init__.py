"""Search loop and tour delivery."""

from .channel import ChannelClosed, Tour, TourChannel
from .driver import SearchConfig, SearchDriver, SearchStats, StopReason, find_closed_tours

__all__ = [
    "ChannelClosed",
    "Tour",
    "TourChannel",
    "SearchConfig",
    "SearchDriver",
    "SearchStats",
    "StopReason",
    "find_closed_tours",
]
