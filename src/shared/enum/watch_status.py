from enum import Enum


class WatchStatus(str, Enum):
    """Watchlist entry state"""

    PLAN_TO_WATCH = "plan_to_watch"
    WATCHING = "watching"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
