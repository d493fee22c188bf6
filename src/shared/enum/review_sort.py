from enum import Enum


class ReviewSort(str, Enum):
    """Ordering for per-anime review listings"""

    RECENT = "recent"
    HELPFUL = "helpful"
