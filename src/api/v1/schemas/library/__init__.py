from api.v1.schemas.library.favorite import (
    FavoriteCreateRequest,
    FavoriteDetail,
    FavoritePage,
    FavoriteStatus,
)
from api.v1.schemas.library.watch_history import (
    HistoryClearResponse,
    WatchHistoryDetail,
    WatchHistoryPage,
    WatchProgressRequest,
)
from api.v1.schemas.library.watchlist import (
    WatchlistCreateRequest,
    WatchlistItemDetail,
    WatchlistPage,
    WatchlistUpdateRequest,
)

__all__ = [
    "FavoriteCreateRequest",
    "FavoriteDetail",
    "FavoritePage",
    "FavoriteStatus",
    "HistoryClearResponse",
    "WatchHistoryDetail",
    "WatchHistoryPage",
    "WatchProgressRequest",
    "WatchlistCreateRequest",
    "WatchlistItemDetail",
    "WatchlistPage",
    "WatchlistUpdateRequest",
]
