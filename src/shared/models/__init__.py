from .user import User
from .anime_review import AnimeReview
from .review_vote import ReviewVote
from .favorite import Favorite
from .watchlist_item import WatchlistItem
from .watch_history import WatchHistory

# Imported here so Alembic / SQLModel.metadata can discover every table
__all__ = [
    "User",
    "AnimeReview",
    "ReviewVote",
    "Favorite",
    "WatchlistItem",
    "WatchHistory",
]
