from typing import Optional

from pydantic import BaseModel, Field

from shared.models.anime_review import AnimeReview


class ReviewWithAuthor(BaseModel):
    """A review row joined with its author's public profile"""

    review: AnimeReview
    username: Optional[str] = Field(None, description="None if the author row is gone")
    avatar: Optional[str] = None
