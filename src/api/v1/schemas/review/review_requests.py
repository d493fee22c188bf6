from typing import Optional

from pydantic import Field

from api.v1.schemas.base import CamelModel


class ReviewCreateRequest(CamelModel):
    """Body of POST /reviews"""

    anime_id: str = Field(description="External catalog id")
    anime_title: str = Field(description="Title at the time of review")
    # Range is checked by the service so a bad rating is a 400 with a clear message
    rating: Optional[int] = Field(None, description="1-10")
    review_text: Optional[str] = Field(None, description="Optional write-up")
    spoiler_warning: bool = Field(False, description="Contains spoilers")


class ReviewUpdateRequest(CamelModel):
    """Body of PUT /reviews/{reviewId}; overwrites all three fields"""

    rating: Optional[int] = Field(None, description="1-10")
    review_text: Optional[str] = None
    spoiler_warning: bool = False


class VoteRequest(CamelModel):
    helpful: bool = Field(description="True if the review was helpful")
