from pydantic import BaseModel, Field


class RatingStats(BaseModel):
    """Aggregate rating for one anime"""

    average_rating: str = Field(..., description="Mean rating, one decimal place")
    total_reviews: int = Field(..., description="Number of reviews")
