from reviews.dto.rating_stats import RatingStats
from reviews.dto.review_with_author import ReviewWithAuthor

__all__ = ["RatingStats", "ReviewWithAuthor"]
