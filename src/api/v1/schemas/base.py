from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.pagination import page_count


class CamelModel(BaseModel):
    """
    Base for every request/response body.

    Attributes are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class Pagination(CamelModel):
    """Standard pagination block"""

    page: int = Field(description="1-based page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total matching items")
    pages: int = Field(description="ceil(total / limit)")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=page_count(total, limit))


class MessageResponse(CamelModel):
    message: str = Field(description="Result message")
