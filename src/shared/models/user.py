from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """Account record. Only the public profile is read by this service."""

    __tablename__ = "users"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, description="Login email")
    username: str = Field(unique=True, index=True, description="Public username")
    avatar: Optional[str] = Field(default="1", description="Avatar reference")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Created at"
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"onupdate": lambda: datetime.now(timezone.utc)},
        description="Last updated at",
    )
