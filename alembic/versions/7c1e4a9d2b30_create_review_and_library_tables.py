"""create review and library tables

Revision ID: 7c1e4a9d2b30
Revises:
Create Date: 2026-10-17 10:12:44.301522

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7c1e4a9d2b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if "users" not in tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("username", sa.String(), nullable=False),
            sa.Column("avatar", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("email"),
        )
        op.create_index("ix_users_username", "users", ["username"], unique=True)

    if "anime_reviews" not in tables:
        op.create_table(
            "anime_reviews",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("anime_id", sa.String(), nullable=False),
            sa.Column("anime_title", sa.String(), nullable=False),
            sa.Column("rating", sa.Integer(), nullable=False),
            sa.Column("review_text", sa.String(), nullable=True),
            sa.Column("spoiler_warning", sa.Boolean(), nullable=False),
            sa.Column("helpful_count", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("reported", sa.Boolean(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(
                "user_id", "anime_id", name="uq_anime_review_user_anime"
            ),
        )
        op.create_index("ix_anime_reviews_user_id", "anime_reviews", ["user_id"])
        op.create_index("ix_anime_reviews_anime_id", "anime_reviews", ["anime_id"])
        op.create_index(
            "ix_anime_reviews_helpful_count", "anime_reviews", ["helpful_count"]
        )
        op.create_index("ix_anime_reviews_reported", "anime_reviews", ["reported"])
        op.create_index("ix_anime_reviews_created_at", "anime_reviews", ["created_at"])

    if "review_votes" not in tables:
        op.create_table(
            "review_votes",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("review_id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("helpful", sa.Boolean(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["review_id"], ["anime_reviews.id"]),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(
                "review_id", "user_id", name="uq_review_vote_review_user"
            ),
        )
        op.create_index("ix_review_votes_review_id", "review_votes", ["review_id"])
        op.create_index("ix_review_votes_user_id", "review_votes", ["user_id"])

    if "favorites" not in tables:
        op.create_table(
            "favorites",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("anime_id", sa.String(), nullable=False),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("poster", sa.String(), nullable=True),
            sa.Column("added_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id", "anime_id", name="uq_favorite_user_anime"),
        )
        op.create_index("ix_favorites_user_id", "favorites", ["user_id"])
        op.create_index("ix_favorites_anime_id", "favorites", ["anime_id"])

    if "watchlist" not in tables:
        op.create_table(
            "watchlist",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("anime_id", sa.String(), nullable=False),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("poster", sa.String(), nullable=True),
            sa.Column("status", sa.String(), nullable=False),
            sa.Column("added_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id", "anime_id", name="uq_watchlist_user_anime"),
        )
        op.create_index("ix_watchlist_user_id", "watchlist", ["user_id"])
        op.create_index("ix_watchlist_anime_id", "watchlist", ["anime_id"])
        op.create_index("ix_watchlist_status", "watchlist", ["status"])

    if "watch_history" not in tables:
        op.create_table(
            "watch_history",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("anime_id", sa.String(), nullable=False),
            sa.Column("episode_id", sa.String(), nullable=False),
            sa.Column("episode_number", sa.Integer(), nullable=False),
            sa.Column("progress", sa.Integer(), nullable=False),
            sa.Column("completed", sa.Boolean(), nullable=False),
            sa.Column("watched_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(
                "user_id", "anime_id", "episode_id", name="uq_watch_history_episode"
            ),
        )
        op.create_index("ix_watch_history_user_id", "watch_history", ["user_id"])
        op.create_index("ix_watch_history_anime_id", "watch_history", ["anime_id"])
        op.create_index("ix_watch_history_watched_at", "watch_history", ["watched_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("watch_history")
    op.drop_table("watchlist")
    op.drop_table("favorites")
    op.drop_table("review_votes")
    op.drop_table("anime_reviews")
    op.drop_table("users")
