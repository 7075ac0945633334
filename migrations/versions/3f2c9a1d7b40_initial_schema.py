"""initial_schema

Create the schema for OPAQ:
- Users and posts (artwall)
- Pitches (bloom) with view and like counters
- Discussions with one level of replies
- Interaction ledgers for posts, discussions and pitches

Revision ID: 3f2c9a1d7b40
Revises:
Create Date: 2026-10-19 10:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c9a1d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() lives in pgcrypto before PostgreSQL 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE post_status AS ENUM ('draft', 'published');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE pitch_visibility AS ENUM ('private', 'public');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "labels",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "status",
            postgresql.ENUM(
                "draft", "published", name="post_status", create_type=False
            ),
            nullable=False,
            server_default="draft",
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_posts_user_id", "posts", ["user_id"])
    op.create_index(
        "idx_posts_created_at", "posts", [sa.text("created_at DESC")]
    )

    # ========================================================================
    # PITCHES table
    # ========================================================================
    op.create_table(
        "pitches",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("storage_id", sa.String(255), nullable=False),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "visibility",
            postgresql.ENUM(
                "private", "public", name="pitch_visibility", create_type=False
            ),
            nullable=False,
            server_default="private",
        ),
        sa.Column("views_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("views_count >= 0", name="pitch_views_non_negative"),
        sa.CheckConstraint("likes_count >= 0", name="pitch_likes_non_negative"),
    )
    op.create_index("idx_pitches_user_id", "pitches", ["user_id"])
    op.create_index(
        "idx_pitches_created_at", "pitches", [sa.text("created_at DESC")]
    )

    # ========================================================================
    # DISCUSSIONS table
    # ========================================================================
    op.create_table(
        "discussions",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("replies_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_hearted", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["parent_id"], ["discussions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("likes >= 0", name="discussion_likes_non_negative"),
        sa.CheckConstraint(
            "replies_count >= 0", name="discussion_replies_non_negative"
        ),
    )
    op.create_index(
        "idx_discussions_post_parent", "discussions", ["post_id", "parent_id"]
    )
    op.create_index("idx_discussions_parent_id", "discussions", ["parent_id"])
    op.create_index("idx_discussions_created_at", "discussions", ["created_at"])

    # ========================================================================
    # POST_INTERACTIONS table
    # ========================================================================
    op.create_table(
        "post_interactions",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("liked", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("saved", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("viewed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_liked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_saved_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_viewed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "post_id", name="uq_post_interaction"),
    )
    op.create_index(
        "idx_post_interactions_post_id", "post_interactions", ["post_id"]
    )
    op.create_index(
        "idx_post_interactions_user_updated",
        "post_interactions",
        ["user_id", sa.text("updated_at DESC")],
    )

    # ========================================================================
    # DISCUSSION_INTERACTIONS table
    # ========================================================================
    op.create_table(
        "discussion_interactions",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("discussion_id", sa.UUID(), nullable=False),
        sa.Column("liked", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("last_liked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "discussion_id", name="uq_discussion_interaction"
        ),
    )
    op.create_index(
        "idx_discussion_interactions_discussion_id",
        "discussion_interactions",
        ["discussion_id"],
    )

    # ========================================================================
    # PITCH_INTERACTIONS table
    # ========================================================================
    op.create_table(
        "pitch_interactions",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("pitch_id", sa.UUID(), nullable=False),
        sa.Column("has_viewed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("has_liked", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("first_viewed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_viewed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("liked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["pitch_id"], ["pitches.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "pitch_id", name="uq_pitch_interaction"),
    )
    op.create_index(
        "idx_pitch_interactions_pitch_id", "pitch_interactions", ["pitch_id"]
    )

    # Trigger function to keep updated_at current
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in _UPDATED_AT_TABLES:
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


_UPDATED_AT_TABLES = (
    "users",
    "posts",
    "pitches",
    "discussions",
    "post_interactions",
    "discussion_interactions",
    "pitch_interactions",
)


def downgrade() -> None:
    """Downgrade schema."""
    for table in _UPDATED_AT_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("pitch_interactions")
    op.drop_table("discussion_interactions")
    op.drop_table("post_interactions")
    op.drop_table("discussions")
    op.drop_table("pitches")
    op.drop_table("posts")
    op.drop_table("users")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS pitch_visibility")
    op.execute("DROP TYPE IF EXISTS post_status")
