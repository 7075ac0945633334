"""SQLAlchemy table definitions for OPAQ.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("username", String(30), nullable=False, unique=True),
    Column("full_name", String(255), nullable=False),
    Column("email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_email", users_table.c.email)

# ============================================================================
# POSTS TABLE (Artwall)
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False),
    Column("labels", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column(
        "status",
        Enum("draft", "published", name="post_status", create_type=False),
        nullable=False,
        server_default="draft",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_user_id", posts_table.c.user_id)
Index("idx_posts_created_at", posts_table.c.created_at.desc())

# ============================================================================
# PITCHES TABLE (Bloom)
# ============================================================================
pitches_table = Table(
    "pitches",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column("file_url", Text, nullable=False),
    Column("storage_id", String(255), nullable=False),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column(
        "visibility",
        Enum("private", "public", name="pitch_visibility", create_type=False),
        nullable=False,
        server_default="private",
    ),
    Column("views_count", Integer, nullable=False, server_default="0"),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("views_count >= 0", name="pitch_views_non_negative"),
    CheckConstraint("likes_count >= 0", name="pitch_likes_non_negative"),
)

Index("idx_pitches_user_id", pitches_table.c.user_id)
Index("idx_pitches_created_at", pitches_table.c.created_at.desc())

# ============================================================================
# DISCUSSIONS TABLE (one level of replies)
# ============================================================================
discussions_table = Table(
    "discussions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "parent_id",
        UUID,
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column("replies_count", Integer, nullable=False, server_default="0"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("is_hearted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("likes >= 0", name="discussion_likes_non_negative"),
    CheckConstraint("replies_count >= 0", name="discussion_replies_non_negative"),
)

Index(
    "idx_discussions_post_parent",
    discussions_table.c.post_id,
    discussions_table.c.parent_id,
)
Index("idx_discussions_parent_id", discussions_table.c.parent_id)
Index("idx_discussions_created_at", discussions_table.c.created_at)

# ============================================================================
# POST INTERACTIONS TABLE (ledger)
# ============================================================================
post_interactions_table = Table(
    "post_interactions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("liked", Boolean, nullable=False, server_default="false"),
    Column("saved", Boolean, nullable=False, server_default="false"),
    Column("viewed", Boolean, nullable=False, server_default="false"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("last_liked_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_saved_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_viewed_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "post_id", name="uq_post_interaction"),
)

Index("idx_post_interactions_post_id", post_interactions_table.c.post_id)
Index(
    "idx_post_interactions_user_updated",
    post_interactions_table.c.user_id,
    post_interactions_table.c.updated_at.desc(),
)

# ============================================================================
# DISCUSSION INTERACTIONS TABLE (ledger)
# ============================================================================
discussion_interactions_table = Table(
    "discussion_interactions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "discussion_id",
        UUID,
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("liked", Boolean, nullable=False, server_default="false"),
    Column("last_liked_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "discussion_id", name="uq_discussion_interaction"),
)

Index(
    "idx_discussion_interactions_discussion_id",
    discussion_interactions_table.c.discussion_id,
)

# ============================================================================
# PITCH INTERACTIONS TABLE (ledger)
# ============================================================================
pitch_interactions_table = Table(
    "pitch_interactions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "pitch_id", UUID, ForeignKey("pitches.id", ondelete="CASCADE"), nullable=False
    ),
    Column("has_viewed", Boolean, nullable=False, server_default="false"),
    Column("has_liked", Boolean, nullable=False, server_default="false"),
    Column("first_viewed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_viewed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("liked_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "pitch_id", name="uq_pitch_interaction"),
)

Index("idx_pitch_interactions_pitch_id", pitch_interactions_table.c.pitch_id)
