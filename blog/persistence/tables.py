"""SQLAlchemy table definitions for the blog.

These table definitions are used with SQLAlchemy Core and manual mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (provisioned by the identity service)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("username", String(30), nullable=False, unique=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "role",
        postgresql.ENUM("user", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("slug", String(100), nullable=False, unique=True),
    Column("title", String(200), nullable=False),
    Column("content", Text, nullable=False),
    Column("excerpt", String(300), nullable=True),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("category", String(50), nullable=False, server_default="General"),
    Column("cover_image", Text, nullable=False, server_default=""),
    Column(
        "status",
        postgresql.ENUM(
            "draft", "published", "archived", name="post_status", create_type=False
        ),
        nullable=False,
        server_default="draft",
    ),
    Column("views", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("reading_time", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_status_created_at", posts_table.c.status, posts_table.c.created_at)
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_category", posts_table.c.category)

# ============================================================================
# POST_LIKES TABLE (at most one like per user per post)
# ============================================================================
post_likes_table = Table(
    "post_likes",
    metadata,
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("post_id", "user_id", name="pk_post_likes"),
)

Index("idx_post_likes_user_id", post_likes_table.c.user_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# parent_id uses SET NULL rather than CASCADE: subtree deletion is done by the
# application so that post comment counters stay in step.
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", Text, nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True
    ),
    Column("replies", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_post_created", comments_table.c.post_id, comments_table.c.created_at)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index(
    "idx_comments_author_created", comments_table.c.author_id, comments_table.c.created_at
)

# ============================================================================
# COMMENT_LIKES TABLE (at most one like per user per comment)
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("comment_id", "user_id", name="pk_comment_likes"),
)

Index("idx_comment_likes_user_id", comment_likes_table.c.user_id)
