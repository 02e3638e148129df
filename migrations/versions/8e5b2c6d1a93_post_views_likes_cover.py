"""post_views_likes_cover

Add post engagement and presentation fields:
- views counter and cover image on posts
- post_likes (one per user per post)
- category index for filtered listings

Revision ID: 8e5b2c6d1a93
Revises: 3c1f9a2b7d40
Create Date: 2026-10-18 16:41:07.552013

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8e5b2c6d1a93"
down_revision: Union[str, Sequence[str], None] = "3c1f9a2b7d40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column(
        "posts",
        sa.Column("cover_image", sa.Text(), nullable=False, server_default=""),
    )
    op.add_column(
        "posts",
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_check_constraint("ck_posts_views", "posts", "views >= 0")
    op.create_index("idx_posts_category", "posts", ["category"])

    # ========================================================================
    # POST_LIKES table
    # ========================================================================
    op.create_table(
        "post_likes",
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "user_id", name="pk_post_likes"),
    )
    op.create_index("idx_post_likes_user_id", "post_likes", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("post_likes")
    op.drop_index("idx_posts_category", table_name="posts")
    op.drop_constraint("ck_posts_views", "posts", type_="check")
    op.drop_column("posts", "views")
    op.drop_column("posts", "cover_image")
