"""initial_schema

Create the blog CMS schema:
- Users (email/password accounts with roles)
- Categories and tags (unique slugs)
- Posts (draft/published/archived, SEO meta)
- Post-tag and post-category junction tables (one category per post)

Revision ID: 3f2b9c41d7a0
Revises:
Create Date: 2026-10-19 09:12:44.318201

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2b9c41d7a0"
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
            CREATE TYPE user_role AS ENUM ('reader', 'author', 'admin', 'super_admin');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE post_status AS ENUM ('draft', 'published', 'archived');
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
        sa.Column("email", sa.String(255), nullable=False),  # Stored lowercase
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(
                "reader",
                "author",
                "admin",
                "super_admin",
                name="user_role",
                create_type=False,
            ),
            nullable=False,
            server_default="reader",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # ========================================================================
    # CATEGORIES table
    # ========================================================================
    op.create_table(
        "categories",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_categories_slug"),
    )
    op.create_index("idx_categories_name", "categories", ["name"])

    # ========================================================================
    # TAGS table
    # ========================================================================
    op.create_table(
        "tags",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_tags_slug"),
    )
    op.create_index("idx_tags_name", "tags", ["name"])

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        _id_column(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("featured_image", sa.Text(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                "draft", "published", "archived", name="post_status", create_type=False
            ),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("meta_title", sa.String(255), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("meta_keywords", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_posts_slug"),
    )
    op.create_index(
        "idx_posts_created_at", "posts", [sa.text("created_at DESC")]
    )
    op.create_index(
        "idx_posts_published_at", "posts", [sa.text("published_at DESC")]
    )
    op.create_index("idx_posts_status", "posts", ["status"])
    op.create_index("idx_posts_author_id", "posts", ["author_id"])

    # ========================================================================
    # POST_TAGS junction table
    # ========================================================================
    op.create_table(
        "post_tags",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("tag_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "tag_id", name="uq_post_tag"),
    )
    op.create_index("idx_post_tags_tag_id", "post_tags", ["tag_id"])

    # ========================================================================
    # POST_CATEGORIES junction table (at most one category per post)
    # ========================================================================
    op.create_table(
        "post_categories",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", name="uq_post_category"),
    )
    op.create_index(
        "idx_post_categories_category_id", "post_categories", ["category_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("post_categories")
    op.drop_table("post_tags")
    op.drop_table("posts")
    op.drop_table("tags")
    op.drop_table("categories")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS post_status")
    op.execute("DROP TYPE IF EXISTS user_role")
