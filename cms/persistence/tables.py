"""SQLAlchemy table definitions for the CMS.

SQLAlchemy Core tables queried directly by the repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("email", String(255), nullable=False, unique=True),  # Stored lowercase
    Column("name", String(255), nullable=False),
    Column("password_hash", Text, nullable=False),
    Column(
        "role",
        Enum(
            "reader", "author", "admin", "super_admin", name="user_role", create_type=False
        ),
        nullable=False,
        server_default="reader",
    ),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
)

# ============================================================================
# CATEGORIES TABLE
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(100), nullable=False),
    Column("slug", String(100), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
)

Index("idx_categories_name", categories_table.c.name)

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(100), nullable=False),
    Column("slug", String(100), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
)

Index("idx_tags_name", tags_table.c.name)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("title", String(300), nullable=False),
    Column("slug", String(100), nullable=False, unique=True),
    Column("excerpt", Text, nullable=True),
    Column("content", Text, nullable=False),
    Column("featured_image", Text, nullable=True),
    Column(
        "status",
        Enum("draft", "published", "archived", name="post_status", create_type=False),
        nullable=False,
        server_default="draft",
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_name", String(255), nullable=False),  # Denormalized from users
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    # SEO meta
    Column("meta_title", String(255), nullable=True),
    Column("meta_description", Text, nullable=True),
    Column("meta_keywords", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_published_at", posts_table.c.published_at.desc())
Index("idx_posts_status", posts_table.c.status)
Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# POST_TAGS TABLE (junction table for many-to-many relationship)
# ============================================================================
post_tags_table = Table(
    "post_tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="RESTRICT"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    UniqueConstraint("post_id", "tag_id", name="uq_post_tag"),
)

Index("idx_post_tags_tag_id", post_tags_table.c.tag_id)

# ============================================================================
# POST_CATEGORIES TABLE (at most one category per post)
# ============================================================================
post_categories_table = Table(
    "post_categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    UniqueConstraint("post_id", name="uq_post_category"),
)

Index("idx_post_categories_category_id", post_categories_table.c.category_id)
