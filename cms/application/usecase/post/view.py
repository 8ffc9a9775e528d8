"""Post read models shared by the post, category and tag use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from cms.domain.model import Post
from cms.domain.value import PostStatus


class AuthorInfo(BaseModel):
    """Author reference embedded in post responses."""

    id: str
    name: str


class CategoryInfo(BaseModel):
    """Category reference embedded in post responses."""

    id: str
    name: str
    slug: str


class TagInfo(BaseModel):
    """Tag reference embedded in post responses."""

    id: str
    name: str
    slug: str


class PostSummary(BaseModel):
    """Post without its body, used in lists."""

    id: str
    title: str
    slug: str
    excerpt: Optional[str]
    featured_image: Optional[str]
    status: PostStatus
    author: AuthorInfo
    category: Optional[CategoryInfo]
    tags: list[TagInfo]
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostSummary":
        return cls(**_common_fields(post))


class PostResponse(PostSummary):
    """Full post including content and SEO metadata."""

    content: str
    meta_title: Optional[str]
    meta_description: Optional[str]
    meta_keywords: Optional[str]

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            **_common_fields(post),
            content=post.content,
            meta_title=post.meta_title,
            meta_description=post.meta_description,
            meta_keywords=post.meta_keywords,
        )


def _common_fields(post: Post) -> dict:
    category = None
    if post.category:
        category = CategoryInfo(
            id=str(post.category.id),
            name=post.category.name,
            slug=post.category.slug.root,
        )
    return {
        "id": str(post.id),
        "title": post.title,
        "slug": post.slug.root,
        "excerpt": post.excerpt,
        "featured_image": post.featured_image,
        "status": post.status,
        "author": AuthorInfo(id=str(post.author_id), name=post.author_name),
        "category": category,
        "tags": [
            TagInfo(id=str(t.id), name=t.name, slug=t.slug.root) for t in post.tags
        ],
        "published_at": post.published_at,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }
