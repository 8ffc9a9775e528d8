"""Shared in-memory storage for the in-memory repositories."""

from dataclasses import dataclass, field

from cms.domain.model import Category, Post, Tag, User
from cms.domain.value import CategoryId, PostId, TagId, UserId


@dataclass
class InMemoryDatabase:
    """Tables shared by the in-memory repositories.

    Join edges are kept here so that post reads see tag and category
    changes made through the other repositories, as with the real database.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    categories: dict[CategoryId, Category] = field(default_factory=dict)
    tags: dict[TagId, Tag] = field(default_factory=dict)
    posts: dict[PostId, Post] = field(default_factory=dict)
    # (post_id, tag_id) pairs; a set keeps them unique
    post_tags: set[tuple[PostId, TagId]] = field(default_factory=set)
    # One category per post
    post_categories: dict[PostId, CategoryId] = field(default_factory=dict)

    def delete_post(self, post_id: PostId) -> bool:
        """Remove a post and cascade its edges."""
        if self.posts.pop(post_id, None) is None:
            return False
        self.post_tags = {edge for edge in self.post_tags if edge[0] != post_id}
        self.post_categories.pop(post_id, None)
        return True

    def snapshot(self) -> "InMemoryDatabase":
        """Copy the tables; entities are frozen, so shallow copies suffice."""
        return InMemoryDatabase(
            users=dict(self.users),
            categories=dict(self.categories),
            tags=dict(self.tags),
            posts=dict(self.posts),
            post_tags=set(self.post_tags),
            post_categories=dict(self.post_categories),
        )

    def restore(self, saved: "InMemoryDatabase") -> None:
        """Put back the tables from an earlier snapshot."""
        self.users = dict(saved.users)
        self.categories = dict(saved.categories)
        self.tags = dict(saved.tags)
        self.posts = dict(saved.posts)
        self.post_tags = set(saved.post_tags)
        self.post_categories = dict(saved.post_categories)
