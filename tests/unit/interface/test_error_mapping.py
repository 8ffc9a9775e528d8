"""Unit tests for domain error to HTTP translation."""

import pytest

from cms.domain.error import (
    AuthenticationError,
    ConcurrencyConflictError,
    ConflictError,
    DomainError,
    InvalidMergeError,
    NotAuthorizedError,
    NotFoundError,
    ResourceInUseError,
    SlugExhaustedError,
    ValidationError,
)
from cms.interface.error import http_error, status_for


class TestStatusFor:
    """Tests for status_for()."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (ValidationError("Category name is required"), 400),
            (ResourceInUseError("tag", 3, "Please remove tag from posts first."), 400),
            (InvalidMergeError("Cannot merge tag with itself"), 400),
            (AuthenticationError("Invalid email or password"), 401),
            (NotAuthorizedError("You can only edit your own posts"), 403),
            (NotFoundError("Post", "abc"), 404),
            (ConflictError("Tag with this name already exists"), 409),
            (ConcurrencyConflictError("Conflicting tag slug"), 409),
            (SlugExhaustedError("news", 10_000), 500),
            (DomainError("unmapped"), 500),
        ],
    )
    def test_maps_each_error(self, error, expected):
        assert status_for(error) == expected


class TestHttpError:
    """Tests for http_error()."""

    def test_carries_message(self):
        exc = http_error(
            ResourceInUseError("category", 2, "Please reassign or delete posts first.")
        )

        assert exc.status_code == 400
        assert exc.detail == (
            "Cannot delete category with existing posts. "
            "Please reassign or delete posts first."
        )
        assert exc.headers is None

    def test_unauthenticated_adds_challenge_header(self):
        exc = http_error(AuthenticationError("Account is deactivated"))

        assert exc.status_code == 401
        assert exc.headers == {"WWW-Authenticate": "Bearer"}
