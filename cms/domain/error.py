"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (blank names, names without slug characters)."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change content they may not touch."""

    def __init__(self, message: str):
        super().__init__(message)


class AuthenticationError(DomainError):
    """Raised when credentials are wrong or the account is disabled."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a resource with the same natural key already exists."""

    pass


class ResourceInUseError(DomainError):
    """Raised when deleting a category or tag that posts still reference."""

    def __init__(self, resource: str, post_count: int, hint: str):
        self.resource = resource
        self.post_count = post_count
        super().__init__(f"Cannot delete {resource} with existing posts. {hint}")


class SlugExhaustedError(DomainError):
    """Raised when no free numeric suffix was found for a slug."""

    def __init__(self, candidate: str, attempts: int):
        self.candidate = candidate
        self.attempts = attempts
        super().__init__(
            f"No unique slug found for '{candidate}' after {attempts} attempts"
        )


class InvalidMergeError(DomainError):
    """Raised when a tag is merged into itself."""

    pass


class ConcurrencyConflictError(DomainError):
    """Raised when a unique constraint rejects a row the resolver believed free.

    Callers retry the whole resolve-and-insert sequence once.
    """

    pass
