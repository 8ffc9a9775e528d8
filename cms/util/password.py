"""Password hashing with passlib's CryptContext.

Argon2id is the primary scheme; pbkdf2_sha256 hashes are still accepted and
flagged for rehash on the next successful login.
"""

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from cms.util.error import PasswordHashingError


class PasswordHasher:
    """Hash and verify user passwords."""

    def __init__(self) -> None:
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
        )

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: The plaintext password to hash

        Returns:
            The encoded hash

        Raises:
            PasswordHashingError: If the password is empty
        """
        if not password:
            raise PasswordHashingError("Password cannot be empty")
        return self.pwd_context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash.

        Unrecognised hash formats count as a mismatch.
        """
        if not password or not hashed:
            return False
        try:
            return self.pwd_context.verify(password, hashed)
        except (UnknownHashError, ValueError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """Whether a stored hash uses a deprecated scheme or parameters."""
        return self.pwd_context.needs_update(hashed)
