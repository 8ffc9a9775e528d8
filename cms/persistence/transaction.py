"""Request transaction outcome."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class TransactionState:
    """Whether the current request's transaction may commit.

    Route handlers turn domain errors into HTTP responses, so the session
    provider never sees them raised. Anything that decides the request failed
    marks it here, and the session rolls back instead of committing.
    """

    failed: bool = False
    reason: Optional[str] = None

    def mark_failed(self, reason: str) -> None:
        """Roll back this request's writes when the scope closes."""
        self.failed = True
        self.reason = reason
