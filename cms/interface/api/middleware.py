"""HTTP middleware."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from cms.persistence.transaction import TransactionState


async def rollback_on_error(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Roll back the request transaction when the response is an error.

    Routes map domain errors to ``HTTPException``, so the request container
    closes without an exception and would otherwise commit partial writes.
    Must be registered before the DI middleware so that it runs inside the
    request container.
    """
    response = await call_next(request)

    if response.status_code >= 400:
        container = getattr(request.state, "dishka_container", None)
        if container is not None:
            transaction = await container.get(TransactionState)
            transaction.mark_failed(f"HTTP {response.status_code}")

    return response
