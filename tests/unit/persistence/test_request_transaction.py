"""Unit tests for request-scoped commit and rollback."""

import pytest

from cms.domain.repository import TagRepository
from cms.persistence.transaction import TransactionState
from cms.util.di.infrastructure.persistence import ProdPersistenceProvider
from tests.conftest import make_tag
from tests.di import build_test_container


class RecordingSession:
    """Stands in for AsyncSession; records how the transaction ended."""

    def __init__(self, log: list[str]) -> None:
        self.log = log

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.log.append("close")

    async def commit(self) -> None:
        self.log.append("commit")

    async def rollback(self) -> None:
        self.log.append("rollback")


async def _close_scope(transaction: TransactionState, error=None) -> list[str]:
    """Open a session and close it the way the request container does."""
    log: list[str] = []
    provider = ProdPersistenceProvider()
    sessions = provider.get_session(lambda: RecordingSession(log), transaction)

    await sessions.__anext__()
    with pytest.raises(StopAsyncIteration):
        await sessions.asend(error)

    return log


class TestSessionOutcome:
    """The PostgreSQL session commits only clean requests."""

    @pytest.mark.asyncio
    async def test_clean_scope_commits(self):
        assert await _close_scope(TransactionState()) == ["commit", "close"]

    @pytest.mark.asyncio
    async def test_exception_rolls_back(self):
        log = await _close_scope(TransactionState(), RuntimeError("boom"))

        assert log == ["rollback", "close"]

    @pytest.mark.asyncio
    async def test_failed_transaction_rolls_back(self):
        transaction = TransactionState()
        transaction.mark_failed("HTTP 400")

        assert await _close_scope(transaction) == ["rollback", "close"]


class TestInMemoryRollback:
    """The in-memory tables follow the same commit rules."""

    @pytest.mark.asyncio
    async def test_exception_discards_writes(self):
        container = build_test_container()

        with pytest.raises(RuntimeError):
            async with container() as request_container:
                await make_tag(await request_container.get(TagRepository), "lost")
                raise RuntimeError("boom")

        async with container() as request_container:
            tags = await (await request_container.get(TagRepository)).find_all()

        await container.close()
        assert tags == []

    @pytest.mark.asyncio
    async def test_failed_transaction_discards_writes(self):
        container = build_test_container()

        async with container() as request_container:
            await make_tag(await request_container.get(TagRepository), "kept")

        async with container() as request_container:
            await make_tag(await request_container.get(TagRepository), "lost")
            (await request_container.get(TransactionState)).mark_failed("HTTP 400")

        async with container() as request_container:
            tags = await (await request_container.get(TagRepository)).find_all()

        await container.close()
        assert [t.name for t in tags] == ["kept"]
