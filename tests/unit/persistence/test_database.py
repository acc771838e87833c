"""Unit tests for the request session lifecycle."""

import pytest

from letters.persistence.database import request_session


class RecordingSession:
    """Stands in for AsyncSession, recording what the request does to it."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.pending = True

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.calls.append("close")

    def in_transaction(self) -> bool:
        return self.pending

    async def commit(self) -> None:
        self.calls.append("commit")
        self.pending = False

    async def rollback(self) -> None:
        self.calls.append("rollback")
        self.pending = False


class TestRequestSession:
    """The request session never commits on its own."""

    @pytest.mark.asyncio
    async def test_uncommitted_writes_rolled_back_on_success(self):
        """Should discard whatever the request left pending."""
        # Arrange
        session = RecordingSession()

        # Act
        async with request_session(lambda: session):
            pass

        # Assert
        assert session.calls == ["rollback", "close"]

    @pytest.mark.asyncio
    async def test_failed_request_rolled_back(self):
        """Should roll back and re-raise when the request fails."""
        # Arrange
        session = RecordingSession()

        # Act & Assert
        with pytest.raises(TimeoutError):
            async with request_session(lambda: session):
                raise TimeoutError()

        assert "commit" not in session.calls
        assert session.calls == ["rollback", "close"]

    @pytest.mark.asyncio
    async def test_committed_session_left_alone(self):
        """Should not roll back after the use case committed."""
        # Arrange
        session = RecordingSession()

        # Act
        async with request_session(lambda: session) as active:
            await active.commit()

        # Assert
        assert session.calls == ["commit", "close"]
