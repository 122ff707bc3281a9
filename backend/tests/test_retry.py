"""Tests for storage retry with backoff."""

import warnings
from unittest.mock import AsyncMock

import pytest

from idiomcards.infrastructure.retry import retry_operation
from idiomcards.ports.deck_repository import StorageError, TransientStorageError


async def test_transient_errors_are_retried():
    operation = AsyncMock(side_effect=[TransientStorageError("locked"), "saved"])

    result = await retry_operation(operation, "deck-1", initial_wait=0)

    assert result == "saved"
    assert operation.await_count == 2
    operation.assert_awaited_with("deck-1")


async def test_gives_up_after_max_attempts():
    operation = AsyncMock(side_effect=TransientStorageError("locked"))

    with pytest.raises(TransientStorageError):
        await retry_operation(operation, max_attempts=2, initial_wait=0)

    assert operation.await_count == 2


async def test_permanent_errors_raise_immediately():
    operation = AsyncMock(side_effect=StorageError("disk full"))

    with pytest.raises(StorageError):
        await retry_operation(operation, initial_wait=0)

    assert operation.await_count == 1


async def test_backoff_emits_no_warnings():
    operation = AsyncMock(side_effect=[TransientStorageError("locked"), "saved"])

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert await retry_operation(operation, initial_wait=0, max_wait=0) == "saved"
