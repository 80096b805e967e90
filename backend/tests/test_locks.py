"""Tests for the per-document lock registry."""

import asyncio

import pytest

from prolist.document_lifecycle.locks import KeyedLockRegistry
from prolist.exceptions import ConcurrentModification
from prolist.models.document import DocumentKey


@pytest.mark.asyncio
async def test_idle_locks_are_dropped():
    locks = KeyedLockRegistry(timeout=1.0)
    for i in range(50):
        async with locks.hold(f"s_{i}", DocumentKey.INVOICE):
            assert locks.is_locked(f"s_{i}", DocumentKey.INVOICE)
    async with locks.hold_many("s_1", [DocumentKey.COO, DocumentKey.INVOICE]):
        assert len(locks) == 2
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_lock_kept_while_a_waiter_remains():
    locks = KeyedLockRegistry(timeout=1.0)
    order: list[str] = []

    async def second():
        async with locks.hold("s_1", DocumentKey.COO):
            order.append("second")

    async with locks.hold("s_1", DocumentKey.COO):
        waiter = asyncio.create_task(second())
        await asyncio.sleep(0)
        order.append("first")
    # The waiter still needs the same lock object after the first holder leaves.
    assert len(locks) == 1
    await waiter

    assert order == ["first", "second"]
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_timed_out_waiter_is_forgotten():
    locks = KeyedLockRegistry(timeout=0.05)
    async with locks.hold("s_1", DocumentKey.COO):
        with pytest.raises(ConcurrentModification):
            async with locks.hold("s_1", DocumentKey.COO):
                pass
        assert len(locks) == 1
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_hold_many_releases_acquired_keys_on_timeout():
    locks = KeyedLockRegistry(timeout=0.05)
    async with locks.hold("s_1", DocumentKey.PACKING_LIST):
        with pytest.raises(ConcurrentModification):
            async with locks.hold_many("s_1", [DocumentKey.INVOICE, DocumentKey.PACKING_LIST]):
                pass
        assert not locks.is_locked("s_1", DocumentKey.INVOICE)
        assert len(locks) == 1
    assert len(locks) == 0
