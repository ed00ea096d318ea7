"""Tests for concurrent registry operations."""

import asyncio

import pytest

from linkviz import ListNotFoundError, ListRegistry


@pytest.mark.asyncio
async def test_concurrent_appends_same_list() -> None:
    """Test multiple writers appending to one list concurrently."""
    registry = ListRegistry()
    list_id = (await registry.create_list("shared", "double")).id

    async def writer(start: int, count: int) -> None:
        for i in range(start, start + count):
            await registry.append(list_id, i)
            await asyncio.sleep(0)

    await asyncio.gather(
        writer(0, 20),
        writer(100, 20),
        writer(200, 20),
    )

    snap = await registry.get_list(list_id)
    assert snap.size == 60
    assert len(snap.nodes) == 60
    assert sorted(r.value for r in snap.nodes) == sorted(
        list(range(0, 20)) + list(range(100, 120)) + list(range(200, 220))
    )


@pytest.mark.asyncio
async def test_concurrent_creates_get_unique_ids() -> None:
    """Test that concurrent creates never share an id."""
    registry = ListRegistry()

    snaps = await asyncio.gather(*(registry.create_list(f"l{i}", "circular") for i in range(50)))

    assert len({snap.id for snap in snaps}) == 50
    assert await registry.count() == 50


@pytest.mark.asyncio
async def test_concurrent_mixed_operations_keep_invariants() -> None:
    """Test interleaved inserts and deletes across variants."""
    registry = ListRegistry()
    ids = [(await registry.create_list(v, v)).id for v in ("single", "double", "circular")]

    async def churn(list_id: str) -> None:
        for i in range(30):
            await registry.append(list_id, i)
            await registry.prepend(list_id, -i)
            await asyncio.sleep(0)
            if i % 3 == 0:
                await registry.delete_at(list_id, 0)

    await asyncio.gather(*(churn(list_id) for list_id in ids for _ in range(2)))

    for list_id in ids:
        snap = await registry.get_list(list_id)
        assert snap.size == 2 * (60 - 10)
        assert len(snap.nodes) == snap.size
        async with registry._hold(list_id) as lst:
            lst.check_invariants()


@pytest.mark.asyncio
async def test_delete_list_while_writers_run() -> None:
    """Test that writers see ListNotFoundError once the list is deleted."""
    registry = ListRegistry()
    list_id = (await registry.create_list("doomed")).id
    errors: list[Exception] = []
    started = asyncio.Event()

    async def writer() -> None:
        i = 0
        while True:
            try:
                await registry.append(list_id, i)
            except ListNotFoundError as exc:
                errors.append(exc)
                return
            i += 1
            started.set()
            await asyncio.sleep(0)

    task = asyncio.create_task(writer())
    await started.wait()
    await registry.delete_list(list_id)
    await task

    assert not await registry.contains(list_id)
    assert len(errors) == 1


@pytest.mark.asyncio
async def test_concurrent_readers_and_writer() -> None:
    """Test that projections taken during writes are always consistent."""
    registry = ListRegistry()
    list_id = (await registry.create_list("ring", "circular")).id
    done = asyncio.Event()

    async def writer() -> None:
        for i in range(50):
            await registry.append(list_id, i)
            await asyncio.sleep(0)
        done.set()

    async def reader() -> None:
        while not done.is_set():
            records = await registry.project(list_id)
            if records:
                assert records[-1].next_id == records[0].id
            await asyncio.sleep(0)

    await asyncio.gather(writer(), reader(), reader())
    assert len(await registry.project(list_id)) == 50


@pytest.mark.asyncio
async def test_delete_waits_for_in_flight_operation() -> None:
    """Test that delete and later writers queue behind a list's lock holder."""
    registry = ListRegistry()
    list_id = (await registry.create_list("busy", "double")).id
    entered = asyncio.Event()
    release = asyncio.Event()

    async def holder() -> None:
        async with registry._hold(list_id) as lst:
            entered.set()
            await release.wait()
            lst.append(1)

    holder_task = asyncio.create_task(holder())
    await entered.wait()

    delete_task = asyncio.create_task(registry.delete_list(list_id))
    await asyncio.sleep(0)
    append_task = asyncio.create_task(registry.append(list_id, 2))
    for _ in range(5):
        await asyncio.sleep(0)

    # Both are parked on the list lock
    assert not delete_task.done()
    assert not append_task.done()
    assert await registry.contains(list_id)

    release.set()
    await holder_task
    await delete_task
    assert not await registry.contains(list_id)

    with pytest.raises(ListNotFoundError):
        await append_task


@pytest.mark.asyncio
async def test_project_waits_for_in_flight_operation() -> None:
    """Test that a projection never observes a half-finished operation."""
    registry = ListRegistry()
    list_id = (await registry.create_list("busy", "circular")).id
    entered = asyncio.Event()
    release = asyncio.Event()

    async def holder() -> None:
        async with registry._hold(list_id) as lst:
            lst.append(1)
            entered.set()
            await release.wait()
            lst.append(2)

    holder_task = asyncio.create_task(holder())
    await entered.wait()

    project_task = asyncio.create_task(registry.project(list_id))
    for _ in range(5):
        await asyncio.sleep(0)
    assert not project_task.done()

    release.set()
    await holder_task
    records = await project_task
    assert [r.value for r in records] == [1, 2]
    assert records[-1].next_id == records[0].id
