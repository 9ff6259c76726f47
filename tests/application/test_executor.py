"""Tests for BackgroundExecutor."""

import asyncio

import pytest

from codemenu.application.executor import BackgroundExecutor


def test_rejects_non_positive_chunk_size():
    with pytest.raises(ValueError):
        BackgroundExecutor(chunk_size=0)


@pytest.mark.asyncio
async def test_spawn_tracks_until_done():
    executor = BackgroundExecutor()

    async def work():
        await asyncio.sleep(0)
        return 42

    task = executor.spawn(work(), name="work")
    assert executor.pending == 1
    assert await task == 42
    await asyncio.sleep(0)
    assert executor.pending == 0


@pytest.mark.asyncio
async def test_failed_task_is_logged_not_raised():
    executor = BackgroundExecutor()

    async def boom():
        raise RuntimeError("boom")

    task = executor.spawn(boom(), name="boom")
    await asyncio.gather(task, return_exceptions=True)
    await asyncio.sleep(0)
    assert executor.pending == 0


@pytest.mark.asyncio
async def test_shutdown_cancels_pending_tasks():
    executor = BackgroundExecutor()
    never = asyncio.Event()

    task = executor.spawn(never.wait(), name="waiting")
    await asyncio.sleep(0)
    await executor.shutdown()

    assert task.cancelled()
    assert executor.pending == 0
