"""ReadWriteLock -- 基于 asyncio.Condition 的读写锁

任意数量的读者可以并发持有读锁；写者独占，期间阻塞所有读者和其他写者。
一旦有写者在等待，新读者会排在其后，避免持续的读请求饿死写入。
读锁 / 写锁均以 async 上下文管理器形式提供，保证任何退出路径都会释放：
释放时先同步更新计数，再在独立任务中唤醒等待者，释放过程中被取消
也不会让锁停留在占用状态。
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ReadWriteLock:
    """写者优先的 asyncio 读写锁"""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0
        # 进行中的唤醒任务，持有引用直到完成
        self._wakeups: set[asyncio.Task] = set()

    @property
    def reader_count(self) -> int:
        """当前持有读锁的读者数量"""
        return self._readers

    @property
    def writer_active(self) -> bool:
        """是否有写者持有写锁"""
        return self._writer_active

    async def _notify_all(self) -> None:
        async with self._cond:
            self._cond.notify_all()

    async def _wake_waiters(self) -> None:
        """唤醒所有等待者，调用方被取消时唤醒照常完成"""
        task = asyncio.ensure_future(self._notify_all())
        self._wakeups.add(task)
        task.add_done_callback(self._wakeups.discard)
        await asyncio.shield(task)

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[None]:
        """共享（读）临界区"""
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer_active and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            self._readers -= 1
            if self._readers == 0:
                await self._wake_waiters()

    @asynccontextmanager
    async def writer(self) -> AsyncIterator[None]:
        """独占（写）临界区"""
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer_active and self._readers == 0
                )
            except BaseException:
                # 等待中被取消：唤醒因本写者排队而阻塞的读者
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer_active = True
        try:
            yield
        finally:
            self._writer_active = False
            await self._wake_waiters()
