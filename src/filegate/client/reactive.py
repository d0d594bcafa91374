"""Asynchronous client facade over a transfer handler.

Each method is a coroutine (or, for listings, an async generator) that
runs the blocking transfer call in an executor. Nothing is executed until
the coroutine is awaited, and errors raised by the transfer call surface
at the ``await``, never when the coroutine object is created.

Operations are independent: two outstanding calls may run at the same
time. A connection holds a single session without locking, so keep at
most one call in flight per client, or pass an executor with a single
worker to serialise them::

    executor = ThreadPoolExecutor(max_workers=1)
    client = AsyncClient(transfer, executor=executor)
    await client.create_directories("/inbox")
    await client.upload_file("a.csv", "/inbox/a.csv")
    async for name in client.list_files("/inbox"):
        print(name)

Cancelling a task before the executor has started its call prevents the
call from running. A call that is already running cannot be interrupted;
disconnecting the session is the only way to abort it.
"""

import asyncio
import functools
from concurrent.futures import Executor
from typing import AsyncIterator, Callable, Optional, TypeVar

from filegate.transfer import BaseTransfer

T = TypeVar("T")


class AsyncClient:
    """Non-blocking client for remote file operations."""

    def __init__(self, transfer: BaseTransfer, executor: Optional[Executor] = None):
        """Initialize client.

        Args:
            transfer: Transfer handler to wrap
            executor: Executor for blocking calls (default: the event
                loop's default executor)
        """
        self.transfer = transfer
        self.executor = executor

    async def _run(self, func: Callable[..., T], *args, **kwargs) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, functools.partial(func, *args, **kwargs)
        )

    async def list_files(self, remote_dir: str) -> AsyncIterator[str]:
        """Yield the names in a remote directory one at a time, in listing order."""
        names = await self._run(self.transfer.list_files, remote_dir)
        for name in names:
            yield name

    async def upload_file(
        self, local_path: str, remote_path: str, create_parents: bool = False
    ) -> None:
        await self._run(
            self.transfer.upload,
            str(local_path),
            remote_path,
            create_parents=create_parents,
        )

    async def download_file(self, remote_path: str, local_path: str) -> None:
        await self._run(self.transfer.download, remote_path, str(local_path))

    async def delete_file(self, remote_path: str) -> None:
        await self._run(self.transfer.delete, remote_path)

    async def create_directories(self, remote_path: str) -> None:
        await self._run(self.transfer.create_directories, remote_path)

    async def delete_directory(self, remote_dir: str) -> None:
        await self._run(self.transfer.delete_directory, remote_dir)

    async def exists(self, remote_path: str) -> bool:
        return await self._run(self.transfer.exists, remote_path)

    async def disconnect(self) -> None:
        await self._run(self.transfer.disconnect)

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
