"""The thread pool which runs the blocking database calls of `postbox.utils.storage.UnQLiteStorage`.

The pool is created on first use and shared by all storages of the process.
`shutdown` releases the threads; the next `get` creates a new pool.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

MAX_WORKERS = 4
"""Database calls are short. A few threads are enough to keep the event loop free."""

_storage_executor: Optional[ThreadPoolExecutor] = None


def get() -> ThreadPoolExecutor:
    """Return the storage executor, create it if it does not exists."""
    global _storage_executor
    if not _storage_executor:
        _storage_executor = ThreadPoolExecutor(
            MAX_WORKERS, "postbox.utils.storage_executor"
        )
    return _storage_executor


def shutdown() -> None:
    """Wait for the pending calls and release the threads of the storage executor."""
    global _storage_executor
    if _storage_executor:
        executor, _storage_executor = _storage_executor, None
        executor.shutdown(wait=True)
