"""The abstract storage layer of Postbox.

Postbox keeps its state in a key-value store: every value is an opaque `bytes` blob stored under a `str` key (see `KeyValueStorage`).
The store gives no finer granularity than one key and no transaction, a `put` simply replaces what was stored under the key.

Most of the data structures in Postbox are declared with `dataclasses.dataclass`, and they are persisted as JSON objects.
`RecordAdapter` describes the conversion between a record type and a `dict`, and this module provides a direct implementation for dataclasses: `DataclassRecordAdapter`.
"""
from typing import (
    Any,
    Awaitable,
    Dict,
    Generic,
    Optional,
    Type,
    TypeVar,
)

T = TypeVar("T")


class KeyValueStorage(object):
    """A protocol type which describes the operations of a key-value store.

    .. note:: There is no compare-and-swap. Two writers doing read-modify-write on the same key race, the later `put` wins.
    """

    def get(self, key: str) -> Awaitable[Optional[bytes]]:
        """Return the value stored under `key`, or `None` if the key is absent."""
        ...

    def put(self, key: str, value: bytes) -> Awaitable[None]:
        """Replace the value stored under `key` with `value`."""
        ...


class RecordAdapter(Generic[T]):
    """Adapter between a record type and `dict`.
    Implement `record2dict` and `dict2record` to transform the data between record and dict.
    """

    def record2dict(self, record: T) -> Dict[str, Any]:
        """Build a `dict` from `record`."""
        ...

    def dict2record(self, d: Dict[str, Any]) -> T:
        """Build a record from a `d`."""
        ...


import dataclasses


class DataclassRecordAdapter(RecordAdapter[T]):
    """A `RecordAdapter` for `dataclasses`.

    The key of a field in the `dict` is the field name, unless the field carries a `"key"` in its metadata:

    ````python
    @dataclass
    class Spam(object):
        is_read: bool = field(metadata={"key": "isRead"})
    ````

    ..warning:: the checking is performed by dataclass itself. `dataclasses` does not check the actual data type, but checking the fields given.
        Unknown keys are ignored, missing keys without default raise `TypeError`.
    """

    def __init__(self, datacls: Type[T]) -> None:
        assert dataclasses.is_dataclass(datacls), "datacls should be a dataclass"
        self.datacls = datacls
        self.keys = {
            f.name: f.metadata.get("key", f.name) for f in dataclasses.fields(datacls)
        }
        super().__init__()

    def dict2record(self, d: Dict[str, Any]) -> T:
        kwargs = {name: d[key] for name, key in self.keys.items() if key in d}
        return self.datacls(**kwargs)  # type: ignore # it should work

    def record2dict(self, record: T) -> Dict[str, Any]:
        return {
            self.keys[name]: value
            for name, value in dataclasses.asdict(record).items()
        }


import asyncio

from unqlite import UnQLite

from . import storage_executor


class UnQLiteStorage(KeyValueStorage):
    """An implementation of `KeyValueStorage` for `unqlite.UnQLite`.

    .. note:: This implementation using thead pool to avoid main thread blocking
        The API of `unqlite-python` is synchrounous. To prevent main thread blocking it is wrapped with `postbox.utils.storage_executor`.

    Related:

    - [unqlite-python API documentation](https://unqlite-python.readthedocs.io/en/latest/api.html)
    """

    def __init__(self, instance: UnQLite) -> None:
        self.instance = instance
        super().__init__()

    def get_sync(self, key: str) -> Optional[bytes]:
        """Fetch the value of `key` without thread pool."""
        try:
            value = self.instance.fetch(key)
        except KeyError:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    def put_sync(self, key: str, value: bytes) -> None:
        """Store `value` as `key` without thread pool."""
        self.instance.store(key, value)

    def get(self, key: str) -> Awaitable[Optional[bytes]]:
        return asyncio.get_running_loop().run_in_executor(
            storage_executor.get(), self.get_sync, key
        )

    def put(self, key: str, value: bytes) -> Awaitable[None]:
        return asyncio.get_running_loop().run_in_executor(
            storage_executor.get(), self.put_sync, key, value
        )
