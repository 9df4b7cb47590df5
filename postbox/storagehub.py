"""This module contains `StorageHub`, the storage centre of postbox.
"""
from unqlite import UnQLite

from .mailstore import MailStore
from .utils.storage import KeyValueStorage, UnQLiteStorage


class StorageHub(object):
    """The storage centre for postbox. This class hands out the storages keep postbox storing data.

    ..note:: Typically you use the one from `postbox.Postbox`.

    Related:

    - `postbox.utils.storage` The abstract storage layer of postbox.
    """

    def __init__(self, database: UnQLite) -> None:
        self.database = database
        """The database instance.
        .. important:: Don't depends on this property, postbox may support more database backend in future."""
        self._key_value_storage = UnQLiteStorage(database)
        super().__init__()

    @property
    def key_value_storage(self) -> KeyValueStorage:
        return self._key_value_storage

    @property
    def mailstore(self) -> MailStore:
        """
        Related:

        - `postbox.mailstore.MailRecord` The object being stored.
        """
        return MailStore(self.key_value_storage)
