# Copyright (C) 2021 The Postbox Contributors
#
# This file is part of Postbox.
#
# Postbox is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Postbox is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Postbox.  If not, see <http://www.gnu.org/licenses/>.
import pytest
from postbox.utils import storage_executor
from postbox.utils.storage import UnQLiteStorage
from .utils import database


class TestStorageExecutor:
    def test_get_returns_shared_executor(self):
        assert storage_executor.get() is storage_executor.get()

    def test_shutdown_releases_executor_and_get_recreates_it(self):
        before = storage_executor.get()
        storage_executor.shutdown()
        after = storage_executor.get()
        assert after is not before
        assert after.submit(lambda: 42).result() == 42

    def test_shutdown_without_executor_does_nothing(self):
        storage_executor.shutdown()
        storage_executor.shutdown()

    @pytest.mark.asyncio
    async def test_storage_works_after_shutdown(self, database):
        storage = UnQLiteStorage(database)
        await storage.put("spam", b"eggs")
        storage_executor.shutdown()
        assert await storage.get("spam") == b"eggs"
        assert await storage.get("absent") is None
