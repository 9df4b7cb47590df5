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
from unqlite import UnQLite
from postbox import Postbox
from postbox.mailstore import MailStore
from postbox.service import MailService
from postbox.usrsys.directory import UserDirectory
from postbox.utils.storage import UnQLiteStorage


@pytest.fixture
async def postbox():
    instance = Postbox(database_path=":mem:")
    try:
        await instance.start()
        yield instance
    finally:
        await instance.stop()


@pytest.fixture
def database():
    db = UnQLite(":mem:")
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def mailstore(database) -> MailStore:
    return MailStore(UnQLiteStorage(database))


@pytest.fixture
def mail_service(mailstore) -> MailService:
    return MailService(mailstore, UserDirectory())
