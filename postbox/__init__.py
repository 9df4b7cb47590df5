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

from typing import Iterable, List, Optional, Tuple

import httpx
from unqlite import UnQLite

from .apigate import HTTPAPIGateway
from .service import MailService
from .storagehub import StorageHub
from .usrsys.directory import DEFAULT_USERS, User, UserDirectory
from .utils import storage_executor


class Postbox(object):
    """The entry of Postbox. This class stores configuration and tools to keep other components running.

    Components:

    - User Directory (`postbox.usrsys.directory`)
    - Mail Service (`postbox.service`)
    - HTTP API Gateway (`postbox.apigate`)

    .. caution:: The users are fixed after construction, there is no way to add or remove one at runtime.
    """

    def __init__(
        self,
        *,
        database_path: str,
        users: Optional[Iterable[User]] = None,
        http_binds: Optional[List[Tuple[Optional[str], int]]] = None,
        debug: bool = False,
    ) -> None:
        self.debug = debug
        self.database_path: str = database_path
        """`str`. The path to database. Currently it's a file path or ":mem:".
        ":mem:" tells UnQLite open database in memory."""
        self.database = UnQLite(database_path)
        """Database instance. Notice that this property may not be avaliable in future."""
        self.storage_hub = StorageHub(self.database)
        """`postbox.StorageHub`. The references to all storages in postbox."""
        self.directory = UserDirectory(users if users is not None else DEFAULT_USERS)
        """`postbox.usrsys.directory.UserDirectory`. The users of this instance."""
        self.mail_service = MailService(self.storage_hub.mailstore, self.directory)
        """`postbox.service.MailService`. The mail service for this instance."""
        self.http_api_gate = HTTPAPIGateway(
            self.mail_service,
            http_binds=http_binds if http_binds else [],
            debug=debug,
        )
        """`postbox.apigate.HTTPAPIGateway`. The HTTP API gateway for this instance."""
        super().__init__()

    async def start(self):
        """Start the engine!

        Related:

        - `postbox.apigate.HTTPAPIGateway.start`
        """
        await self.http_api_gate.start()

    async def stop(self):
        """Stop the postbox instance and close the database.

        Related:

        - `postbox.apigate.HTTPAPIGateway.stop`
        - `postbox.utils.storage_executor.shutdown`
        """
        await self.http_api_gate.stop()
        storage_executor.shutdown()
        self.database.close()

    def http_api_gate_client(self) -> httpx.AsyncClient:
        return self.http_api_gate.http_client()
