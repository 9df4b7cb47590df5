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
"""The HTTP API Gate for Postbox.

The web client reaches the mail service through this gate.
"""
from typing import List, Optional, Tuple

from httpx import AsyncClient
from tornado.httpserver import HTTPServer
from tornado.netutil import bind_sockets
from tornado.web import Application

from postbox.service import MailService

from .base import NotFoundHandler
from .mails import (
    MailReadHandler,
    MailsHandler,
    SendMailHandler,
    UnreadCountHandler,
    UsersHandler,
)

ROUTES = [
    (r"/api/users", UsersHandler),
    (r"/api/mails", SendMailHandler),
    (r"/api/mails/([^/]+)/unread-count", UnreadCountHandler),
    (r"/api/mails/([^/]+)/read", MailReadHandler),
    (r"/api/mails/([^/]+)", MailsHandler),
]
"""The route table. Patterns are matched in order against the whole path."""


class HTTPAPIGateway(object):
    """The HTTP API Gateway for Postbox.

    Current handlers:

    - `GET /api/users`: `mails.UsersHandler`
    - `POST /api/mails`: `mails.SendMailHandler`
    - `GET /api/mails/{username}/unread-count`: `mails.UnreadCountHandler`
    - `PUT /api/mails/{mailId}/read`: `mails.MailReadHandler`
    - `GET /api/mails/{username}`, `DELETE /api/mails/{mailId}`: `mails.MailsHandler`
    - anything else: `base.NotFoundHandler`

    Related:

    - [Tornado documentation](https://www.tornadoweb.org)
    """

    def __init__(
        self,
        mail_service: MailService,
        http_binds: List[Tuple[Optional[str], int]],
        debug: bool = False,
    ) -> None:
        self._application = Application(
            ROUTES,
            default_handler_class=NotFoundHandler,
            mail_service=mail_service,
            debug=debug,
        )
        self._http_server: Optional[HTTPServer] = None
        self._http_binds = http_binds
        super().__init__()

    @property
    def http_binds(self) -> List[Tuple[Optional[str], int]]:
        """The tcp binds for HTTP server.
        Each element in the list is a tuple of (binding address/hostname/None, port).

        For example:

        - `("127.0.0.1", 1989)` binds the port 1989 on address 127.0.0.1.
        - `("::0", 525)` binds the port 525 on address ::0.
        - `(None, 8080)` binds port 8080 on all network interfaces.

        Related:

        - `HTTPAPIGateway.start` the method will automatically binds a random port on 127.0.0.1 if this list is empty.
        """
        return self._http_binds

    @property
    def application(self) -> Application:
        """Application instance for HTTP server."""
        return self._application

    async def start(self) -> None:
        """Listen to the address-port pairs given in `HTTPAPIGateway.http_binds`.

        This method will bind a random port on 127.0.0.1 and put it into `HTTPAPIGateway.http_binds` list if the list is empty.
        """
        self._http_server = HTTPServer(self.application)
        if self.http_binds:
            for addr, port in self.http_binds:
                self._http_server.listen(port, addr if addr else "")
        else:
            sockets = bind_sockets(0, "127.0.0.1")
            free_port = sockets[0].getsockname()[1]
            self.http_binds.append(("127.0.0.1", free_port))
            self._http_server.add_sockets(sockets)

    async def stop(self) -> None:
        """Prevent new incoming request and wait for all existing connections closed."""
        assert self._http_server
        self._http_server.stop()
        await self._http_server.close_all_connections()
        self._http_server = None

    def http_client(self) -> AsyncClient:
        """Return a http client from httpx which uses the first bind from `HTTPAPIGateway.http_binds` as base url.

        Related:

        - [httpx documentation](https://www.python-httpx.org/)
        """
        assert self._http_server
        address, port = self.http_binds[0]
        if not address:
            address = "localhost"
        base_url = "http://{}:{}".format(address, port)
        return AsyncClient(base_url=base_url)
