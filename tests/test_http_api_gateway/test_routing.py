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
from postbox import Postbox
from postbox.apigate.base import CORS_HEADERS
from ..utils import postbox
import pytest


def assert_cors(response):
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


class TestRouting:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/"),
            ("GET", "/api"),
            ("GET", "/api/unknown"),
            ("GET", "/api/mails/Q09/read"),
            ("GET", "/api/mails/Q09/unread-count/extra"),
            ("POST", "/api/users"),
            ("POST", "/api/mails/Q09"),
            ("PUT", "/api/mails/1-abc"),
            ("DELETE", "/api/mails/1-abc/read"),
            ("PATCH", "/api/mails"),
        ],
    )
    @pytest.mark.asyncio
    async def test_unmatched_routes_are_404(self, postbox: Postbox, method, path):
        async with postbox.http_api_gate_client() as http_cli:
            response = await http_cli.request(method, path)
            assert response.status_code == 404
            assert response.json() == {"error": "Not found"}
            assert_cors(response)

    @pytest.mark.parametrize(
        "path", ["/api/users", "/api/mails", "/api/mails/Q09/read", "/anything"]
    )
    @pytest.mark.asyncio
    async def test_options_is_cors_preflight(self, postbox: Postbox, path):
        async with postbox.http_api_gate_client() as http_cli:
            response = await http_cli.options(path)
            assert response.status_code == 200
            assert response.content == b""
            assert_cors(response)

    @pytest.mark.asyncio
    async def test_unread_count_route_is_not_a_listing(self, postbox: Postbox):
        async with postbox.http_api_gate_client() as http_cli:
            response = await http_cli.get("/api/mails/Q09/unread-count")
            assert response.json() == {"unreadCount": 0}
            response = await http_cli.get("/api/mails/Q09")
            assert response.json() == {"mails": []}

    @pytest.mark.asyncio
    async def test_responses_are_json_with_cors_headers(self, postbox: Postbox):
        async with postbox.http_api_gate_client() as http_cli:
            for path in ("/api/users", "/api/mails/Q09", "/api/mails/nobody"):
                response = await http_cli.get(path)
                assert response.headers["Content-Type"].startswith("application/json")
                assert_cors(response)
