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
from ..utils import postbox
import pytest


class TestUsersHandler:
    @pytest.mark.asyncio
    async def test_get_users_returns_directory(self, postbox: Postbox):
        async with postbox.http_api_gate_client() as http_cli:
            response = await http_cli.get("/api/users")
            assert response.status_code == 200
            assert response.json() == {
                "users": [
                    {"username": "Q38", "name": "Nate"},
                    {"username": "Q09", "name": "Nadh"},
                ]
            }
