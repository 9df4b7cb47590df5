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

"""The user system for Postbox.

Postbox does not manage users at runtime. The users are a fixed directory (`directory.UserDirectory`) given when the instance is constructed.

## About authentication
There is no authentication on the server side. The login screen of the web client checks the credentials by itself,
and any caller who knows a username in the directory can act as that user through the HTTP API.
"""
