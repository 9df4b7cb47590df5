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
"""The errors raised by Postbox's mail service.

Every error carries the HTTP status code and the short message the API gateway answers with:

- `ValidationError`: 400, a required field is missing or has a wrong type.
- `InvalidUser`: 400, the username is not in the user directory.
- `NotFoundOrUnauthorized`: 404, the mail does not exist, or it is not addressed to the user.
- `CorruptState`: 500, the stored mail collection could not be decoded.
"""


class PostboxError(Exception):
    """Base class of the errors in Postbox.

    Attributes:
        status_code: `int`. The HTTP status code for the error.
        message: `str`. The message which is safe to show to clients.
    """

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None) -> None:
        self.message = message if message else self.default_message
        super().__init__(self.message)


class ValidationError(PostboxError):
    status_code = 400
    default_message = "Missing required fields"


class InvalidUser(PostboxError):
    status_code = 400
    default_message = "Invalid user"


class NotFoundOrUnauthorized(PostboxError):
    """The mail is not found, or it is not addressed to the user.

    ..note:: The two cases are not distinguished, so the existence of another user's mail is never revealed.
    """

    status_code = 404
    default_message = "Mail not found or unauthorized"


class CorruptState(PostboxError):
    """The stored mail collection could not be decoded. It is never repaired automatically."""

    status_code = 500
    default_message = "Stored mail collection is corrupted"
