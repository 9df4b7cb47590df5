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
"""The tornado handlers for users and mails.

The segment after `/api/mails/` is a username for `GET` (`MailsHandler`, `UnreadCountHandler`),
and a mail id for `PUT` and `DELETE` (`MailReadHandler`, `MailsHandler`).
"""

from postbox.mailstore import mail_to_dict

from .base import BaseRequestHandler


class UsersHandler(BaseRequestHandler):
    """`GET /api/users`: the user directory."""

    def get(self) -> None:
        users = self.mail_service.list_users()
        self.respond({"users": [u.to_dict() for u in users]})


class SendMailHandler(BaseRequestHandler):
    """`POST /api/mails`: send a mail.

    The body is `{from, to, subject, message, priority?}`.
    """

    failure_message = "Failed to send mail"

    async def post(self) -> None:
        body = self.json_body()
        mail = await self.mail_service.send_mail(
            body.get("from"),
            body.get("to"),
            body.get("subject"),
            body.get("message"),
            body.get("priority"),
        )
        self.respond({"message": "Mail sent successfully", "mail": mail_to_dict(mail)})


class UnreadCountHandler(BaseRequestHandler):
    """`GET /api/mails/{username}/unread-count`."""

    failure_message = "Failed to get unread count"

    async def get(self, username: str) -> None:
        count = await self.mail_service.unread_count(username)
        self.respond({"unreadCount": count})


class MailReadHandler(BaseRequestHandler):
    """`PUT /api/mails/{mailId}/read`, the body is `{userId}`."""

    failure_message = "Failed to mark mail as read"

    async def put(self, mail_id: str) -> None:
        user_id = self.user_id_from_body()
        await self.mail_service.mark_as_read(mail_id, user_id)
        self.respond({"message": "Mail marked as read"})


class MailsHandler(BaseRequestHandler):
    """`/api/mails/{segment}`.

    - `GET`: the mails addressed to the user, the segment is a username.
    - `DELETE`: delete one mail, the segment is a mail id and the body is `{userId}`.
    """

    failure_messages = {
        "GET": "Failed to get mails",
        "DELETE": "Failed to delete mail",
    }

    @property
    def failure_message(self) -> str:
        return self.failure_messages.get(self.request.method, "Internal server error")

    async def get(self, username: str) -> None:
        mails = await self.mail_service.list_mails(username)
        self.respond({"mails": [mail_to_dict(m) for m in mails]})

    async def delete(self, mail_id: str) -> None:
        user_id = self.user_id_from_body()
        await self.mail_service.delete_mail(mail_id, user_id)
        self.respond({"message": "Mail deleted successfully"})
