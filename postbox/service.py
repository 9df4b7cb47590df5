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
"""`MailService`: sending, listing, marking and deleting mails.
"""
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from .errors import InvalidUser, NotFoundOrUnauthorized, ValidationError
from .mailstore import PRIORITIES, PRIORITY_NORMAL, MailRecord, MailStore
from .usrsys.directory import User, UserDirectory
from .utils.mailid import MailID


def utc_timestamp() -> str:
    """Current time in ISO 8601, with milliseconds and "Z" as the UTC suffix."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def normalize_priority(priority: Any) -> str:
    """Return `priority` if it is one of `postbox.mailstore.PRIORITIES`, otherwise "normal"."""
    if isinstance(priority, str) and priority in PRIORITIES:
        return priority
    return PRIORITY_NORMAL


def require_text(*values: Any) -> None:
    """Raise `ValidationError` unless all `values` are non-empty strings."""
    for v in values:
        if not isinstance(v, str) or not v:
            raise ValidationError()


class MailService(object):
    """The mail operations on top of `postbox.mailstore.MailStore`.

    All parameters are checked against the user directory before the store is touched,
    so a rejected request never writes anything.

    ..caution:: The mutating operations are read-modify-write on the whole collection without any lock.
        Concurrent mutations may overwrite each other (last writer wins).
    """

    __logger = logging.getLogger("postbox.service.MailService")

    def __init__(
        self,
        mailstore: MailStore,
        directory: UserDirectory,
        id_generator: Optional[MailID] = None,
    ) -> None:
        self.mailstore = mailstore
        self.directory = directory
        self.id_generator = id_generator if id_generator else MailID()
        super().__init__()

    def check_user(self, username: Any) -> str:
        """Raise `InvalidUser` if `username` is not in the directory."""
        if username not in self.directory:
            raise InvalidUser()
        return username

    def list_users(self) -> List[User]:
        return list(self.directory.users)

    async def send_mail(
        self,
        sender: Any,
        recipient: Any,
        subject: Any,
        message: Any,
        priority: Any = None,
    ) -> MailRecord:
        """Create a mail from `sender` to `recipient` and store it.

        Raise `ValidationError` if any of `sender`, `recipient`, `subject` and `message` is empty,
        `InvalidUser` if `sender` or `recipient` is not in the directory.
        An absent or unknown `priority` is stored as "normal".
        """
        require_text(sender, recipient, subject, message)
        self.check_user(sender)
        self.check_user(recipient)
        mail = MailRecord(
            id=self.id_generator.new(),
            sender=sender,
            recipient=recipient,
            subject=subject,
            message=message,
            priority=normalize_priority(priority),
            timestamp=utc_timestamp(),
            is_read=False,
        )
        mails = await self.mailstore.load()
        mails.append(mail)
        await self.mailstore.save(mails)
        self.__logger.info(
            "mail sent: {id} ({sender} -> {recipient})".format(
                id=mail.id, sender=sender, recipient=recipient
            )
        )
        return mail

    async def list_mails(self, username: Any) -> List[MailRecord]:
        """Return the mails addressed to `username`, in the order they were stored."""
        self.check_user(username)
        mails = await self.mailstore.load()
        return [m for m in mails if m.recipient == username]

    async def unread_count(self, username: Any) -> int:
        self.check_user(username)
        mails = await self.mailstore.load()
        return sum(1 for m in mails if m.recipient == username and not m.is_read)

    async def mark_as_read(self, mail_id: Any, username: Any) -> None:
        """Mark the mail `mail_id` as read. Marking a read mail again changes nothing.

        Raise `NotFoundOrUnauthorized` if there is no such mail addressed to `username`.
        """
        self.check_user(username)
        mails = await self.mailstore.load()
        mail = self._find_owned(mails, mail_id, username)
        mail.is_read = True
        await self.mailstore.save(mails)
        self.__logger.info("mail read: {id} by {user}".format(id=mail_id, user=username))

    async def delete_mail(self, mail_id: Any, username: Any) -> None:
        """Remove the mail `mail_id`. Only the recipient could delete a mail.

        Raise `NotFoundOrUnauthorized` if there is no such mail addressed to `username`.
        """
        self.check_user(username)
        mails = await self.mailstore.load()
        mail = self._find_owned(mails, mail_id, username)
        mails.remove(mail)
        await self.mailstore.save(mails)
        self.__logger.info(
            "mail deleted: {id} by {user}".format(id=mail_id, user=username)
        )

    @staticmethod
    def _find_owned(mails: List[MailRecord], mail_id: Any, username: str) -> MailRecord:
        for m in mails:
            if m.id == mail_id and m.recipient == username:
                return m
        raise NotFoundOrUnauthorized()
