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

"""
`MailStore` stores the whole mail collection as one JSON array under one key.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .errors import CorruptState
from .utils.storage import DataclassRecordAdapter, KeyValueStorage

PRIORITY_LOW = "low"
PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"
PRIORITY_URGENT = "urgent"

PRIORITIES = (PRIORITY_LOW, PRIORITY_NORMAL, PRIORITY_HIGH, PRIORITY_URGENT)

MAILS_KEY = "mails"
"""The storage key of the mail collection."""


@dataclass
class MailRecord(object):
    """A mail sent from one user to another.

    Attributes:
        id: `str`. The mail identity, see `postbox.utils.mailid.MailID`.
        sender: `str`. The username of the sender, stored as "from".
        recipient: `str`. The username of the recipient, stored as "to".
        subject: `str`.
        message: `str`. The body.
        priority: `str`. One of `PRIORITIES`.
        timestamp: `str`. ISO 8601 time in UTC when the mail was sent.
        is_read: `bool`. Stored as "isRead".
    """

    id: str
    sender: str = field(metadata={"key": "from"})
    recipient: str = field(metadata={"key": "to"})
    subject: str
    message: str
    priority: str
    timestamp: str
    is_read: bool = field(default=False, metadata={"key": "isRead"})


MAIL_RECORD_ADAPTER = DataclassRecordAdapter(MailRecord)


def mail_to_dict(mail: MailRecord) -> Dict[str, Any]:
    """The JSON shape of `mail`, which is used both in storage and in HTTP responses."""
    return MAIL_RECORD_ADAPTER.record2dict(mail)


class MailStore(object):
    """Interface for mail collection storing.

    ..note:: There is only one record in the underlying storage: the whole collection.
        Every change is a read-modify-write of the collection, and it is not atomic.
        If two writers `load` then `save` at the same time, the later `save` wins and the other change is lost.
    """

    def __init__(self, storage: KeyValueStorage, key: str = MAILS_KEY) -> None:
        self.storage = storage
        self.key = key
        super().__init__()

    async def load(self) -> List[MailRecord]:
        """Load the mail collection. Return an empty list if nothing was stored.

        Raise `postbox.errors.CorruptState` if the stored value could not be decoded.
        """
        blob = await self.storage.get(self.key)
        if blob is None:
            return []
        return self.decode(blob)

    async def save(self, mails: List[MailRecord]) -> None:
        """Replace the stored collection with `mails`."""
        await self.storage.put(self.key, self.encode(mails))

    @staticmethod
    def encode(mails: List[MailRecord]) -> bytes:
        return json.dumps([mail_to_dict(m) for m in mails]).encode("utf-8")

    @staticmethod
    def decode(blob: bytes) -> List[MailRecord]:
        try:
            docs = json.loads(blob)
        except ValueError as e:
            raise CorruptState() from e
        if not isinstance(docs, list):
            raise CorruptState()
        mails: List[MailRecord] = []
        for doc in docs:
            if not isinstance(doc, dict):
                raise CorruptState()
            try:
                mail = MAIL_RECORD_ADAPTER.dict2record(doc)
            except TypeError as e:
                raise CorruptState() from e
            if not MailStore.is_well_formed(mail):
                raise CorruptState()
            mails.append(mail)
        return mails

    @staticmethod
    def is_well_formed(mail: MailRecord) -> bool:
        """Check every text field of `mail` is a non-empty `str` and `is_read` is a `bool`."""
        texts = (
            mail.id,
            mail.sender,
            mail.recipient,
            mail.subject,
            mail.message,
            mail.priority,
            mail.timestamp,
        )
        return all(isinstance(t, str) and t for t in texts) and isinstance(
            mail.is_read, bool
        )
