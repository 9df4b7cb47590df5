"""`MailID`: the generator of mail identities.

A mail id looks like `1714557600123-k3x9q0a1z`: the milliseconds since the unix epoch, and a random suffix in base 36.
"""
import secrets
import string
from threading import Lock
from time import time

ALPHABET = string.digits + string.ascii_lowercase
"""The alphabet of the random suffix."""

SUFFIX_LENGTH = 9


class MailID(object):
    """Generate mail identities.

    The timestamp part never goes backwards in one generator, even when the wall clock does.
    The random suffix gives 36^9 (about 1e14) choices for mails in the same millisecond.

    Typical usage:
    ````python
    mail_id = MailID().new()
    ````
    """

    def __init__(self) -> None:
        self._last_millis = 0
        self._lock = Lock()
        super().__init__()

    def _now_millis(self) -> int:
        with self._lock:
            millis = max(int(time() * 1000), self._last_millis)
            self._last_millis = millis
            return millis

    @staticmethod
    def random_suffix(length: int = SUFFIX_LENGTH) -> str:
        return "".join(secrets.choice(ALPHABET) for _ in range(length))

    def new(self) -> str:
        """Return a new mail id."""
        return "{}-{}".format(self._now_millis(), self.random_suffix())
