"""This module contains the definitions about users: `User` and `UserDirectory`.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Tuple


@dataclass(frozen=True)
class User(object):
    """Infomation about user.

    Attributes:
        username: `str`. Unique identity of the user, used as the mail address.
        name: `str`. The public name.
    """

    username: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"username": self.username, "name": self.name}


DEFAULT_USERS: Tuple[User, ...] = (
    User(username="Q38", name="Nate"),
    User(username="Q09", name="Nadh"),
)
"""The built-in users."""


class UserDirectory(object):
    """The immutable set of users.

    ..note:: The directory is a value. Construct a new one instead of changing it.
    """

    def __init__(self, users: Iterable[User] = DEFAULT_USERS) -> None:
        self._users: Tuple[User, ...] = tuple(users)
        self._by_username: Dict[str, User] = {u.username: u for u in self._users}
        if len(self._by_username) != len(self._users):
            raise ValueError("usernames in the directory should be unique")
        super().__init__()

    def __iter__(self) -> Iterator[User]:
        return iter(self._users)

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, username: object) -> bool:
        return isinstance(username, str) and username in self._by_username

    @property
    def users(self) -> Tuple[User, ...]:
        """All users, in the order given."""
        return self._users
