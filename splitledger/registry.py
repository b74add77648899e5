"""
In-memory containers backing the ledger.

GroupRegistry keeps groups in creation order. Each Group owns a
UserRegistry, kept in ascending-balance order, and a TransactionLog,
kept most-recent-first. Transactions refer to users by name only.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from typing import Callable, Iterator, Optional

from .models import Transaction, User

logger = logging.getLogger("splitledger.registry")


class LookupPosition(str, Enum):
    HEAD = "HEAD"
    AFTER = "AFTER"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class UserLookup:
    """Where a user sits in its registry.

    HEAD: ``user`` is first. AFTER: ``predecessor`` is the user right before
    ``user``. NOT_FOUND: no user, predecessor or index.
    """
    position: LookupPosition
    user: Optional[User] = None
    predecessor: Optional[User] = None
    index: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.position != LookupPosition.NOT_FOUND


NOT_FOUND = UserLookup(position=LookupPosition.NOT_FOUND)


class UserRegistry:
    def __init__(self):
        self._users: list[User] = []

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return iter(self._users)

    @property
    def head(self) -> Optional[User]:
        return self._users[0] if self._users else None

    def names(self) -> list[str]:
        return [u.name for u in self._users]

    def find_prev(self, name: str) -> UserLookup:
        for index, user in enumerate(self._users):
            if user.name != name:
                continue
            if index == 0:
                return UserLookup(position=LookupPosition.HEAD, user=user, index=0)
            return UserLookup(
                position=LookupPosition.AFTER,
                user=user,
                predecessor=self._users[index - 1],
                index=index,
            )
        return NOT_FOUND

    def get(self, name: str) -> Optional[User]:
        return self.find_prev(name).user

    def insert_at_head(self, user: User) -> None:
        self._users.insert(0, user)

    def insert_before(self, user: User, predicate: Callable[[User], bool]) -> int:
        """Insert ``user`` before the first member matching ``predicate``, else at the tail.

        Returns the index the user ended up at.
        """
        for index, other in enumerate(self._users):
            if predicate(other):
                self._users.insert(index, user)
                return index
        self._users.append(user)
        return len(self._users) - 1

    def remove(self, name: str) -> Optional[User]:
        lookup = self.find_prev(name)
        if not lookup.found:
            return None
        return self._users.pop(lookup.index)

    def reposition(self, user: User) -> int:
        """Move ``user`` to the slot that keeps balances non-decreasing.

        The user is detached, then re-inserted before the first remaining user
        with a strictly greater balance. Everyone else keeps their relative
        order. Returns the new index.
        """
        if len(self._users) == 1:
            return 0

        lookup = self.find_prev(user.name)
        if not lookup.found:
            raise ValueError(f"User {user.name} is not in this registry")

        del self._users[lookup.index]
        new_index = self.insert_before(user, lambda other: other.balance > user.balance)
        if new_index != lookup.index:
            logger.debug("Moved %s from position %d to %d", user.name, lookup.index, new_index)
        return new_index


class TransactionLog:
    def __init__(self):
        self._entries: deque[Transaction] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._entries)

    def record(self, transaction: Transaction) -> None:
        self._entries.appendleft(transaction)

    def recent(self, count: int) -> list[Transaction]:
        if count <= 0:
            return []
        return list(islice(self._entries, count))

    def count_for(self, user_name: str) -> int:
        return sum(1 for t in self._entries if t.user_name == user_name)

    def purge(self, user_name: str) -> int:
        kept = deque(t for t in self._entries if t.user_name != user_name)
        removed = len(self._entries) - len(kept)
        self._entries = kept
        return removed


@dataclass
class Group:
    name: str
    users: UserRegistry = field(default_factory=UserRegistry)
    transactions: TransactionLog = field(default_factory=TransactionLog)


class GroupRegistry:
    def __init__(self):
        self._groups: list[Group] = []

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(self._groups)

    def find(self, name: str) -> Optional[Group]:
        for group in self._groups:
            if group.name == name:
                return group
        return None

    def append(self, group: Group) -> None:
        self._groups.append(group)

    def names(self) -> list[str]:
        return [g.name for g in self._groups]
