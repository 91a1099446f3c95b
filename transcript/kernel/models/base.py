"""
Base types shared by every store.
"""

import uuid
from typing import Hashable, Iterable, Iterator, List, Optional

# Opaque caller identity supplied by the host. Only equality and hashing are relied on.
AccountId = Hashable


def generate_account_id() -> AccountId:
    """Generate a new account id. Hosts may use any hashable id instead."""
    return uuid.uuid4()


class OrderedIdSet:
    """
    Ordered, duplicate-free collection of account ids.

    Enumeration follows insertion order; membership checks are O(1).
    Compares equal to another OrderedIdSet or to a list/tuple with the
    same ids in the same order.
    """

    __slots__ = ("_items",)

    def __init__(self, ids: Optional[Iterable[AccountId]] = None):
        self._items: dict = {}
        for account_id in ids or ():
            self.add(account_id)

    def add(self, account_id: AccountId) -> bool:
        """Append an id. Returns False if it was already present."""
        if account_id in self._items:
            return False
        self._items[account_id] = None
        return True

    def discard(self, account_id: AccountId) -> bool:
        """Remove an id if present. Returns True if something was removed."""
        if account_id not in self._items:
            return False
        del self._items[account_id]
        return True

    def as_list(self) -> List[AccountId]:
        return list(self._items)

    def copy(self) -> "OrderedIdSet":
        return OrderedIdSet(self._items)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._items

    def __iter__(self) -> Iterator[AccountId]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedIdSet):
            return self.as_list() == other.as_list()
        if isinstance(other, (list, tuple)):
            return self.as_list() == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedIdSet({self.as_list()!r})"
