"""Insertion-ordered set container.

Candidate references can be reached through several paths (the same name and
extension through two sub-locations, two format loaders sharing an
extension, ...). They must be probed once, in the order in which they were
first produced, which neither `set` nor `list` guarantees on their own.
"""

from typing import Generic, Hashable, Iterable, Iterator, List, TypeVar

T = TypeVar("T", bound=Hashable)

__all__ = ["OrderedSet", "reversed_precedence"]


class OrderedSet(Generic[T]):
    """Sequence of unique items which remembers the first insertion order.

    Attributes
    ----------
    _items : List[T]
        Items in insertion order
    _index : set
        Membership index used to drop duplicates
    """

    def __init__(self, items: Iterable[T] = ()):
        """Initialize the set, optionally from an iterable of items.

        Parameters
        ----------
        items : Iterable[T], optional
            Initial items, duplicates are dropped (first seen wins)
        """
        self._items: List[T] = []
        self._index = set()
        self.update(items)

    def add(self, item: T) -> bool:
        """Append an item if it is not already present.

        Parameters
        ----------
        item : T
            Item to append

        Returns
        -------
        bool
            `True` if the item was added, `False` if it was a duplicate
        """
        if item in self._index:
            return False

        self._index.add(item)
        self._items.append(item)

        return True

    def update(self, items: Iterable[T]) -> None:
        """Append every item of an iterable, in order, dropping duplicates.

        Parameters
        ----------
        items : Iterable[T]
            Items to append
        """
        for item in items:
            self.add(item)

    def __contains__(self, item: object) -> bool:
        return item in self._index

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, idx: int) -> T:
        return self._items[idx]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedSet):
            return self._items == other._items

        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


def reversed_precedence(items: Iterable[T]) -> OrderedSet[T]:
    """Build a precedence list by visiting the sources in reverse.

    Duplicates are resolved on the forward order (the first occurrence is the
    one which is kept) and the deduplicated sequence is then reversed, so
    that the sources registered last are probed first.

    Parameters
    ----------
    items : Iterable[T]
        Items in registration order

    Returns
    -------
    OrderedSet[T]
        Deduplicated items, last registered first
    """
    forward = OrderedSet(items)

    return OrderedSet(reversed(list(forward)))
