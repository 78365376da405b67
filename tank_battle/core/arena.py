"""Per-kind entity storage with stable identifiers."""

from __future__ import annotations

from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class Arena(Generic[T]):
    """Owning collection for one entity kind.

    Every inserted entity receives an integer id that stays valid until the
    entity is removed. Ids are never reused. Removal compacts the backing
    lists in place so the per-frame pruning pass does not allocate a new
    collection.
    """

    def __init__(self) -> None:
        self._ids: List[int] = []
        self._items: List[T] = []
        self._slots: Dict[int, int] = {}
        self._next_id = 0

    def add(self, item: T) -> int:
        entity_id = self._next_id
        self._next_id += 1
        self._slots[entity_id] = len(self._items)
        self._ids.append(entity_id)
        self._items.append(item)
        return entity_id

    def get(self, entity_id: int) -> Optional[T]:
        slot = self._slots.get(entity_id)
        if slot is None:
            return None
        return self._items[slot]

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._slots

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def items(self) -> Iterator[Tuple[int, T]]:
        return zip(self._ids, self._items)

    def discard(self, entity_id: int) -> bool:
        if entity_id not in self._slots:
            return False
        self.retain(lambda _item: True, skip=entity_id)
        return True

    def retain(self, keep: Callable[[T], bool], *, skip: Optional[int] = None) -> int:
        """Keep only entities for which ``keep`` is true; return how many were dropped."""

        write = 0
        for read in range(len(self._items)):
            entity_id = self._ids[read]
            item = self._items[read]
            if entity_id == skip or not keep(item):
                del self._slots[entity_id]
                continue
            if write != read:
                self._ids[write] = entity_id
                self._items[write] = item
                self._slots[entity_id] = write
            write += 1
        removed = len(self._items) - write
        if removed:
            del self._ids[write:]
            del self._items[write:]
        return removed

    def clear(self) -> None:
        self._ids.clear()
        self._items.clear()
        self._slots.clear()


__all__ = ["Arena"]
