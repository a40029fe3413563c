#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
indexed_min_heap.py
-------------------

An updatable min-priority queue: a binary heap plus a location index that
maps every queued element to its heap slot.

Features
~~~~~~~~
* O(log n) enqueue, dequeue, update and arbitrary removal.
* O(1) membership test, peek and size.
* ``update`` moves an element up *or* down, whichever the new value needs,
  and reports a missing element with ``False`` instead of raising.
* Growable slot buffer: capacity doubles when full and (optionally) halves
  when occupancy drops to a quarter.
* Optional FIFO tie-breaking (``fifo_ties=True``): equal values leave in
  insertion order.
* Type annotations for static checkers.

Elements are used as dictionary keys, so they must be hashable, and their
hash/equality must not change while they are queued. Values only need to
support ``<``.

The structure is not synchronized. Wrap it in a lock if several threads
share it.

Typical usage
~~~~~~~~~~~~~
>>> from indexed_min_heap import IndexedMinHeap
>>> pq = IndexedMinHeap()
>>> pq.enqueue('a', 5)
>>> pq.enqueue('b', 3)
>>> pq.enqueue('c', 8)
>>> pq.update('a', 1)
True
>>> pq.dequeue()
Entry(element='a', value=1)
>>> pq.update('zz', 4)
False
>>> len(pq)
2
"""

from __future__ import annotations

import itertools
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Tuple,
    TypeVar,
)

from pq_logging import init_logger

logger = init_logger(__name__)

# ----------------------------------------------------------------------
#  Generic type variables
# ----------------------------------------------------------------------
E = TypeVar('E')                     # type of the queued element (hashable)
V = TypeVar('V')                     # type of the value (supports ``<``)

DEFAULT_CAPACITY = 10

# slot layout: (value, sequence number, element)
_Slot = Tuple[Any, int, Any]


# ----------------------------------------------------------------------
#  Errors
# ----------------------------------------------------------------------
class PriorityQueueError(Exception):
    """Base class for every error raised by :class:`IndexedMinHeap`."""


class InvalidArgument(PriorityQueueError, ValueError):
    """A value was missing (``None``) or a constructor argument is bad."""


class DuplicateElement(PriorityQueueError, ValueError):
    """``enqueue`` was called with an element that is already queued."""


class EmptyQueue(PriorityQueueError, IndexError):
    """``dequeue`` / ``peek_min`` on an empty queue."""


class ElementNotFound(PriorityQueueError, KeyError):
    """``remove`` was called with an element that is not queued."""


class Entry(NamedTuple, Generic[E, V]):
    """An ``(element, value)`` pair handed back to callers (Python 3.11+)."""

    element: E
    value: V


# ----------------------------------------------------------------------
#  Core class
# ----------------------------------------------------------------------
class IndexedMinHeap(Generic[E, V]):
    """
    A min-priority queue whose element priorities can be changed in place.

    The heap lives in ``_heap``, a list of ``capacity`` slots of which the
    first ``size`` are live and the rest are ``None``. ``_position`` maps
    each element to its slot; every swap keeps the two in step.

    Parameters
    ----------
    initial_capacity : int, default 10
        Number of slots allocated up front. Also the floor for shrinking.

    shrink : bool, default ``True``
        Halve the capacity when a removal leaves the buffer at most a
        quarter full.

    fifo_ties : bool, default ``False``
        If true, entries with equal values are dequeued in the order they
        were enqueued (or last updated). Otherwise equal values are never
        swapped and their relative order is unspecified.
    """

    __slots__ = (
        "_heap",
        "_position",
        "_size",
        "_counter",
        "_initial_capacity",
        "_shrink",
        "_fifo_ties",
    )

    def __init__(
        self,
        initial_capacity: int = DEFAULT_CAPACITY,
        *,
        shrink: bool = True,
        fifo_ties: bool = False,
    ) -> None:
        if (
            not isinstance(initial_capacity, int)
            or isinstance(initial_capacity, bool)
            or initial_capacity < 1
        ):
            raise InvalidArgument(
                f"initial_capacity must be a positive int, got {initial_capacity!r}"
            )
        self._heap: List[Optional[_Slot]] = [None] * initial_capacity
        self._position: Dict[E, int] = {}
        self._size: int = 0
        self._counter = itertools.count()
        self._initial_capacity = initial_capacity
        self._shrink = shrink
        self._fifo_ties = fifo_ties

    # ------------------------------------------------------------------
    #   Core public API
    # ------------------------------------------------------------------
    def enqueue(self, element: E, value: V) -> None:
        """
        Insert *element* with priority *value*.
        Raises ``InvalidArgument`` if *value* is ``None`` and
        ``DuplicateElement`` if *element* is already queued.
        """
        if value is None:
            raise InvalidArgument("value must not be None")
        if element in self._position:
            raise DuplicateElement(f"Element {element!r} already present in queue")

        if self._size == len(self._heap):
            self._resize(2 * len(self._heap))

        idx = self._size
        self._heap[idx] = (value, next(self._counter), element)
        self._position[element] = idx
        self._size += 1
        self._sift_up(idx)

    def dequeue(self) -> Entry[E, V]:
        """
        Remove and return the entry with the smallest value.
        Raises ``EmptyQueue`` if the queue is empty.
        """
        if self._size == 0:
            raise EmptyQueue("dequeue from an empty priority queue")
        return self._delete_at(0)

    def peek_min(self) -> Entry[E, V]:
        """
        Return the entry with the smallest value **without** removing it.
        Raises ``EmptyQueue`` if the queue is empty.
        """
        if self._size == 0:
            raise EmptyQueue("peek from an empty priority queue")
        value, _, element = self._heap[0]
        return Entry(element, value)

    def update(self, element: E, new_value: V) -> bool:
        """
        Change the value of *element* to *new_value*.

        Returns ``False`` and leaves the queue untouched when *element* is
        not queued, ``True`` otherwise. Raises ``InvalidArgument`` if
        *new_value* is ``None``.
        """
        if new_value is None:
            raise InvalidArgument("value must not be None")
        idx = self._position.get(element)
        if idx is None:
            return False

        # A fresh sequence number makes an update order exactly like a
        # remove followed by a re-insert when ties are FIFO.
        self._heap[idx] = (new_value, next(self._counter), element)

        # The slot is interior, so the new value may have to travel
        # either way.
        if idx > 0 and self._precedes(self._heap[idx], self._heap[(idx - 1) // 2]):
            self._sift_up(idx)
        else:
            self._sift_down(idx)
        return True

    def remove(self, element: E) -> Entry[E, V]:
        """
        Delete *element* from the queue, regardless of its value, and
        return its entry. Raises ``ElementNotFound`` if it is not queued.
        """
        idx = self._position.get(element)
        if idx is None:
            raise ElementNotFound(element)
        return self._delete_at(idx)

    def contains(self, element: Any) -> bool:
        """O(1) membership test."""
        return element in self._position

    def get(self, element: Any, default: Optional[V] = None) -> Optional[V]:
        """Return the current value of *element*, or *default*."""
        idx = self._position.get(element)
        if idx is None:
            return default
        return self._heap[idx][0]

    def is_empty(self) -> bool:
        return self._size == 0

    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        """Number of allocated slots (always >= ``size()``)."""
        return len(self._heap)

    # ------------------------------------------------------------------
    #   Python protocol support
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self._size

    def __contains__(self, element: Any) -> bool:
        return element in self._position

    def __bool__(self) -> bool:
        return self._size > 0

    def __iter__(self) -> Iterator[Entry[E, V]]:
        """
        Iterate over the entries **in heap order** (not sorted). Mutating
        the queue while iterating is not supported.
        """
        for i in range(self._size):
            value, _, element = self._heap[i]
            yield Entry(element, value)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self._size}, "
            f"capacity={len(self._heap)}, fifo_ties={self._fifo_ties})"
        )

    # ------------------------------------------------------------------
    #   Internal heap-maintenance helpers
    # ------------------------------------------------------------------
    def _precedes(self, a: _Slot, b: _Slot) -> bool:
        """Strict ordering of two slots; equal values never precede."""
        if a[0] < b[0]:
            return True
        if self._fifo_ties and not b[0] < a[0]:
            return a[1] < b[1]
        return False

    def _swap(self, i: int, j: int) -> None:
        """Swap slots i and j and keep `_position` in sync."""
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._position[heap[i][2]] = i
        self._position[heap[j][2]] = j

    def _sift_up(self, idx: int) -> int:
        """
        Move the entry at *idx* towards the root while its parent is
        strictly greater. Returns the final slot.
        """
        heap = self._heap
        while idx > 0:
            parent = (idx - 1) // 2
            if not self._precedes(heap[idx], heap[parent]):
                break
            self._swap(idx, parent)
            idx = parent
        return idx

    def _sift_down(self, idx: int) -> int:
        """
        Move the entry at *idx* down while its smaller child is strictly
        smaller. Returns the final slot.
        """
        heap = self._heap
        n = self._size
        while (left := 2 * idx + 1) < n:
            smallest = left
            right = left + 1
            if right < n and self._precedes(heap[right], heap[left]):
                smallest = right
            if not self._precedes(heap[smallest], heap[idx]):
                break
            self._swap(idx, smallest)
            idx = smallest
        return idx

    def _delete_at(self, idx: int) -> Entry[E, V]:
        """Unlink the entry at slot *idx*, fill the hole and repair."""
        heap = self._heap
        value, _, element = heap[idx]
        last = self._size - 1

        moved = heap[last]
        heap[last] = None
        self._size = last
        del self._position[element]

        if idx < last:
            heap[idx] = moved
            self._position[moved[2]] = idx
            # The filler came from the bottom; it can only need one of
            # the two directions.
            if self._sift_up(idx) == idx:
                self._sift_down(idx)

        self._maybe_shrink()
        return Entry(element, value)

    def _resize(self, new_capacity: int) -> None:
        """Reallocate the slot buffer; live slots keep their positions."""
        old_capacity = len(self._heap)
        live = self._heap[: self._size]
        self._heap = live + [None] * (new_capacity - self._size)
        logger.debug(
            "Resized heap storage from %d to %d slots (size=%d)",
            old_capacity,
            new_capacity,
            self._size,
        )

    def _maybe_shrink(self) -> None:
        capacity = len(self._heap)
        if (
            self._shrink
            and capacity > self._initial_capacity
            and self._size <= capacity // 4
        ):
            self._resize(max(capacity // 2, self._initial_capacity))

    # ------------------------------------------------------------------
    #   Convenience: bulk insertion
    # ------------------------------------------------------------------
    def extend(self, pairs: Iterable[Tuple[E, V]]) -> None:
        """
        Enqueue a bunch of (element, value) pairs, one at a time. Stops at
        the first pair that fails; the pairs before it stay queued.
        """
        for element, value in pairs:
            self.enqueue(element, value)

    # ------------------------------------------------------------------
    #   Debug/validation helpers
    # ------------------------------------------------------------------
    def _is_valid(self) -> bool:
        """Check heap order, index consistency and slot density."""
        if len(self._position) != self._size or self._size > len(self._heap):
            return False
        for i in range(self._size):
            slot = self._heap[i]
            if slot is None or self._position.get(slot[2]) != i:
                return False
            if i > 0 and self._precedes(slot, self._heap[(i - 1) // 2]):
                return False
        return all(slot is None for slot in self._heap[self._size:])
