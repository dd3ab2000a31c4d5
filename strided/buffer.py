import collections
import itertools
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .config import BORROW_EVENT_LOG_SIZE, DEFAULT_DTYPE, TRACK_BORROW_EVENTS
from .errors import BorrowError, ReleasedBufferError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """A rectangle in the logical (row, col) space of the owning matrix."""
    row: int
    col: int
    nb_rows: int
    nb_cols: int

    @property
    def is_empty(self) -> bool:
        return self.nb_rows == 0 or self.nb_cols == 0

    def contains(self, row: int, col: int) -> bool:
        return (self.row <= row < self.row + self.nb_rows
                and self.col <= col < self.col + self.nb_cols)

    def overlaps(self, other: "Region") -> bool:
        if self.is_empty or other.is_empty:
            return False
        return (self.row < other.row + other.nb_rows and other.row < self.row + self.nb_rows
                and self.col < other.col + other.nb_cols and other.col < self.col + self.nb_cols)


@dataclass(eq=False)
class Borrow:
    """
    One live loan of a region of a buffer.

    `parent` is the borrow this one was re-borrowed from, or None when it was
    taken directly from the owning matrix.
    """
    borrow_id: int
    region: Region
    exclusive: bool
    parent: Optional["Borrow"] = None
    alive: bool = True
    children: List["Borrow"] = field(default_factory=list, repr=False)

    def lineage(self):
        """Yield this borrow and every borrow it was derived from."""
        borrow = self
        while borrow is not None:
            yield borrow
            borrow = borrow.parent


class BorrowTracker:
    """
    Registry of the live borrows of a single buffer.
    Single writer / multiple readers per region, thread-safe.
    """
    def __init__(self, track_events: bool = TRACK_BORROW_EVENTS,
                 event_log_size: int = BORROW_EVENT_LOG_SIZE):
        self.live: List[Borrow] = []
        self.roots: List[Borrow] = []  # borrows taken directly from the owning matrix
        self.track_events = track_events
        self._ids = itertools.count(1)
        self.lock = threading.RLock()  # finalizers may release while the lock is held

        # (timestamp, event_type, borrow_id, live_count), oldest entries dropped first
        self.event_log = collections.deque(maxlen=event_log_size)

    def _log_event(self, event_type, borrow_id):
        if self.track_events:
            self.event_log.append((time.perf_counter(), event_type, borrow_id, len(self.live)))

    def acquire(self, region: Region, exclusive: bool, parent: Optional[Borrow] = None) -> Borrow:
        """
        Registers a new borrow of `region`.

        Args:
            region: Rectangle being borrowed, in the owner's coordinates
            exclusive: True for a mutable borrow
            parent: Borrow this one is derived from (None for the owning matrix)

        Raises:
            BorrowError: if a live borrow outside the new borrow's lineage overlaps
                the region and either of the two is exclusive.
        """
        with self.lock:
            if parent is not None and not parent.alive:
                raise BorrowError(f"Cannot re-borrow from released borrow #{parent.borrow_id}")

            lineage = list(parent.lineage()) if parent is not None else []
            for other in list(self.live):
                if any(other is ancestor for ancestor in lineage):
                    continue
                if not (exclusive or other.exclusive):
                    continue
                if other.region.overlaps(region):
                    self._log_event('REJECT', other.borrow_id)
                    mode = "mutable" if exclusive else "shared"
                    held = "mutable" if other.exclusive else "shared"
                    raise BorrowError(
                        f"Cannot take a {mode} borrow of {region}: overlaps live "
                        f"{held} borrow #{other.borrow_id} of {other.region}"
                    )

            borrow = Borrow(next(self._ids), region, exclusive, parent)
            if parent is not None:
                parent.children.append(borrow)
            else:
                self.roots.append(borrow)
            self.live.append(borrow)
            self._log_event('ACQUIRE', borrow.borrow_id)

        logger.debug(f"Acquired {'mutable' if exclusive else 'shared'} borrow "
                     f"#{borrow.borrow_id} of {region}")
        return borrow

    def release(self, borrow: Borrow):
        """
        Ends a borrow together with everything re-borrowed from it.
        Releasing an already released borrow does nothing.
        """
        with self.lock:
            self._release_locked(borrow)

    def _release_locked(self, borrow: Borrow):
        if not borrow.alive:
            return
        for child in list(borrow.children):
            self._release_locked(child)
        borrow.alive = False
        self.live.remove(borrow)
        siblings = self.roots if borrow.parent is None else borrow.parent.children
        if borrow in siblings:
            siblings.remove(borrow)
        self._log_event('RELEASE', borrow.borrow_id)
        logger.debug(f"Released borrow #{borrow.borrow_id}")

    def release_all(self) -> int:
        """Ends every live borrow; returns how many were still live."""
        with self.lock:
            count = len(self.live)
            for borrow in list(self.roots):
                self._release_locked(borrow)
        return count

    def check_access(self, holder: Optional[Borrow], row: int, col: int, write: bool):
        """
        Verifies that `holder` (None for the owning matrix) may touch (row, col).

        A holder cannot read a point it has lent out mutably, nor write a
        point it has lent out at all. Only the holder's own children are
        consulted, so a holder that has lent nothing out pays nothing.
        """
        children = self.roots if holder is None else holder.children
        if not children:
            return
        with self.lock:
            for other in list(children):
                if (write or other.exclusive) and other.region.contains(row, col):
                    action = "write" if write else "read"
                    raise BorrowError(
                        f"Cannot {action} ({row}, {col}): lent out to borrow #{other.borrow_id}"
                    )

    def get_log(self):
        """
        Returns the event log of borrow activity.
        """
        return list(self.event_log)


class Buffer:
    """
    Flat, contiguous element storage behind a stable handle.

    Views keep a reference to the Buffer rather than to the numpy array, so
    once the owner releases it every later access faults instead of reaching
    stale memory.
    """
    def __init__(self, size: int, dtype=DEFAULT_DTYPE, default=None):
        if size < 0:
            raise ValueError(f"Buffer size must be non-negative, got {size}")
        self.size = size
        self.dtype = np.dtype(dtype)
        if default is None:
            self._data = np.zeros(size, dtype=self.dtype)
        else:
            self._data = np.full(size, default, dtype=self.dtype)
        self.borrows = BorrowTracker()
        logger.debug(f"Allocated buffer of {size} {self.dtype.name} elements")

    @property
    def is_alive(self) -> bool:
        return self._data is not None

    @property
    def data(self) -> np.ndarray:
        if self._data is None:
            raise ReleasedBufferError("Buffer has been released")
        return self._data

    def release(self):
        """Frees the storage and invalidates every outstanding borrow."""
        if self._data is None:
            return
        live = self.borrows.release_all()
        if live:
            logger.warning(f"Releasing buffer with {live} live borrow(s); they are now invalid")
        self._data = None
        logger.debug(f"Released buffer of {self.size} elements")

    def __len__(self):
        return self.size

    def __repr__(self):
        state = "alive" if self.is_alive else "released"
        return f"Buffer(size={self.size}, dtype={self.dtype.name}, {state})"
