"""
Bounded linear undo/redo history of mask snapshots.

Classes:
    MaskHistory: Snapshot log with a current position

The history holds one full-raster snapshot per completed stroke or explicit
clear. Index 0 is the blank mask captured when the image was loaded.

Eviction:
    Once more than `capacity` snapshots are stored the oldest one is dropped
    and the index is left where it was, so it keeps pointing at the newest
    frame. With the default settings this also evicts the blank base frame,
    after which index 0 holds an old stroke rather than an empty mask. Pass
    ``keep_blank_base=True`` to evict the oldest frame after the base
    instead, which keeps index 0 blank for the lifetime of the history.
"""

import logging
from typing import List, Optional

from SS_Libs.MaskEditingLib.mask_models import MaskSnapshot
from SS_Libs.constants import HISTORY_CAPACITY

logger = logging.getLogger(__name__)


class MaskHistory:
    """
    Undo/redo log of MaskSnapshots.

    Example:
        >>> history = MaskHistory()
        >>> history.reset(raster.snapshot())
        >>> history.push(raster.snapshot())   # after a stroke
        >>> previous = history.undo()
        >>> raster.restore(previous)
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY, keep_blank_base: bool = False):
        if capacity < 2:
            raise ValueError(f"capacity must be >= 2, got {capacity}")

        self.capacity = int(capacity)
        self.keep_blank_base = keep_blank_base
        self._snapshots: List[MaskSnapshot] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def index(self) -> int:
        return self._index

    @property
    def snapshots(self) -> List[MaskSnapshot]:
        return list(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def current(self) -> Optional[MaskSnapshot]:
        if 0 <= self._index < len(self._snapshots):
            return self._snapshots[self._index]
        return None

    def clear(self) -> None:
        self._snapshots = []
        self._index = -1

    def reset(self, blank: MaskSnapshot) -> None:
        """Drop all history and start over from a blank snapshot."""
        self.clear()
        self.push(blank)

    def push(self, snapshot: MaskSnapshot) -> None:
        """
        Record a new snapshot after the current position.

        Any redo branch beyond the current index is discarded first.

        Args:
            snapshot: Snapshot of the raster after the action
        """
        if not isinstance(snapshot, MaskSnapshot):
            raise TypeError(f"Expected MaskSnapshot, got {type(snapshot)}")

        del self._snapshots[self._index + 1:]
        self._snapshots.append(snapshot)

        if len(self._snapshots) > self.capacity:
            evict_at = 1 if self.keep_blank_base else 0
            del self._snapshots[evict_at]
            logger.debug(f"History full, evicted snapshot at position {evict_at}")
        else:
            self._index += 1

    def undo(self) -> Optional[MaskSnapshot]:
        """Step back one snapshot. Returns None when already at the start."""
        if self._index <= 0:
            return None

        self._index -= 1
        return self._snapshots[self._index]

    def redo(self) -> Optional[MaskSnapshot]:
        """Step forward one snapshot. Returns None when already at the end."""
        if not self.can_redo:
            return None

        self._index += 1
        return self._snapshots[self._index]
