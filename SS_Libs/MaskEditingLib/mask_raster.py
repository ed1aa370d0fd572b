"""
Mask raster store.

Holds the live RGBA pixel buffer that brush strokes accumulate into. The
alpha channel encodes selection: any non-zero alpha counts as selected.
"""

from typing import Any, Tuple

import numpy as np
from PIL import Image

from SS_Libs.MaskEditingLib.mask_models import MaskSnapshot, Size


class MaskRaster:
    """
    Fixed-size RGBA buffer for a mask.

    The buffer is a numpy uint8 array of shape (height, width, 4). Its
    dimensions are fixed at creation; a new source image gets a new raster.

    Example:
        >>> raster = MaskRaster(800, 600)
        >>> raster.has_content
        False
        >>> snapshot = raster.snapshot()
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Raster size must be positive, got {width}x{height}")

        self._width = int(width)
        self._height = int(height)
        self._pixels = np.zeros((self._height, self._width, 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Size:
        return self._width, self._height

    @property
    def pixels(self) -> np.ndarray:
        """The live buffer. Mutating it mutates the mask."""
        return self._pixels

    @property
    def has_content(self) -> bool:
        return bool(self._pixels[:, :, 3].any())

    def clear(self) -> None:
        self._pixels.fill(0)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        return tuple(int(v) for v in self._pixels[y, x])

    def snapshot(self) -> MaskSnapshot:
        """Copy the current buffer into an immutable snapshot."""
        return MaskSnapshot.from_array(self._pixels)

    def restore(self, snapshot: MaskSnapshot) -> None:
        """
        Overwrite the buffer with a snapshot's pixels.

        Raises:
            ValueError: If the snapshot was taken from a raster of another size
        """
        if (snapshot.width, snapshot.height) != self.size:
            raise ValueError(
                f"Snapshot size {snapshot.width}x{snapshot.height} does not match "
                f"raster size {self._width}x{self._height}"
            )
        self._pixels[:] = snapshot.to_array()

    def to_image(self) -> Any:
        """Return a PIL RGBA image copy of the buffer (for overlays)."""
        return Image.fromarray(self._pixels.copy())
