"""
Mask editing data models for Sculpt Studio.

This module defines core data structures used throughout the mask editing system.

Classes:
    Point: A position in raster (or display) pixel space
    SurfaceBox: On-screen bounding box of the drawing surface
    Stroke: Ordered points of one brush drag plus its radius
    MaskSnapshot: Immutable copy of a mask raster buffer
"""

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

Size = Tuple[int, int]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class SurfaceBox:
    left: float
    top: float
    width: float
    height: float


@dataclass
class Stroke:
    radius: float
    points: List[Point] = field(default_factory=list)

    def add(self, point: Point) -> None:
        self.points.append(point)


@dataclass(frozen=True)
class MaskSnapshot:
    """
    Immutable copy of a mask raster at one point in time.

    The pixels are held as bytes so the snapshot can never alias the
    live buffer it was taken from.

    Attributes:
        width: Raster width in pixels
        height: Raster height in pixels
        pixels: Row-major RGBA bytes (width * height * 4)
    """
    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"Snapshot buffer has {len(self.pixels)} bytes, expected {expected}"
            )

    @classmethod
    def from_array(cls, array: np.ndarray) -> "MaskSnapshot":
        """Copy an (H, W, 4) uint8 array into a new snapshot."""
        height, width = array.shape[:2]
        return cls(width=width, height=height, pixels=array.astype(np.uint8).tobytes())

    def to_array(self) -> np.ndarray:
        """Return a writable (H, W, 4) copy of the snapshot pixels."""
        flat = np.frombuffer(self.pixels, dtype=np.uint8)
        return flat.reshape((self.height, self.width, 4)).copy()

    @property
    def is_blank(self) -> bool:
        return not any(self.pixels[3::4])
