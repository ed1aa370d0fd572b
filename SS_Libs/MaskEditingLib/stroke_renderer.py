"""
Soft round brush rendering into a mask raster.

A stroke starts with a single dab (a filled circle) and continues with
round-capped segments from the previous point to the new one. Coverage is
computed analytically from the distance to the segment, which gives a one
pixel anti-aliased edge, and a blurred shadow of the same shape is laid down
underneath for extra edge softness.

Only the dirty rectangle of each dab or segment is touched.

Example:
    >>> raster = MaskRaster(200, 200)
    >>> renderer = StrokeRenderer(raster)
    >>> renderer.begin_stroke(Point(50, 50), brush_radius=20)
    >>> renderer.continue_stroke(Point(120, 80))
    >>> renderer.end_stroke()
"""

from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageFilter

from SS_Libs.MaskEditingLib.mask_models import Point
from SS_Libs.MaskEditingLib.mask_raster import MaskRaster
from SS_Libs.constants import (
    BRUSH_COLOR,
    BRUSH_ALPHA,
    BRUSH_SHADOW_ALPHA,
    BRUSH_SHADOW_BLUR,
)

Region = Tuple[int, int, int, int]


class StrokeRenderer:
    """
    Draws brush dabs and segments into a MaskRaster.

    Attributes:
        color: RGB fill colour of the brush
        alpha: Opacity of the brush fill (0-1)
        shadow_alpha: Opacity of the soft shadow (0-1)
        shadow_blur: Shadow blur in pixels (0 disables the shadow)
    """

    def __init__(
        self,
        raster: MaskRaster,
        color: Tuple[int, int, int] = BRUSH_COLOR,
        alpha: float = BRUSH_ALPHA,
        shadow_alpha: float = BRUSH_SHADOW_ALPHA,
        shadow_blur: float = BRUSH_SHADOW_BLUR,
    ):
        if not 0 < alpha <= 1:
            raise ValueError(f"alpha must be 0 < a <= 1, got {alpha}")
        if shadow_blur < 0:
            raise ValueError(f"shadow_blur must be >= 0, got {shadow_blur}")

        self._raster = raster
        self.color = color
        self.alpha = alpha
        self.shadow_alpha = shadow_alpha
        self.shadow_blur = shadow_blur
        self._last_point: Optional[Point] = None
        self._radius: float = 0.0

    @property
    def last_point(self) -> Optional[Point]:
        return self._last_point

    @property
    def radius(self) -> float:
        return self._radius

    def begin_stroke(self, point: Point, brush_radius: float) -> None:
        """
        Draw the first dab of a stroke.

        Args:
            point: Dab centre in raster pixels
            brush_radius: Brush radius in raster pixels

        Raises:
            ValueError: If brush_radius is not positive
        """
        if brush_radius <= 0:
            raise ValueError(f"brush_radius must be > 0, got {brush_radius}")

        self._radius = float(brush_radius)
        self._paint_segment(point, point)
        self._last_point = point

    def continue_stroke(self, point: Point) -> None:
        """Draw a capsule from the last point to `point`. No-op without a prior point."""
        if self._last_point is None:
            return

        self._paint_segment(self._last_point, point)
        self._last_point = point

    def end_stroke(self) -> None:
        self._last_point = None

    def _paint_segment(self, start: Point, end: Point) -> None:
        margin = self._radius + 1.0
        if self.shadow_blur > 0:
            margin += self.shadow_blur * 2

        region = self._dirty_region(start, end, margin)
        if region is None:
            return

        coverage = _capsule_coverage(start, end, self._radius, region)

        if self.shadow_blur > 0 and self.shadow_alpha > 0:
            shadow = _blur_coverage(coverage, self.shadow_blur / 2.0)
            self._composite(region, shadow * self.alpha * self.shadow_alpha)

        self._composite(region, coverage * self.alpha)

    def _dirty_region(self, start: Point, end: Point, margin: float) -> Optional[Region]:
        x0 = max(int(np.floor(min(start.x, end.x) - margin)), 0)
        y0 = max(int(np.floor(min(start.y, end.y) - margin)), 0)
        x1 = min(int(np.ceil(max(start.x, end.x) + margin)), self._raster.width)
        y1 = min(int(np.ceil(max(start.y, end.y) + margin)), self._raster.height)

        if x0 >= x1 or y0 >= y1:
            return None
        return x0, y0, x1, y1

    def _composite(self, region: Region, src_alpha: np.ndarray) -> None:
        """Porter-Duff source-over of the brush colour onto the raster."""
        x0, y0, x1, y1 = region
        target = self._raster.pixels[y0:y1, x0:x1]

        dst = target.astype(np.float32) / 255.0
        dst_alpha = dst[:, :, 3]
        src_rgb = np.array(self.color, dtype=np.float32) / 255.0

        out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
        out_rgb = (
            src_rgb[None, None, :] * src_alpha[:, :, None]
            + dst[:, :, :3] * (dst_alpha * (1.0 - src_alpha))[:, :, None]
        )
        safe_alpha = np.where(out_alpha > 0, out_alpha, 1.0)
        out_rgb = out_rgb / safe_alpha[:, :, None]

        result = np.dstack([out_rgb, out_alpha])
        target[:] = np.clip(np.rint(result * 255.0), 0, 255).astype(np.uint8)


def _capsule_coverage(start: Point, end: Point, radius: float, region: Region) -> np.ndarray:
    """
    Per-pixel coverage (0-1) of a round-capped segment within a region.

    A zero-length segment is a circle. The edge ramps over one pixel.
    """
    x0, y0, x1, y1 = region
    xs = np.arange(x0, x1, dtype=np.float32) + 0.5
    ys = np.arange(y0, y1, dtype=np.float32) + 0.5
    px, py = np.meshgrid(xs, ys)

    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        t = np.zeros_like(px)
    else:
        t = np.clip(((px - start.x) * dx + (py - start.y) * dy) / length_sq, 0.0, 1.0)

    distance = np.hypot(px - (start.x + t * dx), py - (start.y + t * dy))
    return np.clip(radius + 0.5 - distance, 0.0, 1.0).astype(np.float32)


def _blur_coverage(coverage: np.ndarray, sigma: float) -> np.ndarray:
    image = Image.fromarray(np.rint(coverage * 255.0).astype(np.uint8))
    blurred = image.filter(ImageFilter.GaussianBlur(radius=sigma))
    return np.asarray(blurred, dtype=np.float32) / 255.0
