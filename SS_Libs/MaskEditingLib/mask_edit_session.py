"""
Mask editing session.

MaskEditSession owns everything the brush tool mutates for one loaded
image: the mask raster, the renderer (and with it the last pointer
position), the undo/redo history and the has-mask flag. Callers hold a
reference to the session and drive it with pointer events; nothing here is
global.

Example:
    >>> session = MaskEditSession()
    >>> session.load(800, 600)
    >>> session.begin_stroke(Point(100, 100))
    >>> session.end_stroke()
    >>> session.undo()
    True
    >>> session.has_mask
    False
"""

import logging
from typing import Optional

from SS_Libs.MaskEditingLib.coordinate_mapper import map_to_raster
from SS_Libs.MaskEditingLib.mask_extractor import extract_mask
from SS_Libs.MaskEditingLib.mask_history import MaskHistory
from SS_Libs.MaskEditingLib.mask_models import Point, Size, Stroke, SurfaceBox
from SS_Libs.MaskEditingLib.mask_raster import MaskRaster
from SS_Libs.MaskEditingLib.stroke_renderer import StrokeRenderer
from SS_Libs.constants import DEFAULT_BRUSH_SIZE, MIN_BRUSH_SIZE, MAX_BRUSH_SIZE

logger = logging.getLogger(__name__)


class MaskEditSession:
    """
    Brush-mask state for a single source image.

    Attributes:
        is_editing: True while sculpting mode is active
        history: Undo/redo log of mask snapshots; by default it keeps the
            blank base frame when full, so undoing far enough always
            returns to an empty mask
    """

    def __init__(self, brush_size: int = DEFAULT_BRUSH_SIZE, history: Optional[MaskHistory] = None):
        self.history = history if history is not None else MaskHistory(keep_blank_base=True)
        self.is_editing = False
        self._brush_size = DEFAULT_BRUSH_SIZE
        self.brush_size = brush_size
        self._raster: Optional[MaskRaster] = None
        self._renderer: Optional[StrokeRenderer] = None
        self._has_mask = False
        self._is_drawing = False
        self._stroke: Optional[Stroke] = None

    @property
    def raster(self) -> Optional[MaskRaster]:
        return self._raster

    @property
    def is_loaded(self) -> bool:
        return self._raster is not None

    @property
    def has_mask(self) -> bool:
        return self._has_mask

    @property
    def is_drawing(self) -> bool:
        return self._is_drawing

    @property
    def current_stroke(self) -> Optional[Stroke]:
        """The stroke in progress, or the last completed one."""
        return self._stroke

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def brush_size(self) -> int:
        """Brush diameter in raster pixels."""
        return self._brush_size

    @brush_size.setter
    def brush_size(self, value: int) -> None:
        self._brush_size = max(MIN_BRUSH_SIZE, min(MAX_BRUSH_SIZE, int(value)))

    @property
    def brush_radius(self) -> float:
        return self._brush_size / 2.0

    def load(self, width: int, height: int) -> None:
        """
        Allocate a blank mask for a newly loaded image and reset history.

        Args:
            width: Source image width in pixels
            height: Source image height in pixels
        """
        self._raster = MaskRaster(width, height)
        self._renderer = StrokeRenderer(self._raster)
        self._has_mask = False
        self._is_drawing = False
        self.is_editing = False
        self.history.reset(self._raster.snapshot())
        logger.debug(f"Mask session loaded at {width}x{height}")

    def unload(self) -> None:
        self._raster = None
        self._renderer = None
        self._has_mask = False
        self._is_drawing = False
        self.is_editing = False
        self.history.clear()

    def begin_stroke(self, point: Point) -> None:
        """Start a stroke at a raster-space point."""
        renderer = self._require_renderer()
        self._is_drawing = True
        self._has_mask = True
        self._stroke = Stroke(radius=self.brush_radius, points=[point])
        renderer.begin_stroke(point, self.brush_radius)

    def continue_stroke(self, point: Point) -> None:
        """Extend the current stroke. Ignored when no stroke is in progress."""
        if not self._is_drawing:
            return
        self._stroke.add(point)
        self._require_renderer().continue_stroke(point)

    def end_stroke(self) -> None:
        """Finish the current stroke and record it in the history."""
        if not self._is_drawing:
            return

        self._is_drawing = False
        self._renderer.end_stroke()
        self.history.push(self._raster.snapshot())

    def pointer_down(self, display_point: Point, surface_box: SurfaceBox) -> None:
        self.begin_stroke(map_to_raster(display_point, surface_box, self._native_size()))

    def pointer_move(self, display_point: Point, surface_box: SurfaceBox) -> None:
        if not self._is_drawing:
            return
        self.continue_stroke(map_to_raster(display_point, surface_box, self._native_size()))

    def pointer_up(self) -> None:
        self.end_stroke()

    def clear_mask(self) -> None:
        """Erase the whole mask; the cleared state becomes a history entry."""
        raster = self._require_raster()
        raster.clear()
        self._has_mask = False
        self.history.push(raster.snapshot())

    def undo(self) -> bool:
        """
        Restore the previous snapshot.

        Returns:
            True if a snapshot was restored, False if already at the start
        """
        snapshot = self.history.undo()
        if snapshot is None:
            return False

        self._require_raster().restore(snapshot)
        self._has_mask = not snapshot.is_blank
        return True

    def redo(self) -> bool:
        """Re-apply the next snapshot. Returns False if already at the end."""
        snapshot = self.history.redo()
        if snapshot is None:
            return False

        self._require_raster().restore(snapshot)
        self._has_mask = not snapshot.is_blank
        return True

    def mask_for_submission(self) -> Optional[str]:
        """Base64 PNG of the binarized mask, or None outside sculpting or without strokes."""
        if self._raster is None:
            return None
        return extract_mask(self._raster, self.is_editing and self._has_mask)

    def _native_size(self) -> Size:
        return self._require_raster().size

    def _require_raster(self) -> MaskRaster:
        if self._raster is None:
            raise RuntimeError("No image loaded in the mask session")
        return self._raster

    def _require_renderer(self) -> StrokeRenderer:
        self._require_raster()
        return self._renderer
