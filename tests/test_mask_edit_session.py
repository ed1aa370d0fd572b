"""
Tests for MaskEditSession.

Tests cover:
- Load/reset lifecycle and the has-mask flag
- Undo/redo restoring exact raster contents
- Redo branch truncation on a new stroke
- Clearing the mask
- Pointer events mapped through the surface box
- Mask extraction for submission
"""

import base64
from io import BytesIO

import pytest
from PIL import Image

from SS_Libs.MaskEditingLib.mask_edit_session import MaskEditSession
from SS_Libs.MaskEditingLib.mask_history import MaskHistory
from SS_Libs.MaskEditingLib.mask_models import Point, SurfaceBox
from SS_Libs.constants import HISTORY_CAPACITY, MIN_BRUSH_SIZE, MAX_BRUSH_SIZE


def draw_stroke(session, start, end=None):
    session.begin_stroke(start)
    if end is not None:
        session.continue_stroke(end)
    session.end_stroke()


@pytest.fixture
def small_session():
    session = MaskEditSession(brush_size=10)
    session.load(120, 90)
    session.is_editing = True
    return session


class TestLoad:
    """Tests for loading a new image."""

    def test_load_starts_blank(self, loaded_session):
        assert loaded_session.raster.size == (800, 600)
        assert not loaded_session.raster.has_content
        assert not loaded_session.has_mask
        assert len(loaded_session.history) == 1
        assert loaded_session.history.index == 0
        assert not loaded_session.can_undo
        assert not loaded_session.can_redo

    def test_reload_resets_history(self, small_session):
        draw_stroke(small_session, Point(20, 20))

        small_session.load(60, 40)

        assert small_session.raster.size == (60, 40)
        assert len(small_session.history) == 1
        assert not small_session.has_mask
        assert not small_session.is_editing

    def test_operations_require_loaded_image(self):
        session = MaskEditSession()

        with pytest.raises(RuntimeError):
            session.begin_stroke(Point(1, 1))
        with pytest.raises(RuntimeError):
            session.clear_mask()
        assert session.mask_for_submission() is None

    def test_unload(self, small_session):
        small_session.unload()

        assert not small_session.is_loaded
        assert len(small_session.history) == 0


class TestStrokes:
    """Tests for stroke lifecycle."""

    def test_single_stroke_then_undo(self, loaded_session):
        """800x600 image, one radius-20 stroke at (100, 100), one undo."""
        assert loaded_session.brush_radius == 20

        draw_stroke(loaded_session, Point(100, 100))
        assert loaded_session.has_mask
        assert loaded_session.raster.pixel(100, 100)[3] > 0
        assert loaded_session.can_undo

        assert loaded_session.undo()

        assert not loaded_session.has_mask
        assert not loaded_session.raster.has_content

    def test_stroke_pushes_one_snapshot(self, small_session):
        draw_stroke(small_session, Point(10, 10), Point(60, 40))

        assert len(small_session.history) == 2
        assert small_session.current_stroke.points == [Point(10, 10), Point(60, 40)]
        assert small_session.current_stroke.radius == 5

    def test_continue_without_begin_is_ignored(self, small_session):
        small_session.continue_stroke(Point(30, 30))
        small_session.end_stroke()

        assert not small_session.raster.has_content
        assert len(small_session.history) == 1

    @pytest.mark.parametrize("count", [0, 1, 3, 19, 20, 25])
    def test_n_strokes_then_n_undos_is_blank(self, small_session, count):
        blank = small_session.raster.snapshot()

        for i in range(count):
            x = 5 + (i * 5) % 110
            draw_stroke(small_session, Point(x, 10), Point(x, 80))
        undone = sum(small_session.undo() for _ in range(count))

        assert undone == min(count, HISTORY_CAPACITY - 1)
        assert small_session.raster.snapshot() == blank
        assert not small_session.has_mask

    def test_has_mask_follows_visible_mask_past_capacity(self, small_session):
        """Undo down from a full history keeps the flag in step with the raster."""
        for i in range(HISTORY_CAPACITY + 1):
            draw_stroke(small_session, Point(5 + i * 5, 45))

        while small_session.undo():
            assert small_session.has_mask == small_session.raster.has_content
            if small_session.has_mask:
                assert small_session.mask_for_submission() is not None

        assert small_session.history.snapshots[0].is_blank
        assert not small_session.raster.has_content

        assert small_session.redo()
        assert small_session.has_mask

    def test_redo_restores_identical_pixels(self, small_session):
        draw_stroke(small_session, Point(10, 10))
        draw_stroke(small_session, Point(50, 50), Point(100, 20))
        before_undo = small_session.raster.snapshot()

        small_session.undo()
        assert small_session.raster.snapshot() != before_undo

        assert small_session.redo()
        assert small_session.raster.snapshot() == before_undo
        assert small_session.has_mask

    def test_undo_and_redo_at_bounds(self, small_session):
        assert not small_session.undo()
        assert not small_session.redo()

    def test_new_stroke_after_undo_discards_redo(self, small_session):
        draw_stroke(small_session, Point(10, 10))
        draw_stroke(small_session, Point(60, 60))
        small_session.undo()
        assert small_session.can_redo

        draw_stroke(small_session, Point(100, 30))

        assert not small_session.can_redo
        assert len(small_session.history) == 3
        assert not small_session.redo()

    def test_brush_size_is_clamped(self):
        session = MaskEditSession(brush_size=1)
        assert session.brush_size == MIN_BRUSH_SIZE

        session.brush_size = 500
        assert session.brush_size == MAX_BRUSH_SIZE


class TestClearMask:
    """Tests for clear_mask."""

    def test_clear_is_undoable(self, small_session):
        draw_stroke(small_session, Point(30, 30))
        stroked = small_session.raster.snapshot()

        small_session.clear_mask()
        assert not small_session.raster.has_content
        assert not small_session.has_mask
        assert len(small_session.history) == 3

        small_session.undo()
        assert small_session.raster.snapshot() == stroked
        assert small_session.has_mask


class TestPointerEvents:
    """Tests for display-space pointer handling."""

    def test_pointer_down_maps_to_raster(self, loaded_session):
        box = SurfaceBox(left=10, top=10, width=400, height=300)

        loaded_session.pointer_down(Point(60, 60), box)
        loaded_session.pointer_up()

        assert loaded_session.raster.pixel(100, 100)[3] > 0
        assert loaded_session.raster.pixel(60, 60)[3] == 0

    def test_pointer_move_without_down_is_ignored(self, loaded_session):
        box = SurfaceBox(left=0, top=0, width=800, height=600)

        loaded_session.pointer_move(Point(50, 50), box)

        assert not loaded_session.raster.has_content

    def test_pointer_up_without_down_does_not_push(self, loaded_session):
        loaded_session.pointer_up()

        assert len(loaded_session.history) == 1


class TestMaskForSubmission:
    """Tests for mask_for_submission."""

    def test_none_outside_sculpting(self, small_session):
        draw_stroke(small_session, Point(30, 30))
        small_session.is_editing = False

        assert small_session.mask_for_submission() is None

    def test_none_without_strokes(self, small_session):
        assert small_session.mask_for_submission() is None

    def test_binary_png_with_strokes(self, small_session):
        draw_stroke(small_session, Point(30, 30))

        encoded = small_session.mask_for_submission()

        image = Image.open(BytesIO(base64.b64decode(encoded))).convert("RGBA")
        assert image.size == (120, 90)
        assert image.getpixel((30, 30)) == (255, 255, 255, 255)
        assert image.getpixel((110, 80)) == (0, 0, 0, 0)


class TestHistoryInjection:

    def test_uses_supplied_history(self):
        history = MaskHistory(capacity=3, keep_blank_base=True)
        session = MaskEditSession(history=history)
        session.load(20, 20)
        session.is_editing = True

        for x in (2, 8, 14, 18):
            draw_stroke(session, Point(x, 10))

        assert len(history) == 3
        while session.undo():
            pass
        assert not session.raster.has_content
