import logging
from pathlib import Path
from typing import Any, Optional

from PyQt5.QtCore import QObject, QRectF, Qt, QThread, QTimer, pyqtSignal
from PyQt5.QtGui import QImage, QPainter, QPixmap
from PyQt5.QtWidgets import (
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from SS_Libs.ImageEditingLib.image_codec import apply_result, load_image_record, save_result
from SS_Libs.ImageEditingLib.image_models import ImageRecord
from SS_Libs.MaskEditingLib.mask_edit_session import MaskEditSession
from SS_Libs.MaskEditingLib.mask_models import Point, SurfaceBox
from SS_Libs.RequestLib.error_classifier import GENERIC_MESSAGE, ImageRequestError, SubmissionRejected
from SS_Libs.RequestLib.request_models import (
    EditMode,
    QualityTier,
    RequestPayload,
    validate_submission,
)
from SS_Libs.RequestLib.request_orchestrator import ImageRequestOrchestrator
from SS_Libs.RequestLib.submission_gate import SubmissionGate
from SS_Libs.config import StudioConfig
from SS_Libs.constants import (
    DEFAULT_WINDOW_WIDTH,
    DEFAULT_WINDOW_HEIGHT,
    PREVIEW_MIN_SIZE,
    MIN_BRUSH_SIZE,
    MAX_BRUSH_SIZE,
    PROGRESS_MESSAGES,
    PROGRESS_MESSAGE_INTERVAL_MS,
)

logger = logging.getLogger(__name__)


def _to_qimage(image: Any) -> QImage:
    rgba = image.convert("RGBA")
    data = rgba.tobytes("raw", "RGBA")
    return QImage(data, rgba.width, rgba.height, rgba.width * 4, QImage.Format_RGBA8888).copy()


class SubmissionWorker(QObject):
    finished = pyqtSignal(int, bytes)  # ticket, result
    failed = pyqtSignal(int, str)      # ticket, message

    def __init__(self, orchestrator: ImageRequestOrchestrator, payload: RequestPayload, api_key: str, ticket: int):
        super().__init__()
        self._orchestrator = orchestrator
        self._payload = payload
        self._api_key = api_key
        self._ticket = ticket

    def run(self) -> None:
        try:
            result = self._orchestrator.process_image(self._payload, self._api_key)
        except ImageRequestError as e:
            self.failed.emit(self._ticket, e.message)
            return
        except Exception as e:
            logger.exception("Submission worker crashed")
            self.failed.emit(self._ticket, str(e) or GENERIC_MESSAGE)
            return
        self.finished.emit(self._ticket, result)


class MaskCanvas(QWidget):
    """Shows the source image with the mask overlay and feeds pointer events to the session."""

    mask_changed = pyqtSignal()

    def __init__(self, session: MaskEditSession, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.session = session
        self._source: Optional[QImage] = None
        self.setMinimumSize(PREVIEW_MIN_SIZE, PREVIEW_MIN_SIZE)
        self.setMouseTracking(False)

    def set_source(self, image: Optional[Any]) -> None:
        self._source = _to_qimage(image) if image is not None else None
        self.update()

    def surface_box(self) -> Optional[SurfaceBox]:
        if self._source is None or self._source.width() == 0 or self._source.height() == 0:
            return None

        scale = min(self.width() / self._source.width(), self.height() / self._source.height())
        width = self._source.width() * scale
        height = self._source.height() * scale
        return SurfaceBox(
            left=(self.width() - width) / 2,
            top=(self.height() - height) / 2,
            width=width,
            height=height,
        )

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        box = self.surface_box()
        if box is None:
            painter.drawText(self.rect(), Qt.AlignCenter, "Load an image to begin")
            return

        target = QRectF(box.left, box.top, box.width, box.height)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        painter.drawImage(target, self._source)
        if self.session.is_editing and self.session.raster is not None:
            painter.drawImage(target, _to_qimage(self.session.raster.to_image()))

    def mousePressEvent(self, event) -> None:
        box = self.surface_box()
        if event.button() != Qt.LeftButton or box is None or not self.session.is_editing:
            return
        self.session.pointer_down(Point(event.x(), event.y()), box)
        self.update()

    def mouseMoveEvent(self, event) -> None:
        box = self.surface_box()
        if box is None or not self.session.is_drawing:
            return
        self.session.pointer_move(Point(event.x(), event.y()), box)
        self.update()

    def mouseReleaseEvent(self, event) -> None:
        self._finish_stroke()

    def leaveEvent(self, event) -> None:
        self._finish_stroke()

    def _finish_stroke(self) -> None:
        if self.session.is_drawing:
            self.session.pointer_up()
            self.mask_changed.emit()


class SculptEditorWindow(QMainWindow):
    def __init__(self, config: Optional[StudioConfig] = None) -> None:
        super().__init__()
        self.config = config or StudioConfig.from_env()
        self.setWindowTitle("Sculpt Studio")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.session = MaskEditSession()
        self.orchestrator = ImageRequestOrchestrator.from_config(self.config)
        self.gate = SubmissionGate()
        self.record: Optional[ImageRecord] = None

        self._thread: Optional[QThread] = None
        self._worker: Optional[SubmissionWorker] = None
        self._progress_index = 0
        self._progress_timer = QTimer(self)
        self._progress_timer.setInterval(PROGRESS_MESSAGE_INTERVAL_MS)

        self._build_ui()
        self._connect_signals()
        self._refresh_controls()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        controls_col = QVBoxLayout()
        previews_col = QHBoxLayout()

        self.btn_load_image = QPushButton("Load Image")
        self.btn_toggle_sculpt = QPushButton("Sculpt Region")
        self.btn_undo = QPushButton("Undo")
        self.btn_redo = QPushButton("Redo")
        self.btn_clear = QPushButton("Clear Mask")
        self.btn_submit = QPushButton("Restore Image")
        self.btn_save_result = QPushButton("Save Result")
        self.btn_reset = QPushButton("Start Over")

        self.quality_combo = QComboBox()
        for tier in QualityTier:
            self.quality_combo.addItem(tier.name.title(), tier)
        self.quality_combo.setCurrentIndex(list(QualityTier).index(QualityTier.HIGH))

        self.brush_slider = QSlider(Qt.Horizontal)
        self.brush_slider.setRange(MIN_BRUSH_SIZE, MAX_BRUSH_SIZE)
        self.brush_slider.setValue(self.session.brush_size)
        self.label_brush = QLabel(f"Brush: {self.session.brush_size}px")

        self.directive_edit = QLineEdit()
        self.directive_edit.setPlaceholderText("Optional directive, e.g. 'Enhance the colors of the sunset.'")

        self.label_status = QLabel("")
        self.label_error = QLabel("")
        self.label_error.setWordWrap(True)
        self.label_error.setStyleSheet("color: #c0392b;")

        self.canvas = MaskCanvas(self.session)
        self.label_result_preview = QLabel("Result Preview")
        self.label_result_preview.setAlignment(Qt.AlignCenter)
        self.label_result_preview.setMinimumSize(PREVIEW_MIN_SIZE, PREVIEW_MIN_SIZE)
        self.label_result_preview.setStyleSheet("border: 1px solid #888;")

        controls_col.addWidget(self.btn_load_image)
        controls_col.addWidget(QLabel("Quality"))
        controls_col.addWidget(self.quality_combo)
        controls_col.addWidget(QLabel("Directive"))
        controls_col.addWidget(self.directive_edit)
        controls_col.addWidget(self.btn_toggle_sculpt)
        controls_col.addWidget(self.label_brush)
        controls_col.addWidget(self.brush_slider)
        controls_col.addWidget(self.btn_undo)
        controls_col.addWidget(self.btn_redo)
        controls_col.addWidget(self.btn_clear)
        controls_col.addWidget(self.btn_submit)
        controls_col.addWidget(self.label_status)
        controls_col.addWidget(self.label_error)
        controls_col.addWidget(self.btn_save_result)
        controls_col.addWidget(self.btn_reset)
        controls_col.addStretch(1)

        previews_col.addWidget(self.canvas)
        previews_col.addWidget(self.label_result_preview)

        root.addLayout(controls_col, stretch=1)
        root.addLayout(previews_col, stretch=3)

    def _connect_signals(self) -> None:
        self.btn_load_image.clicked.connect(self.load_image)
        self.btn_toggle_sculpt.clicked.connect(self.toggle_sculpting)
        self.btn_undo.clicked.connect(self.undo)
        self.btn_redo.clicked.connect(self.redo)
        self.btn_clear.clicked.connect(self.clear_mask)
        self.btn_submit.clicked.connect(self.submit)
        self.btn_save_result.clicked.connect(self.save_current_result)
        self.btn_reset.clicked.connect(self.reset_state)
        self.brush_slider.valueChanged.connect(self.on_brush_size_changed)
        self.canvas.mask_changed.connect(self._refresh_controls)
        self._progress_timer.timeout.connect(self._advance_progress_message)

    def load_image(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Image",
            "",
            "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp)",
        )
        if not file_path:
            return

        try:
            record = load_image_record(Path(file_path))
        except (OSError, ValueError) as e:
            QMessageBox.warning(self, "Cannot Open Image", str(e))
            return

        self.gate.abandon()
        self.record = record
        self.session.load(*record.original.size)
        self.canvas.set_source(record.original)
        self.label_error.setText("")
        self.label_result_preview.setText("Result Preview")
        self._set_busy(False)
        logger.info(f"Loaded {record.path.name} ({record.source.mime_type})")

    def toggle_sculpting(self) -> None:
        if not self.session.is_loaded:
            return
        self.session.is_editing = not self.session.is_editing
        self.canvas.update()
        self._refresh_controls()

    def on_brush_size_changed(self, value: int) -> None:
        self.session.brush_size = value
        self.label_brush.setText(f"Brush: {self.session.brush_size}px")

    def undo(self) -> None:
        if self.session.undo():
            self.canvas.update()
        self._refresh_controls()

    def redo(self) -> None:
        if self.session.redo():
            self.canvas.update()
        self._refresh_controls()

    def clear_mask(self) -> None:
        if not self.session.is_loaded:
            return
        self.session.clear_mask()
        self.canvas.update()
        self._refresh_controls()

    def _edit_mode(self) -> EditMode:
        return EditMode.SCULPTING if self.session.is_editing else EditMode.RESTORATION

    def submit(self) -> None:
        if self.gate.in_flight:
            return

        directive = self.directive_edit.text()
        mode = self._edit_mode()
        try:
            validate_submission(
                self.config.api_key,
                self.record.source if self.record else None,
                mode,
                directive,
                self.session.has_mask,
            )
        except SubmissionRejected as e:
            self.label_error.setText(e.message)
            return

        payload = RequestPayload(
            source_image=self.record.source,
            mode=mode,
            quality_tier=self.quality_combo.currentData(),
            directive_text=directive,
            mask_image=self.session.mask_for_submission(),
        )

        ticket = self.gate.begin()
        self.label_error.setText("")
        self.record.result = None
        self.label_result_preview.setText("Result Preview")
        self._set_busy(True)

        self._thread = QThread(self)
        self._worker = SubmissionWorker(self.orchestrator, payload, self.config.api_key, ticket)
        self._worker.moveToThread(self._thread)
        self._thread.started.connect(self._worker.run)
        self._worker.finished.connect(self._on_submission_finished)
        self._worker.failed.connect(self._on_submission_failed)
        self._worker.finished.connect(self._thread.quit)
        self._worker.failed.connect(self._thread.quit)
        self._thread.finished.connect(self._worker.deleteLater)
        self._thread.start()

    def _on_submission_finished(self, ticket: int, result: bytes) -> None:
        if not self.gate.finish(ticket):
            return

        self._set_busy(False)
        try:
            image = apply_result(self.record, result)
        except OSError as e:
            logger.error(f"Could not decode result image: {e}")
            self.label_error.setText(f"The returned image could not be displayed: {e}")
            self._refresh_controls()
            return

        self.session.is_editing = False
        self._set_preview(self.label_result_preview, image)
        self.canvas.update()
        self._refresh_controls()

    def _on_submission_failed(self, ticket: int, message: str) -> None:
        if not self.gate.finish(ticket):
            return

        self._set_busy(False)
        self.label_error.setText(message)
        self._refresh_controls()

    def save_current_result(self) -> None:
        if self.record is None or self.record.result is None:
            return

        folder = QFileDialog.getExistingDirectory(self, "Select Save Directory")
        if not folder:
            return

        try:
            saved_path = save_result(self.record.result, self.record.path, Path(folder))
        except OSError as e:
            QMessageBox.critical(self, "Save Failed", str(e))
            return
        QMessageBox.information(self, "Success", f"Result saved to {saved_path}")

    def reset_state(self) -> None:
        self.gate.abandon()
        self._set_busy(False)
        self.record = None
        self.session.unload()
        self.canvas.set_source(None)
        self.directive_edit.clear()
        self.quality_combo.setCurrentIndex(list(QualityTier).index(QualityTier.HIGH))
        self.label_error.setText("")
        self.label_result_preview.setText("Result Preview")
        self._refresh_controls()

    def closeEvent(self, event) -> None:
        self.gate.abandon()
        if self._thread is not None and self._thread.isRunning():
            self._thread.quit()
            self._thread.wait()
        super().closeEvent(event)

    def _set_busy(self, busy: bool) -> None:
        if busy:
            self._progress_index = 0
            self.label_status.setText(PROGRESS_MESSAGES[0])
            self._progress_timer.start()
        else:
            self._progress_timer.stop()
            self.label_status.setText("")
        self._refresh_controls()

    def _advance_progress_message(self) -> None:
        self._progress_index = (self._progress_index + 1) % len(PROGRESS_MESSAGES)
        self.label_status.setText(PROGRESS_MESSAGES[self._progress_index])

    def _refresh_controls(self) -> None:
        loaded = self.session.is_loaded
        busy = self.gate.in_flight
        editing = self.session.is_editing

        self.btn_submit.setEnabled(loaded and not busy)
        self.btn_submit.setText("Processing..." if busy else ("Apply Sculpting" if editing else "Restore Image"))
        self.btn_toggle_sculpt.setEnabled(loaded and not busy)
        self.btn_toggle_sculpt.setText("Exit Sculpting" if editing else "Sculpt Region")
        self.btn_undo.setEnabled(editing and self.session.can_undo)
        self.btn_redo.setEnabled(editing and self.session.can_redo)
        self.btn_clear.setEnabled(editing)
        self.brush_slider.setEnabled(editing)
        self.quality_combo.setEnabled(not editing)
        self.btn_save_result.setEnabled(self.record is not None and self.record.result is not None)

    def _set_preview(self, label: QLabel, image: Any) -> None:
        pixmap = QPixmap.fromImage(_to_qimage(image))
        scaled = pixmap.scaled(
            label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        label.setPixmap(scaled)
