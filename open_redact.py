import logging
import sys
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, Optional

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QKeySequence, QPixmap
from PyQt5.QtWidgets import (
    QApplication,
    QButtonGroup,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QRadioButton,
    QScrollArea,
    QShortcut,
    QVBoxLayout,
    QWidget,
)

from OR_Libs.config import RedactionConfig
from OR_Libs.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    REDACTION_BLACK_OUT,
    REDACTION_BLUR,
    SUPPORTED_STANDARD_IMAGES,
)
from OR_Libs.redaction_session import RedactionSession

logger = logging.getLogger(__name__)


class RedactionCanvas(QLabel):
    """Label showing the session at 1:1 scale and forwarding mouse drags."""

    def __init__(self, session: RedactionSession, on_changed: Callable[[], None], parent=None) -> None:
        super().__init__(parent)
        self.session = session
        self._on_changed = on_changed
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setCursor(Qt.CrossCursor)

    def mousePressEvent(self, event) -> None:
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        self.session.selection.pointer_down(event.x(), event.y())
        event.accept()

    def mouseMoveEvent(self, event) -> None:
        if not self.session.selection.is_dragging:
            super().mouseMoveEvent(event)
            return
        self.session.selection.pointer_move(event.x(), event.y())
        self._on_changed()
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        self.session.selection.pointer_up(event.x(), event.y())
        self._on_changed()
        event.accept()


class OpenRedactWindow(QMainWindow):
    def __init__(self, config: Optional[RedactionConfig] = None) -> None:
        super().__init__()
        self.setWindowTitle("Open Redact")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.session = RedactionSession(config, scheduler=self._schedule)

        self._build_ui()
        self._connect_signals()
        self._setup_shortcuts()
        self.refresh_canvas()

    def _schedule(self, callback: Callable[[], None]) -> None:
        def resume() -> None:
            try:
                callback()
            finally:
                self.refresh_canvas()

        QTimer.singleShot(0, resume)

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        controls_col = QVBoxLayout()

        self.btn_open = QPushButton("Open Image")
        self.btn_undo = QPushButton("Undo")
        self.btn_redo = QPushButton("Redo")
        self.btn_export = QPushButton("Export PNG")

        self.radio_black_out = QRadioButton("Black out")
        self.radio_blur = QRadioButton("Blur")
        self.mode_group = QButtonGroup(self)
        self.mode_group.addButton(self.radio_black_out)
        self.mode_group.addButton(self.radio_blur)
        if self.session.mode == REDACTION_BLUR:
            self.radio_blur.setChecked(True)
        else:
            self.radio_black_out.setChecked(True)

        self.label_status = QLabel("No image loaded")

        controls_col.addWidget(self.btn_open)
        controls_col.addWidget(self.radio_black_out)
        controls_col.addWidget(self.radio_blur)
        controls_col.addWidget(self.btn_undo)
        controls_col.addWidget(self.btn_redo)
        controls_col.addWidget(self.btn_export)
        controls_col.addStretch(1)
        controls_col.addWidget(self.label_status)

        self.canvas = RedactionCanvas(self.session, self.refresh_canvas)
        scroll = QScrollArea()
        scroll.setWidget(self.canvas)
        scroll.setWidgetResizable(False)

        root.addLayout(controls_col, stretch=0)
        root.addWidget(scroll, stretch=1)

    def _connect_signals(self) -> None:
        self.btn_open.clicked.connect(self.open_image)
        self.btn_undo.clicked.connect(self.undo)
        self.btn_redo.clicked.connect(self.redo)
        self.btn_export.clicked.connect(self.export_png)
        self.radio_black_out.toggled.connect(self.on_mode_toggled)
        self.radio_blur.toggled.connect(self.on_mode_toggled)

    def _setup_shortcuts(self) -> None:
        self.shortcut_open = QShortcut(QKeySequence("Ctrl+O"), self)
        self.shortcut_open.activated.connect(self.open_image)

        self.shortcut_export = QShortcut(QKeySequence("Ctrl+S"), self)
        self.shortcut_export.activated.connect(self.export_png)

        self.shortcut_undo = QShortcut(QKeySequence("Ctrl+Z"), self)
        self.shortcut_undo.activated.connect(self.undo)

        self.shortcut_redo = QShortcut(QKeySequence("Ctrl+Y"), self)
        self.shortcut_redo.activated.connect(self.redo)

        self.shortcut_redo_alt = QShortcut(QKeySequence("Ctrl+Shift+Z"), self)
        self.shortcut_redo_alt.activated.connect(self.redo)

    def on_mode_toggled(self) -> None:
        if self.radio_blur.isChecked():
            self.session.set_mode(REDACTION_BLUR)
        else:
            self.session.set_mode(REDACTION_BLACK_OUT)

    def open_image(self) -> None:
        patterns = " ".join(f"*{ext}" for ext in sorted(SUPPORTED_STANDARD_IMAGES))
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Open Image",
            "",
            f"Images ({patterns})",
        )
        if not file_path:
            return

        try:
            self.session.load_image(Path(file_path))
        except OSError as exc:
            logger.warning(f"Failed to open {file_path}: {exc}")
            QMessageBox.warning(self, "Open Failed", f"Could not open {file_path}:\n{exc}")
            return

        self.setWindowTitle(f"Open Redact - {Path(file_path).name}")

    def undo(self) -> None:
        self.session.undo()
        self.refresh_canvas()

    def redo(self) -> None:
        self.session.redo()
        self.refresh_canvas()

    def export_png(self) -> None:
        if not self.session.has_image:
            return

        save_path, _ = QFileDialog.getSaveFileName(
            self,
            "Export Redacted Image",
            "redacted.png",
            "PNG Images (*.png)",
        )
        if not save_path:
            return

        try:
            self.session.export_png(save_path)
        except OSError as exc:
            logger.warning(f"Failed to export {save_path}: {exc}")
            QMessageBox.warning(self, "Export Failed", f"Could not write {save_path}:\n{exc}")
            return

        self.statusBar().showMessage(f"Exported to {save_path}", 3000)

    def refresh_canvas(self) -> None:
        pixmap = QPixmap()
        if not pixmap.loadFromData(self._to_png_bytes(self.session.render()), "PNG"):
            self.canvas.setText("Preview failed")
            return

        self.canvas.setPixmap(pixmap)
        self.canvas.resize(pixmap.size())
        self._update_history_actions()

    def _update_history_actions(self) -> None:
        log = self.session.event_log
        self.btn_undo.setEnabled(log.can_undo)
        self.btn_redo.setEnabled(log.can_redo)
        if self.session.has_image:
            self.label_status.setText(f"Actions: {log.cursor}/{len(log)}")

    def _to_png_bytes(self, image: Any) -> bytes:
        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = OpenRedactWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
