from __future__ import annotations

import html
import importlib
from pathlib import Path
from typing import Callable

from .logutil import get_logger
from .textio import CompanionReadError, CompanionWriteError, read_companion_text, write_companion_text

_logger = get_logger(__name__)


def _qt():
    qtwidgets = importlib.import_module("PyQt6.QtWidgets")
    qtcore = importlib.import_module("PyQt6.QtCore")
    qtgui = importlib.import_module("PyQt6.QtGui")
    return qtwidgets, qtcore, qtgui


def show_error(parent, title: str, message: str) -> None:
    QtWidgets, _, _ = _qt()
    box = QtWidgets.QMessageBox(parent)
    box.setIcon(QtWidgets.QMessageBox.Icon.Warning)
    box.setWindowTitle(title)
    box.setText(message)
    box.exec()


def make_wrapper_panel(parent=None):
    QtWidgets, QtCore, _ = _qt()
    panel = QtWidgets.QWidget(parent)
    layout = QtWidgets.QHBoxLayout(panel)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
    return panel


def _link_html(text: str, color: str) -> str:
    return f'<a href="#" style="color:{color}; text-decoration:none">{html.escape(text)}</a>'


def set_link_selected(label, selected: bool) -> None:
    _, _, QtGui = _qt()
    role = QtGui.QPalette.ColorRole.HighlightedText if selected else QtGui.QPalette.ColorRole.Link
    color = label.palette().color(role).name()
    label.setText(_link_html(label.property("companion_text"), color))


def make_link_label(text: str, font_size: int, on_click: Callable[[], None], parent=None):
    QtWidgets, QtCore, _ = _qt()
    label = QtWidgets.QLabel(parent)
    label.setProperty("companion_text", text)
    label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
    label.setCursor(QtCore.Qt.CursorShape.PointingHandCursor)
    label.setTextFormat(QtCore.Qt.TextFormat.RichText)

    font = label.font()
    font.setPointSize(font_size)
    label.setFont(font)

    label.linkActivated.connect(lambda _href: on_click())
    set_link_selected(label, False)
    return label


class CompanionFileDialog:
    """Modal view/edit dialog for one companion text file.

    OK writes the whole text back to disk; Cancel discards edits.
    """

    def __init__(self, path: Path, text: str, parent=None):
        QtWidgets, _, _ = _qt()
        self.path = path

        self.dialog = QtWidgets.QDialog(parent)
        self.dialog.setWindowTitle(f"Text for {path.name}")
        self.dialog.resize(580, 250)

        layout = QtWidgets.QVBoxLayout(self.dialog)

        self.text_edit = QtWidgets.QPlainTextEdit()
        self.text_edit.setLineWrapMode(QtWidgets.QPlainTextEdit.LineWrapMode.WidgetWidth)
        self.text_edit.setPlainText(text)
        layout.addWidget(self.text_edit)

        btns = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok
            | QtWidgets.QDialogButtonBox.StandardButton.Cancel
        )
        layout.addWidget(btns)

        btns.accepted.connect(self._save)
        btns.rejected.connect(self.dialog.reject)

    def exec(self) -> int:
        return self.dialog.exec()

    def _save(self) -> None:
        try:
            write_companion_text(self.path, self.text_edit.toPlainText())
        except CompanionWriteError as exc:
            _logger.error("Unable to save text file %s", self.path, exc_info=True)
            show_error(self.dialog, "Unable to save text file!", str(exc))
            return
        self.dialog.accept()


def open_companion(path: Path, parent=None) -> None:
    if not path.exists():
        _logger.warning("The specified file seems to no longer exist: %s", path.absolute())
        return

    try:
        text = read_companion_text(path)
    except CompanionReadError as exc:
        _logger.error("Unable to read text file %s", path, exc_info=True)
        show_error(parent, "Unable to read text file!", str(exc))
        return

    CompanionFileDialog(path, text, parent).exec()
