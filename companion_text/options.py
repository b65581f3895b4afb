from __future__ import annotations

import importlib

from .config import (
    LINK_FONT_SIZE_MAX,
    LINK_FONT_SIZE_MIN,
    CompanionTextSettings,
    ConfigError,
    default_settings,
    settings_to_json,
    validate_settings,
)
from .plugin_hooks import ensure_plugin_defaults, load_settings, SETTINGS_KEY


def _qt():
    qtwidgets = importlib.import_module("PyQt6.QtWidgets")
    return qtwidgets


class CompanionTextOptionsPage:
    NAME = "companion_text"
    TITLE = "Companion text file"
    PARENT = "thumbnails"

    def __init__(self, api=None, parent=None):
        self.api = api

        QtWidgets = _qt()
        self._QtWidgets = QtWidgets

        root = QtWidgets.QWidget(parent)
        layout = QtWidgets.QVBoxLayout(root)
        form = QtWidgets.QFormLayout()

        self.font_size_spin = QtWidgets.QSpinBox()
        self.font_size_spin.setRange(LINK_FONT_SIZE_MIN, LINK_FONT_SIZE_MAX)
        self.font_size_spin.setSingleStep(1)
        form.addRow("Hyperlink font size", self.font_size_spin)
        layout.addLayout(form)
        layout.addStretch(1)

        self.restore_btn = QtWidgets.QPushButton("Restore defaults")
        self.restore_btn.clicked.connect(self._restore_defaults)
        layout.addWidget(self.restore_btn)

        self._root = root

    def get_widget(self):
        return self._root

    def load(self):
        ensure_plugin_defaults(self.api)
        settings = load_settings(self.api)
        self.font_size_spin.setValue(settings.link_font_size)

    def save(self):
        settings = CompanionTextSettings(link_font_size=self.font_size_spin.value())
        try:
            validate_settings(settings)
        except ConfigError as exc:
            self._message_error("Invalid settings", str(exc))
            return
        self.api.plugin_config[SETTINGS_KEY] = settings_to_json(settings)

    def _message_error(self, title: str, message: str) -> None:
        QtWidgets = self._QtWidgets
        box = QtWidgets.QMessageBox(self._root)
        box.setIcon(QtWidgets.QMessageBox.Icon.Warning)
        box.setWindowTitle(title)
        box.setText(message)
        box.exec()

    def _restore_defaults(self):
        self.font_size_spin.setValue(default_settings().link_font_size)
