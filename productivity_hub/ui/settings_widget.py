"""
Settings Panel — pomodoro lengths, sound, data management.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QCheckBox, QFileDialog, QFormLayout, QGroupBox, QHBoxLayout, QLabel,
    QMessageBox, QPushButton, QSlider, QSpinBox, QVBoxLayout, QWidget,
)

from productivity_hub.audio.sound_manager import SoundManager
from productivity_hub.config import save_config
from productivity_hub.data.context import AppContext

logger = logging.getLogger(__name__)


class SettingsWidget(QWidget):
    """Settings panel for the app."""

    settings_changed = Signal()

    def __init__(self, ctx: AppContext, sound: SoundManager,
                 config_path: Optional[Path] = None,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.ctx = ctx
        self.sound = sound
        self.config_path = config_path
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(20, 16, 20, 20)

        title = QLabel("Settings")
        title.setObjectName("title")
        layout.addWidget(title)

        # ── Pomodoro ────────────────────────────────────────────────────
        pomo = self.ctx.config.get("pomodoro", {})
        pomo_group = QGroupBox("Pomodoro")
        form = QFormLayout(pomo_group)
        self.spin_work = self._spin(pomo.get("work_minutes", 25), 1, 180, " min")
        self.spin_short = self._spin(pomo.get("short_break_minutes", 5), 1, 60, " min")
        self.spin_long = self._spin(pomo.get("long_break_minutes", 15), 1, 120, " min")
        self.spin_cycle = self._spin(pomo.get("sessions_before_long_break", 4), 1, 12, "")
        form.addRow("Focus length:", self.spin_work)
        form.addRow("Short break:", self.spin_short)
        form.addRow("Long break:", self.spin_long)
        form.addRow("Pomodoros before long break:", self.spin_cycle)
        layout.addWidget(pomo_group)

        # ── Sound ───────────────────────────────────────────────────────
        sound_group = QGroupBox("Sound")
        sound_layout = QHBoxLayout(sound_group)
        self.cb_sound = QCheckBox("Enabled")
        self.cb_sound.setChecked(self.sound.enabled)
        self.cb_sound.toggled.connect(self._on_sound_toggled)
        sound_layout.addWidget(self.cb_sound)
        sound_layout.addWidget(QLabel("Vol:"))
        self.volume_slider = QSlider(Qt.Orientation.Horizontal)
        self.volume_slider.setRange(0, 100)
        self.volume_slider.setValue(int(self.sound.volume * 100))
        self.volume_slider.valueChanged.connect(self._on_volume_changed)
        sound_layout.addWidget(self.volume_slider)
        layout.addWidget(sound_group)

        save_btn = QPushButton("Save settings")
        save_btn.setObjectName("primary")
        save_btn.clicked.connect(self._on_save)
        layout.addWidget(save_btn, alignment=Qt.AlignmentFlag.AlignLeft)

        # ── Data management ─────────────────────────────────────────────
        data_group = QGroupBox("Data")
        data_layout = QHBoxLayout(data_group)
        export_btn = QPushButton("Export JSON…")
        export_btn.clicked.connect(self._on_export)
        import_btn = QPushButton("Import JSON…")
        import_btn.clicked.connect(self._on_import)
        reset_btn = QPushButton("Reset all data")
        reset_btn.setObjectName("danger")
        reset_btn.clicked.connect(self._on_reset)
        for b in (export_btn, import_btn, reset_btn):
            data_layout.addWidget(b)
        layout.addWidget(data_group)
        layout.addStretch()

    @staticmethod
    def _spin(value: int, lo: int, hi: int, suffix: str) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(lo, hi)
        spin.setValue(int(value))
        spin.setSuffix(suffix)
        return spin

    def get_pomodoro_settings(self) -> Dict[str, int]:
        return {
            "work_minutes": self.spin_work.value(),
            "short_break_minutes": self.spin_short.value(),
            "long_break_minutes": self.spin_long.value(),
            "sessions_before_long_break": self.spin_cycle.value(),
        }

    # ── Slots ───────────────────────────────────────────────────────────

    @Slot(bool)
    def _on_sound_toggled(self, checked: bool) -> None:
        self.sound.set_enabled(checked)

    @Slot(int)
    def _on_volume_changed(self, value: int) -> None:
        self.sound.set_volume(value / 100.0)

    @Slot()
    def _on_save(self) -> None:
        self.ctx.config["pomodoro"] = self.get_pomodoro_settings()
        self.ctx.config["sound"] = {"enabled": self.sound.enabled, "volume": self.sound.volume}
        save_config(self.ctx.config, self.config_path)
        logger.info("Settings saved.")
        self.settings_changed.emit()

    @Slot()
    def _on_export(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export data", "productivity_hub_export.json", "JSON (*.json)"
        )
        if path:
            self.ctx.export_json(Path(path))
            QMessageBox.information(self, "Export", f"Data exported to:\n{path}")

    @Slot()
    def _on_import(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import data", "", "JSON (*.json)")
        if not path:
            return
        reply = QMessageBox.question(
            self, "Import data",
            "Collections in the file will replace what you have now. Continue?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        try:
            count = self.ctx.import_json(Path(path))
        except (OSError, ValueError, json.JSONDecodeError) as e:
            logger.warning("Import failed: %s", e)
            QMessageBox.warning(self, "Import failed", str(e))
            return
        QMessageBox.information(self, "Import", f"Imported {count} collection(s).")

    @Slot()
    def _on_reset(self) -> None:
        reply = QMessageBox.warning(
            self, "Reset all data",
            "This deletes every task, note, project, habit, event and pomodoro.\n"
            "This cannot be undone. Continue?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply == QMessageBox.StandardButton.Yes:
            self.ctx.reset_all()
            QMessageBox.information(self, "Reset", "All data has been cleared.")
