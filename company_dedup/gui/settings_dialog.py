from __future__ import annotations
from typing import Any, Dict

from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QComboBox,
    QSpinBox,
    QPushButton,
    QCheckBox,
    QGroupBox,
)

from ..engine import CONFIG_PRESETS
from ..engine.config import THRESHOLD_FIELDS
from ..settings import DEFAULT_PRESET, PRESET_NAMES, THEMES


class SettingsDialog(QDialog):
    def __init__(self, cfg: Dict[str, Any], parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.cfg = cfg or {}
        overrides = self.cfg.get("overrides") or {}
        preset = self.cfg.get("preset", DEFAULT_PRESET)
        base = CONFIG_PRESETS.get(preset, CONFIG_PRESETS[DEFAULT_PRESET])

        layout = QVBoxLayout(self)

        # Theme
        row1 = QHBoxLayout()
        row1.addWidget(QLabel("Theme:"))
        self.theme_combo = QComboBox()
        self.theme_combo.addItems(THEMES)
        self.theme_combo.setCurrentText(self.cfg.get("theme", "dark"))
        row1.addWidget(self.theme_combo)
        layout.addLayout(row1)

        # Default preset
        row2 = QHBoxLayout()
        row2.addWidget(QLabel("Default preset:"))
        self.preset_combo = QComboBox()
        self.preset_combo.addItems(PRESET_NAMES)
        self.preset_combo.setCurrentText(preset)
        row2.addWidget(self.preset_combo)
        layout.addLayout(row2)

        # Max results per name
        row3 = QHBoxLayout()
        row3.addWidget(QLabel("Max duplicates per name:"))
        self.max_spin = QSpinBox()
        self.max_spin.setRange(1, 1000)
        self.max_spin.setValue(
            int(overrides.get("max_results_per_name", base.max_results_per_name))
        )
        row3.addWidget(self.max_spin)
        layout.addLayout(row3)

        norm_box = QGroupBox("Normalization")
        nb = QVBoxLayout(norm_box)

        self.cb_suffixes = QCheckBox("Remove business suffixes (Inc, Ltd, Studio, ...)")
        self.cb_suffixes.setChecked(overrides.get("remove_suffixes", base.remove_suffixes))

        self.cb_accents = QCheckBox("Fold accents (é -> e, ñ -> n)")
        self.cb_accents.setChecked(overrides.get("handle_accents", base.handle_accents))

        self.cb_numbers = QCheckBox("Remove numbers")
        self.cb_numbers.setChecked(overrides.get("remove_numbers", base.remove_numbers))

        for cb in (self.cb_suffixes, self.cb_accents, self.cb_numbers):
            nb.addWidget(cb)

        layout.addWidget(norm_box)

        # Buttons
        btn_row = QHBoxLayout()
        ok_btn = QPushButton("OK")
        cancel_btn = QPushButton("Cancel")
        ok_btn.clicked.connect(self.accept)
        cancel_btn.clicked.connect(self.reject)
        btn_row.addStretch(1)
        btn_row.addWidget(ok_btn)
        btn_row.addWidget(cancel_btn)
        layout.addLayout(btn_row)

    def get_settings(self) -> Dict[str, Any]:
        overrides = dict(self.cfg.get("overrides") or {})
        if self.preset_combo.currentText() != self.cfg.get("preset", DEFAULT_PRESET):
            # new preset: start from its thresholds
            for field in THRESHOLD_FIELDS:
                overrides.pop(field, None)
        overrides.update(
            {
                "max_results_per_name": self.max_spin.value(),
                "remove_suffixes": self.cb_suffixes.isChecked(),
                "handle_accents": self.cb_accents.isChecked(),
                "remove_numbers": self.cb_numbers.isChecked(),
            }
        )
        return {
            "theme": self.theme_combo.currentText(),
            "preset": self.preset_combo.currentText(),
            "overrides": overrides,
        }
