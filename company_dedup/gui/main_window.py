from __future__ import annotations
import importlib
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, List

import pandas as pd
from PyQt6.QtWidgets import (
    QApplication,
    QMainWindow,
    QWidget,
    QLabel,
    QPushButton,
    QFileDialog,
    QVBoxLayout,
    QHBoxLayout,
    QGridLayout,
    QComboBox,
    QLineEdit,
    QTextEdit,
    QProgressBar,
    QMessageBox,
    QGroupBox,
    QListWidget,
    QListWidgetItem,
    QSplitter,
    QDoubleSpinBox,
    QTableWidget,
)
from PyQt6.QtCore import Qt

from ..config_manager import load_config, save_config, saved_preset_and_overrides
from ..engine import CONFIG_PRESETS, DeduplicationResult, create_config, describe_config
from ..errors import (
    EmptyInputError,
    InputReadError,
    InvalidConfigurationError,
    UnsupportedFormatError,
)
from ..file_loader import read_names
from ..formatters import results_to_dataframe
from ..settings import DEFAULT_EXPORT_BASE, DEFAULT_PRESET, PRESET_NAMES
from .preview_helpers import populate_table_from_dataframe
from .settings_dialog import SettingsDialog
from .theme_loader import apply_theme
from .threads import DedupWorker

THRESHOLD_SPINS = (
    ("high_similarity", "High similarity"),
    ("token_match", "Token match"),
    ("partial_match", "Partial match"),
    ("min_confidence", "Min confidence"),
)


@dataclass
class PluginInfo:
    name: str
    module: Any
    enabled: bool
    description: str = ""
    stage: str = "post_match"


def load_plugins(cfg: Dict[str, Any], log=None) -> List[PluginInfo]:
    plugins: List[PluginInfo] = []
    base_dir = os.path.dirname(os.path.dirname(__file__))
    plugins_dir = os.path.join(base_dir, "plugins")
    if not os.path.isdir(plugins_dir):
        return plugins

    enabled_map = cfg.get("plugins", {})
    package = __package__.rsplit(".", 1)[0]

    for fname in sorted(os.listdir(plugins_dir)):
        if not fname.endswith(".py") or fname == "__init__.py":
            continue
        mod_name = f"{package}.plugins.{os.path.splitext(fname)[0]}"
        try:
            mod = importlib.import_module(mod_name)
        except ImportError as e:
            if log:
                log(f"[Plugin] Failed to load {fname}: {e}")
            continue
        pname = getattr(mod, "PLUGIN_NAME", os.path.splitext(fname)[0])
        info = PluginInfo(
            name=pname,
            module=mod,
            enabled=enabled_map.get(pname, True),
            description=getattr(mod, "PLUGIN_DESCRIPTION", ""),
            stage=getattr(mod, "PLUGIN_STAGE", "post_match"),
        )
        plugins.append(info)
        if log:
            log(f"[Plugin] Loaded: {pname} (stage={info.stage}, enabled={info.enabled})")

    return plugins


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Company Deduplicator")
        self.resize(1200, 760)

        self.cfg = load_config() or {}
        self.names: List[str] = []
        self.current_result: DeduplicationResult | None = None
        self.worker: DedupWorker | None = None
        self.plugins: List[PluginInfo] = []

        self._build_ui()
        self._apply_settings_to_ui()
        self.plugins = load_plugins(self.cfg, log=self.log)
        self._refresh_plugin_list()
        self.validate_ready_state()

    def _build_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        outer = QVBoxLayout(central)

        top_row = QHBoxLayout()
        top_row.addWidget(QLabel("Company Deduplicator"))
        top_row.addStretch(1)
        btn_settings = QPushButton("Settings")
        top_row.addWidget(btn_settings)
        outer.addLayout(top_row)

        main_split = QSplitter(Qt.Orientation.Horizontal)
        outer.addWidget(main_split, 1)

        # LEFT PANEL
        left = QWidget()
        left_layout = QVBoxLayout(left)

        files_box = QGroupBox("Input")
        fgrid = QGridLayout(files_box)
        fgrid.addWidget(QLabel("Names file"), 0, 0)
        self.path_edit = QLineEdit()
        btn_browse = QPushButton("Browse")
        fgrid.addWidget(self.path_edit, 0, 1)
        fgrid.addWidget(btn_browse, 0, 2)
        fgrid.addWidget(QLabel("Column"), 1, 0)
        self.column_edit = QLineEdit()
        self.column_edit.setPlaceholderText("first column")
        fgrid.addWidget(self.column_edit, 1, 1, 1, 2)
        left_layout.addWidget(files_box)

        self.preview_label = QLabel("Preview (first 5 names)")
        self.preview = QTableWidget()
        self.preview.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        left_layout.addWidget(self.preview_label)
        left_layout.addWidget(self.preview)

        match_box = QGroupBox("Matching")
        g = QGridLayout(match_box)
        g.addWidget(QLabel("Preset"), 0, 0)
        self.preset_combo = QComboBox()
        self.preset_combo.addItems(PRESET_NAMES)
        self.preset_combo.setCurrentText(DEFAULT_PRESET)
        g.addWidget(self.preset_combo, 0, 1)

        self.threshold_spins: Dict[str, QDoubleSpinBox] = {}
        for row, (field, label) in enumerate(THRESHOLD_SPINS, start=1):
            g.addWidget(QLabel(label), row, 0)
            spin = QDoubleSpinBox()
            spin.setRange(0.0, 1.0)
            spin.setSingleStep(0.01)
            spin.setDecimals(2)
            g.addWidget(spin, row, 1)
            self.threshold_spins[field] = spin

        self.btn_run = QPushButton("Find Duplicates")
        self.btn_run.setEnabled(False)
        g.addWidget(self.btn_run, len(THRESHOLD_SPINS) + 1, 0, 1, 2)
        left_layout.addWidget(match_box)

        export_box = QGroupBox("Export")
        eg = QGridLayout(export_box)
        eg.addWidget(QLabel("Folder"), 0, 0)
        self.export_folder_edit = QLineEdit()
        btn_exp = QPushButton("...")
        eg.addWidget(self.export_folder_edit, 0, 1)
        eg.addWidget(btn_exp, 0, 2)
        eg.addWidget(QLabel("Base filename"), 1, 0)
        self.base_name_edit = QLineEdit(DEFAULT_EXPORT_BASE)
        eg.addWidget(self.base_name_edit, 1, 1, 1, 2)
        left_layout.addWidget(export_box)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setValue(0)
        self.progress_bar.setFormat("Idle")
        left_layout.addWidget(self.progress_bar)
        main_split.addWidget(left)

        # RIGHT PANEL
        right = QWidget()
        rlayout = QVBoxLayout(right)

        rlayout.addWidget(QLabel("Duplicate groups"))
        self.results_table = QTableWidget()
        self.results_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        rlayout.addWidget(self.results_table, 3)

        plug_box = QGroupBox("Plugins (double-click to toggle)")
        pv = QVBoxLayout(plug_box)
        self.plugin_list = QListWidget()
        pv.addWidget(self.plugin_list)
        rlayout.addWidget(plug_box)

        rlayout.addWidget(QLabel("Log"))
        self.log_edit = QTextEdit()
        self.log_edit.setReadOnly(True)
        rlayout.addWidget(self.log_edit, 1)

        main_split.addWidget(right)
        main_split.setStretchFactor(0, 2)
        main_split.setStretchFactor(1, 3)

        # Connections
        btn_browse.clicked.connect(self.load_names)
        btn_exp.clicked.connect(self.select_export_folder)
        btn_settings.clicked.connect(self.open_settings)
        self.btn_run.clicked.connect(self.run_dedup)
        self.preset_combo.currentTextChanged.connect(self._apply_preset_to_spins)
        self.plugin_list.itemDoubleClicked.connect(self.toggle_plugin_from_list)

    def _apply_preset_to_spins(self, preset: str):
        base = CONFIG_PRESETS.get(preset, CONFIG_PRESETS[DEFAULT_PRESET])
        for field, spin in self.threshold_spins.items():
            spin.setValue(getattr(base, field))

    def _apply_settings_to_ui(self):
        preset, overrides = saved_preset_and_overrides(self.cfg)
        preset = preset if preset in CONFIG_PRESETS else DEFAULT_PRESET
        self.preset_combo.setCurrentText(preset)
        self._apply_preset_to_spins(preset)
        for field, spin in self.threshold_spins.items():
            if field in overrides:
                spin.setValue(float(overrides[field]))
        if self.cfg.get("export_folder"):
            self.export_folder_edit.setText(self.cfg["export_folder"])
        if self.cfg.get("export_base"):
            self.base_name_edit.setText(self.cfg["export_base"])

    def log(self, msg: str):
        self.log_edit.append(msg)

    def _refresh_plugin_list(self):
        self.plugin_list.clear()
        for p in self.plugins:
            state = "on" if p.enabled else "off"
            item = QListWidgetItem(f"{p.name} [{state}] - {p.description}")
            item.setData(Qt.ItemDataRole.UserRole, p.name)
            self.plugin_list.addItem(item)

    def toggle_plugin_from_list(self, item: QListWidgetItem):
        name = item.data(Qt.ItemDataRole.UserRole)
        for p in self.plugins:
            if p.name == name:
                p.enabled = not p.enabled
                self.cfg.setdefault("plugins", {})[p.name] = p.enabled
                save_config(self.cfg)
                self.log(f"[Plugin] {p.name} {'enabled' if p.enabled else 'disabled'}")
        self._refresh_plugin_list()

    def validate_ready_state(self):
        running = self.worker is not None and self.worker.isRunning()
        self.btn_run.setEnabled(bool(self.names) and not running)

    def load_names(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Select names file", "", "Names (*.txt *.csv *.xlsx)"
        )
        if not path:
            return
        self.path_edit.setText(path)
        column = self.column_edit.text().strip() or None
        try:
            self.names = read_names(path, column=column)
        except (OSError, KeyError, EmptyInputError, InputReadError, UnsupportedFormatError) as e:
            self.names = []
            QMessageBox.warning(self, "Error", f"Failed to load names file:\n{e}")
            self.log(f"[Load] Failed: {e}")
            self.validate_ready_state()
            return

        populate_table_from_dataframe(self.preview, pd.DataFrame({"Name": self.names}))
        self.log(f"[Load] {len(self.names)} names from {os.path.basename(path)}")
        self.validate_ready_state()

    def select_export_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Select export folder", "")
        if folder:
            self.export_folder_edit.setText(folder)
            self.cfg["export_folder"] = folder
            save_config(self.cfg)

    def _current_overrides(self) -> Dict[str, Any]:
        overrides = dict(self.cfg.get("overrides") or {})
        for field, spin in self.threshold_spins.items():
            overrides[field] = round(spin.value(), 2)
        return overrides

    def run_dedup(self):
        preset = self.preset_combo.currentText()
        overrides = self._current_overrides()
        try:
            config = create_config(preset, overrides)
        except InvalidConfigurationError as e:
            QMessageBox.warning(self, "Invalid configuration", "\n".join(e.errors))
            return

        self.cfg["preset"] = preset
        self.cfg["overrides"] = overrides
        self.cfg["export_base"] = self.base_name_edit.text().strip() or DEFAULT_EXPORT_BASE
        save_config(self.cfg)

        self.log(f"[Dedup] Starting on {len(self.names)} names")
        self.log(describe_config(config))
        self.progress_bar.setValue(0)
        self.progress_bar.setFormat("Running %p%")

        self.worker = DedupWorker(self.names, config)
        self.worker.progress_signal.connect(self.progress_bar.setValue)
        self.worker.finished_signal.connect(self.dedup_finished)
        self.worker.failed_signal.connect(self.dedup_failed)
        self.worker.finished.connect(self.validate_ready_state)
        self.btn_run.setEnabled(False)
        self.worker.start()

    def dedup_failed(self, message: str):
        self.progress_bar.setFormat("Failed")
        self.log(f"[Dedup] Error: {message}")
        QMessageBox.critical(self, "Deduplication failed", message)

    def dedup_finished(self, result: DeduplicationResult):
        self.current_result = result
        self.progress_bar.setValue(100)
        self.progress_bar.setFormat("Done")

        df = results_to_dataframe(result)
        populate_table_from_dataframe(self.results_table, df, max_rows=None)
        self.results_table.resizeColumnsToContents()

        if not result.duplicate_groups:
            self.log(f"[Dedup] No duplicates among {result.total_companies} names.")
            QMessageBox.information(self, "Finished", "No duplicates found.")
            return

        self.log(
            f"[Dedup] Completed in {result.processing_time_ms}ms: "
            f"{len(result.duplicate_groups)} groups, {len(df)} matches."
        )

        for p in self.plugins:
            if not p.enabled or not hasattr(p.module, "post_match"):
                continue
            try:
                p.module.post_match(
                    result,
                    {
                        "export_folder": self.export_folder_edit.text().strip(),
                        "export_base": self.base_name_edit.text().strip()
                        or DEFAULT_EXPORT_BASE,
                        "log": self.log,
                        "config": self.cfg,
                    },
                )
            except Exception as e:  # plugin errors are logged, not raised
                self.log(f"[Plugin:{p.name}] Error: {e}")

        self.log("[Dedup] All enabled plugins executed.")

    def open_settings(self):
        dlg = SettingsDialog(self.cfg, parent=self)
        if dlg.exec():
            self.cfg.update(dlg.get_settings())
            save_config(self.cfg)
            apply_theme(self.cfg.get("theme", "dark"))
            self._apply_settings_to_ui()
            self.log("[Settings] Updated.")


def run_app():
    app = QApplication(sys.argv)
    cfg = load_config() or {}
    apply_theme(cfg.get("theme", "dark"))
    win = MainWindow()
    win.show()
    sys.exit(app.exec())
