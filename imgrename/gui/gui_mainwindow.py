"""
gui_mainwindow.py - GUI Main Window

Layout (left to right):
1. Input paths and the discovered input tree
2. Rename rules, max name length and preview settings
3. Output tree coloured by status
Below them, a row of preview tiles managed by the pane router.
"""

import glob
import logging
from pathlib import Path
from typing import Dict, List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QComboBox, QSpinBox,
    QTableWidget, QTableWidgetItem, QTreeWidget, QTreeWidgetItem,
    QListWidget, QProgressBar, QFileDialog, QMessageBox, QHeaderView,
    QGroupBox, QSplitter, QFrame, QToolButton, QAbstractItemView
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QColor, QPixmap

from ..core import (
    AppHome, ClickBehavior, ConfigurationError, DEFAULT_MAX_NAME_LENGTH, InputEntry,
    InvalidRule, OutputEntry, OutputOptions, OutputResult, OutputSnapshot, OutputStatus,
    PaneKind, PaneRouter, PreviewCache, RenameRule, add_from_glob, build_output_tree,
    clear_inputs, load_gui_settings, load_inputs, load_max_name_length, load_rule_set,
    output_dir_for, output_path_for, plan_outputs, remove_from_glob, save_gui_settings,
    save_max_name_length, save_rules,
)
from .gui_workers import ScanWorker, OutputWorker

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    OutputStatus.UNCHANGED: QColor(0, 150, 0),
    OutputStatus.RENAMED: QColor(255, 165, 0),
    OutputStatus.TOO_LONG: QColor(220, 0, 0),
}

CLICK_BEHAVIOR_LABELS = [
    (ClickBehavior.REPLACE_LAST_TILE, "Replace last tile"),
    (ClickBehavior.OPEN_NEW_TILE, "Open new tile"),
]

# Rule table columns
COL_FIND, COL_REPLACE, COL_CASE, COL_TOO_LONG = range(4)

DATA_ROLE = Qt.ItemDataRole.UserRole


class PreviewTile(QFrame):
    """Single image preview tile"""

    def __init__(self, on_close, parent=None):
        super().__init__(parent)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setMinimumWidth(160)

        layout = QVBoxLayout(self)
        header = QHBoxLayout()
        self.title_label = QLabel("")
        self.title_label.setWordWrap(True)
        header.addWidget(self.title_label, 1)
        close_btn = QToolButton()
        close_btn.setText("✖")
        close_btn.clicked.connect(lambda: on_close(self))
        header.addWidget(close_btn)
        layout.addLayout(header)

        self.image_label = QLabel()
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_label.setMinimumHeight(120)
        layout.addWidget(self.image_label, 1)

    def show_image(self, title: str, image_path: Path, color: Optional[QColor] = None):
        self.title_label.setText(title)
        if color is not None:
            self.title_label.setStyleSheet(f"color: {color.name()};")
        else:
            self.title_label.setStyleSheet("")

        pixmap = QPixmap(str(image_path))
        if pixmap.isNull():
            self.image_label.setText("(cannot load image)")
            return
        self.image_label.setPixmap(pixmap.scaled(
            320, 240,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        ))


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self, home: Optional[AppHome] = None):
        super().__init__()
        self.setWindowTitle("imgrename")
        self.setMinimumSize(1100, 700)

        self.home = home or AppHome.resolve()
        self.rules = load_rule_set(self.home)
        self.max_length = load_max_name_length(self.home)
        self.settings = load_gui_settings(self.home)
        self.input_paths: List[Path] = load_inputs(self.home)
        self.inputs: List[InputEntry] = []

        self.preview_cache = PreviewCache()
        self.snapshot = OutputSnapshot()
        self.router = PaneRouter(self.settings.click_behavior)
        self.tiles: List[PreviewTile] = []

        self.scan_worker: Optional[ScanWorker] = None
        self.output_worker: Optional[OutputWorker] = None
        self._loading_rules = False

        self._init_ui()
        self._reload_rule_table()
        self._reload_input_list()
        self._rescan()

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        columns = QSplitter(Qt.Orientation.Horizontal)
        columns.addWidget(self._build_inputs_column())
        columns.addWidget(self._build_settings_column())
        columns.addWidget(self._build_output_column())

        self.tile_splitter = QSplitter(Qt.Orientation.Horizontal)

        rows = QSplitter(Qt.Orientation.Vertical)
        rows.addWidget(columns)
        rows.addWidget(self.tile_splitter)
        rows.setStretchFactor(0, 3)
        rows.setStretchFactor(1, 2)
        layout.addWidget(rows)

        self.statusBar().showMessage("Ready")

    def _build_inputs_column(self) -> QWidget:
        column = QWidget()
        layout = QVBoxLayout(column)

        paths_group = QGroupBox("Input Paths")
        paths_layout = QVBoxLayout(paths_group)
        self.input_list = QListWidget()
        self.input_list.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        paths_layout.addWidget(self.input_list)

        buttons = QHBoxLayout()
        add_btn = QPushButton("Add Folder...")
        add_btn.clicked.connect(self._add_input_folder)
        remove_btn = QPushButton("Remove")
        remove_btn.clicked.connect(self._remove_selected_inputs)
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self._clear_inputs)
        rescan_btn = QPushButton("Rescan")
        rescan_btn.clicked.connect(self._rescan)
        for btn in (add_btn, remove_btn, clear_btn, rescan_btn):
            buttons.addWidget(btn)
        paths_layout.addLayout(buttons)
        layout.addWidget(paths_group)

        images_group = QGroupBox("Input Images")
        images_layout = QVBoxLayout(images_group)
        self.input_tree = QTreeWidget()
        self.input_tree.setHeaderHidden(True)
        self.input_tree.itemClicked.connect(self._on_input_clicked)
        images_layout.addWidget(self.input_tree)
        layout.addWidget(images_group, 1)

        return column

    def _build_settings_column(self) -> QWidget:
        column = QWidget()
        layout = QVBoxLayout(column)

        rules_group = QGroupBox("Rename Rules")
        rules_layout = QGridLayout(rules_group)

        self.rules_enabled_check = QCheckBox("Enable rename rules")
        self.rules_enabled_check.setChecked(self.settings.rules_enabled)
        self.rules_enabled_check.toggled.connect(self._on_rules_enabled_toggled)
        rules_layout.addWidget(self.rules_enabled_check, 0, 0, 1, 4)

        rules_layout.addWidget(QLabel("Find:"), 1, 0)
        self.find_edit = QLineEdit()
        self.find_edit.setPlaceholderText("Text to find")
        rules_layout.addWidget(self.find_edit, 1, 1)
        rules_layout.addWidget(QLabel("Replace:"), 1, 2)
        self.replace_edit = QLineEdit()
        self.replace_edit.setPlaceholderText("Replacement (leave empty to delete)")
        rules_layout.addWidget(self.replace_edit, 1, 3)

        self.new_case_check = QCheckBox("Case sensitive")
        self.new_case_check.setChecked(True)
        self.new_too_long_check = QCheckBox("Only when name too long")
        add_rule_btn = QPushButton("+ Add Rule")
        add_rule_btn.clicked.connect(self._add_rule)
        rules_layout.addWidget(self.new_case_check, 2, 0, 1, 2)
        rules_layout.addWidget(self.new_too_long_check, 2, 2)
        rules_layout.addWidget(add_rule_btn, 2, 3)

        self.rule_table = QTableWidget()
        self.rule_table.setColumnCount(4)
        self.rule_table.setHorizontalHeaderLabels(["Find", "Replace", "Case Sensitive", "Only When Too Long"])
        header = self.rule_table.horizontalHeader()
        header.setSectionResizeMode(COL_FIND, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(COL_REPLACE, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(COL_CASE, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(COL_TOO_LONG, QHeaderView.ResizeMode.ResizeToContents)
        self.rule_table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.rule_table.itemChanged.connect(self._on_rule_item_changed)
        rules_layout.addWidget(self.rule_table, 3, 0, 1, 4)

        order_layout = QHBoxLayout()
        for text, handler in (("Move Up", self._move_rule_up), ("Move Down", self._move_rule_down),
                              ("Remove", self._remove_rule)):
            btn = QPushButton(text)
            btn.clicked.connect(handler)
            order_layout.addWidget(btn)
        order_layout.addStretch()
        rules_layout.addLayout(order_layout, 4, 0, 1, 4)

        # Inline validation message for rule edits
        self.rule_error_label = QLabel("")
        self.rule_error_label.setStyleSheet("color: #c00;")
        rules_layout.addWidget(self.rule_error_label, 5, 0, 1, 4)

        layout.addWidget(rules_group, 1)

        length_group = QGroupBox("Max Name Length")
        length_layout = QHBoxLayout(length_group)
        self.length_spin = QSpinBox()
        self.length_spin.setRange(1, 1000)
        self.length_spin.setValue(self.max_length)
        self.length_spin.setSuffix(" characters")
        self.length_spin.valueChanged.connect(self._on_max_length_changed)
        length_layout.addWidget(self.length_spin)
        reset_btn = QPushButton(f"Reset to default ({DEFAULT_MAX_NAME_LENGTH})")
        reset_btn.clicked.connect(lambda: self.length_spin.setValue(DEFAULT_MAX_NAME_LENGTH))
        length_layout.addWidget(reset_btn)
        length_layout.addStretch()
        layout.addWidget(length_group)

        tiles_group = QGroupBox("Preview Tiles")
        tiles_layout = QHBoxLayout(tiles_group)
        tiles_layout.addWidget(QLabel("On file click:"))
        self.click_combo = QComboBox()
        for behavior, label in CLICK_BEHAVIOR_LABELS:
            self.click_combo.addItem(label, behavior)
        self.click_combo.setCurrentIndex(
            [b for b, _ in CLICK_BEHAVIOR_LABELS].index(self.settings.click_behavior)
        )
        self.click_combo.currentIndexChanged.connect(self._on_click_behavior_changed)
        tiles_layout.addWidget(self.click_combo)
        close_all_btn = QPushButton("Close All Tiles")
        close_all_btn.clicked.connect(self._close_all_tiles)
        tiles_layout.addWidget(close_all_btn)
        tiles_layout.addStretch()
        layout.addWidget(tiles_group)

        return column

    def _build_output_column(self) -> QWidget:
        group = QGroupBox("Output Preview")
        layout = QVBoxLayout(group)

        legend = QLabel(
            f'<span style="color:{STATUS_COLORS[OutputStatus.UNCHANGED].name()}">●</span> unchanged '
            f'<span style="color:{STATUS_COLORS[OutputStatus.RENAMED].name()}">●</span> renamed '
            f'<span style="color:{STATUS_COLORS[OutputStatus.TOO_LONG].name()}">●</span> too long'
        )
        layout.addWidget(legend)

        self.output_tree = QTreeWidget()
        self.output_tree.setHeaderHidden(True)
        self.output_tree.itemClicked.connect(self._on_output_clicked)
        layout.addWidget(self.output_tree, 1)

        bottom = QHBoxLayout()
        self.skip_too_long_check = QCheckBox("Skip too long")
        bottom.addWidget(self.skip_too_long_check)
        self.overwrite_check = QCheckBox("Overwrite existing")
        bottom.addWidget(self.overwrite_check)
        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom.addWidget(self.progress_bar, 1)
        self.write_btn = QPushButton("Write Outputs")
        self.write_btn.clicked.connect(self._do_write_outputs)
        self.write_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom.addWidget(self.write_btn)
        layout.addLayout(bottom)

        return group

    # ---- inputs ----

    def _reload_input_list(self):
        self.input_list.clear()
        for p in self.input_paths:
            self.input_list.addItem(str(p))

    def _add_input_folder(self):
        directory = QFileDialog.getExistingDirectory(self, "Select Input Folder")
        if not directory:
            return
        add_from_glob(self.home, glob.escape(directory))
        self._inputs_changed()

    def _remove_selected_inputs(self):
        for item in self.input_list.selectedItems():
            remove_from_glob(self.home, glob.escape(item.text()))
        self._inputs_changed()

    def _clear_inputs(self):
        clear_inputs(self.home)
        self._inputs_changed()

    def _inputs_changed(self):
        self.input_paths = load_inputs(self.home)
        self._reload_input_list()
        self._rescan()

    def _rescan(self):
        if self.scan_worker is not None and self.scan_worker.isRunning():
            self.scan_worker.cancel()
            self.scan_worker.wait()

        self.statusBar().showMessage("Scanning inputs...")
        self.scan_worker = ScanWorker(self.input_paths)
        self.scan_worker.progress.connect(self._on_scan_progress)
        self.scan_worker.finished.connect(self._on_scan_finished)
        self.scan_worker.error.connect(self._on_scan_error)
        self.scan_worker.start()

    @Slot(str)
    def _on_scan_progress(self, msg: str):
        self.statusBar().showMessage(msg[-80:] if len(msg) > 80 else msg)

    @Slot(list)
    def _on_scan_finished(self, entries: List[InputEntry]):
        logger.debug("Scan found %d images under %d input paths", len(entries), len(self.input_paths))
        self.inputs = entries
        self._populate_input_tree()
        self._refresh_outputs()

    @Slot(str)
    def _on_scan_error(self, error: str):
        QMessageBox.critical(self, "Error", f"Scanning inputs failed: {error}")
        self.statusBar().showMessage("Scan failed")

    def _populate_input_tree(self):
        self.input_tree.clear()
        root_items: Dict[Path, QTreeWidgetItem] = {}
        dir_items: Dict[tuple, QTreeWidgetItem] = {}

        for entry in self.inputs:
            parent = root_items.get(entry.root)
            if parent is None:
                parent = QTreeWidgetItem(self.input_tree, [str(entry.root)])
                root_items[entry.root] = parent
            key = (entry.root,)
            for part in entry.relative_path.parent.parts:
                key = key + (part,)
                item = dir_items.get(key)
                if item is None:
                    item = QTreeWidgetItem(parent, [part])
                    dir_items[key] = item
                parent = item
            leaf = QTreeWidgetItem(parent, [entry.name])
            leaf.setData(0, DATA_ROLE, str(entry.path))

        self.input_tree.expandAll()

    # ---- rules ----

    def _reload_rule_table(self):
        self._loading_rules = True
        try:
            rules = self.rules.snapshot()
            self.rule_table.setRowCount(len(rules))
            for row, rule in enumerate(rules):
                find_item = QTableWidgetItem(rule.find)
                find_item.setData(DATA_ROLE, rule.id)
                self.rule_table.setItem(row, COL_FIND, find_item)
                self.rule_table.setItem(row, COL_REPLACE, QTableWidgetItem(rule.replace))
                for col, value in ((COL_CASE, rule.case_sensitive), (COL_TOO_LONG, rule.only_when_name_too_long)):
                    item = QTableWidgetItem("")
                    item.setFlags(Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable)
                    item.setCheckState(Qt.CheckState.Checked if value else Qt.CheckState.Unchecked)
                    self.rule_table.setItem(row, col, item)
        finally:
            self._loading_rules = False

    def _rule_id_at(self, row: int) -> Optional[str]:
        item = self.rule_table.item(row, COL_FIND)
        return item.data(DATA_ROLE) if item is not None else None

    def _rules_changed(self):
        save_rules(self.home, self.rules)
        logger.debug("Saved %d rules (revision %d)", len(self.rules), self.rules.revision)
        self.rule_error_label.setText("")
        self._refresh_outputs()

    def _add_rule(self):
        try:
            rule = RenameRule(
                find=self.find_edit.text(),
                replace=self.replace_edit.text(),
                case_sensitive=self.new_case_check.isChecked(),
                only_when_name_too_long=self.new_too_long_check.isChecked(),
            )
        except InvalidRule as e:
            self.rule_error_label.setText(str(e))
            return
        self.rules.add(rule)
        self.find_edit.clear()
        self.replace_edit.clear()
        self._reload_rule_table()
        self._rules_changed()

    @Slot(QTableWidgetItem)
    def _on_rule_item_changed(self, item: QTableWidgetItem):
        if self._loading_rules:
            return
        rule_id = self._rule_id_at(item.row())
        if rule_id is None:
            return

        col = item.column()
        if col == COL_FIND:
            changes = {"find": item.text()}
        elif col == COL_REPLACE:
            changes = {"replace": item.text()}
        elif col == COL_CASE:
            changes = {"case_sensitive": item.checkState() == Qt.CheckState.Checked}
        else:
            changes = {"only_when_name_too_long": item.checkState() == Qt.CheckState.Checked}

        try:
            self.rules.update(rule_id, **changes)
        except InvalidRule as e:
            # Rejected edit: restore the stored rule
            self.rule_error_label.setText(str(e))
            self._reload_rule_table()
            return
        self._rules_changed()

    def _move_rule(self, offset: int):
        row = self.rule_table.currentRow()
        target = row + offset
        if row < 0 or not 0 <= target < len(self.rules):
            return
        self.rules.move(self._rule_id_at(row), target)
        self._reload_rule_table()
        self.rule_table.selectRow(target)
        self._rules_changed()

    def _move_rule_up(self):
        self._move_rule(-1)

    def _move_rule_down(self):
        self._move_rule(1)

    def _remove_rule(self):
        row = self.rule_table.currentRow()
        if row < 0:
            return
        self.rules.remove(self._rule_id_at(row))
        self._reload_rule_table()
        self._rules_changed()

    # ---- settings ----

    @Slot(int)
    def _on_max_length_changed(self, value: int):
        try:
            self.max_length = save_max_name_length(self.home, value)
        except ConfigurationError as e:
            QMessageBox.warning(self, "Warning", str(e))
            return
        self._refresh_outputs()

    @Slot(bool)
    def _on_rules_enabled_toggled(self, checked: bool):
        self.settings.rules_enabled = checked
        save_gui_settings(self.home, self.settings)
        self._refresh_outputs()

    @Slot(int)
    def _on_click_behavior_changed(self, index: int):
        behavior = self.click_combo.itemData(index)
        self.settings.click_behavior = behavior
        self.router.behavior = behavior
        save_gui_settings(self.home, self.settings)

    # ---- outputs ----

    def _refresh_outputs(self):
        self.snapshot = self.preview_cache.get(
            self.inputs, self.rules, self.max_length, self.settings.rules_enabled
        )
        self._populate_output_tree()

        counts = self.snapshot.counts()
        self.statusBar().showMessage(
            f"{len(self.snapshot.entries)} files: "
            f"{counts[OutputStatus.UNCHANGED]} unchanged, "
            f"{counts[OutputStatus.RENAMED]} renamed, "
            f"{counts[OutputStatus.TOO_LONG]} too long"
        )

    def _populate_output_tree(self):
        self.output_tree.clear()
        if not self.snapshot.entries:
            QTreeWidgetItem(self.output_tree, ["(no image files to preview)"])
            return

        for root, group in self.snapshot.grouped():
            root_item = QTreeWidgetItem(self.output_tree, [str(output_dir_for(root))])
            self._add_output_nodes(root_item, build_output_tree(root, group))
        self.output_tree.expandAll()

    def _add_output_nodes(self, parent: QTreeWidgetItem, node):
        for child in node.sorted_children():
            item = QTreeWidgetItem(parent, [child.name])
            if child.is_file:
                entry = child.entry
                item.setForeground(0, STATUS_COLORS[entry.status])
                item.setData(0, DATA_ROLE, str(entry.input.path))
                tooltip = f"{len(entry.final_name)} characters (max {self.snapshot.max_length})"
                if entry.was_renamed:
                    tooltip = f"was: {entry.original_name}\n{tooltip}"
                item.setToolTip(0, tooltip)
            else:
                self._add_output_nodes(item, child)

    # ---- preview tiles ----

    @Slot(QTreeWidgetItem, int)
    def _on_input_clicked(self, item: QTreeWidgetItem, _column: int):
        path = item.data(0, DATA_ROLE)
        if path:
            self._open_pane(PaneKind.INPUT, Path(path), Path(path).name, None, Path(path))

    @Slot(QTreeWidgetItem, int)
    def _on_output_clicked(self, item: QTreeWidgetItem, _column: int):
        path = item.data(0, DATA_ROLE)
        if not path:
            return
        entry: Optional[OutputEntry] = self.snapshot.find(Path(path))
        if entry is None:
            return
        # Outputs are copies of the input, so the input image is what gets shown
        self._open_pane(
            PaneKind.OUTPUT, output_path_for(entry), entry.final_name,
            STATUS_COLORS[entry.status], entry.input.path,
        )

    def _open_pane(self, kind: PaneKind, source_path: Path, title: str,
                   color: Optional[QColor], image_path: Path):
        decision = self.router.click(kind, source_path)
        if decision.is_append:
            tile = PreviewTile(self._close_tile)
            self.tiles.append(tile)
            self.tile_splitter.addWidget(tile)
        else:
            tile = self.tiles[decision.replace_index]
        label = "Input" if kind is PaneKind.INPUT else "Output"
        tile.show_image(f"{label}: {title}", image_path, color)

    def _close_tile(self, tile: PreviewTile):
        index = self.tiles.index(tile)
        self.router.close(index)
        self.tiles.pop(index)
        tile.deleteLater()

    def _close_all_tiles(self):
        self.router.clear()
        for tile in self.tiles:
            tile.deleteLater()
        self.tiles = []

    # ---- write outputs ----

    def _do_write_outputs(self):
        if not self.snapshot.entries:
            return

        plan = plan_outputs(
            self.snapshot.entries,
            OutputOptions(
                skip_too_long=self.skip_too_long_check.isChecked(),
                overwrite=self.overwrite_check.isChecked(),
            ),
        )
        if plan.errors:
            QMessageBox.critical(self, "Cannot write outputs", "\n".join(plan.errors[:10]))
            return
        if not plan.ops:
            QMessageBox.information(self, "Nothing to write", "\n".join(plan.warnings[:10]) or "No outputs")
            return

        msg = f"Write {plan.total_count} files into the output directories?"
        if plan.conflict_count:
            msg += f"\n\n{plan.conflict_count} duplicate names will get a numeric suffix."
        if plan.warnings:
            msg += f"\n\n{len(plan.warnings)} files will be skipped."
        existing = plan.existing_count
        if existing:
            action = "overwritten" if plan.options.overwrite else "left as they are"
            msg += f"\n\n{existing} outputs already exist and will be {action}."
        reply = QMessageBox.question(
            self, "Confirm", msg,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self.write_btn.setEnabled(False)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, plan.total_count)

        self.output_worker = OutputWorker(plan, log_dir=self.home.path / "logs")
        self.output_worker.progress.connect(self._on_output_progress)
        self.output_worker.finished.connect(self._on_output_finished)
        self.output_worker.error.connect(self._on_output_error)
        self.output_worker.start()

    @Slot(int, int, str)
    def _on_output_progress(self, current: int, total: int, msg: str):
        self.progress_bar.setValue(current)
        self.statusBar().showMessage(msg)

    @Slot(object)
    def _on_output_finished(self, result: OutputResult):
        self.write_btn.setEnabled(True)
        self.progress_bar.setVisible(False)
        if result.failed_count:
            logger.warning("%d outputs could not be written", result.failed_count)
        QMessageBox.information(self, "Complete", result.summary())
        self.statusBar().showMessage("Outputs written")

    @Slot(str)
    def _on_output_error(self, error: str):
        self.write_btn.setEnabled(True)
        self.progress_bar.setVisible(False)
        QMessageBox.critical(self, "Error", f"Writing outputs failed: {error}")
