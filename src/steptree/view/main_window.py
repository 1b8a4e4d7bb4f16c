"""
Main Application Window
=======================
The GUI container that presents a StepTree on a graphics canvas.

Why is this file needed?
------------------------
1. Layout: It organizes the canvas, the toolbar and the status bar.
2. Routing: It connects the Next/Previous/Show all/Hide all/Clear actions to
   the step tree, and File -> Open to the outline loader.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from PySide6.QtCore import QSettings, Qt, Slot
from PySide6.QtGui import QAction, QPainter
from PySide6.QtWidgets import (
    QComboBox, QFileDialog, QGraphicsScene, QGraphicsView, QLabel, QMainWindow, QMessageBox
)

from steptree import config
from steptree.application import (
    LAST_DIR_KEY, TEMPLATE_KEY, VISIBLE_APP_NAME, stored_outline_dir, stored_template
)
from steptree.model.errors import OutlineError, StepTreeError
from steptree.model.outline import OutlineNode, build_tree, load_outline
from steptree.model.tree import StepTree
from steptree.view.nodes import QtNodeFactory
from steptree.view.registry import list_templates

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, template: Optional[str] = None) -> None:
        super().__init__()
        self.settings = QSettings()
        self.outline_path: Optional[Path] = None
        self._roots: list[OutlineNode] = []

        if template is None:
            template = stored_template(self.settings)
        if template not in list_templates():
            logger.warning(f"Unknown node template '{template}', using '{config.DEFAULT_TEMPLATE}'.")
            template = config.DEFAULT_TEMPLATE

        self.update_window_title()
        self.resize(1200, 800)

        # --- CANVAS ---
        self.scene = QGraphicsScene(self)
        self.view = QGraphicsView(self.scene, self)
        self.view.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.view.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)
        self.setCentralWidget(self.view)

        # --- TREE ---
        self.factory = QtNodeFactory(self.scene, template=template)
        self.tree = StepTree(self.factory)

        # --- ACTIONS, MENUS, TOOLBAR ---
        self._create_actions()
        self._create_menus()
        self._create_toolbar()

        self.lbl_step = QLabel()
        self.statusBar().addPermanentWidget(self.lbl_step)

        self._refresh_controls()

    def _create_actions(self) -> None:
        self.act_open = QAction("Open Outline...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        self.act_prev = QAction("Previous", self)
        self.act_prev.setShortcut("Left")
        self.act_prev.triggered.connect(self.on_prev_step)

        self.act_next = QAction("Next", self)
        self.act_next.setShortcut("Right")
        self.act_next.triggered.connect(self.on_next_step)

        self.act_view_all = QAction("Show All", self)
        self.act_view_all.setShortcut("End")
        self.act_view_all.triggered.connect(self.on_view_all)

        self.act_hide_all = QAction("Hide All", self)
        self.act_hide_all.setShortcut("Home")
        self.act_hide_all.triggered.connect(self.on_hide_all)

        self.act_clear = QAction("Clear", self)
        self.act_clear.triggered.connect(self.on_clear)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_open)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        step_menu = menu_bar.addMenu("&Presentation")
        step_menu.addAction(self.act_prev)
        step_menu.addAction(self.act_next)
        step_menu.addSeparator()
        step_menu.addAction(self.act_view_all)
        step_menu.addAction(self.act_hide_all)
        step_menu.addSeparator()
        step_menu.addAction(self.act_clear)

    def _create_toolbar(self) -> None:
        toolbar = self.addToolBar("Presentation")
        toolbar.setMovable(False)
        toolbar.addAction(self.act_prev)
        toolbar.addAction(self.act_next)
        toolbar.addSeparator()
        toolbar.addAction(self.act_view_all)
        toolbar.addAction(self.act_hide_all)
        toolbar.addSeparator()

        self.combo_template = QComboBox()
        self.combo_template.addItems(list_templates())
        self.combo_template.setCurrentText(self.factory.template)
        self.combo_template.currentTextChanged.connect(self.on_template_changed)
        toolbar.addWidget(QLabel(" Template: "))
        toolbar.addWidget(self.combo_template)

    # --- HELPER METHODS ---

    def update_window_title(self) -> None:
        name = self.outline_path.name if self.outline_path else "Untitled"
        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{name}]")

    def _refresh_controls(self) -> None:
        """Sync action states and the step counter with the tree."""
        n_nodes = len(self.tree)
        self.lbl_step.setText(f"Step {self.tree.cursor + 1} / {n_nodes}")
        self.act_prev.setEnabled(not self.tree.at_start)
        self.act_next.setEnabled(not self.tree.at_end)
        self.act_view_all.setEnabled(n_nodes > 0 and not self.tree.at_end)
        self.act_hide_all.setEnabled(not self.tree.at_start)
        self.act_clear.setEnabled(n_nodes > 0)

    def _run_guarded(self, operation: Callable[[], None]) -> bool:
        """Run a tree operation, reporting contract violations instead of crashing the slot."""
        try:
            operation()
        except StepTreeError as e:
            logger.error(f"Step tree error: {e}")
            QMessageBox.warning(self, VISIBLE_APP_NAME, str(e))
            return False
        finally:
            self._refresh_controls()
        return True

    def _rebuild(self, cursor: int = -1) -> None:
        """Recreate all nodes from the loaded outline and replay up to `cursor`."""
        self.tree.destroy_nodes()
        build_tree(self.tree, self._roots)
        self.scene.setSceneRect(self.scene.itemsBoundingRect())
        self.tree.hide_nodes()
        for _ in range(cursor + 1):
            self.tree.next_step()

    # --- PUBLIC API ---

    def open_outline(self, filepath: Union[str, os.PathLike]) -> bool:
        """Load an outline file and start its presentation from the first step."""
        try:
            roots = load_outline(filepath)
        except (OSError, OutlineError) as e:
            logger.error(f"Could not open outline '{filepath}': {e}")
            QMessageBox.critical(self, VISIBLE_APP_NAME, f"Could not open outline:\n{e}")
            return False

        self._roots = roots
        self.outline_path = Path(filepath)
        self.settings.setValue(LAST_DIR_KEY, str(self.outline_path.parent))
        ok = self._run_guarded(self._rebuild)
        self.update_window_title()
        self.statusBar().showMessage(f"Loaded {len(self.tree)} nodes.", 3000)
        return ok

    # --- SLOTS ---

    @Slot()
    def on_file_open(self) -> None:
        start_dir = stored_outline_dir(self.settings)
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Outline", start_dir, "Outline (*.json);;All Files (*)"
        )
        if not path:
            return
        self.open_outline(path)

    @Slot()
    def on_next_step(self) -> None:
        self._run_guarded(self.tree.next_step)

    @Slot()
    def on_prev_step(self) -> None:
        self._run_guarded(self.tree.prev_step)

    @Slot()
    def on_view_all(self) -> None:
        self._run_guarded(self.tree.view_nodes)

    @Slot()
    def on_hide_all(self) -> None:
        self._run_guarded(self.tree.hide_nodes)

    @Slot()
    def on_clear(self) -> None:
        self._roots = []
        self.outline_path = None
        self._run_guarded(self.tree.destroy_nodes)
        self.update_window_title()

    @Slot(str)
    def on_template_changed(self, key: str) -> None:
        if not key or key == self.factory.template:
            return
        logger.info(f"Switching node template to '{key}'.")
        self.factory.template = key
        self.settings.setValue(TEMPLATE_KEY, key)
        cursor = self.tree.cursor
        self._run_guarded(lambda: self._rebuild(cursor))
