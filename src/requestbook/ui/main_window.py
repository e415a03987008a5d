from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QKeySequence, QShortcut
from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QSplitter

from requestbook.config import get_settings
from requestbook.controller import CollectionController
from requestbook.files import collection_filename
from requestbook.ui.panels import CollectionPanel, RightPanel


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("requestbook")
        self.resize(1200, 800)
        self.setFont(QFont("Segoe UI", 10))
        self._setup_ui()

    def _setup_ui(self) -> None:
        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.left_panel = CollectionPanel()
        self.right_panel = RightPanel()

        splitter.addWidget(self.left_panel)
        splitter.addWidget(self.right_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)

        self.setCentralWidget(splitter)

        self.controller = CollectionController(
            self.right_panel.request_panel,
            self.right_panel.response_panel,
        )
        self.right_panel.send_button.clicked.connect(self._on_send_request)
        self.right_panel.save_button.clicked.connect(self._on_save_request)
        self.right_panel.request_panel.data_changed.connect(self._on_request_data_changed)
        self.left_panel.create_collection_requested.connect(self._on_create_collection)
        self.left_panel.remove_collection_requested.connect(self._on_remove_collection)
        self.left_panel.add_request_requested.connect(self._on_add_request)
        self.left_panel.remove_request_requested.connect(self._on_remove_request)
        self.left_panel.request_selected.connect(self._on_request_selected)
        self.left_panel.export_requested.connect(self._on_export_collection)
        self.left_panel.import_requested.connect(self._on_import_collection)

        QShortcut(QKeySequence("Ctrl+Return"), self, activated=self._on_send_request)
        QShortcut(QKeySequence("Ctrl+S"), self, activated=self._on_save_request)

        self.controller.new_request()
        self._refresh()

    def _refresh(self) -> None:
        self.left_panel.load_collections(self.controller.store.collections)
        self.right_panel.request_panel.set_loaded(self.controller.store.editing.loaded)

    def _set_busy(self, busy: bool) -> None:
        self.right_panel.send_button.setEnabled(not busy)
        if busy:
            self.right_panel.response_panel.show_running()

    def _on_send_request(self) -> None:
        if self.controller.request_running:
            return
        self._set_busy(True)
        self.controller.send_request_async(on_finished=lambda _result: self._set_busy(False))

    def _on_save_request(self) -> None:
        result = self.controller.save_current_request()
        if not result.get("success"):
            QMessageBox.warning(self, "Save Request", result.get("error_message", ""))
            return
        self.right_panel.request_panel.set_dirty(False)
        self._refresh()

    def _on_request_data_changed(self) -> None:
        self.right_panel.request_panel.set_dirty(True)

    def _on_create_collection(self, name: str) -> None:
        result = self.controller.create_collection(name)
        if not result.get("success"):
            QMessageBox.warning(self, "Create Collection", result.get("error_message", ""))
            return
        self._refresh()

    def _on_remove_collection(self, name: str) -> None:
        answer = QMessageBox.question(self, "Remove Collection", f"Remove collection '{name}'?")
        if answer != QMessageBox.StandardButton.Yes:
            return
        self.controller.remove_collection(name)
        self._refresh()

    def _on_add_request(self, collection_name: str) -> None:
        self.controller.add_request(collection_name)
        self._refresh()

    def _on_remove_request(self, collection_name: str, request_name: str) -> None:
        self.controller.remove_request(collection_name, request_name)
        if not self.controller.store.editing.loaded:
            self.right_panel.request_panel.set_dirty(False)
        self._refresh()

    def _on_request_selected(self, collection_index: int, request_index: int) -> None:
        collections = self.controller.store.collections
        try:
            request = collections[collection_index].requests[request_index]
        except IndexError:
            return
        self.controller.load_request(request)
        self.right_panel.request_panel.set_dirty(False)
        self._refresh()

    def _on_export_collection(self, collection_name: str) -> None:
        default_path = Path(get_settings().export_dir) / collection_filename(collection_name)
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Export Collection",
            str(default_path),
            "HTTP Collection (*.http);;All Files (*)",
        )
        if not file_path:
            return
        path = Path(file_path)
        result = self.controller.export_collection(collection_name, str(path.parent), path.name)
        if not result.get("success"):
            QMessageBox.warning(self, "Export Failed", result.get("error_message", ""))
            return
        QMessageBox.information(self, "Export Collection", f"Saved to:\n{result['path']}")

    def _on_import_collection(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Import Collection",
            "",
            "HTTP Collection (*.http);;All Files (*)",
        )
        if not file_path:
            return
        result = self.controller.import_collection(file_path)
        if not result.get("success"):
            QMessageBox.warning(
                self,
                "Import Failed",
                "Failed to import collection. Please make sure the file is valid.\n"
                + result.get("error_message", ""),
            )
            return
        self._refresh()
        skipped = result.get("skipped") or []
        if skipped:
            self.right_panel.response_panel.append_log(
                f"import_skipped_lines={len(skipped)} collection={result['collection'].name}"
            )
