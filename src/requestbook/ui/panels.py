import json
import logging
from datetime import datetime

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMenu,
    QPlainTextEdit,
    QPushButton,
    QSizePolicy,
    QSplitter,
    QTabWidget,
    QTableWidget,
    QTableWidgetItem,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from requestbook.models import HTTP_METHODS, Collection

TABLE_STYLE = (
    "QTableWidget { gridline-color: #e5e7eb; alternate-background-color: #f9fafb; }"
    "QTableWidget::item { padding: 4px; }"
)


class CollectionPanel(QWidget):
    create_collection_requested = Signal(str)
    remove_collection_requested = Signal(str)
    add_request_requested = Signal(str)
    remove_request_requested = Signal(str, str)
    export_requested = Signal(str)
    import_requested = Signal()
    request_selected = Signal(int, int)

    _POSITION_ROLE = Qt.ItemDataRole.UserRole
    _NAME_ROLE = Qt.ItemDataRole.UserRole + 1

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        title = QLabel("Collections")
        title.setObjectName("sectionTitle")

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("New collection name")
        self.name_input.returnPressed.connect(self._on_create_clicked)
        create_button = QPushButton("+")
        create_button.setToolTip("Create collection")
        create_button.setFixedWidth(36)
        create_button.clicked.connect(self._on_create_clicked)

        create_row = QHBoxLayout()
        create_row.setSpacing(6)
        create_row.addWidget(self.name_input, 1)
        create_row.addWidget(create_button)

        import_button = QPushButton("Import")
        import_button.setObjectName("secondaryButton")
        import_button.clicked.connect(self.import_requested.emit)

        self.tree_widget = QTreeWidget()
        self.tree_widget.setHeaderHidden(True)
        self.tree_widget.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.tree_widget.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.tree_widget.customContextMenuRequested.connect(self._on_context_menu)
        self.tree_widget.itemClicked.connect(self._on_item_activated)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(8)
        layout.addWidget(title)
        layout.addLayout(create_row)
        layout.addWidget(import_button)
        layout.addWidget(self.tree_widget, 1)

    def load_collections(self, collections: list[Collection]) -> None:
        expanded = {
            self.tree_widget.topLevelItem(idx).data(0, self._NAME_ROLE)
            for idx in range(self.tree_widget.topLevelItemCount())
            if self.tree_widget.topLevelItem(idx).isExpanded()
        }
        self.tree_widget.clear()
        for collection_index, collection in enumerate(collections):
            collection_item = QTreeWidgetItem([collection.name])
            collection_item.setData(0, self._POSITION_ROLE, (collection_index, -1))
            collection_item.setData(0, self._NAME_ROLE, collection.name)
            font = QFont(collection_item.font(0))
            font.setBold(True)
            collection_item.setFont(0, font)
            for request_index, request in enumerate(collection.requests):
                request_item = QTreeWidgetItem([f"{request.method}  {request.name}"])
                request_item.setData(0, self._POSITION_ROLE, (collection_index, request_index))
                request_item.setData(0, self._NAME_ROLE, request.name)
                collection_item.addChild(request_item)
            self.tree_widget.addTopLevelItem(collection_item)
            collection_item.setExpanded(collection.name in expanded)

    def _on_create_clicked(self) -> None:
        name = self.name_input.text().strip()
        if not name:
            return
        self.create_collection_requested.emit(name)
        self.name_input.clear()

    def _on_item_activated(self, item: QTreeWidgetItem, _column: int) -> None:
        collection_index, request_index = item.data(0, self._POSITION_ROLE)
        if request_index >= 0:
            self.request_selected.emit(collection_index, request_index)

    def _on_context_menu(self, pos) -> None:
        item = self.tree_widget.itemAt(pos)
        if item is None:
            return
        menu = QMenu(self)
        if item.parent() is None:
            name = item.data(0, self._NAME_ROLE)
            menu.addAction("Add Request", lambda: self.add_request_requested.emit(name))
            menu.addAction("Export Collection", lambda: self.export_requested.emit(name))
            menu.addSeparator()
            menu.addAction("Remove Collection", lambda: self.remove_collection_requested.emit(name))
        else:
            collection_name = item.parent().data(0, self._NAME_ROLE)
            request_name = item.data(0, self._NAME_ROLE)
            menu.addAction("Load", lambda: self._on_item_activated(item, 0))
            menu.addAction(
                "Remove",
                lambda: self.remove_request_requested.emit(collection_name, request_name),
            )
        menu.exec(self.tree_widget.viewport().mapToGlobal(pos))


class HeadersTable(QTableWidget):
    def __init__(self, on_changed, parent: QWidget | None = None) -> None:
        super().__init__(0, 2, parent)
        self._on_changed = on_changed
        self.setHorizontalHeaderLabels(["Key", "Value"])
        header = self.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Interactive)
        header.setStretchLastSection(True)
        header.resizeSection(0, 200)
        self.verticalHeader().setVisible(False)
        self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setAlternatingRowColors(True)
        self.setStyleSheet(TABLE_STYLE)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.itemChanged.connect(self._on_item_changed)

    def add_row(self, data: dict | None = None) -> None:
        data = data or {}
        self.blockSignals(True)
        row = self.rowCount()
        self.insertRow(row)
        self.setItem(row, 0, QTableWidgetItem(str(data.get("key") or "")))
        self.setItem(row, 1, QTableWidgetItem(str(data.get("value") or "")))
        self.blockSignals(False)

    def remove_row(self, row: int) -> None:
        if row < 0:
            return
        self.removeRow(row)
        # One editable row is always present.
        if self.rowCount() == 0:
            self.add_row()
        self._on_changed()

    def get_rows(self) -> list[dict]:
        rows: list[dict] = []
        for row in range(self.rowCount()):
            rows.append({"key": self._text(row, 0), "value": self._text(row, 1)})
        return rows

    def apply_rows(self, rows: list[dict]) -> None:
        self.setRowCount(0)
        for row in rows:
            self.add_row(row)
        if self.rowCount() == 0:
            self.add_row()

    def _text(self, row: int, column: int) -> str:
        item = self.item(row, column)
        return item.text().strip() if item is not None else ""

    def _on_item_changed(self, _item: QTableWidgetItem) -> None:
        self._on_changed()


class RequestPanel(QWidget):
    data_changed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._loading = False
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)
        layout.addLayout(self._init_name_row())
        layout.addLayout(self._init_method_url())
        layout.addWidget(self._init_tabs(), 1)

    def _init_name_row(self) -> QHBoxLayout:
        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("Request name")
        self.name_input.textChanged.connect(self._emit_changed)
        self.save_button = QPushButton("Save New Request")
        self.save_button.setObjectName("secondaryButton")
        self.save_status_label = QLabel("")
        self.save_status_label.setStyleSheet("color: #b45309;")

        row = QHBoxLayout()
        row.setSpacing(8)
        row.addWidget(self.name_input, 1)
        row.addWidget(self.save_status_label)
        row.addWidget(self.save_button)
        return row

    def _init_method_url(self) -> QHBoxLayout:
        self.method_combo = QComboBox()
        self.method_combo.addItems(list(HTTP_METHODS))
        self.method_combo.currentIndexChanged.connect(self._emit_changed)

        self.url_input = QLineEdit()
        self.url_input.setPlaceholderText("https://api.example.com/endpoint")
        self.url_input.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.url_input.textChanged.connect(self._emit_changed)

        self.send_button = QPushButton("Send Request")

        row = QHBoxLayout()
        row.setSpacing(8)
        row.addWidget(self.method_combo)
        row.addWidget(self.url_input, 1)
        row.addWidget(self.send_button)
        return row

    def _init_tabs(self) -> QTabWidget:
        tabs = QTabWidget()
        tabs.addTab(self._init_headers(), "Headers")
        tabs.addTab(self._init_body(), "Body")
        return tabs

    def _init_headers(self) -> QWidget:
        add_button = QPushButton("Add Header")
        add_button.setObjectName("secondaryButton")
        add_button.clicked.connect(self._add_header_row)
        remove_button = QPushButton("Remove")
        remove_button.setObjectName("dangerButton")
        remove_button.clicked.connect(self._remove_header_row)

        button_row = QHBoxLayout()
        button_row.addStretch(1)
        button_row.addWidget(add_button)
        button_row.addWidget(remove_button)

        self.headers_table = HeadersTable(self._emit_changed)
        self.headers_table.apply_rows([])

        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)
        layout.addLayout(button_row)
        layout.addWidget(self.headers_table, 1)
        return panel

    def _init_body(self) -> QWidget:
        self.body_edit = QPlainTextEdit()
        self.body_edit.setPlaceholderText("Request body (JSON)")
        self.body_edit.textChanged.connect(self._emit_changed)
        format_button = QPushButton("Format JSON")
        format_button.clicked.connect(self.format_json)

        button_row = QHBoxLayout()
        button_row.addStretch(1)
        button_row.addWidget(format_button)

        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)
        layout.addLayout(button_row)
        layout.addWidget(self.body_edit, 1)
        return panel

    def _add_header_row(self) -> None:
        self.headers_table.add_row()

    def _remove_header_row(self) -> None:
        selected = self.headers_table.selectionModel().selectedRows()
        if selected:
            for index in sorted(selected, key=lambda idx: idx.row(), reverse=True):
                self.headers_table.remove_row(index.row())
            return
        self.headers_table.remove_row(self.headers_table.rowCount() - 1)

    def get_request_data(self) -> dict:
        return {
            "name": self.name_input.text().strip(),
            "method": self.method_combo.currentText(),
            "url": self.url_input.text().strip(),
            "headers": self.headers_table.get_rows(),
            "body": self.body_edit.toPlainText(),
        }

    def set_request_data(self, data: dict) -> None:
        self._loading = True
        name = data.get("name")
        self.name_input.setText(name if isinstance(name, str) else "")
        method = data.get("method")
        if isinstance(method, str) and method in HTTP_METHODS:
            self.method_combo.setCurrentText(method)
        url = data.get("url")
        self.url_input.setText(url if isinstance(url, str) else "")
        headers = data.get("headers")
        self.headers_table.apply_rows(headers if isinstance(headers, list) else [])
        body = data.get("body")
        self.body_edit.setPlainText(body if isinstance(body, str) else "")
        self._loading = False

    def clear_request(self) -> None:
        self._loading = True
        self.name_input.clear()
        self.method_combo.setCurrentText("GET")
        self.url_input.clear()
        self.headers_table.apply_rows([])
        self.body_edit.clear()
        self._loading = False

    def set_loaded(self, loaded: bool) -> None:
        self.save_button.setText("Update Request" if loaded else "Save New Request")

    def set_dirty(self, dirty: bool) -> None:
        self.save_status_label.setText("Unsaved changes" if dirty else "")

    def format_json(self) -> None:
        text = self.body_edit.toPlainText().strip()
        if not text:
            return
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            return
        self.body_edit.setPlainText(json.dumps(parsed, indent=2, ensure_ascii=False))

    def _emit_changed(self) -> None:
        if self._loading:
            return
        self.data_changed.emit()


class ResponsePanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        self.status_value = QLabel("-")
        self.status_value.setObjectName("sectionTitle")
        self.elapsed_value = QLabel("-")
        self.time_value = QLabel("-")

        summary_row = QHBoxLayout()
        summary_row.setSpacing(16)
        summary_row.addWidget(QLabel("Status"))
        summary_row.addWidget(self.status_value)
        summary_row.addWidget(QLabel("Time (ms)"))
        summary_row.addWidget(self.elapsed_value)
        summary_row.addWidget(QLabel("At"))
        summary_row.addWidget(self.time_value)
        summary_row.addStretch(1)

        self.error_group = QGroupBox("Error")
        self.error_view = QLabel()
        self.error_view.setWordWrap(True)
        self.error_view.setStyleSheet("color: #b91c1c;")
        error_layout = QVBoxLayout(self.error_group)
        error_layout.addWidget(self.error_view)
        self.error_group.setVisible(False)

        self.body_text = QPlainTextEdit()
        self.body_text.setReadOnly(True)
        self.headers_table = QTableWidget(0, 2)
        self.headers_table.setHorizontalHeaderLabels(["Header", "Value"])
        self.headers_table.horizontalHeader().setStretchLastSection(True)
        self.headers_table.verticalHeader().setVisible(False)
        self.headers_table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.headers_table.setStyleSheet(TABLE_STYLE)
        self.logs_view = QPlainTextEdit()
        self.logs_view.setReadOnly(True)

        self.result_tabs = QTabWidget()
        self.result_tabs.addTab(self.body_text, "Body")
        self.result_tabs.addTab(self.headers_table, "Headers")
        self.result_tabs.addTab(self.logs_view, "Logs")

        group = QGroupBox("Response")
        group_layout = QVBoxLayout(group)
        group_layout.addLayout(summary_row)
        group_layout.addWidget(self.error_group)
        group_layout.addWidget(self.result_tabs, 1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(group)

    def update_response(self, result: dict) -> None:
        self.time_value.setText(datetime.now().strftime("%H:%M:%S"))
        if result.get("success") is False:
            self.status_value.setText("-")
            self.elapsed_value.setText("-")
            self.error_group.setVisible(True)
            error = result.get("error") or result.get("error_type") or ""
            detail = result.get("error_message") or ""
            self.error_view.setText(f"{error}\n{detail}".strip())
            self.body_text.clear()
            self.headers_table.setRowCount(0)
            return

        status_code = result.get("status_code")
        status_text = result.get("status_text") or ""
        self.status_value.setText(f"{status_code} {status_text}".strip())
        elapsed_ms = result.get("elapsed_ms")
        self.elapsed_value.setText("-" if elapsed_ms is None else str(elapsed_ms))
        self.error_group.setVisible(False)
        self.error_view.clear()
        self.body_text.setPlainText(json.dumps(result.get("data"), indent=2, ensure_ascii=False))
        headers = result.get("headers") or {}
        self.headers_table.setRowCount(0)
        for key, value in headers.items():
            row = self.headers_table.rowCount()
            self.headers_table.insertRow(row)
            self.headers_table.setItem(row, 0, QTableWidgetItem(str(key)))
            self.headers_table.setItem(row, 1, QTableWidgetItem(str(value)))

    def show_running(self) -> None:
        self.status_value.setText("-")
        self.elapsed_value.setText("-")
        self.error_group.setVisible(False)
        self.body_text.setPlainText("Sending request...")

    def clear(self) -> None:
        self.status_value.setText("-")
        self.elapsed_value.setText("-")
        self.time_value.setText("-")
        self.error_group.setVisible(False)
        self.error_view.clear()
        self.headers_table.setRowCount(0)
        self.body_text.clear()

    def append_log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        current = self.logs_view.toPlainText()
        line = f"[{timestamp}] {message}"
        if current:
            self.logs_view.setPlainText(f"{current}\n{line}")
        else:
            self.logs_view.setPlainText(line)
        logging.getLogger("requestbook").info(message)


class RightPanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        self.request_panel = RequestPanel()
        self.response_panel = ResponsePanel()
        self.send_button = self.request_panel.send_button
        self.save_button = self.request_panel.save_button

        splitter = QSplitter(Qt.Orientation.Vertical)
        splitter.setChildrenCollapsible(False)
        splitter.addWidget(self.request_panel)
        splitter.addWidget(self.response_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.addWidget(splitter)
