from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QThread, Slot

from requestbook import http_client
from requestbook.config import get_settings
from requestbook.errors import RequestBookError
from requestbook.files import export_to_file, import_collection_file
from requestbook.models import Header, Request
from requestbook.store import CollectionStore
from requestbook.workers import ApiRequestWorker

logger = logging.getLogger(__name__)


def _error_result(exc: Exception) -> dict:
    return {
        "success": False,
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }


class CollectionController(QObject):
    def __init__(self, request_panel, response_panel, store: CollectionStore | None = None) -> None:
        super().__init__()
        self.request_panel = request_panel
        self.response_panel = response_panel
        self.store = store if store is not None else CollectionStore()
        self._thread: QThread | None = None
        self._worker: ApiRequestWorker | None = None
        self._request_done_cb = None
        self._request_running = False

    @property
    def request_running(self) -> bool:
        return self._request_running

    def create_collection(self, name: str) -> dict:
        try:
            collection = self.store.create_collection(name.strip() if isinstance(name, str) else name)
        except RequestBookError as exc:
            return _error_result(exc)
        return {"success": True, "collection": collection}

    def remove_collection(self, name: str) -> dict:
        removed = self.store.remove_collection(name)
        return {"success": removed is not None, "collection": removed}

    def add_request(self, collection_name: str) -> dict:
        request = self.store.add_blank_request(collection_name)
        return {"success": request is not None, "request": request}

    def load_request(self, request: Request) -> None:
        slot = self.store.load_request(request)
        self.request_panel.set_request_data(slot.request.to_dict())
        self.response_panel.clear()

    def new_request(self) -> None:
        slot = self.store.new_request()
        self.request_panel.set_request_data(slot.request.to_dict())
        self.response_panel.clear()

    def save_current_request(self) -> dict:
        try:
            data = self.request_panel.get_request_data()
            headers = [Header.from_dict(row) for row in data.get("headers") or [] if isinstance(row, dict)]
            saved = self.store.save_current_request(
                (data.get("name") or "").strip(),
                url=data.get("url") or "",
                method=data.get("method") or "GET",
                headers=headers,
                body=data.get("body") or "",
            )
        except RequestBookError as exc:
            return _error_result(exc)
        return {"success": True, "request": saved}

    def remove_request(self, collection_name: str, request_name: str) -> dict:
        was_loaded = self.store.editing.loaded
        removed = self.store.remove_request(collection_name, request_name)
        if was_loaded and not self.store.editing.loaded:
            self.request_panel.clear_request()
            self.response_panel.clear()
        return {"success": removed is not None, "request": removed}

    def export_collection(
        self,
        collection_name: str,
        output_dir: str | None = None,
        filename: str | None = None,
    ) -> dict:
        collection = self.store.find_collection(collection_name)
        if collection is None:
            return {
                "success": False,
                "error_type": "CollectionNotFound",
                "error_message": f"no collection named {collection_name!r}",
            }
        try:
            path = export_to_file(collection, output_dir or get_settings().export_dir, filename)
        except RequestBookError as exc:
            return _error_result(exc)
        return {"success": True, "path": str(path)}

    def import_collection(self, path: str) -> dict:
        try:
            report = import_collection_file(self.store, path)
        except RequestBookError as exc:
            return _error_result(exc)
        return {
            "success": True,
            "collection": report.collection,
            "skipped": report.skipped,
        }

    def current_request(self) -> Request:
        data = self.request_panel.get_request_data()
        return Request.from_dict(data)

    def send_request(self) -> dict:
        try:
            self.response_panel.clear()
            result = http_client.send_request(self.current_request())
        except Exception as exc:
            result = _error_result(exc)
            result["error"] = http_client.GENERIC_ERROR
        self.response_panel.update_response(result)
        return result

    def send_request_async(self, on_finished=None) -> None:
        if self._request_running:
            return
        try:
            request = self.current_request()
        except RequestBookError as exc:
            result = _error_result(exc)
            result["error"] = http_client.GENERIC_ERROR
            self.response_panel.update_response(result)
            if callable(on_finished):
                on_finished(result)
            return
        self._request_running = True
        self.response_panel.clear()
        append_log = getattr(self.response_panel, "append_log", None)
        if callable(append_log):
            append_log(f"request_started {request.method} {request.url}")

        thread = QThread(self)
        worker = ApiRequestWorker(request)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)

        worker.finished.connect(self._on_async_finished)
        worker.error.connect(self._on_async_finished)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        worker.error.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.finished.connect(self._on_request_thread_finished)

        self._thread = thread
        self._worker = worker
        self._request_done_cb = on_finished
        thread.start()

    @Slot(dict)
    def _on_async_finished(self, result: dict) -> None:
        self.response_panel.update_response(result)
        append_log = getattr(self.response_panel, "append_log", None)
        if callable(append_log):
            if result.get("success"):
                append_log(f"request_finished status={result.get('status_code')}")
            else:
                append_log(f"request_error={result.get('error_type')}")
        if callable(self._request_done_cb):
            self._request_done_cb(result)

    @Slot()
    def _on_request_thread_finished(self) -> None:
        self._request_running = False
        self._thread = None
        self._worker = None
