from PySide6.QtCore import QObject, Signal

from requestbook import http_client
from requestbook.models import Request


class ApiRequestWorker(QObject):
    finished = Signal(dict)
    error = Signal(dict)

    def __init__(self, request: Request, timeout: float | None = None) -> None:
        super().__init__()
        self.request = request
        self.timeout = timeout

    def run(self) -> None:
        try:
            result = http_client.send_request(self.request, timeout=self.timeout)
            self.finished.emit(result)
        except Exception as exc:
            self.error.emit(
                {
                    "success": False,
                    "error": http_client.GENERIC_ERROR,
                    "error_type": "WorkerError",
                    "error_message": str(exc),
                }
            )
