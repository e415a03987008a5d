import sys

from PySide6.QtWidgets import QApplication

from requestbook.config import get_settings
from requestbook.logger import setup_logging

STYLE = [
    "QMainWindow { background-color: #f3f4f6; }",
    "QWidget { background-color: #f3f4f6; color: #111827; }",
    "QSplitter::handle { background-color: #e5e7eb; }",
    "QGroupBox { background-color: #ffffff; border: 1px solid #d1d5db; border-radius: 6px; margin-top: 10px; }",
    "QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 6px; color: #374151; font-weight: 600; }",
    "QLineEdit, QPlainTextEdit, QComboBox, QTableWidget, QTreeWidget { background-color: #ffffff; color: #111827; border: 1px solid #d1d5db; border-radius: 4px; padding: 6px; }",
    "QPlainTextEdit { font-family: Consolas, \"Courier New\", monospace; }",
    "QLineEdit:focus, QPlainTextEdit:focus, QComboBox:focus { border: 1px solid #93c5fd; }",
    "QHeaderView::section { background-color: #f3f4f6; color: #374151; border: 1px solid #d1d5db; padding: 4px; font-weight: 600; }",
    "QTreeWidget::item:selected, QTableWidget::item:selected { background-color: #e0e7ff; color: #111827; }",
    "QLabel#sectionTitle { font-weight: 600; }",
    "QTabBar::tab { background-color: #e5e7eb; color: #374151; padding: 6px 12px; border: 1px solid #d1d5db; }",
    "QTabBar::tab:selected { background-color: #ffffff; }",
    "QPushButton { background-color: #2563eb; color: #ffffff; border: 1px solid #1d4ed8; border-radius: 4px; padding: 6px 12px; }",
    "QPushButton:hover { background-color: #1d4ed8; }",
    "QPushButton:disabled { background-color: #9ca3af; color: #f3f4f6; border: 1px solid #9ca3af; }",
    "QPushButton#secondaryButton { background-color: #16a34a; border: 1px solid #15803d; }",
    "QPushButton#secondaryButton:hover { background-color: #15803d; }",
    "QPushButton#dangerButton { background-color: #dc2626; border: 1px solid #b91c1c; }",
    "QPushButton#dangerButton:hover { background-color: #b91c1c; }",
]


def main() -> int:
    setup_logging(get_settings().log_level)
    from requestbook.ui.main_window import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName("requestbook")
    app.setStyleSheet("\n".join(STYLE))
    window = MainWindow()
    window.show()
    return app.exec()
