"""
gui_entry.py - GUI Entry

Launch the PySide6 preview window on the persisted configuration
"""

import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtCore import Qt

from .. import __version__
from ..core import AppHome, ConfigurationError
from .gui_mainwindow import MainWindow

logger = logging.getLogger(__name__)


def main(home: Optional[AppHome] = None) -> int:
    """
    GUI main entry

    Args:
        home: Config directory (defaults to AppHome.resolve())

    Returns:
        Application exit code
    """
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("imgrename")
    app.setApplicationVersion(__version__)
    app.setStyle("Fusion")

    home = home or AppHome.resolve()
    logger.debug("Using config directory %s", home.path)

    try:
        window = MainWindow(home)
    except ConfigurationError as e:
        # Unreadable rules file: refuse to start rather than overwrite it later
        QMessageBox.critical(None, "imgrename", f"Cannot load configuration:\n{e}")
        return 1

    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
