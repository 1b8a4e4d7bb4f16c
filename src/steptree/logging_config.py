"""
Logging Configuration
Sets up the 'steptree' logger and routes Qt's own diagnostics into it.
"""
import logging
import sys
from typing import Optional

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def _qt_message_handler(mode: QtMsgType, context, message: str) -> None:
    logging.getLogger("steptree.qt").log(_QT_LEVELS.get(mode, logging.INFO), message)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    capture_qt: bool = True,
) -> logging.Logger:
    """
    Configures the logger for the 'steptree' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        capture_qt: Forward qDebug/qWarning output to 'steptree.qt'.
    """
    logger = logging.getLogger("steptree")
    logger.setLevel(level)

    # Avoid duplicate handlers when called twice (tests, restarts)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if capture_qt:
        qInstallMessageHandler(_qt_message_handler)

    logger.info("Logging initialized.")
    return logger
