"""
Qt application bootstrap and persisted UI preferences.

Preferences are kept in an INI-format QSettings store keyed by the
organisation/application identity set in create_app().
"""
import os
import sys

from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

from steptree import config

ORG_ID = "steptree"
APP_ID = "steptree"
ORG_DOMAIN = "steptree.local"

VISIBLE_APP_NAME = "StepTree"

TEMPLATE_KEY = "ui/template"
LAST_DIR_KEY = "files/last_dir"


def create_app(argv: list[str] | None = None) -> QApplication:
    """Return the running QApplication, creating and identifying it if needed."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(sys.argv if argv is None else argv)
    app.setApplicationDisplayName(QCoreApplication.translate("App", VISIBLE_APP_NAME))
    return app


def stored_template(settings: QSettings) -> str:
    """Node template chosen in the previous session."""
    return settings.value(TEMPLATE_KEY, config.DEFAULT_TEMPLATE, type=str)


def stored_outline_dir(settings: QSettings) -> str:
    """Directory the last outline was opened from, the bundled assets otherwise."""
    return settings.value(LAST_DIR_KEY, config.ASSETS_PATH, type=str)
