"""
Configuration & Path Management
===============================
Central registry for bundled resources and node layout constants.

Bundled outlines live in the `steptree.assets` package and are looked up
through importlib.resources, so they resolve the same way from a source
checkout, an installed wheel, or a PyInstaller bundle (sys._MEIPASS).

Exports:
    ASSETS_PATH (str): Directory holding the bundled outlines.
    DEMO_OUTLINE_PATH (str): The outline shown when none is given.
"""
import logging
import os
import sys
from importlib.resources import files

logger = logging.getLogger(__name__)

ASSETS_PACKAGE = "steptree.assets"
DEMO_OUTLINE_NAME = "demo_outline.json"


def get_asset_path(name: str = "") -> str:
    """Absolute filesystem path of a bundled asset (or of the assets directory)."""
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder keeps the package layout under steptree/assets
        base_path: str = os.path.join(getattr(sys, '_MEIPASS'), *ASSETS_PACKAGE.split("."))
        return os.path.join(base_path, name) if name else base_path

    resource = files(ASSETS_PACKAGE)
    if name:
        resource = resource.joinpath(name)
    return str(resource)


ASSETS_PATH: str = get_asset_path()
DEMO_OUTLINE_PATH: str = get_asset_path(DEMO_OUTLINE_NAME)

# Node layout (scene units)
NODE_WIDTH: float = 140.0
NODE_HEIGHT: float = 44.0
LEVEL_SPACING: float = 36.0
SIBLING_SPACING: float = 16.0

DEFAULT_TEMPLATE: str = "box"

if not os.path.exists(DEMO_OUTLINE_PATH):
    logger.warning(f"Demo outline not found at {DEMO_OUTLINE_PATH}")
