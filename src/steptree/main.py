"""
Application Initialization
==========================
This module wires the step tree to its Qt host and starts the event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the command line (outline file, template, log level).
2. Creates the Qt Application.
3. Instantiates the Main Window, which builds the StepTree on a Qt node factory.
4. Loads the requested outline (or the bundled demo) into it.
"""
import logging
from pathlib import Path
from typing import Optional

import typer

from steptree import config
from steptree.application import create_app
from steptree.logging_config import setup_logging

app = typer.Typer(add_completion=False, help="Step-by-step tree presentation.")
logger = logging.getLogger(__name__)


@app.command()
def run(
    outline: Path = typer.Argument(
        Path(config.DEMO_OUTLINE_PATH),
        help="JSON outline to present (default: bundled demo).",
        show_default=False,
    ),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Node template key, e.g. 'box' or 'rounded'."
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write the log to this file."),
) -> None:
    # 1. Setup Logging (Console + Optional File)
    setup_logging(
        level=logging.DEBUG if debug else logging.INFO,
        log_file=str(log_file) if log_file else None,
    )

    # 2. Create the Qt Application
    qt_app = create_app()

    # 3. Initialize the Main Window (imported late: widgets need the QApplication)
    from steptree.view.main_window import MainWindow

    window = MainWindow(template=template)
    logger.info(f"Presenting '{outline}' with template '{window.factory.template}'.")
    if not window.open_outline(outline):
        logger.warning("Starting with an empty canvas.")
    window.show()

    # 4. Start Event Loop
    raise typer.Exit(code=qt_app.exec())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
