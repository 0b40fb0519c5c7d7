"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Restores the last session from the autosave file (ProjectState).
2. Instantiates the Main Window (View), which owns the controller.
3. Prevents circular import errors by being the orchestrator.
"""
import logging
import os
import sys

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication

from floorplantakeoff.config import ASSETS_PATH
from floorplantakeoff.logging_config import setup_logging
from floorplantakeoff.model.io import IOManager
from floorplantakeoff.view.main_window import MainWindow, VISIBLE_APP_NAME


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)
    app.setWindowIcon(QIcon(os.path.join(ASSETS_PATH, "icon.svg")))

    # 3. Restore the previous session (empty project if there is none)
    project = IOManager.load_autosave()

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(project)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
