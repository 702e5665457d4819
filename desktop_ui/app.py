import logging
import os
import sys
from pathlib import Path

from PySide6.QtGui import QGuiApplication
from PySide6.QtQml import QQmlApplicationEngine

from config import ConfigurationError, DesktopConfiguration
from desktop_ui.desktop_coordinator import DesktopCoordinator

logger = logging.getLogger(__name__)


def main() -> int:
    # Set Qt Quick Controls style to Basic to allow background customization
    os.environ["QT_QUICK_CONTROLS_STYLE"] = "Basic"

    try:
        config = DesktopConfiguration.from_env()
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}")
        return 1
    logging.getLogger().setLevel(config.log_level)

    app = QGuiApplication(sys.argv)
    coordinator = DesktopCoordinator(config)

    engine = QQmlApplicationEngine()
    engine.rootContext().setContextProperty("hud", coordinator)

    qml_file = Path(__file__).parent / "qml" / "HudWindow.qml"
    engine.load(qml_file)

    if not engine.rootObjects():
        print("Failed to load QML")
        coordinator.cleanup()
        return 1

    try:
        return app.exec()
    finally:
        coordinator.cleanup()
