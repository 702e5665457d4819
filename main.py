"""
HUD desktop entry point
 - Launches the Qt dashboard via desktop_ui.app.main()
 - Use hud_console.py for a headless run
"""
import sys
from desktop_ui.app import main

if __name__ == "__main__":
    sys.exit(main())
