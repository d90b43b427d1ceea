from PyQt6.QtGui import QColor, QPalette
from PyQt6.QtWidgets import QApplication

from ..settings import THEMES


def apply_theme(theme: str = "dark") -> None:
    app = QApplication.instance()
    if not app:
        return

    app.setStyle("Fusion")
    if theme not in THEMES or theme == "light":
        app.setPalette(app.style().standardPalette())
        return

    pal = QPalette()
    role = QPalette.ColorRole
    pal.setColor(role.Window, QColor(45, 45, 48))
    pal.setColor(role.WindowText, QColor(220, 220, 220))
    pal.setColor(role.Base, QColor(30, 30, 32))
    pal.setColor(role.AlternateBase, QColor(50, 50, 54))
    pal.setColor(role.Text, QColor(230, 230, 230))
    pal.setColor(role.Button, QColor(58, 58, 62))
    pal.setColor(role.ButtonText, QColor(230, 230, 230))
    pal.setColor(role.Highlight, QColor(42, 130, 218))
    pal.setColor(role.HighlightedText, QColor(255, 255, 255))
    app.setPalette(pal)
