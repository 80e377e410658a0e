"""
gui - PySide6 interface for imgrename
"""

from .gui_entry import main

__all__ = ["main"]
