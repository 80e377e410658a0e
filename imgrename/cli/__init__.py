"""
cli - Command Line Interface for imgrename
"""

from .cli_entry import main, create_parser

__all__ = ["main", "create_parser"]
