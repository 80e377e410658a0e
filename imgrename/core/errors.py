"""
errors.py - Exception Types

Validation errors raised at the edit boundary (rule editing, configuration)
"""


class RenameToolError(Exception):
    """Base class for all imgrename errors"""


class InvalidRule(RenameToolError, ValueError):
    """Rule is malformed (empty find text) or does not exist"""


class ConfigurationError(RenameToolError, ValueError):
    """Configuration value is invalid or persisted config cannot be read"""
