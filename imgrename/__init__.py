"""
imgrename - Rule-based batch renaming of image files
"""

__version__ = "0.1.0"
