"""
text_match.py - Text Matching Tools

Literal find/replace used by the rename engine, plus filename validity checks
used before writing outputs
"""

from typing import Optional
import re

# Characters rejected by Windows in a single path component
INVALID_NAME_CHARS = '<>:"/\\|?*'

WINDOWS_RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

# Most filesystems cap a single component at 255 characters
FS_NAME_LIMIT = 255


def replace_text(text: str, old: str, new: str, case_sensitive: bool = True) -> str:
    """
    Replace every occurrence of a literal string in text

    The replacement is inserted verbatim, it never adopts the case of the
    matched text. Output of the replacement is not rescanned.

    Args:
        text: Original text
        old: Literal string to replace
        new: Replacement string
        case_sensitive: Whether case-sensitive

    Returns:
        Replaced text
    """
    if not old:
        return text

    if case_sensitive:
        return text.replace(old, new)

    pattern = re.compile(re.escape(old), re.IGNORECASE)
    # Function replacement so backslashes in `new` are not treated as group refs
    return pattern.sub(lambda _m: new, text)


def filename_problem(name: str) -> Optional[str]:
    """
    Describe why a filename cannot be written, or None when it is usable

    Args:
        name: Final filename (single component, no directories)

    Returns:
        Problem description or None
    """
    if not name:
        return "Filename cannot be empty"

    bad = [c for c in INVALID_NAME_CHARS if c in name]
    if bad:
        return f"Filename contains invalid character: {bad[0]}"

    if name[-1] in (" ", "."):
        return "Filename cannot end with space or dot"

    stem = name.split(".")[0].upper()
    if stem in WINDOWS_RESERVED_NAMES:
        return f"Filename is a Windows reserved name: {stem}"

    if len(name) > FS_NAME_LIMIT:
        return f"Filename exceeds {FS_NAME_LIMIT} characters"

    return None
