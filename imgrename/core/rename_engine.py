"""
rename_engine.py - Rename Rule Engine and Output Classification

Responsibilities:
- Apply an ordered rule sequence to a single file name
- Classify the result against the original name and the length limit

Both functions are pure: no IO, no shared state, safe to call per entry
from any thread.
"""

from enum import Enum
from typing import Iterable

from .models_rules import RenameRule
from .text_match import replace_text


class OutputStatus(Enum):
    """Display status of an output name"""
    UNCHANGED = "unchanged"
    RENAMED = "renamed"
    TOO_LONG = "too_long"


def rule_applies(rule: RenameRule, current: str, max_length: int) -> bool:
    """Whether a rule's length guard lets it run on the name-in-progress"""
    if rule.only_when_name_too_long:
        return len(current) > max_length
    return True


def apply_rules(original_name: str, rules: Iterable[RenameRule], max_length: int) -> str:
    """
    Apply rules in order to a file name

    Each rule sees the output of the previous one. Length-guarded rules are
    re-checked against the name as it stands when they are reached. The
    result is never truncated; names still over the limit are reported by
    classify().

    Args:
        original_name: Base name of the input file
        rules: Ordered rules
        max_length: Positive length limit in characters

    Returns:
        Final name
    """
    current = original_name
    for rule in rules:
        if not rule_applies(rule, current, max_length):
            continue
        current = replace_text(current, rule.find, rule.replace, rule.case_sensitive)
    return current


def classify(original_name: str, final_name: str, max_length: int) -> OutputStatus:
    """
    Classify a final name for display

    Length violation wins over every other status since it needs the
    user's attention.

    Args:
        original_name: Name before rules
        final_name: Name after rules
        max_length: Length limit in characters

    Returns:
        Output status
    """
    if len(final_name) > max_length:
        return OutputStatus.TOO_LONG
    if final_name == original_name:
        return OutputStatus.UNCHANGED
    return OutputStatus.RENAMED
