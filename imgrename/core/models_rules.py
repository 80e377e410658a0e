"""
models_rules.py - Rename Rule Data Structures

Contains:
- RenameRule: Single conditional find/replace directive
- RuleSet: Ordered, editable collection of rules
- validate_max_name_length: Edit-boundary check for the length limit
"""

from dataclasses import dataclass, field, replace, asdict
from typing import Any, Dict, Iterator, List, Optional, Tuple
import threading
import uuid

from .errors import InvalidRule, ConfigurationError

# Persisted rule fields, in file order
RULE_FIELDS = ("id", "find", "replace", "case_sensitive", "only_when_name_too_long")


@dataclass(frozen=True)
class RenameRule:
    """Literal find/replace directive, optionally guarded by the length limit"""
    find: str
    replace: str = ""
    case_sensitive: bool = True
    only_when_name_too_long: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if not isinstance(self.find, str) or not self.find:
            raise InvalidRule("Rule find text cannot be empty")
        if not isinstance(self.replace, str):
            raise InvalidRule("Rule replace text must be a string")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain dict holding exactly the persisted fields"""
        data = asdict(self)
        return {key: data[key] for key in RULE_FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenameRule":
        """Build a rule from a persisted dict (raises InvalidRule)"""
        flags = {
            "case_sensitive": data.get("case_sensitive", True),
            "only_when_name_too_long": data.get("only_when_name_too_long", False),
        }
        for name, value in flags.items():
            # JSON true/false only; "false" as a string must not read as True
            if not isinstance(value, bool):
                raise InvalidRule(f"Malformed rule record: {name} must be true or false, got {value!r}")
        try:
            return cls(
                id=str(data["id"]),
                find=data["find"],
                replace=data.get("replace", ""),
                **flags,
            )
        except (KeyError, TypeError) as e:
            raise InvalidRule(f"Malformed rule record: {e}") from e

    def describe(self) -> str:
        """One-line human readable form"""
        flags = []
        if not self.case_sensitive:
            flags.append("case-insensitive")
        if self.only_when_name_too_long:
            flags.append("only when too long")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f'"{self.find}" -> "{self.replace}"{suffix}'


def validate_max_name_length(value: Any) -> int:
    """
    Validate a max name length coming from the user or a config source

    Args:
        value: Candidate value (int or numeric string)

    Returns:
        Positive integer

    Raises:
        ConfigurationError: Value is not a positive integer
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Max name length must be an integer, got {value!r}")
    try:
        length = int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"Max name length must be an integer, got {value!r}") from None
    if length <= 0:
        raise ConfigurationError(f"Max name length must be positive, got {length}")
    return length


class RuleSet:
    """
    Ordered collection of rename rules

    Insertion order is application order. Every mutation bumps `revision`
    so cached previews can tell they are stale. Mutations are serialized
    with a lock; readers take `snapshot()` which is an immutable tuple.
    """

    def __init__(self, rules: Optional[List[RenameRule]] = None):
        self._lock = threading.Lock()
        self._rules: List[RenameRule] = []
        self.revision = 0
        for rule in rules or []:
            self._check_new(rule)
            self._rules.append(rule)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RenameRule]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> RenameRule:
        return self._rules[index]

    def snapshot(self) -> Tuple[RenameRule, ...]:
        with self._lock:
            return tuple(self._rules)

    def _check_new(self, rule: RenameRule) -> None:
        if not isinstance(rule, RenameRule):
            raise InvalidRule(f"Not a rename rule: {rule!r}")
        if any(r.id == rule.id for r in self._rules):
            raise InvalidRule(f"Duplicate rule id: {rule.id}")

    def _index_of(self, rule_id: str) -> int:
        for i, r in enumerate(self._rules):
            if r.id == rule_id:
                return i
        raise InvalidRule(f"No rule with id {rule_id}")

    def _touch(self) -> None:
        self.revision += 1

    def add(self, rule: RenameRule, index: Optional[int] = None) -> RenameRule:
        """Append (or insert at index) a rule"""
        with self._lock:
            self._check_new(rule)
            if index is None:
                self._rules.append(rule)
            else:
                self._rules.insert(index, rule)
            self._touch()
        return rule

    def remove(self, rule_id: str) -> RenameRule:
        with self._lock:
            rule = self._rules.pop(self._index_of(rule_id))
            self._touch()
        return rule

    def move(self, rule_id: str, new_index: int) -> None:
        """Move a rule to a new position (0-based)"""
        with self._lock:
            if not 0 <= new_index < len(self._rules):
                raise InvalidRule(f"Rule position out of range: {new_index}")
            rule = self._rules.pop(self._index_of(rule_id))
            self._rules.insert(new_index, rule)
            self._touch()

    def update(self, rule_id: str, **changes) -> RenameRule:
        """
        Replace a rule with an edited copy keeping its id and position

        Args:
            rule_id: Rule to edit
            **changes: Field values (find, replace, case_sensitive, only_when_name_too_long)

        Returns:
            The edited rule

        Raises:
            InvalidRule: Unknown id, unknown field or empty find text
        """
        if "id" in changes:
            raise InvalidRule("Rule id cannot be edited")
        unknown = set(changes) - set(RULE_FIELDS)
        if unknown:
            raise InvalidRule(f"Unknown rule field(s): {', '.join(sorted(unknown))}")
        with self._lock:
            i = self._index_of(rule_id)
            edited = replace(self._rules[i], **changes)
            self._rules[i] = edited
            self._touch()
        return edited

    def clear(self) -> None:
        with self._lock:
            self._rules.clear()
            self._touch()
