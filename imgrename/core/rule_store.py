"""
rule_store.py - Rename Rule Persistence

Rules live in a single JSON file so their order is preserved:

    {"version": 1, "rules": [{"id": ..., "find": ..., "replace": ...,
                              "case_sensitive": ..., "only_when_name_too_long": ...}]}
"""

from pathlib import Path
from typing import Iterable, List
import json
import logging
import os

from .app_home import AppHome
from .errors import ConfigurationError, InvalidRule
from .models_rules import RenameRule, RuleSet

logger = logging.getLogger(__name__)

RULES_FILE = "rename_rules.json"
FORMAT_VERSION = 1


def rules_path(home: AppHome) -> Path:
    return home.file_path(RULES_FILE)


def load_rules(home: AppHome) -> List[RenameRule]:
    """
    Load persisted rules in order

    Records that do not form a valid rule (e.g. empty find text) or repeat an
    earlier id are logged and skipped.

    Raises:
        ConfigurationError: File is not a JSON rules document
    """
    path = rules_path(home)
    if not path.exists():
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Rules file {path} is not valid JSON: {e}") from e

    records = data.get("rules") if isinstance(data, dict) else None
    if not isinstance(records, list):
        raise ConfigurationError(f"Rules file {path} has no 'rules' list")

    rules: List[RenameRule] = []
    seen_ids = set()
    for i, record in enumerate(records, 1):
        if not isinstance(record, dict):
            logger.warning("Ignoring rule %d in %s: not an object", i, path)
            continue
        try:
            rule = RenameRule.from_dict(record)
        except InvalidRule as e:
            logger.warning("Ignoring rule %d in %s: %s", i, path, e)
            continue
        if rule.id in seen_ids:
            logger.warning("Ignoring rule %d in %s: duplicate id %s", i, path, rule.id)
            continue
        seen_ids.add(rule.id)
        rules.append(rule)

    logger.debug("Loaded %d rename rules from %s", len(rules), path)
    return rules


def save_rules(home: AppHome, rules: Iterable[RenameRule]) -> Path:
    """Write rules atomically (temp file then replace)"""
    home.ensure_dir()
    path = rules_path(home)
    data = {
        "version": FORMAT_VERSION,
        "rules": [rule.to_dict() for rule in rules],
    }

    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)
    return path


def load_rule_set(home: AppHome) -> RuleSet:
    return RuleSet(load_rules(home))
