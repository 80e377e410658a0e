"""
cli_entry.py - CLI Entry Point

Subcommands:
- max-name-length: show / set / reset the length limit
- rule: add / list / remove / move / clear rename rules
- input: add / list / remove / clear input paths
- preview: show the output tree with statuses
- apply: write renamed copies into the output directories
- gui: launch the GUI (default when no subcommand is given)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..core import (
    AppHome, ConfigurationError, InvalidRule, OutputOptions, OutputSnapshot, OutputStatus, RenameRule,
    add_from_glob, build_output_entries, build_output_tree, clear_inputs, discover_inputs,
    execute_plan, load_gui_settings, load_inputs, load_max_name_length, load_rule_set,
    output_dir_for, plan_outputs, remove_from_glob, reset_max_name_length,
    save_max_name_length, save_rules, validate_max_name_length,
)

logger = logging.getLogger(__name__)

STATUS_MARKS = {
    OutputStatus.UNCHANGED: " ",
    OutputStatus.RENAMED: "*",
    OutputStatus.TOO_LONG: "!",
}

# Rows shown before the preview table is cut short
PREVIEW_LIMIT = 20


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="imgrename",
        description="Rule-based batch renaming of image files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Add an input directory and a rule that only fires on long names
  imgrename input add ./photos
  imgrename rule add "vintage_" "" --only-when-too-long

  # Preview, then write renamed copies to ./photos-output
  imgrename preview
  imgrename apply --yes
"""
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # max-name-length
    mnl_parser = subparsers.add_parser("max-name-length", help="Show or change the max name length")
    mnl_sub = mnl_parser.add_subparsers(dest="action", required=True)
    mnl_sub.add_parser("show", help="Show the current max name length")
    mnl_set = mnl_sub.add_parser("set", help="Set the max name length")
    mnl_set.add_argument("length", type=str, help="Positive number of characters")
    mnl_sub.add_parser("reset", help="Reset to the default value")

    # rule
    rule_parser = subparsers.add_parser("rule", help="Manage rename rules")
    rule_sub = rule_parser.add_subparsers(dest="action", required=True)
    rule_add = rule_sub.add_parser("add", help="Append a rename rule")
    rule_add.add_argument("find", type=str, help="Literal text to find")
    rule_add.add_argument("replace", type=str, nargs="?", default="", help="Replacement (empty deletes)")
    rule_add.add_argument("--case-insensitive", "-i", action="store_true", help="Ignore case when matching")
    rule_add.add_argument("--only-when-too-long", "-l", action="store_true",
                          help="Only apply while the name exceeds the max name length")
    rule_sub.add_parser("list", help="List rules in application order")
    rule_remove = rule_sub.add_parser("remove", help="Remove a rule")
    rule_remove.add_argument("index", type=int, help="1-based rule index")
    rule_move = rule_sub.add_parser("move", help="Move a rule to another position")
    rule_move.add_argument("index", type=int, help="1-based rule index")
    rule_move.add_argument("new_index", type=int, help="1-based target position")
    rule_sub.add_parser("clear", help="Remove all rules")

    # input
    input_parser = subparsers.add_parser("input", help="Manage input paths")
    input_sub = input_parser.add_subparsers(dest="action", required=True)
    input_add = input_sub.add_parser("add", help="Add paths matching a glob pattern")
    input_add.add_argument("pattern", type=str, help="Glob pattern or path")
    input_sub.add_parser("list", help="List input paths")
    input_remove = input_sub.add_parser("remove", help="Remove paths matching a glob pattern")
    input_remove.add_argument("pattern", type=str, help="Glob pattern or path")
    input_sub.add_parser("clear", help="Remove all input paths")

    # preview
    preview_parser = subparsers.add_parser("preview", help="Show output names and statuses")
    preview_parser.add_argument("--max-name-length", "-m", type=str,
                                help="Override the configured max name length for this run")
    preview_parser.add_argument("--only-changed", action="store_true",
                                help="Hide unchanged files")

    # apply
    apply_parser = subparsers.add_parser("apply", help="Write renamed copies to the output directories")
    apply_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not write")
    apply_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    apply_parser.add_argument("--skip-too-long", action="store_true", help="Do not write names that are still too long")
    apply_parser.add_argument("--overwrite", action="store_true", help="Overwrite existing output files")
    apply_parser.add_argument("--log-dir", type=str, help="Directory for JSON execution logs")

    subparsers.add_parser("gui", help="Launch the graphical interface")

    return parser


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure root logging once for the process"""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def cmd_max_name_length(args, home: AppHome) -> int:
    """Handle max-name-length command"""
    if args.action == "show":
        print(f"Max name length: {load_max_name_length(home)}")
    elif args.action == "set":
        length = save_max_name_length(home, args.length)
        print(f"Setting max name length to: {length}")
    elif args.action == "reset":
        length = reset_max_name_length(home)
        print(f"Reset max name length to default: {length}")
    return 0


def _rule_at(rules, index: int):
    if not 1 <= index <= len(rules):
        raise InvalidRule(f"No rule {index}")
    return rules[index - 1]


def cmd_rule(args, home: AppHome) -> int:
    """Handle rule command"""
    rules = load_rule_set(home)

    if args.action == "list":
        if not len(rules):
            print("No rename rules")
            return 0
        for i, rule in enumerate(rules, 1):
            print(f"{i}. {rule.describe()}")
        return 0

    if args.action == "add":
        rule = rules.add(RenameRule(
            find=args.find,
            replace=args.replace,
            case_sensitive=not args.case_insensitive,
            only_when_name_too_long=args.only_when_too_long,
        ))
        save_rules(home, rules)
        print(f"Added rule {len(rules)}: {rule.describe()}")
    elif args.action == "remove":
        rule = _rule_at(rules, args.index)
        rules.remove(rule.id)
        save_rules(home, rules)
        print(f"Removed rule {args.index}: {rule.describe()}")
    elif args.action == "move":
        rule = _rule_at(rules, args.index)
        rules.move(rule.id, args.new_index - 1)
        save_rules(home, rules)
        print(f"Moved rule {args.index} to position {args.new_index}")
    elif args.action == "clear":
        count = len(rules)
        rules.clear()
        save_rules(home, rules)
        print(f"Removed {count} rules")
    return 0


def cmd_input(args, home: AppHome) -> int:
    """Handle input command"""
    if args.action == "add":
        added = add_from_glob(home, args.pattern)
        for p in added:
            print(f"Added: {p}")
        if not added:
            print(f"No new paths matched '{args.pattern}'")
    elif args.action == "list":
        paths = load_inputs(home)
        if not paths:
            print("No input paths")
        for p in paths:
            print(p)
    elif args.action == "remove":
        removed = remove_from_glob(home, args.pattern)
        for p in removed:
            print(f"Removed: {p}")
        if not removed:
            print(f"No input paths matched '{args.pattern}'")
    elif args.action == "clear":
        print(f"Removed {clear_inputs(home)} input paths")
    return 0


def compute_outputs(home: AppHome, max_length: Optional[int] = None) -> OutputSnapshot:
    """Run the rename pipeline on the persisted inputs, rules and settings"""
    if max_length is None:
        max_length = load_max_name_length(home)
    inputs = discover_inputs(load_inputs(home))
    rules = load_rule_set(home)
    settings = load_gui_settings(home)
    entries = build_output_entries(inputs, rules.snapshot(), max_length, rules_enabled=settings.rules_enabled)
    return OutputSnapshot(entries=entries, max_length=max_length, rules_revision=rules.revision)


def cmd_preview(args, home: AppHome) -> int:
    """Handle preview command"""
    max_length = None
    if args.max_name_length is not None:
        max_length = validate_max_name_length(args.max_name_length)
    snapshot = compute_outputs(home, max_length)

    if not snapshot.entries:
        print("No input images found")
        return 0

    print(f"Max name length: {snapshot.max_length}")
    print("Legend: '*' renamed, '!' too long")

    for root, group in snapshot.grouped():
        if args.only_changed:
            group = [e for e in group if e.status is not OutputStatus.UNCHANGED]
        if not group:
            continue
        print()
        print(f"{output_dir_for(root)}")
        tree = build_output_tree(root, group)
        for depth, node in tree.walk():
            indent = "  " * (depth + 1)
            if node.is_file:
                entry = node.entry
                mark = STATUS_MARKS[entry.status]
                detail = f"  <- {entry.original_name}" if entry.was_renamed else ""
                print(f"{indent}{mark} {entry.final_name} ({len(entry.final_name)}){detail}")
            else:
                print(f"{indent}{node.name}/")

    counts = snapshot.counts()
    print()
    print(
        f"{len(snapshot.entries)} files: {counts[OutputStatus.UNCHANGED]} unchanged, "
        f"{counts[OutputStatus.RENAMED]} renamed, {counts[OutputStatus.TOO_LONG]} too long"
    )
    return 0


def cmd_apply(args, home: AppHome) -> int:
    """Handle apply command"""
    snapshot = compute_outputs(home)
    if not snapshot.entries:
        print("No input images found")
        return 0

    options = OutputOptions(
        skip_too_long=args.skip_too_long,
        overwrite=args.overwrite,
        dry_run=args.dry_run,
    )
    plan = plan_outputs(snapshot.entries, options)

    if plan.errors:
        print("Errors:")
        for err in plan.errors:
            print(f"  - {err}")
        return 1

    if not plan.ops:
        print("Nothing to write")
        return 0

    print(f"Will write {plan.total_count} files:")
    print("-" * 80)
    for op in plan.ops[:PREVIEW_LIMIT]:
        note = f" ({op.note})" if op.note else ""
        print(f"  {op.src.name:<40} -> {op.dst}{note}")
    if len(plan.ops) > PREVIEW_LIMIT:
        print(f"  ... and {len(plan.ops) - PREVIEW_LIMIT} more operations")
    print("-" * 80)

    existing = plan.existing_count
    if existing:
        action = "overwritten" if args.overwrite else "skipped (use --overwrite to replace them)"
        print(f"{existing} outputs already exist and will be {action}")

    if plan.warnings:
        print("Warnings:")
        for warn in plan.warnings:
            print(f"  - {warn}")

    if args.dry_run:
        print("\n[Preview mode] Will not actually write")
        return 0

    if not args.yes:
        confirm = input("\nConfirm execution? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    print("\nWriting...")
    log_dir = Path(args.log_dir) if args.log_dir else None
    result = execute_plan(plan, dry_run=False, log_dir=log_dir)
    print(result.summary())

    return 0 if result.failed_count == 0 else 1


def cmd_gui(args, home: AppHome) -> int:
    """Handle gui command"""
    try:
        from ..gui import main as gui_main
    except ImportError as e:
        print("Error: Unable to start GUI, please ensure PySide6 is installed")
        print(f"Detailed error: {e}")
        print("\nInstall command: pip install PySide6")
        return 1
    return gui_main(home)


COMMANDS = {
    "max-name-length": cmd_max_name_length,
    "rule": cmd_rule,
    "input": cmd_input,
    "preview": cmd_preview,
    "apply": cmd_apply,
    "gui": cmd_gui,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug, args.log_file)

    home = AppHome.resolve()
    handler = COMMANDS.get(args.command or "gui")

    try:
        return handler(args, home)
    except (InvalidRule, ConfigurationError) as e:
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
