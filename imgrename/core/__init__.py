"""
core - imgrename Core Module

Provides the rename rule engine, output classification, preview pipeline,
pane routing and persisted configuration.
"""

from .errors import (
    RenameToolError,
    InvalidRule,
    ConfigurationError,
)

from .models_rules import (
    RenameRule,
    RuleSet,
    validate_max_name_length,
)

from .rename_engine import (
    OutputStatus,
    apply_rules,
    classify,
)

from .models_fs import (
    InputEntry,
    OutputEntry,
    CopyOp,
    OutputPlan,
    OutputOptions,
    output_dir_for,
    output_path_for,
)

from .scan_files import (
    discover_inputs,
    scan_recursive,
    is_image_file,
)

from .output_preview import (
    build_output_entries,
    build_output_tree,
    group_by_root,
    OutputSnapshot,
    OutputTreeNode,
    PreviewCache,
)

from .pane_routing import (
    ClickBehavior,
    DEFAULT_CLICK_BEHAVIOR,
    Pane,
    PaneDecision,
    PaneKind,
    PaneRouter,
    apply_decision,
    route_click,
)

from .app_home import AppHome

from .settings import (
    DEFAULT_MAX_NAME_LENGTH,
    GuiSettings,
    load_max_name_length,
    save_max_name_length,
    reset_max_name_length,
    load_gui_settings,
    save_gui_settings,
)

from .rule_store import (
    load_rules,
    save_rules,
    load_rule_set,
)

from .inputs import (
    load_inputs,
    add_from_glob,
    remove_from_glob,
    clear_inputs,
)

from .plan_output import (
    plan_outputs,
    validate_plan,
    ConflictResolver,
)

from .exec_output import (
    execute_plan,
    OutputResult,
)

__all__ = [
    # Errors
    "RenameToolError",
    "InvalidRule",
    "ConfigurationError",

    # Rules
    "RenameRule",
    "RuleSet",
    "validate_max_name_length",

    # Engine
    "OutputStatus",
    "apply_rules",
    "classify",

    # File models
    "InputEntry",
    "OutputEntry",
    "CopyOp",
    "OutputPlan",
    "OutputOptions",
    "output_dir_for",
    "output_path_for",

    # Discovery
    "discover_inputs",
    "scan_recursive",
    "is_image_file",

    # Preview
    "build_output_entries",
    "build_output_tree",
    "group_by_root",
    "OutputSnapshot",
    "OutputTreeNode",
    "PreviewCache",

    # Pane routing
    "ClickBehavior",
    "DEFAULT_CLICK_BEHAVIOR",
    "Pane",
    "PaneDecision",
    "PaneKind",
    "PaneRouter",
    "apply_decision",
    "route_click",

    # Configuration
    "AppHome",
    "DEFAULT_MAX_NAME_LENGTH",
    "GuiSettings",
    "load_max_name_length",
    "save_max_name_length",
    "reset_max_name_length",
    "load_gui_settings",
    "save_gui_settings",
    "load_rules",
    "save_rules",
    "load_rule_set",
    "load_inputs",
    "add_from_glob",
    "remove_from_glob",
    "clear_inputs",

    # Output
    "plan_outputs",
    "validate_plan",
    "ConflictResolver",
    "execute_plan",
    "OutputResult",
]
