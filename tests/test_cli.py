"""Tests for the command-line interface."""

import json
import logging

import pytest

from imgrename.cli import create_parser, main
from imgrename.core import load_rules


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put the original handlers back"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr().out


class TestParser:
    """Tests for create_parser."""

    def test_rule_add_flags(self):
        args = create_parser().parse_args(["rule", "add", "Pack", "-i", "-l"])

        assert args.command == "rule"
        assert args.action == "add"
        assert args.find == "Pack"
        assert args.replace == ""
        assert args.case_insensitive is True
        assert args.only_when_too_long is True

    def test_subcommand_action_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["rule"])


class TestMaxNameLength:
    """Tests for the max-name-length command."""

    def test_show_default(self, capsys, home):
        code, out = run(capsys, "max-name-length", "show")

        assert code == 0
        assert "Max name length: 50" in out
        assert home.file_path("max_name_length.txt").read_text() == "50"

    def test_set_then_show(self, capsys):
        run(capsys, "max-name-length", "set", "30")

        _, out = run(capsys, "max-name-length", "show")

        assert "Max name length: 30" in out

    def test_env_overrides_file(self, capsys, monkeypatch):
        run(capsys, "max-name-length", "set", "30")
        monkeypatch.setenv("IMGRENAME_MAX_NAME_LENGTH", "12")

        _, out = run(capsys, "max-name-length", "show")

        assert "Max name length: 12" in out

    def test_reset(self, capsys):
        run(capsys, "max-name-length", "set", "30")

        _, out = run(capsys, "max-name-length", "reset")

        assert "Reset max name length to default: 50" in out

    @pytest.mark.parametrize("value", ["0", "-3", "abc"])
    def test_set_invalid(self, capsys, home, value):
        code, out = run(capsys, "max-name-length", "set", value)

        assert code == 1
        assert out.startswith("Error:")
        assert not home.file_path("max_name_length.txt").exists()


class TestRuleCommand:
    """Tests for the rule command."""

    def test_list_empty(self, capsys):
        _, out = run(capsys, "rule", "list")

        assert "No rename rules" in out

    def test_add_and_list(self, capsys, home):
        run(capsys, "rule", "add", "_final")
        code, out = run(capsys, "rule", "add", "Pack", "Box", "-i")

        assert code == 0
        assert out.startswith("Added rule 2:")

        _, out = run(capsys, "rule", "list")
        assert out.splitlines() == [
            '1. "_final" -> ""',
            '2. "Pack" -> "Box" [case-insensitive]',
        ]
        assert [r.find for r in load_rules(home)] == ["_final", "Pack"]

    def test_add_empty_find_rejected(self, capsys, home):
        code, out = run(capsys, "rule", "add", "")

        assert code == 1
        assert out.startswith("Error:")
        assert load_rules(home) == []

    def test_move_and_remove(self, capsys, home):
        for find in ("a", "b", "c"):
            run(capsys, "rule", "add", find)

        run(capsys, "rule", "move", "3", "1")
        assert [r.find for r in load_rules(home)] == ["c", "a", "b"]

        _, out = run(capsys, "rule", "remove", "2")
        assert out.startswith("Removed rule 2:")
        assert [r.find for r in load_rules(home)] == ["c", "b"]

    @pytest.mark.parametrize("argv", [["remove", "4"], ["remove", "0"], ["move", "1", "9"]])
    def test_bad_index(self, capsys, argv):
        run(capsys, "rule", "add", "a")

        code, out = run(capsys, "rule", *argv)

        assert code == 1
        assert out.startswith("Error:")

    def test_clear(self, capsys, home):
        run(capsys, "rule", "add", "a")
        run(capsys, "rule", "add", "b")

        _, out = run(capsys, "rule", "clear")

        assert "Removed 2 rules" in out
        assert load_rules(home) == []

    def test_corrupt_rules_file(self, capsys, home):
        home.ensure_dir()
        home.file_path("rename_rules.json").write_text("{not json", encoding="utf-8")

        code, out = run(capsys, "rule", "list")

        assert code == 1
        assert out.startswith("Error:")


class TestInputCommand:
    """Tests for the input command."""

    def test_add_list_remove(self, capsys, photo_root):
        resolved = photo_root.resolve()

        _, out = run(capsys, "input", "add", str(photo_root))
        assert f"Added: {resolved}" in out

        _, out = run(capsys, "input", "add", str(photo_root))
        assert "No new paths matched" in out

        _, out = run(capsys, "input", "list")
        assert out.splitlines() == [str(resolved)]

        _, out = run(capsys, "input", "remove", str(photo_root))
        assert f"Removed: {resolved}" in out

        _, out = run(capsys, "input", "list")
        assert "No input paths" in out

    def test_add_glob(self, capsys, home, photo_root):
        run(capsys, "input", "add", str(photo_root / "*.png"))

        _, out = run(capsys, "input", "list")

        assert out.splitlines() == [str((photo_root / "MyPackBox.png").resolve())]

    def test_remove_path_gone_from_disk(self, capsys, tmp_path):
        gone = tmp_path / "gone"
        gone.mkdir()
        run(capsys, "input", "add", str(gone))
        gone.rmdir()

        _, out = run(capsys, "input", "remove", str(gone))

        assert "Removed:" in out

    def test_clear(self, capsys, photo_root):
        run(capsys, "input", "add", str(photo_root / "2023" / "*"))

        _, out = run(capsys, "input", "clear")

        assert "Removed 2 input paths" in out


class TestPreviewAndApply:
    """Tests for the preview and apply commands."""

    @pytest.fixture
    def configured(self, capsys, photo_root):
        run(capsys, "input", "add", str(photo_root))
        run(capsys, "rule", "add", "vintage_", "-l")
        run(capsys, "max-name-length", "set", "30")
        return photo_root

    def test_preview_no_inputs(self, capsys):
        _, out = run(capsys, "preview")

        assert "No input images found" in out

    def test_preview_statuses(self, capsys, configured):
        code, out = run(capsys, "preview")

        assert code == 0
        assert "Max name length: 30" in out
        assert str(configured.resolve().with_name("photos-output")) in out
        assert (
            "! photo_album_collection_12345.jpg (32)"
            "  <- vintage_photo_album_collection_12345.jpg"
        ) in out
        assert "4 files: 3 unchanged, 0 renamed, 1 too long" in out

    def test_preview_length_override(self, capsys, configured):
        _, out = run(capsys, "preview", "-m", "50")

        assert "vintage_photo_album_collection_12345.jpg (40)" in out
        assert "4 files: 4 unchanged, 0 renamed, 0 too long" in out

    def test_preview_only_changed(self, capsys, configured):
        run(capsys, "rule", "add", "_final")

        _, out = run(capsys, "preview", "--only-changed")

        assert "MyPackBox.png" not in out
        assert "* beach.JPG" in out
        assert "4 files: 1 unchanged, 2 renamed, 1 too long" in out

    def test_apply_dry_run_writes_nothing(self, capsys, configured):
        code, out = run(capsys, "apply", "--dry-run")

        assert code == 0
        assert "Will write 4 files:" in out
        assert "[Preview mode]" in out
        assert not configured.resolve().with_name("photos-output").exists()

    def test_apply_yes_writes_copies(self, capsys, configured, tmp_path):
        code, out = run(capsys, "apply", "--yes", "--log-dir", str(tmp_path / "logs"))

        out_root = configured.resolve().with_name("photos-output")
        assert code == 0
        assert "Written: 4" in out
        assert (out_root / "photo_album_collection_12345.jpg").exists()
        assert (out_root / "2023" / "summer" / "sunset_final.jpeg").exists()
        assert (configured / "vintage_photo_album_collection_12345.jpg").exists()

        (log_file,) = (tmp_path / "logs").glob("*.json")
        assert json.loads(log_file.read_text(encoding="utf-8"))["success_count"] == 4

    def test_apply_twice_skips_existing_outputs(self, capsys, configured):
        out_root = configured.resolve().with_name("photos-output")
        run(capsys, "apply", "--yes")
        first = sorted(p.relative_to(out_root).as_posix() for p in out_root.rglob("*.*"))

        code, out = run(capsys, "apply", "--yes")
        second = sorted(p.relative_to(out_root).as_posix() for p in out_root.rglob("*.*"))

        assert code == 0
        assert "4 outputs already exist and will be skipped" in out
        assert "Written: 0" in out
        assert "Skipped: 4" in out
        assert first == second
        assert not any("_1." in name for name in second)

    def test_apply_overwrite_replaces_existing_outputs(self, capsys, configured):
        out_root = configured.resolve().with_name("photos-output")
        run(capsys, "apply", "--yes")
        (out_root / "MyPackBox.png").write_bytes(b"edited")

        _, out = run(capsys, "apply", "--yes", "--overwrite")

        assert "4 outputs already exist and will be overwritten" in out
        assert "Written: 4" in out
        assert (out_root / "MyPackBox.png").read_bytes() == b"data-MyPackBox.png"

    def test_apply_skip_too_long(self, capsys, configured):
        _, out = run(capsys, "apply", "--yes", "--skip-too-long")

        assert "Written: 3" in out
        assert "Warnings:" in out

    def test_apply_cancelled(self, capsys, configured, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        _, out = run(capsys, "apply")

        assert "Cancelled" in out
        assert not configured.resolve().with_name("photos-output").exists()

    def test_rules_disabled_in_settings(self, capsys, configured, home):
        home.file_path("settings.json").write_text(json.dumps({"rules_enabled": False}), encoding="utf-8")

        _, out = run(capsys, "preview")

        assert "4 files: 3 unchanged, 0 renamed, 1 too long" in out
        assert "vintage_photo_album_collection_12345.jpg (40)" in out
