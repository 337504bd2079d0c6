"""Tests for command synthesis."""

from bloatbuster.commands import (
    COMMANDS_PER_PACKAGE,
    build_commands,
    build_restore_commands,
    removal_commands,
    render_script,
    restore_command,
)
from bloatbuster.models import Category, DetectedPackage


def _pkg(name, selected, category=Category.GENERIC):
    return DetectedPackage(name, name, "", category, selected)


def test_removal_commands_literal_format():
    assert removal_commands("com.android.egg") == [
        "pm disable-user --user 0 com.android.egg",
        "pm clear --user 0 com.android.egg",
        "pm uninstall --user 0 com.android.egg",
    ]


def test_build_commands_only_selected_in_collection_order():
    pkgs = [
        _pkg("c.system", True, Category.SYSTEM),
        _pkg("a.skip", False),
        _pkg("b.brand", True, Category.BRAND),
    ]
    cmds = build_commands(pkgs)
    assert len(cmds) == COMMANDS_PER_PACKAGE * 2
    assert cmds[:3] == removal_commands("c.system")
    assert cmds[3:] == removal_commands("b.brand")


def test_build_commands_length_matches_selection():
    pkgs = [_pkg(f"p{i}", i % 3 == 0) for i in range(10)]
    selected = sum(1 for p in pkgs if p.selected)
    cmds = build_commands(pkgs)
    assert len(cmds) == 3 * selected
    for i in range(0, len(cmds), 3):
        assert cmds[i].startswith("pm disable-user ")
        assert cmds[i + 1].startswith("pm clear ")
        assert cmds[i + 2].startswith("pm uninstall ")


def test_build_commands_empty_selection():
    assert build_commands([_pkg("x", False)]) == []
    assert render_script([]) == ""


def test_restore_commands():
    assert restore_command("com.x") == "cmd package install-existing --user 0 com.x"
    assert build_restore_commands([_pkg("a", True), _pkg("b", False)]) == [
        "cmd package install-existing --user 0 a"
    ]


def test_render_script_joins_with_trailing_newline():
    assert render_script(["one", "two"]) == "one\ntwo\n"
