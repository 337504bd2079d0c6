"""Tests for selection transitions and the detection session."""

import pytest

from bloatbuster.errors import BlankInputError, DetectionFailedError, NoPackagesFoundError
from bloatbuster.models import Category
from bloatbuster.session import (
    DetectionSession,
    deselect_all,
    select_all,
    set_category_selected,
    set_selected,
    toggle_package,
)
from bloatbuster.classify import detect_bloatware


@pytest.fixture
def packages(database):
    return tuple(
        detect_bloatware(
            [
                "com.android.egg",
                "com.unknown.test123",
                "com.android.chrome",
                "com.mediatek.engineermode",
                "com.samsung.android.game.gos",
            ],
            database,
        )
    )


def _selected(packages):
    return {p.package_name for p in packages if p.selected}


def test_toggle_package_flips_only_target(packages):
    out = toggle_package(packages, "com.android.chrome")
    assert _selected(out) == _selected(packages) | {"com.android.chrome"}
    for before, after in zip(packages, out):
        if before.package_name != "com.android.chrome":
            assert after is before


def test_toggle_unknown_name_is_noop(packages):
    assert toggle_package(packages, "not.there") is packages


def test_set_selected_noop_returns_same_tuple(packages):
    assert set_selected(packages, ["com.android.egg"], True) is packages
    assert set_selected(packages, [], False) is packages


def test_category_select_then_deselect(packages):
    on = set_category_selected(packages, Category.SUSPICIOUS, True)
    assert "com.unknown.test123" in _selected(on)
    off = set_category_selected(on, Category.SUSPICIOUS, False)
    assert not any(p.selected for p in off if p.category == Category.SUSPICIOUS)
    for before, after in zip(packages, off):
        if before.category != Category.SUSPICIOUS:
            assert after.selected == before.selected


def test_select_and_deselect_all(packages):
    assert all(p.selected for p in select_all(packages))
    assert not any(p.selected for p in deselect_all(packages))
    cleared = deselect_all(packages)
    assert deselect_all(cleared) is cleared


def test_transitions_leave_input_untouched(packages):
    snapshot = [p.selected for p in packages]
    select_all(packages)
    deselect_all(packages)
    assert [p.selected for p in packages] == snapshot


def test_detect_blank_input(database):
    s = DetectionSession(database)
    with pytest.raises(BlankInputError, match="paste your package list"):
        s.detect("   \n ")
    assert s.packages == ()


def test_detect_no_packages(database):
    s = DetectionSession(database)
    with pytest.raises(NoPackagesFoundError, match="No valid packages"):
        s.detect("package:\npackage:")


def test_failed_detection_keeps_previous_state(database, scenario_text):
    s = DetectionSession(database)
    s.detect(scenario_text)
    before = s.packages
    with pytest.raises(BlankInputError):
        s.detect("")
    assert s.packages is before


def test_unexpected_failure_is_wrapped(database, monkeypatch, scenario_text):
    def boom(names, db):
        raise RuntimeError("index exploded")

    monkeypatch.setattr("bloatbuster.session.detect_bloatware", boom)
    s = DetectionSession(database)
    with pytest.raises(DetectionFailedError, match="An error occurred whilst processing: index exploded") as exc:
        s.detect(scenario_text)
    assert isinstance(exc.value.cause, RuntimeError)
    assert s.packages == ()


def test_end_to_end_scenario(database, scenario_text):
    s = DetectionSession(database)
    s.detect(scenario_text)
    assert [(p.package_name, p.category, p.selected) for p in s.packages] == [
        ("com.android.egg", Category.GENERIC, True),
        ("com.unknown.test123", Category.SUSPICIOUS, False),
        ("com.android.chrome", Category.SYSTEM, False),
    ]
    assert s.apply(deselect_all)
    assert s.apply(toggle_package, "com.android.egg")
    assert s.commands == [
        "pm disable-user --user 0 com.android.egg",
        "pm clear --user 0 com.android.egg",
        "pm uninstall --user 0 com.android.egg",
    ]


def test_detect_is_idempotent_and_resets_selection(database, scenario_text):
    s = DetectionSession(database)
    first = s.detect(scenario_text)
    s.apply(select_all)
    second = s.detect(scenario_text)
    assert second == first
    assert not s.has_manual_changes


def test_apply_noop_does_not_record_history(database, scenario_text):
    s = DetectionSession(database)
    s.detect(scenario_text)
    assert s.apply(set_selected, ["com.android.egg"], True) is False
    assert not s.has_manual_changes
    assert s.undo() is False


def test_undo_redo(database, scenario_text):
    s = DetectionSession(database)
    initial = s.detect(scenario_text)
    s.apply(select_all)
    all_on = s.packages
    s.apply(toggle_package, "com.android.chrome")

    assert s.undo()
    assert s.packages is all_on
    assert s.undo()
    assert s.packages is initial
    assert s.undo() is False

    assert s.redo()
    assert s.packages is all_on
    s.apply(deselect_all)
    assert s.redo() is False


def test_commands_follow_latest_selection(database, scenario_text):
    s = DetectionSession(database)
    s.detect(scenario_text)
    assert len(s.commands) == 3
    s.apply(select_all)
    assert len(s.commands) == 9
    assert s.summary.selected == 3
    assert list(s.groups) == ["Generic Bloatware", "Suspicious Packages", "Other Installed Apps"]
    assert s.find("com.android.chrome").selected is True
    assert s.find("nope") is None


def test_edited_packages_compares_against_detection(database, scenario_text):
    s = DetectionSession(database)
    s.detect(scenario_text)
    assert s.edited_packages() == []
    s.apply(toggle_package, "com.unknown.test123")
    s.apply(toggle_package, "com.android.egg")
    assert [p.package_name for p in s.edited_packages()] == ["com.android.egg", "com.unknown.test123"]
    # toggling back leaves history but no difference
    s.apply(toggle_package, "com.android.egg")
    s.apply(toggle_package, "com.unknown.test123")
    assert s.has_manual_changes
    assert s.edited_packages() == []
