from __future__ import annotations
from textual.containers import Container, Horizontal
from textual.coordinate import Coordinate
from textual.widgets import Button, DataTable, Input, Static
from typing import List, Optional

from ..classify import filter_packages
from ..commands import restore_command
from ..models import DetectedPackage
from ..session import deselect_all, select_all, set_category_selected, toggle_package

async def build(app, pane):
    await app.mount_topcard(
        pane,
        "Detected Packages",
        "Review packages and select which ones to remove",
        "Space Toggle · Enter Info · +/- Group on/off · Ctrl+Z Undo · Ctrl+Y Redo",
    )

    cat_tbl = DataTable(id="cat_tbl")
    pkg_tbl = DataTable(id="pkg_tbl")
    app.safe_cursor_row(cat_tbl)
    app.safe_cursor_row(pkg_tbl)
    cat_tbl.add_columns("Group", "Sel")
    pkg_tbl.add_columns("Sel", "Package", "App", "Rating")

    await pane.mount(Input(placeholder="search in group…", id="pkg_search"))
    await pane.mount(
        Horizontal(
            Container(cat_tbl, id="pkg_cat"),
            Container(pkg_tbl, id="pkg_list"),
            Static("", id="pkg_info", classes="infobox", markup=False),
            id="pkg_row",
        )
    )
    await pane.mount(
        Horizontal(
            Button("Select group", id="btn_group_on", variant="success"),
            Button("Clear group", id="btn_group_off", variant="warning"),
            Button("Select all", id="btn_all_on", variant="primary"),
            Button("Clear all", id="btn_all_off", variant="warning"),
            Button("Undo", id="btn_undo"),
            Button("Redo", id="btn_redo"),
            classes="toolbar",
        )
    )

    refresh(app)

def _group_labels(app) -> List[str]:
    return list(app.session.groups.keys())

def _current_label(app) -> Optional[str]:
    labels = _group_labels(app)
    if not labels:
        return None
    app.group_idx = max(0, min(app.group_idx, len(labels) - 1))
    return labels[app.group_idx]

def _group_items(app) -> List[DetectedPackage]:
    label = _current_label(app)
    if label is None:
        return []
    items = app.session.groups.get(label, [])
    return filter_packages(items, app.search_terms.get(label, ""))

def refresh(app):
    cat_tbl = app.query_one("#cat_tbl", DataTable)
    cat_tbl.clear(columns=True)
    cat_tbl.add_columns("Group", "Sel")

    groups = app.session.groups
    if not groups:
        cat_tbl.add_row("(nothing detected yet)", "")
        _populate_pkg_tbl(app)
        _info(app, None)
        return

    counts = app.session.summary.selected_by_group
    for label, items in groups.items():
        cat_tbl.add_row(label, f"{counts.get(label, 0)}/{len(items)}", key=label)

    _current_label(app)
    try:
        cat_tbl.move_cursor(row=app.group_idx, column=0)
    except Exception:
        pass

    _sync_search(app)
    _populate_pkg_tbl(app)
    _info(app, None)

def _sync_search(app):
    label = _current_label(app)
    box = app.query_one("#pkg_search", Input)
    want = app.search_terms.get(label, "") if label else ""
    if box.value != want:
        box.value = want

def _populate_pkg_tbl(app):
    pkg_tbl = app.query_one("#pkg_tbl", DataTable)
    row = pkg_tbl.cursor_row if pkg_tbl.row_count else 0
    pkg_tbl.clear(columns=True)
    pkg_tbl.add_columns("Sel", "Package", "App", "Rating")

    for p in _group_items(app):
        sel = "✔" if p.selected else ""
        rating = p.safety_rating.value if p.safety_rating else ""
        app_name = p.app_name if p.app_name != p.package_name else ""
        pkg_tbl.add_row(sel, p.package_name, app_name[:40], rating, key=p.package_name)

    if pkg_tbl.row_count:
        try:
            pkg_tbl.move_cursor(row=min(row, pkg_tbl.row_count - 1), column=0)
        except Exception:
            pass

def _info(app, pkg: Optional[DetectedPackage]):
    box = app.query_one("#pkg_info", Static)
    if not pkg:
        box.update("Info\n\nSpace toggles the highlighted package.")
        return
    lines = [pkg.package_name]
    if pkg.app_name != pkg.package_name:
        lines.append(pkg.app_name)
    lines.append("")
    lines.append(f"Selected: {'yes' if pkg.selected else 'no'}")
    if pkg.safety_rating:
        lines.append(f"Safety: {pkg.safety_rating.value.upper()}")
    if pkg.package_category:
        lines.append(f"Category: {pkg.package_category}")
    if pkg.removal_impact:
        lines.append(f"Impact: {pkg.removal_impact}")
    if pkg.description:
        lines += ["", pkg.description]
    lines += ["", "Restore:", restore_command(pkg.package_name)]
    box.update("\n".join(lines))

def _active_pkg(app) -> Optional[DetectedPackage]:
    tbl = app.query_one("#pkg_tbl", DataTable)
    if not tbl.row_count:
        return None
    name = str(tbl.get_row_at(tbl.cursor_row)[1])
    return app.session.find(name)

def selection_changed(app, msg: str) -> None:
    refresh_counts(app)
    _populate_pkg_tbl(app)
    _info(app, _active_pkg(app))
    app.refresh_selection_views()
    app.set_last(msg)

def refresh_counts(app):
    cat_tbl = app.query_one("#cat_tbl", DataTable)
    groups = app.session.groups
    if not groups:
        return
    counts = app.session.summary.selected_by_group
    # update in place; rebuilding would move the cursor and re-fire highlights
    for i, (label, items) in enumerate(groups.items()):
        if i < cat_tbl.row_count:
            cat_tbl.update_cell_at(Coordinate(i, 1), f"{counts.get(label, 0)}/{len(items)}")

def set_group(app, selected: bool) -> None:
    label = _current_label(app)
    if label is None:
        return
    items = app.session.groups.get(label, [])
    if not items:
        return
    if app.session.apply(set_category_selected, items[0].category, selected):
        selection_changed(app, f"{label}: {'selected' if selected else 'cleared'}")
    else:
        app.set_last("No change")

def on_row_highlighted(app, event, table_id: str) -> bool:
    if table_id == "cat_tbl":
        labels = _group_labels(app)
        if not labels:
            return True
        idx = max(0, min(event.cursor_row, len(labels) - 1))
        if idx != app.group_idx:
            app.group_idx = idx
            _sync_search(app)
            _populate_pkg_tbl(app)
        return True

    if table_id == "pkg_tbl":
        _info(app, _active_pkg(app))
        return True

    return False

def on_input_changed(app, event) -> bool:
    if getattr(event.input, "id", "") != "pkg_search":
        return False
    label = _current_label(app)
    if label is None:
        return True
    if app.search_terms.get(label, "") == event.value:
        return True
    app.search_terms[label] = event.value
    _populate_pkg_tbl(app)
    return True

async def on_button(app, bid: str) -> bool:
    if bid == "btn_group_on":
        set_group(app, True)
        return True
    if bid == "btn_group_off":
        set_group(app, False)
        return True
    if bid == "btn_all_on":
        if app.session.apply(select_all):
            selection_changed(app, "All selected")
        return True
    if bid == "btn_all_off":
        if app.session.apply(deselect_all):
            selection_changed(app, "Selection cleared")
        return True
    if bid == "btn_undo":
        app.action_undo()
        return True
    if bid == "btn_redo":
        app.action_redo()
        return True
    return False

def action_toggle(app) -> bool:
    # toggles only if pkg_tbl focused
    try:
        if not app.query_one("#pkg_tbl").has_focus:
            return False
    except Exception:
        return False
    p = _active_pkg(app)
    if not p:
        return True
    app.session.apply(toggle_package, p.package_name)
    selection_changed(app, f"Toggled {p.package_name}")
    return True

def action_info(app) -> bool:
    try:
        if not app.query_one("#pkg_tbl").has_focus:
            return False
    except Exception:
        return False
    _info(app, _active_pkg(app))
    return True
