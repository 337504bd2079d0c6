from __future__ import annotations
from textual.containers import Horizontal
from textual.widgets import Button, Static, TextArea

from ..errors import DetectionError, DetectionFailedError
from ..log import logger

PLACEHOLDER = (
    "package:android\n"
    "package:com.android.systemui\n"
    "package:com.google.android.gms\n"
    "package:com.samsung.android.bixby.service\n"
    "package:com.miui.analytics\n"
)

async def build(app, pane):
    await app.mount_topcard(
        pane,
        "Paste Package List",
        "Paste the complete output of: adb shell pm list packages",
        "Ctrl+D Detect · F3 Packages · F4 Commands",
    )
    await pane.mount(TextArea(app.initial_text, id="paste"))
    await pane.mount(
        Horizontal(
            Button("Detect Bloatware", id="btn_detect", variant="success"),
            Button("Example", id="btn_paste_example", variant="primary"),
            Button("Clear", id="btn_paste_clear", variant="warning"),
            classes="toolbar",
        )
    )
    await pane.mount(Static("", id="input_error", classes="errorbox", markup=False))
    await pane.mount(Static("", id="input_summary", classes="infobox"))
    show_error(app, "")
    refresh(app)

def show_error(app, msg: str) -> None:
    box = app.query_one("#input_error", Static)
    box.update(msg)
    box.styles.display = "block" if msg else "none"

def refresh(app):
    s = app.session.summary
    box = app.query_one("#input_summary", Static)
    if not s.total:
        box.update("[b]Detection Summary[/b]\n\nNothing detected yet.")
        return
    box.update(
        "[b]Detection Summary[/b]\n\n"
        f"Total: {s.total}   Bloatware: {s.bloatware}   "
        f"Suspicious: {s.suspicious}   Safe: {s.system}   Selected: {s.selected}"
    )

def detect(app) -> None:
    text = app.query_one("#paste", TextArea).text
    if app.session.has_manual_changes:
        edited = app.session.edited_packages()
        app.confirm(
            "Detect again?",
            "Detection resets every selection to its default. "
            f"{len(edited)} package(s) differ from the defaults now:",
            lambda: _run_detect(app, text),
            details=[f"{'+' if p.selected else '-'} {p.package_name}" for p in edited],
            yes_label="Detect again",
        )
        return
    _run_detect(app, text)

def _failed(app, err: DetectionFailedError) -> None:
    show_error(app, str(err))
    app.show_failure(err)
    app.set_last("Detection failed")

def _run_detect(app, text: str) -> None:
    try:
        app.session.detect(text)
    except DetectionFailedError as e:
        _failed(app, e)
        return
    except DetectionError as e:
        logger.info("detection rejected: %s", e)
        show_error(app, str(e))
        app.set_last("Detection failed")
        return
    show_error(app, "")
    app.group_idx = 0
    app.search_terms.clear()
    try:
        app.refresh_views()
    except Exception as e:
        logger.exception("showing detection results failed")
        _failed(app, DetectionFailedError(e))
        return
    app.set_last(f"Detected {len(app.session.packages)} packages")
    app._go("tab_packages")

async def on_button(app, bid: str) -> bool:
    if bid == "btn_detect":
        detect(app)
        return True
    if bid == "btn_paste_example":
        app.query_one("#paste", TextArea).load_text(PLACEHOLDER)
        return True
    if bid == "btn_paste_clear":
        app.query_one("#paste", TextArea).load_text("")
        show_error(app, "")
        return True
    return False
