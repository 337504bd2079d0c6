from __future__ import annotations
from textual.widgets import Static

from ..commands import COMMANDS_PER_PACKAGE, build_restore_commands, render_script

WARNING = (
    "[b]Critical Safety Warning[/b]\n"
    "Removing system packages can affect device stability. Before proceeding:\n"
    "  • Create a complete backup of your device\n"
    "  • Research packages you're unsure about\n"
    "  • Start with a few packages to test\n"
    "  • Packages can be reinstalled if needed"
)

HOW_TO = (
    "[b]How to Execute[/b]\n"
    "  1. Connect your device via USB\n"
    "  2. Open a terminal and run: adb shell\n"
    "  3. Paste all commands at once\n"
    "  4. Wait for completion (1-2 minutes)\n"
    "  5. Exit the shell: exit\n"
    "  6. Disconnect USB and reboot your device from the phone"
)

async def build(app, pane):
    await app.mount_topcard(pane, "ADB Commands", "Run inside an adb shell session. Nothing is executed from here.", "")
    await pane.mount(Static("", id="cmd_head", classes="infobox"))
    await pane.mount(Static(WARNING, classes="errorbox"))
    await pane.mount(Static("", id="cmd_out", classes="codebox", markup=False))
    await pane.mount(Static(HOW_TO, classes="infobox"))
    await pane.mount(Static("", id="cmd_restore", classes="codebox", markup=False))
    refresh(app)

def refresh(app):
    cmds = app.session.commands
    head = app.query_one("#cmd_head", Static)
    out = app.query_one("#cmd_out", Static)
    restore = app.query_one("#cmd_restore", Static)
    if not cmds:
        head.update("[b]No packages selected[/b]\n\nSelect packages in the Packages tab (F3).")
        out.update("")
        restore.update("")
        return
    pkgs = len(cmds) // COMMANDS_PER_PACKAGE
    head.update(f"[b]ADB Commands Ready[/b]\n{pkgs} packages • {len(cmds)} commands")
    out.update(render_script(cmds))
    restore.update(
        "Quick recovery: need to restore a package?\n\n"
        + render_script(build_restore_commands(app.session.packages))
    )
