from __future__ import annotations
from textual.widgets import Markdown

HELP_TEXT = (
    "## Getting the package list\n"
    "1. Enable *USB debugging* in Developer options\n"
    "2. Run `adb shell pm list packages`\n"
    "3. Paste the whole output into the Input tab and press **Detect**\n"
    "\n"
    "Wireless: `adb pair IP:PORT 123456` then `adb connect IP:PORT` "
    "(older devices: `adb tcpip 5555` and `adb connect IP:5555`).\n"
    "\n"
    "## Keys\n"
    "- `F1` Help · `F2` Input · `F3` Packages · `F4` Commands\n"
    "- `Ctrl+D` Detect\n"
    "- `Space` Toggle package · `Enter` Package info\n"
    "- `+` / `-` Select / clear the highlighted group\n"
    "- `Ctrl+A` Select all · `Ctrl+N` Clear all\n"
    "- `Ctrl+Z` Undo · `Ctrl+Y` Redo\n"
    "\n"
    "## Safety ratings\n"
    "- **SAFE**: bloatware, pre-installed apps, optional services. "
    "Can be removed without affecting core device functionality.\n"
    "- **CAUTION**: services that enhance the device but aren't critical. "
    "Removal may affect specific features such as emergency alerts or biometrics.\n"
    "- **RISKY**: core system services (phone, System UI, network, Bluetooth, storage). "
    "Removal can make the device unstable or unusable. Advanced users only.\n"
    "\n"
    "Start with SAFE packages. Research CAUTION packages first. Avoid RISKY ones.\n"
)

async def build(app, pane):
    await app.mount_topcard(pane, "Help", "Workflow, keys & safety ratings", "")
    await pane.mount(Markdown(HELP_TEXT, classes="infobox"))
