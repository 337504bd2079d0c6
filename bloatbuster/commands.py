from __future__ import annotations
from typing import Iterable, List

from .models import DetectedPackage

USER_PROFILE = 0
COMMANDS_PER_PACKAGE = 3

def removal_commands(pkg: str, user: int = USER_PROFILE) -> List[str]:
    # order matters: disable, clear data, uninstall for the user profile
    return [
        f"pm disable-user --user {user} {pkg}",
        f"pm clear --user {user} {pkg}",
        f"pm uninstall --user {user} {pkg}",
    ]

def restore_command(pkg: str, user: int = USER_PROFILE) -> str:
    return f"cmd package install-existing --user {user} {pkg}"

def build_commands(packages: Iterable[DetectedPackage]) -> List[str]:
    out: List[str] = []
    for p in packages:
        if p.selected:
            out.extend(removal_commands(p.package_name))
    return out

def build_restore_commands(packages: Iterable[DetectedPackage]) -> List[str]:
    return [restore_command(p.package_name) for p in packages if p.selected]

def render_script(commands: List[str]) -> str:
    if not commands:
        return ""
    return "\n".join(commands) + "\n"
