from __future__ import annotations
from dataclasses import replace
from typing import Any, Callable, Collection, Dict, List, Optional, Tuple

from .classify import DetectionSummary, detect_bloatware, group_by_category, summarise
from .commands import build_commands
from .errors import BlankInputError, DetectionFailedError, NoPackagesFoundError
from .log import logger
from .models import Category, DetectedPackage, ReferenceDatabase
from .normalize import is_blank, parse_package_list

Packages = Tuple[DetectedPackage, ...]
Transition = Callable[..., Packages]

# ---------- pure transitions ----------
# each returns the very same tuple when nothing changes

def set_selected(packages: Packages, names: Collection[str], selected: bool) -> Packages:
    targets = set(names)
    if not any(p.package_name in targets and p.selected != selected for p in packages):
        return packages
    return tuple(
        replace(p, selected=selected) if p.package_name in targets and p.selected != selected else p
        for p in packages
    )

def toggle_package(packages: Packages, name: str) -> Packages:
    for p in packages:
        if p.package_name == name:
            return set_selected(packages, [name], not p.selected)
    return packages

def set_category_selected(packages: Packages, category: Category, selected: bool) -> Packages:
    names = [p.package_name for p in packages if p.category == category]
    return set_selected(packages, names, selected)

def select_all(packages: Packages) -> Packages:
    return set_selected(packages, [p.package_name for p in packages], True)

def deselect_all(packages: Packages) -> Packages:
    return set_selected(packages, [p.package_name for p in packages], False)

# ---------- session ----------

class DetectionSession:
    """
    Owns the one DetectedPackage collection of an interactive run.
    Selection changes go through pure transitions, keeping an undo trail.
    """

    def __init__(self, database: ReferenceDatabase):
        self.database = database
        self.packages: Packages = ()
        self._undo: List[Packages] = []
        self._redo: List[Packages] = []

    def detect(self, raw_text: str) -> Packages:
        if is_blank(raw_text):
            raise BlankInputError()
        names = parse_package_list(raw_text)
        if not names:
            raise NoPackagesFoundError()
        try:
            detected = tuple(detect_bloatware(names, self.database))
        except Exception as e:
            logger.exception("detection failed")
            raise DetectionFailedError(e) from e
        self.packages = detected
        self._undo.clear()
        self._redo.clear()
        logger.info("detected %d packages (%d input lines)", len(detected), len(names))
        return detected

    def apply(self, transition: Transition, *args: Any) -> bool:
        new = transition(self.packages, *args)
        if new is self.packages:
            return False
        self._undo.append(self.packages)
        self._redo.clear()
        self.packages = new
        return True

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self.packages)
        self.packages = self._undo.pop()
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self.packages)
        self.packages = self._redo.pop()
        return True

    @property
    def commands(self) -> List[str]:
        return build_commands(self.packages)

    @property
    def groups(self) -> Dict[str, List[DetectedPackage]]:
        return group_by_category(self.packages)

    @property
    def summary(self) -> DetectionSummary:
        return summarise(self.packages)

    def find(self, name: str) -> Optional[DetectedPackage]:
        for p in self.packages:
            if p.package_name == name:
                return p
        return None

    @property
    def has_manual_changes(self) -> bool:
        return bool(self._undo)

    def edited_packages(self) -> List[DetectedPackage]:
        """Packages whose selection differs from what detection chose."""
        if not self._undo:
            return []
        baseline = {p.package_name: p.selected for p in self._undo[0]}
        return [p for p in self.packages if baseline.get(p.package_name) != p.selected]
