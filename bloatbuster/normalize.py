from __future__ import annotations
from typing import List

PACKAGE_PREFIX = "package:"
BOM = "\ufeff"  # str.strip() keeps it; pasted or saved lists often lead with one

def _trim(s: str) -> str:
    return s.strip().strip(BOM).strip()

def is_blank(text: str) -> bool:
    return not _trim(text or "")

def parse_package_list(text: str) -> List[str]:
    """
    Turns pasted `pm list packages` output into package names.
    Keeps input order and duplicates; never raises.
    """
    out: List[str] = []
    for ln in (text or "").split("\n"):
        ln = _trim(ln)
        if not ln:
            continue
        if ln.startswith(PACKAGE_PREFIX):
            ln = _trim(ln[len(PACKAGE_PREFIX):])
        if ln:
            out.append(ln)
    return out
