from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .log import logger
from .models import Category, DetectedPackage, PackageMetadata, ReferenceDatabase

RECOGNISED_DESCRIPTION = (
    "Recognised as a legitimate application. Not identified as bloatware, "
    "but can be removed if desired."
)
UNRECOGNISED_DESCRIPTION = (
    "Unrecognised package - not in our verified database. "
    "Research carefully before removing."
)

BRAND_PREFIXES: Tuple[str, ...] = (
    "com.samsung.", "com.skms.", "com.sds.", "com.sec.",
    "com.xiaomi.", "com.miui.", "com.mi.",
    "com.huawei.", "com.oppo.", "com.vivo.", "com.oneplus.",
    "com.google.", "com.lge.", "com.motorola.", "com.asus.",
    "com.sony.", "com.nokia.", "com.facebook.", "com.hihonor.",
)

CHIPSET_PREFIXES: Tuple[str, ...] = (
    "com.qualcomm.", "com.qti.", "vendor.qti.", "com.mediatek.", "org.codeaurora.",
)

# evaluated top to bottom, first match wins: brand rules precede chipset rules
PREFIX_RULES: Tuple[Tuple[str, Category], ...] = tuple(
    [(p, Category.BRAND) for p in BRAND_PREFIXES]
    + [(p, Category.CHIPSET) for p in CHIPSET_PREFIXES]
)

CATEGORY_LABELS: Dict[Category, str] = {
    Category.BRAND: "Brand-Specific Bloatware",
    Category.CHIPSET: "Chipset-Specific Bloatware",
    Category.GENERIC: "Generic Bloatware",
    Category.SUSPICIOUS: "Suspicious Packages",
    Category.SYSTEM: "Other Installed Apps",
}

CATEGORY_PRIORITY: Dict[Category, int] = {
    Category.BRAND: 0,
    Category.CHIPSET: 1,
    Category.GENERIC: 2,
    Category.SUSPICIOUS: 3,
    Category.SYSTEM: 4,
}
DEFAULT_CATEGORY_PRIORITY = 999

def categorise_package(name: str, rules: Sequence[Tuple[str, Category]] = PREFIX_RULES) -> Category:
    lower = name.lower()
    for prefix, cat in rules:
        if lower.startswith(prefix):
            return cat
    return Category.GENERIC

def _classify_one(pkg: str, db: ReferenceDatabase) -> DetectedPackage:
    meta: Optional[PackageMetadata] = db.metadata_for(pkg)
    m_name = meta.app_name if meta else ""
    m_desc = meta.description if meta else ""

    if db.is_recognised(pkg):
        cat, selected = Category.SYSTEM, False
        app_name = m_name or pkg
        desc = m_desc or RECOGNISED_DESCRIPTION
    elif db.is_bloatware(pkg):
        entry = db.bloatware_entry(pkg)
        cat, selected = categorise_package(pkg), True
        app_name = m_name or (entry.app_name if entry else "") or pkg
        desc = m_desc or (entry.description if entry else "") or ""
    else:
        cat, selected = Category.SUSPICIOUS, False
        app_name = m_name or pkg
        desc = m_desc or UNRECOGNISED_DESCRIPTION

    return DetectedPackage(
        package_name=pkg,
        app_name=app_name,
        description=desc,
        category=cat,
        selected=selected,
        safety_rating=meta.safety_rating if meta else None,
        removal_impact=(meta.removal_impact or None) if meta else None,
        package_category=(meta.category or None) if meta else None,
    )

def detect_bloatware(installed: Iterable[str], db: ReferenceDatabase) -> List[DetectedPackage]:
    """
    Classifies installed package names against the reference database.
    Only the first occurrence of each name is classified; repeats are dropped.
    """
    seen: Set[str] = set()
    out: List[DetectedPackage] = []
    for pkg in installed:
        if pkg in seen:
            continue
        seen.add(pkg)
        out.append(_classify_one(pkg, db))
    logger.debug("classified %d unique packages", len(out))
    return out

def category_priority(cat: object) -> int:
    return CATEGORY_PRIORITY.get(cat, DEFAULT_CATEGORY_PRIORITY)  # type: ignore[arg-type]

def category_label(cat: object) -> str:
    label = CATEGORY_LABELS.get(cat)  # type: ignore[arg-type]
    if label:
        return label
    return str(getattr(cat, "value", cat))

def group_by_category(packages: Iterable[DetectedPackage]) -> Dict[str, List[DetectedPackage]]:
    groups: Dict[str, List[DetectedPackage]] = {}
    # sorted() is stable, so input order survives within a group
    for p in sorted(packages, key=lambda p: category_priority(p.category)):
        groups.setdefault(category_label(p.category), []).append(p)
    return groups

def filter_packages(packages: Sequence[DetectedPackage], term: str) -> List[DetectedPackage]:
    if not term or not term.strip():
        return list(packages)
    q = term.strip().lower()
    return [
        p for p in packages
        if q in p.package_name.lower()
        or q in p.app_name.lower()
        or q in (p.description or "").lower()
    ]

@dataclass(frozen=True)
class DetectionSummary:
    total: int = 0
    bloatware: int = 0
    suspicious: int = 0
    system: int = 0
    selected: int = 0
    selected_by_group: Dict[str, int] = field(default_factory=dict)

def summarise(packages: Sequence[DetectedPackage]) -> DetectionSummary:
    bloat = susp = system = selected = 0
    by_group: Dict[str, int] = {}
    for p in packages:
        label = category_label(p.category)
        by_group.setdefault(label, 0)
        if p.selected:
            selected += 1
            by_group[label] += 1
        if p.category == Category.SUSPICIOUS:
            susp += 1
        elif p.category == Category.SYSTEM:
            system += 1
        else:
            bloat += 1
    return DetectionSummary(
        total=len(packages),
        bloatware=bloat,
        suspicious=susp,
        system=system,
        selected=selected,
        selected_by_group=by_group,
    )
