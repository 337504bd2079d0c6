from __future__ import annotations
import copy, json, os
from typing import Any, Dict, List, Optional

from .errors import DatabaseError
from .log import logger
from .models import BloatwareEntry, PackageMetadata, ReferenceDatabase, SafetyRating

DEFAULT_DATA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "packages.json")

DEFAULT_CFG: Dict[str, Any] = {
    "ui": {"title": "BloatBuster", "tagline": "Take back control of your Android"},
    "recognisedPackages": [],
    "bloatwarePackages": [],
    "metadata": {},
}

def load_json(path: str, default: Any) -> Any:
    """
    Missing or empty file -> default. Malformed JSON raises DatabaseError.
    """
    if not os.path.exists(path):
        return default
    try:
        raw = open(path, "r", encoding="utf-8").read()
    except OSError as e:
        raise DatabaseError(f"Cannot read package database {path}: {e}") from e
    if not raw.strip():
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise DatabaseError(f"Malformed package database {path}: {e}") from e

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    path = path or DEFAULT_DATA_PATH
    cfg = load_json(path, {})
    if not isinstance(cfg, dict):
        raise DatabaseError(f"Package database {path} must be a JSON object")
    for k, v in DEFAULT_CFG.items():
        cfg.setdefault(k, copy.deepcopy(v))
    return cfg

def parse_recognised(cfg: Dict[str, Any]) -> List[str]:
    out: List[str] = []
    for it in cfg.get("recognisedPackages", []) or []:
        nm = str(it).strip() if isinstance(it, str) else ""
        if not nm:
            logger.warning("skipping recognised entry %r", it)
            continue
        out.append(nm)
    return out

def parse_bloatware(cfg: Dict[str, Any]) -> Dict[str, BloatwareEntry]:
    out: Dict[str, BloatwareEntry] = {}
    for it in cfg.get("bloatwarePackages", []) or []:
        if isinstance(it, str):
            nm = it.strip()
            if nm and nm not in out:
                out[nm] = BloatwareEntry(app_id=nm)
        elif isinstance(it, dict):
            nm = str(it.get("appID", "")).strip()
            if not nm:
                logger.warning("skipping bloatware record without appID: %r", it)
                continue
            prev = out.get(nm)
            # a later record may fill in an entry that has no name or description
            if prev is None or (not prev.app_name and not prev.description):
                out[nm] = BloatwareEntry(
                    app_id=nm,
                    app_name=str(it.get("appName", "") or "").strip(),
                    description=str(it.get("description", "") or "").strip(),
                )
        else:
            logger.warning("skipping bloatware entry %r", it)
    return out

def parse_metadata(cfg: Dict[str, Any]) -> Dict[str, PackageMetadata]:
    out: Dict[str, PackageMetadata] = {}
    raw = cfg.get("metadata", {}) or {}
    if not isinstance(raw, dict):
        logger.warning("metadata section is not an object, ignoring")
        return out
    for pkg, m in raw.items():
        if not isinstance(m, dict):
            logger.warning("skipping metadata for %s", pkg)
            continue
        rating_raw = m.get("safetyRating")
        rating = SafetyRating.parse(rating_raw) if rating_raw else None
        if rating_raw and rating is None:
            logger.warning("unknown safety rating %r for %s", rating_raw, pkg)
        out[str(pkg).strip()] = PackageMetadata(
            app_name=str(m.get("appName", "") or "").strip(),
            description=str(m.get("description", "") or "").strip(),
            safety_rating=rating,
            removal_impact=str(m.get("removalImpact", "") or "").strip(),
            category=str(m.get("category", "") or "").strip(),
        )
    return out

def build_database(cfg: Dict[str, Any]) -> ReferenceDatabase:
    return ReferenceDatabase(
        recognised_packages=frozenset(parse_recognised(cfg)),
        bloatware=parse_bloatware(cfg),
        metadata=parse_metadata(cfg),
    )

def load_database(path: Optional[str] = None) -> ReferenceDatabase:
    db = build_database(load_config(path))
    logger.info(
        "loaded package database %s: %d recognised, %d bloatware, %d metadata",
        path or DEFAULT_DATA_PATH,
        len(db.recognised_packages),
        len(db.bloatware),
        len(db.metadata),
    )
    return db
