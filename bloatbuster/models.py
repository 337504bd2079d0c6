from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Mapping, Optional

class Category(str, Enum):
    BRAND = "brand"
    CHIPSET = "chipset"
    GENERIC = "generic"
    SUSPICIOUS = "suspicious"
    SYSTEM = "system"

class SafetyRating(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    RISKY = "risky"

    @classmethod
    def parse(cls, value: object) -> Optional["SafetyRating"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None

@dataclass(frozen=True)
class BloatwareEntry:
    app_id: str
    app_name: str = ""
    description: str = ""

@dataclass(frozen=True)
class PackageMetadata:
    app_name: str = ""
    description: str = ""
    safety_rating: Optional[SafetyRating] = None
    removal_impact: str = ""
    category: str = ""  # free text, curated upstream

@dataclass(frozen=True)
class ReferenceDatabase:
    recognised_packages: FrozenSet[str] = frozenset()
    bloatware: Mapping[str, BloatwareEntry] = field(default_factory=dict)
    metadata: Mapping[str, PackageMetadata] = field(default_factory=dict)

    def is_recognised(self, pkg: str) -> bool:
        return pkg in self.recognised_packages

    def is_bloatware(self, pkg: str) -> bool:
        return pkg in self.bloatware

    def bloatware_entry(self, pkg: str) -> Optional[BloatwareEntry]:
        return self.bloatware.get(pkg)

    def metadata_for(self, pkg: str) -> Optional[PackageMetadata]:
        return self.metadata.get(pkg)

@dataclass(frozen=True)
class DetectedPackage:
    package_name: str
    app_name: str
    description: str
    category: Category
    selected: bool
    safety_rating: Optional[SafetyRating] = None
    removal_impact: Optional[str] = None
    package_category: Optional[str] = None
