from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import ConfigError


class Category(Enum):
    ALL = "all"
    SHORTS = "shorts"
    VIDEO = "video"
    LIVESTREAM = "livestream"
    MEMBERSHIP = "membership"

    @property
    def suffix(self) -> str:
        return _CATEGORY_SUFFIX[self]

    def matches(self, playlist_title: str) -> bool:
        if self is Category.ALL:
            return True
        return playlist_title.endswith(self.suffix)

    @classmethod
    def parse(cls, value: str) -> "Category":
        key = str(value).strip().lower()
        for c in cls:
            if c.value == key:
                return c
        valid = ", ".join(c.value for c in cls)
        raise ConfigError(f"Invalid category: {value!r} (expected one of: {valid})")


# yt-dlp names channel tabs "<channel> - Videos", "<channel> - Shorts", ...
_CATEGORY_SUFFIX: Dict[Category, str] = {
    Category.ALL: "",
    Category.SHORTS: "Shorts",
    Category.VIDEO: "Videos",
    Category.LIVESTREAM: "Live",
    Category.MEMBERSHIP: "Membership",
}


@dataclass(frozen=True)
class MetadataRecord:
    id: str
    title: str = ""
    upload_date: str = ""  # YYYYMMDD, sorts as a plain string
    playlist_title: str = ""


@dataclass(frozen=True)
class SkippedLine:
    line_no: int
    reason: str


@dataclass(frozen=True)
class CatalogLoad:
    records: Tuple[MetadataRecord, ...]
    skipped: Tuple[SkippedLine, ...] = ()
    filtered_out: int = 0

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    id: str
    fields: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MalformedEntry:
    name: str
    reason: str


@dataclass(frozen=True)
class ScanResult:
    root: Path
    entries: Tuple[DirectoryEntry, ...] = ()
    malformed: Tuple[MalformedEntry, ...] = ()
    suspicious: Tuple[DirectoryEntry, ...] = ()

    @property
    def ids(self) -> List[str]:
        return [e.id for e in self.entries]

    @property
    def duplicate_ids(self) -> List[str]:
        seen: Dict[str, int] = {}
        for e in self.entries:
            seen[e.id] = seen.get(e.id, 0) + 1
        return [k for k, n in seen.items() if n > 1]


@dataclass(frozen=True)
class ReconciliationResult:
    missing: Tuple[MetadataRecord, ...]
    extra: Tuple[str, ...]
    scanned_count: int
    catalog_count: int
    matched_count: int

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def missing_ids(self) -> List[str]:
        return list(dict.fromkeys(r.id for r in self.missing))

    @property
    def complete(self) -> bool:
        return not self.missing


@dataclass(frozen=True)
class CheckConfig:
    category: Category = Category.ALL
    dump_to_file: bool = False
    dump_path: Path = Path("missing.txt")
    strict: bool = False
    check_ids: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    file: Optional[Path] = None


@dataclass(frozen=True)
class ReconConfig:
    check: CheckConfig = field(default_factory=CheckConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
