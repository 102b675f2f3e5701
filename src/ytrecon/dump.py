from __future__ import annotations

from pathlib import Path
from typing import List

from .errors import DumpError
from .model import ReconciliationResult

DEFAULT_DUMP_NAME = "missing.txt"


def write_missing(path: Path, result: ReconciliationResult) -> Path:
    """Write missing ids one per line (a yt-dlp --batch-file), replacing `path`."""
    body = "".join(f"{i}\n" for i in result.missing_ids)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(body, encoding="utf-8")
        tmp.replace(path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise DumpError(f"Cannot write {path}: {e}") from e
    return path


def read_missing(path: Path) -> List[str]:
    raw = path.read_text(encoding="utf-8")
    return [line.strip() for line in raw.splitlines() if line.strip()]
