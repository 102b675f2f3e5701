from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List

from .errors import DirectoryNameError, ScanError
from .log import logger
from .model import DirectoryEntry, MalformedEntry, ScanResult

VIDEO_ID_RE = re.compile(r"[A-Za-z0-9_-]{11}")


def _unbracket(token: str) -> str:
    # one layer only: "[[x]]" -> "[x]"
    if token.startswith("["):
        token = token[1:]
    if token.endswith("]"):
        token = token[:-1]
    return token


def parse_directory_name(name: str) -> DirectoryEntry:
    """Decode "[YYYYMMDD] [ID] Title" into a DirectoryEntry.

    The identifier is the second whitespace-separated field with its
    brackets trimmed. The first field and the title are not interpreted.
    """
    fields = tuple(name.split())
    if len(fields) < 2:
        raise DirectoryNameError(name, "expected at least two fields")
    ident = _unbracket(fields[1])
    if not ident:
        raise DirectoryNameError(name, "empty identifier field")
    return DirectoryEntry(name=name, id=ident, fields=fields)


def looks_like_video_id(value: str) -> bool:
    return VIDEO_ID_RE.fullmatch(value) is not None


def scan_directories(root: Path, *, check_ids: bool = False) -> ScanResult:
    if not root.exists():
        raise ScanError(f"Directory does not exist: {root}")
    if not root.is_dir():
        raise ScanError(f"Not a directory: {root}")

    names: List[str] = []
    try:
        with os.scandir(root) as it:
            for entry in it:
                # symlinks to folders are not counted
                if entry.is_dir(follow_symlinks=False):
                    names.append(entry.name)
    except OSError as e:
        raise ScanError(f"Cannot read directory {root}: {e}") from e
    names.sort()

    entries: List[DirectoryEntry] = []
    malformed: List[MalformedEntry] = []
    suspicious: List[DirectoryEntry] = []
    for name in names:
        try:
            de = parse_directory_name(name)
        except DirectoryNameError as e:
            logger.warning("skipping folder {}", e)
            malformed.append(MalformedEntry(name=e.name, reason=e.reason))
            continue
        if check_ids and not looks_like_video_id(de.id):
            logger.warning("folder {!r}: {!r} does not look like a video id", name, de.id)
            suspicious.append(de)
        entries.append(de)

    logger.debug(
        "scan: {} folders under {}, {} malformed", len(names), root, len(malformed)
    )
    return ScanResult(
        root=root,
        entries=tuple(entries),
        malformed=tuple(malformed),
        suspicious=tuple(suspicious),
    )
