from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Union

from .errors import CatalogError, CatalogLineError
from .log import logger
from .model import CatalogLoad, Category, MetadataRecord, SkippedLine
from .utils import as_text

# JSON key -> MetadataRecord field
FIELDS = {
    "id": "id",
    "title": "title",
    "upload_date": "upload_date",
    "playlist_title": "playlist_title",
}


def parse_line(text: str, line_no: int = 0) -> MetadataRecord:
    """Decode one line of a yt-dlp dump into a MetadataRecord.

    Missing keys and nulls become "". Anything else that is not a string
    raises CatalogLineError, as does a line that is not a JSON object.
    """
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogLineError(line_no, f"invalid JSON: {e.msg}") from e
    if not isinstance(obj, dict):
        raise CatalogLineError(
            line_no, f"expected a JSON object, got {type(obj).__name__}"
        )

    values = {}
    for key, attr in FIELDS.items():
        try:
            values[attr] = as_text(obj.get(key))
        except TypeError as e:
            raise CatalogLineError(
                line_no, f"'{key}' must be a string, got {e}"
            ) from e
    return MetadataRecord(**values)


def _decode(raw: Union[str, bytes], line_no: int) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CatalogLineError(
            line_no, f"not valid UTF-8: {e.reason} at byte {e.start}"
        ) from e


def load_catalog(
    lines: Iterable[Union[str, bytes]], category: Category, *, strict: bool = False
) -> CatalogLoad:
    records: List[MetadataRecord] = []
    skipped: List[SkippedLine] = []
    filtered_out = 0

    for line_no, raw in enumerate(lines, start=1):
        if not raw.strip():
            continue
        try:
            rec = parse_line(_decode(raw, line_no).strip(), line_no)
        except CatalogLineError as e:
            if strict:
                raise
            logger.warning("skipping metadata {}", e)
            skipped.append(SkippedLine(line_no=e.line_no, reason=e.reason))
            continue

        if not category.matches(rec.playlist_title):
            filtered_out += 1
            continue
        records.append(rec)

    # sorted() is stable: equal dates keep their input order
    records = sorted(records, key=lambda r: r.upload_date)
    logger.debug(
        "catalog: {} records kept, {} filtered out ({}), {} skipped",
        len(records),
        filtered_out,
        category.value,
        len(skipped),
    )
    return CatalogLoad(
        records=tuple(records), skipped=tuple(skipped), filtered_out=filtered_out
    )


def load_catalog_file(
    path: Path, category: Category, *, strict: bool = False
) -> CatalogLoad:
    # bytes mode: a bad byte only costs the line it is on
    try:
        with path.open("rb") as fh:
            return load_catalog(fh, category, strict=strict)
    except FileNotFoundError as e:
        raise CatalogError(f"Metadata file not found: {path}") from e
    except IsADirectoryError as e:
        raise CatalogError(f"Metadata path is a directory: {path}") from e
    except OSError as e:
        raise CatalogError(f"Cannot read metadata file {path}: {e}") from e
