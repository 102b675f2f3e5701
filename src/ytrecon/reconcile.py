from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .model import CatalogLoad, MetadataRecord, ReconciliationResult, ScanResult


def reconcile(
    records: Sequence[MetadataRecord], ids: Iterable[str]
) -> ReconciliationResult:
    """Diff catalog records against identifiers found on disk.

    `missing` keeps the catalog order (chronological when the records come
    from load_catalog). `extra` keeps scan order and lists each id once.
    Ids are compared as-is, without case or whitespace normalization.
    """
    on_disk = list(dict.fromkeys(ids))
    on_disk_set = set(on_disk)
    catalog_ids = {r.id for r in records}

    missing = tuple(r for r in records if r.id not in on_disk_set)
    extra = tuple(i for i in on_disk if i not in catalog_ids)

    return ReconciliationResult(
        missing=missing,
        extra=extra,
        scanned_count=len(on_disk),
        catalog_count=len(records),
        matched_count=len(records) - len(missing),
    )


def format_record(rec: MetadataRecord) -> str:
    date = rec.upload_date or "????????"
    return f"  [{date}] {rec.id}  {rec.title}".rstrip()


def render_report(
    result: ReconciliationResult,
    *,
    load: Optional[CatalogLoad] = None,
    scan: Optional[ScanResult] = None,
) -> List[str]:
    lines: List[str] = []

    if result.complete:
        lines.append(f"Found {result.scanned_count} IDs. No missing IDs. Congrats")
    else:
        lines.append(
            f"Found {result.scanned_count} IDs. "
            f"Still missing {result.missing_count} IDs. "
            f"For a total of {result.catalog_count} IDs"
        )
        lines.append("Missing videos are:")
        lines.extend(format_record(r) for r in result.missing)

    if result.extra:
        lines.append("Found extra existing videos:")
        lines.extend(f"  {i}" for i in result.extra)

    if load is not None and load.skipped:
        lines.append(f"Skipped {load.skipped_count} unreadable metadata line(s):")
        lines.extend(f"  line {s.line_no}: {s.reason}" for s in load.skipped)

    if scan is not None:
        if scan.malformed:
            lines.append(f"Skipped {len(scan.malformed)} malformed folder name(s):")
            lines.extend(f"  {m.name!r}: {m.reason}" for m in scan.malformed)
        if scan.suspicious:
            lines.append(
                f"{len(scan.suspicious)} folder(s) with an unexpected id shape:"
            )
            lines.extend(f"  {e.id}  ({e.name})" for e in scan.suspicious)
        dupes = scan.duplicate_ids
        if dupes:
            lines.append(f"{len(dupes)} id(s) present in more than one folder:")
            lines.extend(f"  {i}" for i in dupes)

    return lines
