from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .catalog import load_catalog_file
from .config import apply_overrides, load_toml, parse_config
from .dump import write_missing
from .errors import CatalogError, CatalogLineError, ConfigError, DumpError, ScanError
from .log import logger, setup_logging
from .model import Category, ReconConfig
from .reconcile import reconcile, render_report
from .scan import scan_directories
from .utils import as_path


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ytrecon",
        description=(
            "Compare a yt-dlp JSON dump against a folder of downloads named "
            '"[YYYYMMDD] [ID] Title" and list missing and extra videos.'
        ),
    )
    p.add_argument(
        "metadata",
        help="Line-delimited JSON file dumped with yt-dlp -j.",
    )
    p.add_argument(
        "directory",
        help='Directory whose subfolders are named like "[YYYYMMDD] [ID] Title".',
    )
    p.add_argument(
        "--config",
        default=None,
        help="Optional TOML file with defaults for the flags below.",
    )
    p.add_argument(
        "--category",
        default=None,
        help=(
            "Category of videos to check against: "
            + ", ".join(c.value for c in Category)
            + " (default: all)."
        ),
    )
    p.add_argument(
        "--dump-to-file",
        action="store_true",
        help="Write the missing IDs to a file usable as a yt-dlp --batch-file.",
    )
    p.add_argument(
        "--dump-path",
        default=None,
        help="Where --dump-to-file writes (default: ./missing.txt).",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first unreadable metadata line instead of skipping it.",
    )
    p.add_argument(
        "--check-ids",
        action="store_true",
        help="Warn about folders whose ID does not look like a YouTube video ID.",
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging on stderr."
    )
    return p


def resolve_config(args: argparse.Namespace) -> ReconConfig:
    if args.config:
        cfg = parse_config(load_toml(as_path(str(args.config))))
    else:
        cfg = ReconConfig()
    return apply_overrides(
        cfg,
        category=args.category,
        dump_to_file=bool(args.dump_to_file),
        dump_path=args.dump_path,
        strict=bool(args.strict),
        check_ids=bool(args.check_ids),
        verbose=bool(args.verbose),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        cfg = resolve_config(args)
        setup_logging(cfg.logging.level, cfg.logging.file)
    except ConfigError as e:
        print(f"[ytrecon] config error: {e}", file=sys.stderr)
        return 2

    check = cfg.check

    metadata_path = as_path(str(args.metadata))
    directory = as_path(str(args.directory))

    try:
        load = load_catalog_file(metadata_path, check.category, strict=check.strict)
    except (CatalogError, CatalogLineError) as e:
        print(f"[ytrecon] metadata error: {e}", file=sys.stderr)
        return 3

    try:
        scan = scan_directories(directory, check_ids=check.check_ids)
    except ScanError as e:
        print(f"[ytrecon] directory error: {e}", file=sys.stderr)
        return 4

    result = reconcile(load.records, scan.ids)
    logger.info(
        "{} catalog records ({}), {} folders, {} missing, {} extra",
        result.catalog_count,
        check.category.value,
        result.scanned_count,
        result.missing_count,
        len(result.extra),
    )

    for line in render_report(result, load=load, scan=scan):
        print(line)

    if check.dump_to_file:
        try:
            out = write_missing(check.dump_path, result)
        except DumpError as e:
            print(f"[ytrecon] dump error: {e}", file=sys.stderr)
            return 5
        print(f"[ytrecon] wrote {len(result.missing_ids)} missing IDs to {out}")

    return 0
