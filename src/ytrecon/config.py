from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

from .dump import DEFAULT_DUMP_NAME
from .errors import ConfigError
from .log import LEVELS
from .model import Category, CheckConfig, LoggingConfig, ReconConfig
from .utils import as_path

try:
    import tomllib  # py311+
except ModuleNotFoundError as exc:  # pragma: no cover
    raise SystemExit("Python 3.11+ required (missing tomllib).") from exc


def load_toml(path: Path) -> Dict[str, Any]:
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise ConfigError(
            f"Config file not found: {path}\n"
            "Copy config.example.toml or drop --config to use the defaults."
        ) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        return tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config is not valid UTF-8: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"TOML parse error in {path}: {e}") from e


def _table(root: Dict[str, Any], table: str) -> Dict[str, Any]:
    v = root.get(table, {})
    if not isinstance(v, dict):
        raise ConfigError(f"Expected table [{table}], got: {type(v).__name__}")
    return v


def _optional_str(d: Dict[str, Any], key: str, default: str) -> str:
    if key not in d:
        return default
    v = d.get(key)
    if isinstance(v, str):
        return v
    raise ConfigError(f"Expected string for '{key}', got: {type(v).__name__}")


def _optional_bool(d: Dict[str, Any], key: str, default: bool) -> bool:
    if key not in d:
        return default
    v = d.get(key)
    if isinstance(v, bool):
        return v
    raise ConfigError(f"Expected boolean for '{key}', got: {type(v).__name__}")


def parse_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LEVELS:
        raise ConfigError(
            f"Invalid log level: {value!r} (expected one of: {', '.join(LEVELS)})"
        )
    return level


def parse_config(root: Dict[str, Any]) -> ReconConfig:
    # ---- check
    check = _table(root, "check")
    dump_path = _optional_str(check, "dump_path", DEFAULT_DUMP_NAME)
    if not dump_path.strip():
        raise ConfigError("check.dump_path must not be empty")
    check_cfg = CheckConfig(
        category=Category.parse(_optional_str(check, "category", "all")),
        dump_to_file=_optional_bool(check, "dump_to_file", False),
        dump_path=as_path(dump_path),
        strict=_optional_bool(check, "strict", False),
        check_ids=_optional_bool(check, "check_ids", False),
    )

    # ---- logging
    log_tbl = _table(root, "logging")
    log_file = _optional_str(log_tbl, "file", "")
    logging_cfg = LoggingConfig(
        level=parse_level(_optional_str(log_tbl, "level", "INFO")),
        file=as_path(log_file) if log_file else None,
    )

    return ReconConfig(check=check_cfg, logging=logging_cfg)


def apply_overrides(
    cfg: ReconConfig,
    *,
    category: Optional[str] = None,
    dump_to_file: bool = False,
    dump_path: Optional[str] = None,
    strict: bool = False,
    check_ids: bool = False,
    verbose: bool = False,
) -> ReconConfig:
    """Merge command line flags over file values.

    Boolean flags can only switch a setting on; a value set in the file
    cannot be turned off from the command line.
    """
    check = cfg.check
    if category is not None:
        check = replace(check, category=Category.parse(category))
    if dump_path is not None:
        if not dump_path.strip():
            raise ConfigError("--dump-path must not be empty")
        check = replace(check, dump_path=as_path(dump_path))
    check = replace(
        check,
        dump_to_file=check.dump_to_file or dump_to_file,
        strict=check.strict or strict,
        check_ids=check.check_ids or check_ids,
    )

    logging_cfg = cfg.logging
    if verbose:
        logging_cfg = replace(logging_cfg, level="DEBUG")

    return ReconConfig(check=check, logging=logging_cfg)
