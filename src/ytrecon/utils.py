from __future__ import annotations

import os
from pathlib import Path
from typing import Any


def as_path(s: str) -> Path:
    expanded = os.path.expandvars(os.path.expanduser(s))
    return Path(expanded).resolve()


def as_text(v: Any) -> str:
    # JSON null behaves like an absent key
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    raise TypeError(type(v).__name__)
