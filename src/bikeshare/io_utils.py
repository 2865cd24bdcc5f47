# file: src/bikeshare/io_utils.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _atomic_replace(path: Path, write: Callable[[Path], None]) -> None:
    """
    Write to a temp file in the same directory, then replace.

    The temp file is removed if writing or replacing fails.
    """
    ensure_dir(path.parent)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        write(tmp)
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            tmp.unlink()


def atomic_write_bytes(payload: bytes, path: Path) -> None:
    _atomic_replace(path, lambda tmp: tmp.write_bytes(payload))


def atomic_write_json(payload: Dict[str, Any], path: Path) -> None:
    def write(tmp: Path) -> None:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, default=str)

    _atomic_replace(path, write)
