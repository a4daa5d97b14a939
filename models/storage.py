"""Whole-file JSON documents backing the game store."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

SAVE_FILE = "save-data.json"
SETTINGS_FILE = "settings.json"


def read_document(path: Path) -> dict[str, Any]:
    """Read and parse one JSON document. Raises OSError or ValueError."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} does not contain a JSON object")
    return data


def write_document(path: Path, data: dict[str, Any]) -> None:
    """Write ``data`` as pretty-printed UTF-8 JSON, replacing the file whole."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise
