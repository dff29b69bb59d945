"""JSON adapter for productivity logs."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable

from productivity_dashboard.schema import ProductivityLog


def _parse_item(item: dict, index: int) -> ProductivityLog:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")
    try:
        return ProductivityLog.from_record(item)
    except ValueError as exc:
        raise ValueError(f"Item {index}: {exc}") from exc


def parse(file_path: str) -> list[ProductivityLog]:
    """Parse JSON file into productivity logs."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]


def dump(logs: Iterable[ProductivityLog], file_path: str) -> None:
    """Write logs as a JSON array; the target is replaced only once fully written."""

    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps([log.to_record() for log in logs], indent=2)

    with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False) as handle:
        handle.write(payload)
        temp_path = handle.name
    try:
        os.replace(temp_path, path)
    except OSError:
        os.unlink(temp_path)
        raise
