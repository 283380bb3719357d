"""Locale registry: which locales exist and which get generated files."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

logger = logging.getLogger('site_translator')


@dataclass(frozen=True)
class LocaleDescriptor:
    code: str
    create_new: bool = False


def parse_locales(payload: Any) -> list[LocaleDescriptor]:
    """
    Builds the ordered registry from the decoded languages file.

    Accepts ``{"data": [...]}`` or a bare list of records. Each record needs a
    ``code``; ``createnew`` defaults to false. Later duplicates of a code are
    dropped.
    """
    records: Iterable[Any]
    if isinstance(payload, dict):
        records = payload.get("data", [])
    else:
        records = payload
    if not isinstance(records, list):
        raise ValueError("Locale registry must be a list of records.")

    locales: list[LocaleDescriptor] = []
    seen: set[str] = set()
    for idx, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(f"Locale record #{idx} is not an object: {record!r}")
        code = record.get("code")
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"Locale record #{idx} has no code.")
        code = code.strip()
        if code in seen:
            logger.warning(f"Duplicate locale '{code}' in registry, keeping the first entry")
            continue
        seen.add(code)
        create_new = record.get("createnew", record.get("createNew", False))
        locales.append(LocaleDescriptor(code=code, create_new=bool(create_new)))
    return locales


def load_locales(path: Path) -> list[LocaleDescriptor]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_locales(payload)
