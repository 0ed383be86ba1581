# -*- coding: utf-8 -*-
"""Read the medicine database embedded in the site's index.html.

The host page declares the data as a JavaScript array literal:

    // ===== Medicine Database =====
    const medicines = [
        { brand: "Dolo 650", generic: "Paracetamol", ... },
    ];

Reading is split in two stages. ``locate_literal`` cuts out the array text by
counting brackets, and ``normalize_literal`` rewrites that text into strict
JSON. Both are pure; ``load_medicines`` runs them against a file.
"""

import re
from pathlib import Path
from typing import List

import orjson

from .errors import MalformedLiteralError, MissingMarkerError
from .models import MedicineRecord

MARKER = "// ===== Medicine Database ====="
DECLARATION = "const medicines = ["

_LINE_COMMENT_RX = re.compile(r"//.*$", re.MULTILINE)
_TRAILING_COMMA_RX = re.compile(r",(\s*[\]}])")
_BARE_KEY_RX = re.compile(r"([{,]\s*)([a-zA-Z_][a-zA-Z0-9_]*)(\s*:)")


def locate_literal(text: str, marker: str = MARKER, declaration: str = DECLARATION) -> str:
    """Return the full ``[...]`` literal that follows ``marker``.

    Brackets inside string values are counted like any other, so a text field
    containing ``[`` or ``]`` will move the detected end of the literal.
    """
    start = text.find(marker)
    if start == -1:
        raise MissingMarkerError(f"Could not find medicine database marker {marker!r}")

    decl = text.find(declaration, start)
    if decl == -1:
        raise MissingMarkerError(f"Could not find {declaration!r} after the database marker")

    open_idx = text.find("[", decl)
    if open_idx == -1:
        raise MalformedLiteralError("Medicine array has no opening bracket")

    depth = 0
    for i in range(open_idx, len(text)):
        ch = text[i]
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[open_idx:i + 1]

    raise MalformedLiteralError("Medicine array is not closed")


def normalize_literal(span: str) -> str:
    """Rewrite a JavaScript array literal into JSON text.

    Comment removal must run before the trailing-comma pass.
    """
    s = _LINE_COMMENT_RX.sub("", span)
    s = _TRAILING_COMMA_RX.sub(r"\1", s)
    s = _BARE_KEY_RX.sub(r'\1"\2"\3', s)
    return s


def parse_records(json_text: str) -> List[MedicineRecord]:
    try:
        data = orjson.loads(json_text)
    except orjson.JSONDecodeError as e:
        raise MalformedLiteralError(f"JSON parse error: {e}") from e

    if not isinstance(data, list):
        raise MalformedLiteralError("Medicine database is not a list")

    records: List[MedicineRecord] = []
    for pos, raw in enumerate(data):
        if not isinstance(raw, dict):
            raise MalformedLiteralError(f"Medicine #{pos} is not an object")
        records.append(MedicineRecord.from_dict(raw, pos))
    return records


def read_text(path: Path) -> str:
    # Undecodable bytes become U+FFFD.
    return path.read_text(encoding="utf-8", errors="replace")


def load_medicines(path: Path) -> List[MedicineRecord]:
    span = locate_literal(read_text(path))
    return parse_records(normalize_literal(span))
