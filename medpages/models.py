# -*- coding: utf-8 -*-
"""Record types for the medicine database."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import MalformedLiteralError


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Alternative:
    name: str
    price: str


@dataclass(frozen=True)
class MedicineRecord:
    """One medicine entry.

    ``alternatives`` keeps the source order; the first entry is treated as the
    cheapest option everywhere.
    """

    brand: str
    generic: str
    category: str
    usage: str
    price_range: str
    alternatives: Tuple[Alternative, ...] = ()

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], position: int = 0) -> "MedicineRecord":
        brand = raw.get("brand")
        if not isinstance(brand, str):
            raise MalformedLiteralError(f"Medicine #{position} has no brand")

        raw_alts = raw.get("alternatives") or []
        if not isinstance(raw_alts, list):
            raise MalformedLiteralError(f"Medicine #{position} alternatives is not a list")

        alts = []
        for a in raw_alts:
            if not isinstance(a, dict):
                continue
            alts.append(Alternative(name=_text(a.get("name")), price=_text(a.get("price"))))

        return cls(
            brand=brand,
            generic=_text(raw.get("generic")),
            category=_text(raw.get("category")),
            usage=_text(raw.get("usage")),
            price_range=_text(raw.get("priceRange")),
            alternatives=tuple(alts),
        )
