# -*- coding: utf-8 -*-
"""Per-record derived values: slug, category label, prices and savings."""

import math
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from .models import Alternative, MedicineRecord

CATEGORY_LABELS = {
    'fever-pain': 'Fever & Pain', 'antibiotics': 'Antibiotics',
    'diabetes': 'Diabetes', 'bp': 'Blood Pressure', 'acidity': 'Acidity',
    'cold-cough': 'Cold & Cough', 'mental-health': 'Mental Health',
    'skin': 'Skin Care', 'eye-ear': 'Eye & Ear',
    'womens-health': "Women's Health", 'heart': 'Heart',
    'thyroid': 'Thyroid', 'vitamins': 'Vitamins & Supplements',
    'cholesterol': 'Cholesterol', 'asthma': 'Asthma & Respiratory',
    'kidney': 'Kidney', 'liver': 'Liver', 'allergy': 'Allergy',
    'pain': 'Pain Relief', 'neuro': 'Neurology', 'others': 'Others',
}

# Same unreserved set as JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"

_NON_SLUG_RX = re.compile(r"[^a-z0-9]+")
_PRICE_RX = re.compile(r"₹(\d+)")
_TRAILING_PAREN_RX = re.compile(r"\s*\(.*?\)\s*$")


def slug(brand: str) -> str:
    s = _NON_SLUG_RX.sub("-", (brand or "").lower())
    return s.strip("-")


def category_label(code: str) -> str:
    return CATEGORY_LABELS.get(code, code)


def encode_for_url(text: Optional[str]) -> str:
    return quote(text or "", safe=_URI_COMPONENT_SAFE)


def extract_price(text: Optional[str]) -> int:
    """Return the first rupee amount in ``text``, or 0 when there is none.

    Only the leading digit run counts, so ``"₹1,200"`` yields 1.
    """
    if not text:
        return 0
    m = _PRICE_RX.search(text)
    if not m:
        return 0
    return int(m.group(1))


def savings_percent(brand_price: int, alt_price: int) -> int:
    if brand_price > 0 and alt_price > 0 and brand_price > alt_price:
        # Halves round up.
        return int(math.floor((brand_price - alt_price) / brand_price * 100 + 0.5))
    return 0


def strip_parenthetical(name: str) -> str:
    """Drop a trailing ``(...)`` qualifier, e.g. ``"Calpol (GSK)"`` -> ``"Calpol"``."""
    return _TRAILING_PAREN_RX.sub("", name or "", count=1)


@dataclass(frozen=True)
class DerivedFields:
    slug: str
    category_label: str
    brand_encoded: str
    brand_price: int
    alt_price: int
    savings_percent: int
    cheapest: Optional[Alternative]


def derive(record: MedicineRecord) -> DerivedFields:
    cheapest = record.alternatives[0] if record.alternatives else None
    brand_price = extract_price(record.price_range)
    alt_price = extract_price(cheapest.price) if cheapest is not None else 0
    return DerivedFields(
        slug=slug(record.brand),
        category_label=category_label(record.category),
        brand_encoded=encode_for_url(record.brand),
        brand_price=brand_price,
        alt_price=alt_price,
        savings_percent=savings_percent(brand_price, alt_price),
        cheapest=cheapest,
    )
