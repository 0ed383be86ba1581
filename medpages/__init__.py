# -*- coding: utf-8 -*-
"""Static page generator for the Generic Medicine Finder site."""

from .derive import category_label, derive, encode_for_url, extract_price, savings_percent, slug
from .errors import MalformedLiteralError, MedpagesError, MissingMarkerError
from .extract import load_medicines, locate_literal, normalize_literal, parse_records
from .models import Alternative, MedicineRecord
from .render import group_by_category, render_index_page, render_medicine_page
from .sitemap import build_sitemap

__all__ = [
    "Alternative",
    "MalformedLiteralError",
    "MedicineRecord",
    "MedpagesError",
    "MissingMarkerError",
    "build_sitemap",
    "category_label",
    "derive",
    "encode_for_url",
    "extract_price",
    "group_by_category",
    "load_medicines",
    "locate_literal",
    "normalize_literal",
    "parse_records",
    "render_index_page",
    "render_medicine_page",
    "savings_percent",
    "slug",
]
