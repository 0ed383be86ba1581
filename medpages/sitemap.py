# -*- coding: utf-8 -*-
"""sitemap.xml for the generated medicine pages plus the fixed site pages."""

from datetime import date
from pathlib import Path
from typing import Iterable, List, Tuple

from .render import SITE_BASE, page_url

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# (location, changefreq, priority)
STATIC_ENTRIES: List[Tuple[str, str, str]] = [
    (f"{SITE_BASE}/", "weekly", "1.0"),
    (f"{SITE_BASE}/about.html", "monthly", "0.8"),
    (f"{SITE_BASE}/privacy.html", "yearly", "0.5"),
]
MEDICINE_CHANGEFREQ = "monthly"
MEDICINE_PRIORITY = "0.9"


def url_entry(loc: str, lastmod: str, changefreq: str, priority: str) -> str:
    return "\n".join([
        "    <url>",
        f"        <loc>{loc}</loc>",
        f"        <lastmod>{lastmod}</lastmod>",
        f"        <changefreq>{changefreq}</changefreq>",
        f"        <priority>{priority}</priority>",
        "    </url>",
    ])


def build_sitemap(slugs: Iterable[str], run_date: date) -> str:
    """Render the sitemap; every ``lastmod`` is ``run_date``."""
    lastmod = run_date.isoformat()
    entries = [url_entry(loc, lastmod, freq, prio) for loc, freq, prio in STATIC_ENTRIES]
    entries.extend(
        url_entry(page_url(s), lastmod, MEDICINE_CHANGEFREQ, MEDICINE_PRIORITY)
        for s in slugs
    )
    return "\n".join([
        "<?xml version=\"1.0\" encoding=\"UTF-8\"?>",
        f"<urlset xmlns=\"{SITEMAP_NS}\">",
        *entries,
        "</urlset>",
    ]) + "\n"


def write_sitemap(path: Path, slugs: Iterable[str], run_date: date) -> int:
    """Overwrite ``path`` and return the number of URLs written."""
    slugs = list(slugs)
    path.write_text(build_sitemap(slugs, run_date), encoding="utf-8")
    return len(slugs) + len(STATIC_ENTRIES)
