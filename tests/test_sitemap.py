#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tests for sitemap.xml output."""

import tempfile
import unittest
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path

from medpages.sitemap import SITEMAP_NS, build_sitemap, write_sitemap

EXPECTED = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
    <url>
        <loc>https://generic-med.org/</loc>
        <lastmod>2024-05-01</lastmod>
        <changefreq>weekly</changefreq>
        <priority>1.0</priority>
    </url>
    <url>
        <loc>https://generic-med.org/about.html</loc>
        <lastmod>2024-05-01</lastmod>
        <changefreq>monthly</changefreq>
        <priority>0.8</priority>
    </url>
    <url>
        <loc>https://generic-med.org/privacy.html</loc>
        <lastmod>2024-05-01</lastmod>
        <changefreq>yearly</changefreq>
        <priority>0.5</priority>
    </url>
    <url>
        <loc>https://generic-med.org/medicines/dolo-650.html</loc>
        <lastmod>2024-05-01</lastmod>
        <changefreq>monthly</changefreq>
        <priority>0.9</priority>
    </url>
</urlset>
"""


class BuildSitemapTests(unittest.TestCase):
    def test_exact_output_for_fixed_date(self) -> None:
        self.assertEqual(build_sitemap(["dolo-650"], date(2024, 5, 1)), EXPECTED)

    def test_entry_count_and_fields(self) -> None:
        slugs = ["dolo-650", "pan-40", "crocin"]
        root = ET.fromstring(build_sitemap(slugs, date(2025, 1, 31)).encode("utf-8"))
        ns = {"sm": SITEMAP_NS}
        urls = root.findall("sm:url", ns)
        self.assertEqual(len(urls), len(slugs) + 3)
        self.assertEqual({u.findtext("sm:lastmod", namespaces=ns) for u in urls}, {"2025-01-31"})
        meds = urls[3:]
        self.assertEqual(
            [u.findtext("sm:loc", namespaces=ns) for u in meds],
            [f"https://generic-med.org/medicines/{s}.html" for s in slugs],
        )
        self.assertEqual({u.findtext("sm:priority", namespaces=ns) for u in meds}, {"0.9"})

    def test_empty_dataset_keeps_fixed_entries(self) -> None:
        self.assertEqual(build_sitemap([], date(2024, 5, 1)).count("<url>"), 3)


class WriteSitemapTests(unittest.TestCase):
    def test_overwrites_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sitemap.xml"
            path.write_text("stale", encoding="utf-8")
            n = write_sitemap(path, ["dolo-650"], date(2024, 5, 1))
            self.assertEqual(n, 4)
            self.assertEqual(path.read_text(encoding="utf-8"), EXPECTED)


if __name__ == "__main__":
    unittest.main()
