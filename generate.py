#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Generate static medicine pages from the database embedded in index.html.

Inputs (defaults):
  - index.html : site landing page; carries the medicine array after the
                 "// ===== Medicine Database =====" marker

Outputs:
  - medicines/<slug>.html  one page per medicine (alternatives, pharmacy
                           links, FAQ, JSON-LD)
  - medicines/index.html   browse page grouped by category
  - sitemap.xml            fixed site pages + one entry per medicine

Key behaviors:
  - Everything is read and parsed before anything is written; a missing
    marker or unparseable array aborts with a non-zero exit.
  - Brands that slugify to the same name overwrite each other's page.
  - lastmod in the sitemap is the run date (UTC today unless --date).
"""

import argparse
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional

from medpages.errors import MedpagesError
from medpages.extract import load_medicines
from medpages.render import SITE_BASE, write_index_page, write_medicine_pages
from medpages.sitemap import write_sitemap


def parse_run_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}")


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Build per-medicine pages and sitemap.xml")
    ap.add_argument("--source", default="index.html", help="Host page with the medicine database")
    ap.add_argument("--out", default="medicines", help="Output directory for medicine pages")
    ap.add_argument("--sitemap", default="sitemap.xml", help="Sitemap output path")
    ap.add_argument("--date", type=parse_run_date, default=None, help="lastmod date (YYYY-MM-DD)")
    ap.add_argument("--quiet", action="store_true", help="Only report errors")
    args = ap.parse_args(argv)

    def say(*parts) -> None:
        if not args.quiet:
            print(*parts)

    run_date = args.date or datetime.now(timezone.utc).date()
    source = Path(args.source).resolve()
    out_dir = Path(args.out).resolve()
    sitemap_path = Path(args.sitemap).resolve()

    if not source.is_file():
        raise SystemExit(f"Host document not found: {source}")

    try:
        medicines = load_medicines(source)
    except MedpagesError as e:
        raise SystemExit(f"Could not read medicine database from {source.name}: {e}")

    say(f"✅ Found {len(medicines)} medicines")

    slugs = write_medicine_pages(medicines, out_dir)
    say(f"✅ Generated {len(slugs)} individual medicine pages in {out_dir}")

    n_urls = write_sitemap(sitemap_path, slugs, run_date)
    say(f"✅ {sitemap_path.name} updated with {n_urls} URLs")

    index_path = write_index_page(medicines, out_dir)
    say(f"✅ {index_path} created (browse page for all medicines)")

    say("\n🎉 Done! Next steps:")
    say("   1. Deploy to your server")
    say("   2. Submit sitemap to Google Search Console: https://search.google.com/search-console")
    say(f"   3. Submit sitemap URL: {SITE_BASE}/sitemap.xml")


if __name__ == "__main__":
    main()
