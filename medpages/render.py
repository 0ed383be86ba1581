# -*- coding: utf-8 -*-
"""HTML rendering for medicine detail pages and the browse-all index.

Renderers are pure ``record -> str`` functions; only ``write_medicine_pages``
and ``write_index_page`` touch the filesystem.
"""

import html
import re
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import orjson

from .derive import DerivedFields, category_label, derive, encode_for_url, slug, strip_parenthetical
from .models import MedicineRecord

SITE_BASE = "https://generic-med.org"
OG_IMAGE = f"{SITE_BASE}/og-image.png"

# (label, search URL prefix, button colour); the encoded brand is appended.
PHARMACIES = [
    ("1mg", "https://www.1mg.com/search/all?name=", "#ee4036"),
    ("Apollo", "https://www.apollopharmacy.in/search-medicines?search_query=", "#0072bb"),
    ("PharmEasy", "https://pharmeasy.in/search/all?name=", "#5f27cd"),
    ("Netmeds", "https://www.netmeds.com/catalogsearch/result?q=", "#24AEB1"),
    ("MedPlus", "https://www.medplusmart.com/searchProduct?searchKey=", "#E53E3E"),
    ("Truemeds", "https://www.truemeds.in/search?search=", "#00B4D8"),
]
ALT_SEARCH_URL = "https://www.1mg.com/search/all?name="

DEFAULT_SAVINGS_DISPLAY = 70

ANALYTICS_HTML = r"""    <!-- Google Analytics -->
    <script async src="https://www.googletagmanager.com/gtag/js?id=G-LJCB050JVS"></script>
    <script>
        window.dataLayer = window.dataLayer || [];
        function gtag(){dataLayer.push(arguments);}
        gtag('js', new Date());
        gtag('config', 'G-LJCB050JVS');
    </script>

    <!-- Microsoft Clarity -->
    <script type="text/javascript">
        (function(c,l,a,r,i,t,y){
            c[a]=c[a]||function(){(c[a].q=c[a].q||[]).push(arguments)};
            t=l.createElement(r);t.async=1;t.src="https://www.clarity.ms/tag/"+i;
            y=l.getElementsByTagName(r)[0];y.parentNode.insertBefore(t,y);
        })(window, document, "clarity", "script", "vh2mybby3f");
    </script>"""

PAGE_CSS = r"""    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body { font-family: 'Segoe UI', sans-serif; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); min-height: 100vh; padding: 20px; }
        .container { max-width: 800px; margin: 0 auto; }
        .back-link { color: white; text-decoration: none; font-size: 14px; display: inline-block; margin-bottom: 15px; opacity: 0.9; }
        .back-link:hover { opacity: 1; text-decoration: underline; }
        .card { background: white; border-radius: 16px; padding: 30px; box-shadow: 0 10px 40px rgba(0,0,0,0.2); margin-bottom: 20px; }
        h1 { color: #333; font-size: 2em; margin-bottom: 8px; }
        .generic-badge { background: #f0f4ff; color: #667eea; padding: 6px 14px; border-radius: 20px; display: inline-block; font-weight: 600; margin-bottom: 16px; }
        .category-badge { background: #764ba2; color: white; padding: 4px 12px; border-radius: 20px; font-size: 12px; display: inline-block; margin-left: 8px; }
        .usage { color: #555; line-height: 1.7; margin-bottom: 20px; font-size: 15px; }
        .price-box { background: #fff3cd; border: 2px solid #ffc107; border-radius: 10px; padding: 16px; margin-bottom: 20px; }
        .price-label { font-size: 13px; color: #856404; font-weight: 600; margin-bottom: 4px; }
        .price-value { font-size: 1.5em; font-weight: bold; color: #333; }
        .savings-badge { background: #d4edda; border: 2px solid #28a745; border-radius: 10px; padding: 14px; margin-bottom: 20px; color: #155724; }
        h2 { color: #333; margin-bottom: 16px; font-size: 1.3em; }
        table { width: 100%; border-collapse: collapse; margin-bottom: 20px; }
        th { background: #667eea; color: white; padding: 12px; text-align: left; }
        td { padding: 12px; border-bottom: 1px solid #eee; }
        tr:hover td { background: #f8f9ff; }
        .pharmacy-grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 10px; margin-top: 10px; }
        .ph-btn { padding: 12px; border-radius: 8px; text-align: center; text-decoration: none; color: white; font-weight: 600; font-size: 13px; display: block; transition: opacity 0.2s; }
        .ph-btn:hover { opacity: 0.85; }
        .faq-item { margin-bottom: 20px; }
        .faq-q { font-weight: bold; color: #333; margin-bottom: 6px; }
        .faq-a { color: #555; line-height: 1.6; }
        footer-note { display: block; color: rgba(255,255,255,0.85); font-size: 12px; margin-top: 20px; border-top: 1px solid rgba(255,255,255,0.3); padding-top: 16px; }
        @media (max-width: 600px) { h1 { font-size: 1.5em; } .pharmacy-grid { grid-template-columns: repeat(2, 1fr); } }
    </style>"""

INDEX_CSS = r"""    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body { font-family: 'Segoe UI', sans-serif; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); min-height: 100vh; padding: 20px; }
        .container { max-width: 900px; margin: 0 auto; }
        .card { background: white; border-radius: 16px; padding: 30px; box-shadow: 0 10px 40px rgba(0,0,0,0.2); }
        .back-link { color: white; text-decoration: none; font-size: 14px; display: inline-block; margin-bottom: 15px; }
        .back-link:hover { text-decoration: underline; }
        h1 { color: #333; margin-bottom: 8px; }
        .subtitle { color: #666; margin-bottom: 24px; }
        .cat { margin-bottom: 30px; }
        .cat h2 { color: #667eea; margin-bottom: 12px; border-bottom: 2px solid #667eea; padding-bottom: 8px; }
        .chips { display: flex; flex-wrap: wrap; gap: 10px; }
        .chip { background: white; padding: 8px 14px; border-radius: 20px; text-decoration: none; color: #333; font-size: 14px; box-shadow: 0 2px 8px rgba(0,0,0,0.1); transition: all 0.2s; }
        .chip:hover { background: #667eea; color: white; }
    </style>"""

PAGE_TPL = r"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
__HEAD__

__CSS__

__ANALYTICS__
</head>
<body>
<div class="container">
__BODY__
</div>
</body>
</html>
"""

_PLACEHOLDER_RX = re.compile(r"__(HEAD|CSS|ANALYTICS|BODY)__")


def escape(s: Optional[str]) -> str:
    if s is None:
        return ""
    return html.escape(str(s), quote=False)


def attr(s: Optional[str]) -> str:
    return html.escape("" if s is None else str(s), quote=True)


def page_url(page_slug: str) -> str:
    return f"{SITE_BASE}/medicines/{page_slug}.html"


def html_shell(head_html: str, css_html: str, body_html: str) -> str:
    parts = {
        "HEAD": head_html,
        "CSS": css_html,
        "ANALYTICS": ANALYTICS_HTML,
        "BODY": body_html,
    }
    # Single pass: placeholder-like text inside record fields stays literal.
    return _PLACEHOLDER_RX.sub(lambda m: parts[m.group(1)], PAGE_TPL)


def build_json_ld(record: MedicineRecord, d: DerivedFields) -> str:
    url = page_url(d.slug)
    payload = {
        "@context": "https://schema.org",
        "@type": "MedicalWebPage",
        "name": f"{record.brand} Generic Alternative",
        "url": url,
        "description": f"{record.brand} ({record.generic}) - {record.usage}. Find cheaper generic alternatives in India.",
        "mainEntity": {
            "@type": "Drug",
            "name": record.brand,
            "alternateName": record.generic,
            "description": record.usage,
            "relevantSpecialty": d.category_label,
        },
        "breadcrumb": {
            "@type": "BreadcrumbList",
            "itemListElement": [
                {"@type": "ListItem", "position": 1, "name": "Home", "item": f"{SITE_BASE}/"},
                {"@type": "ListItem", "position": 2, "name": d.category_label, "item": f"{SITE_BASE}/#{record.category}"},
                {"@type": "ListItem", "position": 3, "name": record.brand, "item": url},
            ],
        },
    }
    text = orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")
    # Keep the payload from closing the surrounding <script> element.
    return text.replace("</", "<\\/")


def build_head(record: MedicineRecord, d: DerivedFields) -> str:
    pct = d.savings_percent or DEFAULT_SAVINGS_DISPLAY
    url = page_url(d.slug)
    brand, generic = record.brand, record.generic

    like = ""
    if d.cheapest is not None:
        like = f" like {d.cheapest.name} at just {d.cheapest.price}"
    description = (
        f"{brand} ({generic}) costs {record.price_range}. "
        f"Find cheaper generic alternatives{like}. Save up to {pct}% on {brand}."
    )
    keywords = ", ".join([
        f"{brand} generic alternative",
        f"{brand} cheaper substitute",
        f"{generic} price India",
        f"{brand} price",
        f"generic {generic}",
        f"affordable {brand}",
    ])

    lines = [
        f"    <title>{escape(brand)} Generic Alternative | Save up to {pct}% | Generic Medicine Finder</title>",
        f"    <meta name=\"description\" content=\"{attr(description)}\">",
        f"    <meta name=\"keywords\" content=\"{attr(keywords)}\">",
        f"    <link rel=\"canonical\" href=\"{attr(url)}\">",
        "    <meta name=\"robots\" content=\"index, follow\">",
        "",
        "    <!-- Open Graph -->",
        "    <meta property=\"og:type\" content=\"article\">",
        f"    <meta property=\"og:url\" content=\"{attr(url)}\">",
        f"    <meta property=\"og:title\" content=\"{attr(f'{brand} Generic Alternative - Save up to {pct}%')}\">",
        f"    <meta property=\"og:description\" content=\"{attr(f'Find cheaper alternatives for {brand} ({generic}). Compare prices and save money.')}\">",
        f"    <meta property=\"og:image\" content=\"{OG_IMAGE}\">",
        "",
        "    <!-- Schema.org -->",
        "    <script type=\"application/ld+json\">",
        build_json_ld(record, d),
        "    </script>",
    ]
    return "\n".join(lines)


def build_summary_card(record: MedicineRecord, d: DerivedFields) -> str:
    parts = [
        "    <div class=\"card\">",
        f"        <div class=\"category-badge\">{escape(d.category_label)}</div>",
        f"        <h1>💊 {escape(record.brand)}</h1>",
        f"        <div class=\"generic-badge\">Generic: {escape(record.generic)}</div>",
        f"        <p class=\"usage\">{escape(record.usage)}</p>",
        "",
        "        <div class=\"price-box\">",
        f"            <div class=\"price-label\">💰 Branded Price ({escape(record.brand)})</div>",
        f"            <div class=\"price-value\">{escape(record.price_range)}</div>",
        "        </div>",
    ]
    if d.savings_percent > 0:
        cheapest_html = ""
        if d.cheapest is not None:
            cheapest_html = (
                f" Cheapest option: <strong>{escape(d.cheapest.name)}</strong>"
                f" at <strong>{escape(d.cheapest.price)}</strong>"
            )
        parts.append(
            "        <div class=\"savings-badge\">"
            f"🎉 <strong>You can save up to {d.savings_percent}%</strong> by switching to a generic alternative!"
            f"{cheapest_html}</div>"
        )
    parts.append("    </div>")
    return "\n".join(parts)


def build_alternatives_card(record: MedicineRecord) -> str:
    rows: List[str] = []
    for alt in record.alternatives:
        href = ALT_SEARCH_URL + encode_for_url(strip_parenthetical(alt.name))
        rows.append(
            "            <tr>"
            f"<td>{escape(alt.name)}</td>"
            f"<td style=\"color:#27ae60;font-weight:bold;\">{escape(alt.price)}</td>"
            f"<td><a href=\"{attr(href)}\" target=\"_blank\" rel=\"noopener\" style=\"color:#667eea;\">Buy on 1mg ↗</a></td>"
            "</tr>"
        )
    return "\n".join([
        "    <div class=\"card\">",
        f"        <h2>✅ Cheaper Generic Alternatives for {escape(record.brand)}</h2>",
        "        <table>",
        "            <thead><tr><th>Medicine Name</th><th>Price</th><th>Buy Online</th></tr></thead>",
        "            <tbody>",
        *rows,
        "            </tbody>",
        "        </table>",
        "        <p style=\"font-size:12px;color:#888;\">⚠️ Prices are approximate. Always consult your doctor before switching medicines.</p>",
        "    </div>",
    ])


def build_pharmacy_card(record: MedicineRecord, d: DerivedFields) -> str:
    links = [
        f"            <a href=\"{attr(prefix + d.brand_encoded)}\" target=\"_blank\" rel=\"noopener\" "
        f"class=\"ph-btn\" style=\"background:{colour};\">{escape(label)}</a>"
        for label, prefix, colour in PHARMACIES
    ]
    return "\n".join([
        "    <div class=\"card\">",
        f"        <h2>🏪 Buy {escape(record.brand)} Online</h2>",
        "        <p style=\"color:#666;font-size:14px;margin-bottom:12px;\">Compare prices across all major Indian pharmacies:</p>",
        "        <div class=\"pharmacy-grid\">",
        *links,
        "        </div>",
        "    </div>",
    ])


def faq_items(record: MedicineRecord, d: DerivedFields) -> List[Tuple[str, str]]:
    """Question/answer pairs; answers are already HTML."""
    brand = escape(record.brand)
    generic = escape(record.generic)
    items = [
        (
            f"What is the generic name of {brand}?",
            f"The generic name of {brand} is <strong>{generic}</strong>. Generic medicines contain "
            "the same active ingredient and work exactly the same way as branded medicines.",
        ),
        (
            f"Is {brand} generic alternative safe?",
            "Yes. Generic medicines are approved by the Central Drugs Standard Control Organisation "
            f"(CDSCO) and contain the same active ingredient ({generic}) in the same dosage. "
            "Always consult your doctor before switching.",
        ),
    ]
    if d.cheapest is not None:
        items.append((
            f"What is the cheapest alternative to {brand}?",
            f"<strong>{escape(d.cheapest.name)}</strong> is one of the cheapest alternatives at "
            f"<strong>{escape(d.cheapest.price)}</strong>, compared to {brand} at {escape(record.price_range)}.",
        ))
    items.append((f"What is {brand} used for?", escape(record.usage)))
    return items


def build_faq_card(record: MedicineRecord, d: DerivedFields) -> str:
    parts = ["    <div class=\"card\">", "        <h2>❓ Frequently Asked Questions</h2>"]
    for q, a in faq_items(record, d):
        parts.append(
            "        <div class=\"faq-item\">"
            f"<div class=\"faq-q\">{q}</div>"
            f"<div class=\"faq-a\">{a}</div>"
            "</div>"
        )
    parts.append("    </div>")
    return "\n".join(parts)


def build_footer() -> str:
    return "\n".join([
        "    <div class=\"card\" style=\"text-align:center;\">",
        "        <p style=\"color:#666;margin-bottom:12px;\">🔍 Search 300+ more medicines for generic alternatives</p>",
        f"        <a href=\"{SITE_BASE}/\" style=\"background: linear-gradient(135deg, #667eea, #764ba2); color: white; "
        "padding: 14px 30px; border-radius: 8px; text-decoration: none; font-weight: bold; font-size: 16px; "
        "display: inline-block;\">Find More Generic Medicines →</a>",
        "    </div>",
        "",
        "    <footer-note>",
        "        ⚠️ <strong>Disclaimer:</strong> This information is for educational purposes only. Always consult "
        "your doctor or pharmacist before switching or stopping any medicine. Prices are approximate and may vary.",
        "        <br><br>",
        f"        <a href=\"{SITE_BASE}/\" style=\"color:white;text-decoration:underline;\">Generic Medicine Finder</a>"
        " — Helping Indians save money on healthcare.",
        "    </footer-note>",
    ])


def render_medicine_page(record: MedicineRecord) -> str:
    d = derive(record)
    body = "\n\n".join([
        f"    <a href=\"{SITE_BASE}/\" class=\"back-link\">← Back to Generic Medicine Finder</a>",
        build_summary_card(record, d),
        build_alternatives_card(record),
        build_pharmacy_card(record, d),
        build_faq_card(record, d),
        build_footer(),
    ])
    return html_shell(build_head(record, d), PAGE_CSS, body)


def write_medicine_pages(records: Sequence[MedicineRecord], out_dir: Path) -> List[str]:
    """Write ``<slug>.html`` for every record and return the slugs in order.

    Records whose brands share a slug overwrite each other; the last one wins.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    slugs: List[str] = []
    for rec in records:
        page_slug = slug(rec.brand)
        (out_dir / f"{page_slug}.html").write_text(render_medicine_page(rec), encoding="utf-8")
        slugs.append(page_slug)
    return slugs


def group_by_category(records: Iterable[MedicineRecord]) -> Mapping[str, Tuple[MedicineRecord, ...]]:
    """Group records by category label, in the order categories first appear."""
    grouped: Dict[str, List[MedicineRecord]] = {}
    for rec in records:
        grouped.setdefault(category_label(rec.category), []).append(rec)
    return MappingProxyType({label: tuple(recs) for label, recs in grouped.items()})


def render_index_page(records: Sequence[MedicineRecord]) -> str:
    sections: List[str] = []
    for label, recs in group_by_category(records).items():
        chips = "".join(
            f"<a class=\"chip\" href=\"{attr(slug(r.brand))}.html\">{escape(r.brand)}</a>"
            for r in recs
        )
        sections.append(
            "        <section class=\"cat\">"
            f"<h2>{escape(label)}</h2>"
            f"<div class=\"chips\">{chips}</div>"
            "</section>"
        )

    head = "\n".join([
        "    <title>All Generic Medicines - Find Cheaper Alternatives | Generic Medicine Finder</title>",
        "    <meta name=\"description\" content=\"Browse 300+ branded medicines and find cheaper generic alternatives. "
        "Search by category - fever, antibiotics, diabetes, blood pressure, and more.\">",
        f"    <link rel=\"canonical\" href=\"{SITE_BASE}/medicines/\">",
        "    <meta name=\"robots\" content=\"index, follow\">",
    ])
    body = "\n".join([
        f"    <a href=\"{SITE_BASE}/\" class=\"back-link\">← Back to Search</a>",
        "    <div class=\"card\">",
        f"        <h1>💊 All Generic Medicines ({len(records)})</h1>",
        "        <p class=\"subtitle\">Click any medicine to find cheaper generic alternatives and compare prices.</p>",
        *sections,
        "    </div>",
    ])
    return html_shell(head, INDEX_CSS, body)


def write_index_page(records: Sequence[MedicineRecord], out_dir: Path) -> Path:
    path = out_dir / "index.html"
    path.write_text(render_index_page(records), encoding="utf-8")
    return path
