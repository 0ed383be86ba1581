#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tests for locating, normalizing and parsing the embedded medicine array."""

import tempfile
import unittest
from pathlib import Path

import orjson

from medpages.errors import MalformedLiteralError, MissingMarkerError
from medpages.extract import load_medicines, locate_literal, normalize_literal, parse_records
from medpages.models import Alternative

HOST_HTML = """<!DOCTYPE html>
<html>
<body>
<script>
    const pageSize = [10, 20];
    // ===== Medicine Database =====
    const medicines = [
        // Fever & pain
        { brand: "Dolo 650", generic: "Paracetamol 650mg", category: "fever-pain",
          usage: "Fever and mild to moderate pain", priceRange: "₹30–₹35",
          alternatives: [
              { name: "Paracetamol (Jan Aushadhi)", price: "₹10" },
              { name: "Calpol 650", price: "₹25" },
          ] },
        { brand: "Pan 40", generic: "Pantoprazole", category: "acidity",
          usage: "Acidity and GERD", priceRange: "₹150" },
    ];
    function search() { return medicines.filter(m => m.brand); }
</script>
</body>
</html>
"""


class LocateLiteralTests(unittest.TestCase):
    def test_isolates_array_after_marker(self) -> None:
        span = locate_literal(HOST_HTML)
        self.assertTrue(span.startswith("[\n        // Fever"))
        self.assertTrue(span.endswith("},\n    ]"))
        self.assertNotIn("pageSize", span)
        self.assertNotIn("function search", span)

    def test_nested_lists(self) -> None:
        text = "x // ===== Medicine Database =====\nconst medicines = [[1, [2, [3]]], [4]]; [5]"
        self.assertEqual(locate_literal(text), "[[1, [2, [3]]], [4]]")

    def test_missing_marker(self) -> None:
        with self.assertRaises(MissingMarkerError):
            locate_literal("<html>const medicines = [];</html>")

    def test_missing_declaration(self) -> None:
        with self.assertRaises(MissingMarkerError):
            locate_literal("// ===== Medicine Database =====\nlet meds = [];")

    def test_unterminated(self) -> None:
        with self.assertRaises(MalformedLiteralError):
            locate_literal("// ===== Medicine Database =====\nconst medicines = [[1, 2]")

    def test_bracket_inside_string_ends_span_early(self) -> None:
        text = '// ===== Medicine Database =====\nconst medicines = [{ brand: "Odd ] name" }];'
        self.assertEqual(locate_literal(text), '[{ brand: "Odd ]')


class NormalizeLiteralTests(unittest.TestCase):
    def test_comments_trailing_commas_and_keys(self) -> None:
        span = "[{a: 1, b: [1,2,],}, // note\n]"
        self.assertEqual(normalize_literal(span), '[{"a": 1, "b": [1,2]} \n]')

    def test_already_quoted_keys_untouched(self) -> None:
        span = '[{"brand": "X", generic: "Y"}]'
        self.assertEqual(normalize_literal(span), '[{"brand": "X", "generic": "Y"}]')

    def test_host_literal_becomes_json(self) -> None:
        data = orjson.loads(normalize_literal(locate_literal(HOST_HTML)))
        self.assertEqual(len(data), 2)
        self.assertEqual(data[0]["priceRange"], "₹30–₹35")
        self.assertEqual(data[0]["alternatives"][1], {"name": "Calpol 650", "price": "₹25"})


class ParseRecordsTests(unittest.TestCase):
    def test_builds_records_in_order(self) -> None:
        records = parse_records(normalize_literal(locate_literal(HOST_HTML)))
        self.assertEqual([r.brand for r in records], ["Dolo 650", "Pan 40"])
        self.assertEqual(records[0].price_range, "₹30–₹35")
        self.assertEqual(
            records[0].alternatives,
            (Alternative("Paracetamol (Jan Aushadhi)", "₹10"), Alternative("Calpol 650", "₹25")),
        )

    def test_missing_optional_fields_default(self) -> None:
        (rec,) = parse_records('[{"brand": "Solo"}]')
        self.assertEqual(rec.generic, "")
        self.assertEqual(rec.price_range, "")
        self.assertEqual(rec.alternatives, ())

    def test_invalid_json(self) -> None:
        with self.assertRaises(MalformedLiteralError) as cm:
            parse_records('[{"brand": "X"')
        self.assertIn("JSON parse error", str(cm.exception))

    def test_not_a_list(self) -> None:
        with self.assertRaises(MalformedLiteralError):
            parse_records('{"brand": "X"}')

    def test_entry_not_object(self) -> None:
        with self.assertRaises(MalformedLiteralError):
            parse_records('[{"brand": "X"}, 3]')

    def test_entry_without_brand(self) -> None:
        with self.assertRaises(MalformedLiteralError):
            parse_records('[{"generic": "X"}]')

    def test_alternatives_not_a_list(self) -> None:
        for value in ('5', '"abc"', '{"name": "Y", "price": "₹1"}'):
            with self.subTest(value=value):
                with self.assertRaises(MalformedLiteralError) as cm:
                    parse_records('[{"brand": "X", "alternatives": ' + value + '}]')
                self.assertIn("alternatives is not a list", str(cm.exception))

    def test_null_alternatives_treated_as_empty(self) -> None:
        (rec,) = parse_records('[{"brand": "X", "alternatives": null}]')
        self.assertEqual(rec.alternatives, ())


class LoadMedicinesTests(unittest.TestCase):
    def test_reads_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "index.html"
            path.write_text(HOST_HTML, encoding="utf-8")
            records = load_medicines(path)
        self.assertEqual(len(records), 2)
        self.assertEqual(records[1].category, "acidity")

    def test_string_bracket_breaks_parse(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "index.html"
            path.write_text(
                '// ===== Medicine Database =====\nconst medicines = [{ brand: "Odd ] name" }];',
                encoding="utf-8",
            )
            with self.assertRaises(MalformedLiteralError):
                load_medicines(path)

    def test_undecodable_bytes_are_replaced(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "index.html"
            path.write_bytes(b"<p>\xff\xfe legacy</p>\n" + HOST_HTML.encode("utf-8"))
            records = load_medicines(path)
        self.assertEqual([r.brand for r in records], ["Dolo 650", "Pan 40"])


if __name__ == "__main__":
    unittest.main()
