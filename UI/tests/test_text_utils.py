import unittest

from UI.utils.text_utils import (
    contains_term,
    filter_entities,
    format_currency,
    format_date,
    normalize_search_term,
    truncate_text,
)


class TestSearch(unittest.TestCase):

    def test_normalize(self):
        self.assertEqual(normalize_search_term("  Casa A "), "casa a")
        self.assertEqual(normalize_search_term(None), "")

    def test_blank_term_returns_everything_without_predicate(self):
        entities = [{"id": 1}, {"id": 2}]

        def predicate(entity, term):
            raise AssertionError("predicate should not run")

        self.assertEqual(filter_entities(entities, "   ", predicate), entities)

    def test_filter_keeps_order(self):
        entities = [{"n": "b1"}, {"n": "a"}, {"n": "b2"}]
        result = filter_entities(entities, "B", lambda e, t: t in e["n"])
        self.assertEqual(result, [{"n": "b1"}, {"n": "b2"}])

    def test_contains_term_skips_none(self):
        self.assertTrue(contains_term("pérez", None, "Juan Pérez"))
        self.assertFalse(contains_term("x", None, 12))
        self.assertTrue(contains_term("12", 1200))


class TestFormatting(unittest.TestCase):

    def test_truncate(self):
        self.assertEqual(truncate_text("short", 10), "short")
        self.assertEqual(truncate_text("a" * 12, 10), "a" * 10 + "...")
        self.assertEqual(truncate_text(None), "")

    def test_currency(self):
        self.assertEqual(format_currency(1200), "$1,200")
        self.assertEqual(format_currency("abc"), "$0")
        self.assertEqual(format_currency(-50), "-$50")

    def test_date(self):
        self.assertEqual(format_date("2026-03-01T10:00:00"), "2026-03-01")
        self.assertEqual(format_date(None), "")


if __name__ == '__main__':
    unittest.main()
