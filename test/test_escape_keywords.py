"""Tests for dismax keyword escaping."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchSpec.query.escape import escape_keywords, escape_term


class TestEscapeKeywords(unittest.TestCase):
    def test_plain_terms_pass_through(self) -> None:
        self.assertEqual(escape_keywords("great pizza").expression, "great pizza")

    def test_balanced_phrase_is_kept_verbatim(self) -> None:
        result = escape_keywords('"deep dish (chicago)" pizza')
        self.assertEqual(result.expression, '"deep dish (chicago)" pizza')

    def test_multiple_phrases_are_kept(self) -> None:
        result = escape_keywords('"a: b" and "c^d"')
        self.assertEqual(result.expression, '"a: b" and "c^d"')

    def test_unmatched_quote_strips_all_quotes(self) -> None:
        result = escape_keywords('"deep dish" "pizza')
        self.assertNotIn('"', result.expression)
        self.assertEqual(result.expression, "deep dish pizza")

    def test_odd_quote_counts_never_leave_a_quote(self) -> None:
        cases = [
            ('-"a b" "c', "-a b c"),
            ('a"b"c"', "abc"),
            ('"pizza', "pizza"),
            ('pizza "', "pizza"),
            ('"new "york" style', "new york style"),
            ('+"thin crust -anchovies', "+thin crust -anchovies"),
            ('"a:b" "c', "a\\:b c"),
            ('-"', "\\-"),
            ('"""', ""),
        ]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                expression = escape_keywords(raw).expression
                self.assertNotIn('"', expression)
                self.assertEqual(expression, expected)

    def test_reserved_characters_are_escaped_once(self) -> None:
        result = escape_keywords("a:b (c) [d] {e} ^f ~g *h ?i")
        self.assertEqual(
            result.expression,
            "a\\:b \\(c\\) \\[d\\] \\{e\\} \\^f \\~g \\*h \\?i",
        )

    def test_backslash_and_boolean_operators_are_escaped(self) -> None:
        result = escape_keywords("a\\b c && d || !e f/g")
        self.assertEqual(result.expression, "a\\\\b c \\&\\& d \\|\\| \\!e f\\/g")

    def test_leading_modifiers_are_preserved(self) -> None:
        result = escape_keywords("+pizza -anchovies")
        self.assertEqual(result.expression, "+pizza -anchovies")

    def test_modifier_before_phrase_is_preserved(self) -> None:
        result = escape_keywords('-"thin crust" pizza')
        self.assertEqual(result.expression, '-"thin crust" pizza')

    def test_inner_and_dangling_modifiers_are_escaped(self) -> None:
        result = escape_keywords("x-ray + pizza -")
        self.assertEqual(result.expression, "x\\-ray \\+ pizza \\-")

    def test_modifier_directly_after_phrase_is_escaped(self) -> None:
        result = escape_keywords('"thin crust"-pizza')
        self.assertEqual(result.expression, '"thin crust"\\-pizza')

    def test_whitespace_is_collapsed_outside_phrases(self) -> None:
        result = escape_keywords('  pizza \t\n "new   york"   style ')
        self.assertEqual(result.expression, 'pizza "new   york" style')

    def test_empty_phrase_is_dropped(self) -> None:
        result = escape_keywords('pizza "" pie')
        self.assertEqual(result.expression, "pizza pie")

    def test_degenerate_inputs_are_not_usable(self) -> None:
        for raw in (None, "", "   ", '""', '"""', '" "'):
            with self.subTest(raw=raw):
                self.assertFalse(escape_keywords(raw).is_usable)

    def test_fields_are_deduplicated_in_order(self) -> None:
        result = escape_keywords("pizza", fields=["name", "menu", "name", " "])
        self.assertEqual(result.fields, ("name", "menu"))

    def test_no_fields_defers_to_engine_default(self) -> None:
        self.assertEqual(escape_keywords("pizza").fields, ())

    def test_quote_stripping_is_logged(self) -> None:
        with self.assertLogs("SearchSpec", level="DEBUG") as logs:
            escape_keywords('say "hi')
        self.assertIn("unmatched quote", logs.output[0])


class TestEscapeTerm(unittest.TestCase):
    def test_reserved_and_whitespace_are_escaped(self) -> None:
        self.assertEqual(escape_term("New York: NY"), "New\\ York\\:\\ NY")

    def test_quotes_are_escaped(self) -> None:
        self.assertEqual(escape_term('say "hi"'), 'say\\ \\"hi\\"')

    def test_scalars(self) -> None:
        self.assertEqual(escape_term(True), "true")
        self.assertEqual(escape_term(1.5), "1.5")
        self.assertEqual(escape_term(-3), "\\-3")


if __name__ == "__main__":
    unittest.main()
