"""
Tokenizer behavioral tests.

Scope
- Validate whitespace splitting, quoted spans kept verbatim (quotes included),
  unterminated quotes and the absence of escape processing.
- Validate render_option(): the 'name[=value]' echo of applied options and its quoting rules.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from fieldopts import tokenize, render_option, QuotingError


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def testQuotedSpanStaysTogether(self):
        self.assertEqual(tokenize("a 'b c' d"), ["a", "'b c'", "d"])

    def testDoubleQuotedValueKeepsQuotes(self):
        self.assertEqual(tokenize('--name="a b" x'), ['--name="a b"', "x"])

    def testSurroundingWhitespaceIgnoredAndRunsCollapse(self):
        self.assertEqual(tokenize("  --x=1 \t  --y  "), ["--x=1", "--y"])

    def testEmptyAndBlankInput(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("   "), [])

    def testUnterminatedQuoteClosedAtEnd(self):
        self.assertEqual(tokenize("a 'b c"), ["a", "'b c'"])

    def testQuoteInsideTokenJoinsNeighbours(self):
        self.assertEqual(tokenize('x"y z"w end'), ['x"y z"w', "end"])

    def testOtherQuoteInsideSpanIsLiteral(self):
        self.assertEqual(tokenize("'it\"s' ok"), ["'it\"s'", "ok"])

    def testNoEscapeProcessing(self):
        self.assertEqual(tokenize(r"a\ b"), ["a\\", "b"])

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            tokenize(["a", "b"])  # type: ignore[arg-type]


class TestRenderOption(TestCase):
    """Behavioral tests for render_option()."""

    def testNameOnlyWithoutValue(self):
        self.assertEqual(render_option("-v"), "-v")

    def testPlainValueAttached(self):
        self.assertEqual(render_option("--jobs", "4"), "--jobs=4")

    def testEmptyValueAttached(self):
        self.assertEqual(render_option("--name", ""), "--name=")

    def testValueWithSpaceSingleQuoted(self):
        self.assertEqual(render_option("--name", "a b"), "--name='a b'")

    def testValueWithSpaceAndSingleQuoteDoubleQuoted(self):
        self.assertEqual(render_option("--name", "it's here"), '--name="it\'s here"')

    def testValueWithSpaceAndBothQuotesRejected(self):
        with self.assertRaises(QuotingError) as context:
            render_option("--name", "a 'b\" c")
        self.assertEqual(context.exception.option, "--name")

    def testQuotedRenderingReadsBackAsOneToken(self):
        self.assertEqual(tokenize(render_option("--name", "a b") + " rest"), ["--name='a b'", "rest"])


if __name__ == "__main__":
    unittest.main()
