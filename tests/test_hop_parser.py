"""
Tests for trace hop line parsing

Covers normalization, hop classification and AS token extraction.
"""

import unittest

from asroute.models import HopKind
from asroute.processors.hop_parser import (
    classify_line, extract_as_token, marker_output, normalize_line,
    NO_RESPONSE_OUTPUT, RESERVED_OUTPUT
)


class TestNormalizeLine(unittest.TestCase):
    """Test line normalization."""

    def test_upper_cases_line(self):
        """Test that units and tokens are upper-cased."""
        line = "1  [AS0] 192.168.8.1 (192.168.8.1)  3.722 ms  4.705 ms  4.613 ms"
        expected = "1  [AS0] 192.168.8.1 (192.168.8.1)  3.722 MS  4.705 MS  4.613 MS"
        self.assertEqual(normalize_line(line), expected)

    def test_strips_line_terminator(self):
        self.assertEqual(normalize_line("12  [as13335] host\r\n"), "12  [AS13335] HOST")

    def test_idempotent(self):
        """Test that normalizing twice equals normalizing once."""
        samples = [
            "",
            " 8  * * *",
            "3  [as7922] po-1.core.example.net (96.108.1.1)  9.1 ms\n",
            "straße ﬁber [AS?]",
            "  mixed Case \t tabs ",
        ]
        for sample in samples:
            once = normalize_line(sample)
            self.assertEqual(normalize_line(once), once, msg=repr(sample))


class TestClassifyLine(unittest.TestCase):
    """Test hop classification."""

    def test_no_response(self):
        result = classify_line(" 8  * * *")
        self.assertEqual(result.kind, HopKind.NO_RESPONSE)
        self.assertIsNone(result.line)

    def test_partial_no_response(self):
        """Test that a single timed-out packet still counts as no response."""
        result = classify_line("5  [AS3356] 4.69.1.1 (4.69.1.1)  12.1 MS * 11.9 MS")
        self.assertEqual(result.kind, HopKind.NO_RESPONSE)

    def test_reserved_as0(self):
        result = classify_line("1  [AS0] 192.168.8.1 (192.168.8.1)  3.722 MS")
        self.assertEqual(result.kind, HopKind.RESERVED)

    def test_reserved_unknown(self):
        result = classify_line("2  [AS?] 10.0.0.1 (10.0.0.1)  5.1 MS")
        self.assertEqual(result.kind, HopKind.RESERVED)

    def test_no_response_takes_precedence_over_reserved(self):
        """Test that '*' wins when both markers are present."""
        for line in ["1  [AS0] * * *", "2  [AS?] 10.0.0.1 * 5.1 MS"]:
            self.assertEqual(classify_line(line).kind, HopKind.NO_RESPONSE, msg=line)

    def test_candidate_carries_line(self):
        line = "12  [AS13335] 172.67.6.216 (172.67.6.216)  17.510 MS"
        result = classify_line(line)
        self.assertEqual(result.kind, HopKind.CANDIDATE)
        self.assertTrue(result.is_candidate)
        self.assertEqual(result.line, line)

    def test_as0_prefix_of_longer_number_is_candidate(self):
        """Test that [AS01234] is not mistaken for the [AS0] marker."""
        self.assertEqual(classify_line("4  [AS01234] host").kind, HopKind.CANDIDATE)

    def test_line_without_brackets_is_candidate(self):
        self.assertEqual(classify_line("TRACEROUTE TO EXAMPLE.COM").kind, HopKind.CANDIDATE)

    def test_marker_output(self):
        self.assertEqual(marker_output(classify_line(" 8  * * *")), NO_RESPONSE_OUTPUT)
        self.assertEqual(marker_output(classify_line("1  [AS0] x")), RESERVED_OUTPUT)
        self.assertIsNone(marker_output(classify_line("12  [AS13335] x")))
        self.assertEqual(NO_RESPONSE_OUTPUT, "-> *")
        self.assertEqual(RESERVED_OUTPUT, "-> AS0 (Reserved)")


class TestExtractASToken(unittest.TestCase):
    """Test bracketed AS token extraction."""

    def test_extracts_token(self):
        line = "12  [AS13335] 172.67.6.216 (172.67.6.216)  17.510 MS  16.734 MS  15.266 MS"
        self.assertEqual(extract_as_token(line), "AS13335")

    def test_missing_brackets(self):
        self.assertIsNone(extract_as_token("12  172.67.6.216  17.510 MS"))
        self.assertIsNone(extract_as_token("12  [AS13335 172.67.6.216"))
        self.assertIsNone(extract_as_token("12  AS13335] 172.67.6.216"))

    def test_uses_first_bracket_pair(self):
        self.assertEqual(extract_as_token("1 [AS3356] [AS174] host"), "AS3356")

    def test_empty_brackets(self):
        self.assertEqual(extract_as_token("1 [] host"), "")

    def test_token_not_validated(self):
        self.assertEqual(extract_as_token("1 [ASXXX] host"), "ASXXX")

    def test_reversed_brackets_treated_as_missing(self):
        self.assertIsNone(extract_as_token("1 ]AS13335[ host"))


if __name__ == '__main__':
    unittest.main()
