"""Tests for the named entity table and single-reference resolution."""

import unittest

from turboescape.entities import (
    ENTITY_DEFINITIONS,
    NAMED_ENTITIES,
    decode_named_reference,
    decode_numeric_reference,
    resolve_reference,
)


class TestNamedEntityTable(unittest.TestCase):
    def test_sizes(self):
        # Two duplicate names ("sigma", "tau") collapse in the lookup
        assert len(ENTITY_DEFINITIONS) == 254
        assert len(NAMED_ENTITIES) == 252

    def test_markup_entities(self):
        assert NAMED_ENTITIES["quot"] == 34
        assert NAMED_ENTITIES["amp"] == 38
        assert NAMED_ENTITIES["lt"] == 60
        assert NAMED_ENTITIES["gt"] == 62

    def test_latin1_range_is_complete(self):
        latin1 = {codepoint for codepoint in NAMED_ENTITIES.values() if 160 <= codepoint <= 255}
        assert latin1 == set(range(160, 256))
        assert NAMED_ENTITIES["nbsp"] == 160
        assert NAMED_ENTITIES["yuml"] == 255

    def test_extended_symbols(self):
        assert NAMED_ENTITIES["euro"] == 8364
        assert NAMED_ENTITIES["trade"] == 8482
        assert NAMED_ENTITIES["hearts"] == 9829
        assert NAMED_ENTITIES["diams"] == 9830
        assert NAMED_ENTITIES["forall"] == 8704
        assert NAMED_ENTITIES["infin"] == 8734
        assert NAMED_ENTITIES["ne"] == 8800
        assert NAMED_ENTITIES["Alpha"] == 913
        assert NAMED_ENTITIES["omega"] == 969

    def test_code_points_stay_in_historical_range(self):
        assert min(NAMED_ENTITIES.values()) == 34
        assert max(NAMED_ENTITIES.values()) == 9830

    def test_duplicate_names_last_write_wins(self):
        tau = [codepoint for name, codepoint in ENTITY_DEFINITIONS if name == "tau"]
        assert tau == [8756, 964]
        assert NAMED_ENTITIES["tau"] == 964

        sigma = [codepoint for name, codepoint in ENTITY_DEFINITIONS if name == "sigma"]
        assert sigma == [963, 963]
        assert NAMED_ENTITIES["sigma"] == 963

    def test_names_are_case_sensitive(self):
        assert NAMED_ENTITIES["Sigma"] == 931
        assert NAMED_ENTITIES["sigma"] == 963
        assert "AMP" not in NAMED_ENTITIES
        assert "apos" not in NAMED_ENTITIES

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            NAMED_ENTITIES["new"] = 1  # type: ignore[index]


class TestDecodeNumericReference(unittest.TestCase):
    def test_decimal(self):
        assert decode_numeric_reference("38") == "&"
        assert decode_numeric_reference("0039") == "'"

    def test_hex(self):
        assert decode_numeric_reference("26", is_hex=True) == "&"
        assert decode_numeric_reference("1F600", is_hex=True) == "\U0001f600"
        assert decode_numeric_reference("1f600", is_hex=True) == "\U0001f600"

    def test_zero_is_a_code_point(self):
        assert decode_numeric_reference("0") == "\x00"

    def test_rejects_malformed_digits(self):
        for digits in ["", "-1", "+1", " 1", "1 ", "1_0", "12a", "١", "x1"]:
            assert decode_numeric_reference(digits) is None, digits
        for digits in ["", "g", "-a", "+a", "0x1", "1_f"]:
            assert decode_numeric_reference(digits, is_hex=True) is None, digits

    def test_rejects_out_of_range(self):
        assert decode_numeric_reference("10FFFF", is_hex=True) == "\U0010ffff"
        assert decode_numeric_reference("110000", is_hex=True) is None
        assert decode_numeric_reference("1114112") is None
        assert decode_numeric_reference("9" * 400) is None

    def test_rejects_surrogates(self):
        assert decode_numeric_reference("D800", is_hex=True) is None
        assert decode_numeric_reference("57343") is None


class TestResolveReference(unittest.TestCase):
    def test_named(self):
        assert resolve_reference("amp") == "&"
        assert resolve_reference("hearts") == "♥"

    def test_numeric(self):
        assert resolve_reference("#39") == "'"
        assert resolve_reference("#x27") == "'"
        assert resolve_reference("#X27") == "'"

    def test_failures_return_literal_reference(self):
        for body in ["", "#", "#x", "#X", "#xZZ", "#12a", "# 1", "nope", "AMP", "quotamp", "#-5"]:
            assert resolve_reference(body) == "&" + body + ";", body

    def test_decode_named_reference(self):
        assert decode_named_reference("euro") == "€"
        assert decode_named_reference("Euro") is None


if __name__ == "__main__":
    unittest.main()
