"""Tests for escaping text for HTML output."""

import unittest

from turboescape import ESCAPE_TABLE, escape, unescape


class TestEscapeTable(unittest.TestCase):
    def test_table_has_nineteen_entries(self):
        assert len(ESCAPE_TABLE) == 19

    def test_markup_characters(self):
        assert ESCAPE_TABLE["&"] == "&amp;"
        assert ESCAPE_TABLE["<"] == "&lt;"
        assert ESCAPE_TABLE[">"] == "&gt;"
        assert ESCAPE_TABLE['"'] == "&quot;"
        assert ESCAPE_TABLE["'"] == "&#39;"

    def test_numeric_replacements_use_the_characters_code_point(self):
        """Every replacement other than the named four is &#<ord>;."""
        named = {"&", "<", ">", '"'}
        for char, replacement in ESCAPE_TABLE.items():
            if char in named:
                continue
            assert replacement == f"&#{ord(char)};", char

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            ESCAPE_TABLE["a"] = "b"  # type: ignore[index]


class TestEscape(unittest.TestCase):
    def test_empty(self):
        assert escape("") == ""

    def test_plain_text_is_unchanged(self):
        for text in ["abc", "Hello,World.", "line\nbreak\ttab", "café☃", "-_:;/?#~*^|\\"]:
            assert escape(text) == text

    def test_script_injection(self):
        assert (
            escape("<script>alert('inject')</script>")
            == "&lt;script&gt;alert&#40;&#39;inject&#39;&#41;&lt;/script&gt;"
        )

    def test_every_table_character(self):
        text = "".join(ESCAPE_TABLE)
        assert escape(text) == "".join(ESCAPE_TABLE.values())

    def test_space_and_template_characters(self):
        assert escape("a b") == "a&#32;b"
        assert escape("{{x}}") == "&#123;&#123;x&#125;&#125;"
        assert escape("`${a}`") == "&#96;&#36;&#123;a&#125;&#96;"
        assert escape("[1+1=2]") == "&#91;1&#43;1&#61;2&#93;"
        assert escape("100%!@") == "100&#37;&#33;&#64;"

    def test_not_idempotent_on_ampersand(self):
        once = escape("&")
        assert once == "&amp;"
        assert escape(once) == "&amp;amp;"

    def test_escape_is_per_character_substitution(self):
        text = "x<y & 'z' (w)"
        escaped = escape(text)
        assert len(escaped) >= len(text)
        rebuilt = "".join(escape(char) for char in text)
        assert escaped == rebuilt

    def test_escaped_output_decodes_back(self):
        samples = [
            "<p class=\"x\">Tom & Jerry</p>",
            "a&b;c",
            "&amp; is already escaped",
            "{[(@$%!+=)]}`",
            "&&&;;;",
        ]
        for text in samples:
            assert unescape(escape(text)) == text


if __name__ == "__main__":
    unittest.main()
