"""
Unit tests for TolerantJsonParser.

Tests comment and trailing-comma handling, string-literal safety, and the
conversion of decode and shape failures into ParsingError.
"""

import pytest
from json_monitor.models import ParsingError, RootDocument
from json_monitor.parsers import TolerantJsonParser, strip_comments, strip_trailing_commas

GARDEN_TOOLS_JSON = """{
  "title": "Garden Tools Connection Monitor",
  "lastModified": "2025-09-29T18:30:00Z",
  "items": [
    {
      "name": "Chainsaw",
      "value": "Connected",
      "timestamp": "2025-09-29T18:30:00Z"
    }
  ]
}"""


class TestStripComments:
    """Test cases for comment removal."""

    def test_line_comment_removed(self):
        """Test removal of a // comment."""
        assert strip_comments('{"a": 1} // trailing').strip() == '{"a": 1}'

    def test_block_comment_removed(self):
        """Test removal of a /* */ comment."""
        assert strip_comments('{/* note */"a": 1}') == '{ "a": 1}'

    def test_block_comment_keeps_line_count(self):
        """Test newlines inside block comments are preserved."""
        text = '{\n/* one\ntwo\nthree */\n"a": 1}'

        assert strip_comments(text).count('\n') == text.count('\n')

    def test_comment_markers_inside_strings_kept(self):
        """Test that // and /* inside string literals are not comments."""
        text = '{"url": "http://example.com/*path*/"}'

        assert strip_comments(text) == text

    def test_escaped_quote_inside_string(self):
        """Test that an escaped quote does not end the string."""
        text = '{"a": "say \\"//hi\\""} // gone'

        assert strip_comments(text).strip() == '{"a": "say \\"//hi\\""}'

    def test_unterminated_block_comment(self):
        """Test an unclosed block comment raises ParsingError."""
        with pytest.raises(ParsingError) as exc_info:
            strip_comments('{\n"a": 1 /* never closed', source="/data/a.json")

        assert exc_info.value.context["line_number"] == 2
        assert exc_info.value.context["file_path"] == "/data/a.json"


class TestStripTrailingCommas:
    """Test cases for trailing comma removal."""

    def test_object_trailing_comma(self):
        assert strip_trailing_commas('{"a": 1,}') == '{"a": 1}'

    def test_array_trailing_comma_with_whitespace(self):
        assert strip_trailing_commas('[1, 2,\n  ]') == '[1, 2\n  ]'

    def test_separating_commas_kept(self):
        assert strip_trailing_commas('[1, 2, 3]') == '[1, 2, 3]'

    def test_comma_inside_string_kept(self):
        text = '{"a": ",}"}'

        assert strip_trailing_commas(text) == text


class TestTolerantJsonParser:
    """Test cases for TolerantJsonParser."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = TolerantJsonParser()

    def test_parse_valid_document(self):
        """Test parsing a well-formed document."""
        document = self.parser.parse_string(GARDEN_TOOLS_JSON)

        assert isinstance(document, RootDocument)
        assert document.title == "Garden Tools Connection Monitor"
        assert len(document.items) == 1
        assert document.items[0].name == "Chainsaw"
        assert document.items[0].value == "Connected"

    def test_parse_with_comments_and_trailing_commas(self):
        """Test that relaxed syntax is accepted."""
        content = """{
  // display name
  "title": "Tools",
  /* the monitored items */
  "items": [
    {"name": "Chainsaw", "value": "Connected",},
    {"name": "Leaf Blower", "value": "Charging"}, // last one
  ],
}"""
        document = self.parser.parse_string(content)

        assert document.title == "Tools"
        assert [item.name for item in document.items] == ["Chainsaw", "Leaf Blower"]

    def test_strict_parser_rejects_comments(self):
        """Test that disabling comments makes them a parse failure."""
        parser = TolerantJsonParser(allow_comments=False)

        with pytest.raises(ParsingError):
            parser.parse_string('{"title": "T"} // comment')

    def test_strict_parser_rejects_trailing_commas(self):
        """Test that disabling trailing commas makes them a parse failure."""
        parser = TolerantJsonParser(allow_trailing_commas=False)

        with pytest.raises(ParsingError):
            parser.parse_string('{"title": "T",}')

    def test_malformed_json(self):
        """Test malformed JSON raises ParsingError with a line number."""
        with pytest.raises(ParsingError) as exc_info:
            self.parser.parse_string('{\n"title": \n}', source="/data/bad.json")

        error = exc_info.value
        assert error.context["operation"] == "decode"
        assert error.context["file_path"] == "/data/bad.json"
        assert error.context["line_number"] == 3

    def test_empty_content(self):
        """Test empty content is a parse failure."""
        with pytest.raises(ParsingError):
            self.parser.parse_string("")

    @pytest.mark.parametrize("content", ['[1, 2]', '"text"', '42'])
    def test_non_object_top_level(self, content):
        """Test that only a JSON object is accepted at top level."""
        with pytest.raises(ParsingError) as exc_info:
            self.parser.parse_string(content)

        assert "Expected a JSON object" in str(exc_info.value)

    def test_shape_mismatch(self):
        """Test values of the wrong type raise ParsingError."""
        with pytest.raises(ParsingError) as exc_info:
            self.parser.parse_string('{"items": [{"name": "Chainsaw", "timestamp": "yesterday"}]}')

        assert exc_info.value.context["operation"] == "validate"
        assert exc_info.value.cause is not None

    def test_loads_returns_raw_data(self):
        """Test loads decodes without model validation."""
        assert self.parser.loads('[1, 2,] // list') == [1, 2]

    def test_null_document(self):
        """Test a top-level null yields no document."""
        assert self.parser.parse_string('null // nothing yet') is None

    def test_null_title_and_values(self):
        """Test null strings bind as empty text."""
        document = self.parser.parse_string('{"title": null, "items": [{"name": "Chainsaw", "value": null}]}')

        assert document.title == ""
        assert document.items[0].value == ""
