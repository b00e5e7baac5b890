"""Tests for the line-oriented Hurl parser."""

import pytest

from hurlkit.document.parser import parse, split_lines
from hurlkit.errors import DocumentParseError

SAMPLE = """# Health check
GET http://localhost:8000/health
HTTP 200

POST http://localhost:8000/users
Content-Type: application/json
{"name": "bob"}
"""


class TestParse:
    """Tests for document parsing."""

    def test_entries_and_header(self):
        document = parse(SAMPLE)

        assert [line.text for line in document.header] == ["# Health check"]
        assert [entry.request.method for entry in document.entries] == ["GET", "POST"]
        assert document.entries[1].request.url == "http://localhost:8000/users"
        assert document.entries[1].request.line.number == 5

    def test_entry_lines_run_until_next_request(self):
        document = parse(SAMPLE)

        assert [line.text for line in document.entries[0].lines] == ["HTTP 200", ""]
        assert [line.number for line in document.entries[1].lines] == [6, 7]

    def test_source_lines_preserve_order(self):
        document = parse(SAMPLE)

        assert [line.number for line in document.source_lines()] == list(range(1, 8))

    def test_empty_document(self):
        document = parse("")

        assert document.header == ()
        assert document.entries == ()

    def test_comments_only(self):
        document = parse("# nothing\n\n")

        assert len(document.header) == 2
        assert document.entries == ()

    def test_crlf_line_endings(self):
        document = parse("GET http://a\r\nHTTP 200\r\n")

        assert document.entries[0].request.url == "http://a"
        assert [line.text for line in document.entries[0].lines] == ["HTTP 200"]

    def test_indented_request_is_recognized(self):
        document = parse("  GET http://a\n")

        assert document.entries[0].request.method == "GET"

    def test_content_before_first_request_fails(self):
        with pytest.raises(DocumentParseError) as exc_info:
            parse("# comment\n  FETCH http://a\n")

        error = exc_info.value
        assert error.message == "Parsing Method: expecting an HTTP method"
        assert (error.line, error.column) == (2, 3)

    def test_unknown_method_is_not_a_request(self):
        with pytest.raises(DocumentParseError):
            parse("GETX http://a\n")


class TestSplitLines:
    def test_mixed_endings(self):
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]
