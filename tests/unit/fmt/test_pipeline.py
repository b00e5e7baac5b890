"""
Tests for the hurlfmt pipeline.

The pipeline is driven directly with an injected binary stdin and terminal checks;
error messages are read back from the captured stderr.
"""

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from hurlkit.document import LineToolkit
from hurlkit.errors import ConflictingFlagsError, OutputWriteError
from hurlkit.exit_codes import ExitCode
from hurlkit.fmt.pipeline import FormatFlags, FormatPipeline, FormatRequest, validate_flags

UNFORMATTED = "  GET   http://localhost/health  \nHTTP 200\n"
FORMATTED = "GET http://localhost/health\nHTTP 200\n"


def make_pipeline(stdin_text: str = "", stdin_is_tty: bool = False, **kwargs) -> FormatPipeline:
    return FormatPipeline(
        stdin=io.BytesIO(stdin_text.encode("utf-8")),
        stdin_is_tty=lambda: stdin_is_tty,
        stdout_is_tty=lambda: False,
        **kwargs,
    )


@pytest.fixture
def hurl_file(tmp_path: Path) -> Path:
    path = tmp_path / "health.hurl"
    path.write_text(UNFORMATTED)
    return path


class TestFormatFlags:
    """Tests for flag conflicts detected at construction."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"check": True, "format": "json"},
            {"check": True, "output": "out.hurl"},
            {"color": True, "no_color": True},
            {"color": True, "in_place": True},
            {"in_place": True, "output": "out.hurl"},
        ],
    )
    def test_conflicting_pairs(self, kwargs):
        with pytest.raises(ConflictingFlagsError, match="cannot be used with"):
            FormatFlags(**kwargs)

    def test_defaults(self):
        flags = FormatFlags()

        assert flags.filename == "-"
        assert flags.target == "text"

    def test_empty_format_is_not_text(self):
        assert FormatFlags(format="").target == ""


class TestValidateFlags:
    """Tests for conflicts that depend on input and format."""

    def test_standalone_requires_html(self):
        with pytest.raises(ConflictingFlagsError, match="--standalone option only with html"):
            validate_flags(FormatFlags(input="a.hurl", standalone=True))

    def test_standalone_with_html(self):
        validate_flags(FormatFlags(input="a.hurl", format="html", standalone=True))

    def test_in_place_with_stdin(self):
        with pytest.raises(ConflictingFlagsError, match="standard input stream"):
            validate_flags(FormatFlags(in_place=True))

    def test_in_place_needs_text_format(self):
        with pytest.raises(ConflictingFlagsError, match="only text format"):
            validate_flags(FormatFlags(input="a.hurl", in_place=True, format="json"))


class TestFormatRequest:
    def test_destination(self):
        base = {"filename": "a.hurl", "contents": "", "lines": ()}

        assert FormatRequest(**base).destination is None
        assert FormatRequest(**base, output="b.hurl").destination == "b.hurl"
        assert FormatRequest(**base, in_place=True).destination == "a.hurl"


class TestRun:
    """Tests for complete pipeline runs."""

    def test_formats_to_output_file(self, hurl_file: Path, tmp_path: Path):
        out = tmp_path / "out.hurl"

        code = make_pipeline().run(FormatFlags(input=str(hurl_file), output=str(out)))

        assert code == ExitCode.SUCCESS
        assert out.read_text() == FORMATTED
        assert hurl_file.read_text() == UNFORMATTED

    def test_formats_to_stdout(self, hurl_file: Path, capsys):
        code = make_pipeline().run(FormatFlags(input=str(hurl_file)))

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == FORMATTED

    def test_reads_stdin(self, tmp_path: Path):
        out = tmp_path / "out.hurl"

        code = make_pipeline(UNFORMATTED).run(FormatFlags(output=str(out)))

        assert code == ExitCode.SUCCESS
        assert out.read_text() == FORMATTED

    def test_in_place_rewrites_input(self, hurl_file: Path):
        code = make_pipeline().run(FormatFlags(input=str(hurl_file), in_place=True))

        assert code == ExitCode.SUCCESS
        assert hurl_file.read_text() == FORMATTED

    def test_no_format_keeps_layout(self, hurl_file: Path, tmp_path: Path):
        out = tmp_path / "out.hurl"

        make_pipeline().run(FormatFlags(input=str(hurl_file), no_format=True, output=str(out)))

        assert out.read_text() == UNFORMATTED

    def test_bom_is_stripped(self, tmp_path: Path):
        source = tmp_path / "bom.hurl"
        source.write_bytes(b"\xef\xbb\xbfGET http://a\n")
        out = tmp_path / "out.hurl"

        make_pipeline().run(FormatFlags(input=str(source), output=str(out)))

        assert out.read_text() == "GET http://a\n"

    def test_stdin_bom_is_stripped(self, tmp_path: Path):
        out = tmp_path / "out.hurl"
        pipeline = FormatPipeline(
            stdin=io.BytesIO(b"\xef\xbb\xbfGET http://a\n"),
            stdin_is_tty=lambda: False,
            stdout_is_tty=lambda: False,
        )

        pipeline.run(FormatFlags(output=str(out)))

        assert out.read_text() == "GET http://a\n"

    def test_stdin_line_endings_kept_like_file_input(self, tmp_path: Path):
        data = b"GET http://a\r\nHTTP 200\rignored\n"
        source = tmp_path / "mixed.hurl"
        source.write_bytes(data)
        pipeline = FormatPipeline(stdin=io.BytesIO(data), stdin_is_tty=lambda: False)

        from_stdin = pipeline.acquire_input(FormatFlags(), color=False)
        from_file = pipeline.acquire_input(FormatFlags(input=str(source)), color=False)

        assert from_stdin.contents == data.decode("utf-8")
        assert from_stdin.contents == from_file.contents
        assert from_stdin.lines == from_file.lines
        assert from_stdin.lines[1] == "HTTP 200\rignored"

    def test_json_output(self, hurl_file: Path, tmp_path: Path):
        out = tmp_path / "out.json"

        code = make_pipeline().run(
            FormatFlags(input=str(hurl_file), format="json", output=str(out))
        )

        assert code == ExitCode.SUCCESS
        assert '"method": "GET"' in out.read_text()

    def test_standalone_html(self, hurl_file: Path, tmp_path: Path):
        out = tmp_path / "out.html"

        make_pipeline().run(
            FormatFlags(input=str(hurl_file), format="html", standalone=True, output=str(out))
        )

        assert out.read_text().startswith("<!DOCTYPE html>")


class TestRunFailures:
    """Tests for exit codes of failing runs."""

    def test_missing_input(self, tmp_path: Path, capsys):
        missing = tmp_path / "missing.hurl"

        code = make_pipeline().run(FormatFlags(input=str(missing)))

        assert code == ExitCode.FAILURE
        assert f"Input file {missing} does not exist!" in capsys.readouterr().err

    def test_undecodable_input(self, tmp_path: Path, capsys):
        source = tmp_path / "latin1.hurl"
        source.write_bytes(b"GET http://a/\xe9\n")

        code = make_pipeline().run(FormatFlags(input=str(source)))

        assert code == ExitCode.PARSE_ERROR
        assert "Input stream can not be read" in capsys.readouterr().err

    def test_undecodable_stdin(self, capsys):
        pipeline = FormatPipeline(stdin=io.BytesIO(b"GET http://a/\xe9\n"), stdin_is_tty=lambda: False)

        code = pipeline.run(FormatFlags())

        assert code == ExitCode.PARSE_ERROR
        assert "Input stream can not be read" in capsys.readouterr().err

    def test_parse_error(self, tmp_path: Path, capsys):
        source = tmp_path / "bad.hurl"
        source.write_text("# comment\nGEX http://a\n")

        code = make_pipeline().run(FormatFlags(input=str(source)))

        captured = capsys.readouterr()
        assert code == ExitCode.PARSE_ERROR
        assert captured.out == ""
        assert "error: Parsing Method: expecting an HTTP method" in captured.err
        assert f"{source}:2:1" in captured.err

    @pytest.mark.parametrize("output_format", ["yaml", ""])
    def test_invalid_format(self, hurl_file: Path, capsys, output_format):
        code = make_pipeline().run(FormatFlags(input=str(hurl_file), format=output_format))

        assert code == ExitCode.FAILURE
        assert "Invalid output option - expecting text, html or json" in capsys.readouterr().err

    def test_standalone_without_html(self, hurl_file: Path, capsys):
        code = make_pipeline().run(FormatFlags(input=str(hurl_file), standalone=True))

        assert code == ExitCode.FAILURE
        assert "use --standalone option only with html output" in capsys.readouterr().err

    def test_in_place_with_stdin_is_rejected_before_reading(self, capsys):
        stdin = MagicMock()
        pipeline = FormatPipeline(stdin=stdin, stdin_is_tty=lambda: False)

        code = pipeline.run(FormatFlags(in_place=True))

        assert code == ExitCode.FAILURE
        stdin.read.assert_not_called()
        assert "You can not use --in-place with standard input stream!" in capsys.readouterr().err

    def test_terminal_stdin_shows_usage(self):
        show_usage = MagicMock()
        stdin = MagicMock()
        pipeline = FormatPipeline(stdin=stdin, stdin_is_tty=lambda: True, show_usage=show_usage)

        code = pipeline.run(FormatFlags())

        assert code == ExitCode.FAILURE
        show_usage.assert_called_once()
        stdin.read.assert_not_called()

    def test_write_failure_propagates(self, hurl_file: Path, tmp_path: Path):
        out = tmp_path / "missing" / "out.hurl"

        with pytest.raises(OutputWriteError, match="Issue writing to"):
            make_pipeline().run(FormatFlags(input=str(hurl_file), output=str(out)))


class TestCheckMode:
    """Tests for --check."""

    def test_findings_are_reported(self, hurl_file: Path, capsys):
        code = make_pipeline().run(FormatFlags(input=str(hurl_file), check=True))

        captured = capsys.readouterr()
        assert code == ExitCode.FAILURE
        assert captured.out == ""
        assert "warning: Unnecessary space" in captured.err
        assert "warning: One space" in captured.err

    def test_clean_file_still_fails(self, tmp_path: Path, capsys):
        source = tmp_path / "clean.hurl"
        source.write_text(FORMATTED)

        code = make_pipeline().run(FormatFlags(input=str(source), check=True))

        captured = capsys.readouterr()
        assert code == ExitCode.FAILURE
        assert captured.out == ""
        assert captured.err == ""

    def test_nothing_is_written(self, hurl_file: Path):
        toolkit = MagicMock(wraps=LineToolkit())
        pipeline = make_pipeline(toolkit=toolkit)

        pipeline.run(FormatFlags(input=str(hurl_file), check=True))

        toolkit.fix.assert_not_called()
        toolkit.format_text.assert_not_called()
        assert hurl_file.read_text() == UNFORMATTED


class TestColor:
    """Tests for color resolution."""

    def test_follows_stdout_terminal(self):
        pipeline = FormatPipeline(stdout_is_tty=lambda: True)

        assert pipeline.resolve_color(FormatFlags()) is True
        assert pipeline.resolve_color(FormatFlags(no_color=True)) is False

    def test_in_place_disables_color(self):
        pipeline = FormatPipeline(stdout_is_tty=lambda: True)

        assert pipeline.resolve_color(FormatFlags(input="a.hurl", in_place=True)) is False

    def test_color_flag(self):
        pipeline = FormatPipeline(stdout_is_tty=lambda: False)

        assert pipeline.resolve_color(FormatFlags(color=True)) is True
