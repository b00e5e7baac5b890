"""Renderers for parsed Hurl documents: text, JSON, HTML and AST dump."""

import html
import io
import json
import pprint

from rich.console import Console
from rich.text import Text

from hurlkit.document.model import Document, SourceLine
from hurlkit.document.parser import REQUEST_LINE

_STANDALONE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Hurl File</title>
<style>
.hurl-entry {{ margin: 0; }}
.comment {{ color: #888; }}
.method {{ color: #d70; font-weight: bold; }}
.url {{ color: #070; }}
</style>
</head>
<body>
{body}
</body>
</html>
"""


def _styled_line(line: SourceLine, is_request: bool) -> Text:
    text = Text(line.text)
    if line.text.lstrip().startswith("#"):
        text.stylize("bright_black")
    elif is_request:
        match = REQUEST_LINE.match(line.text)
        text.stylize("yellow", match.start("method"), match.end("method"))
        text.stylize("green", match.start("url"), match.end("url"))
    return text


def format_text(document: Document, color: bool = False) -> str:
    """Render the document as Hurl text, with ANSI colors when requested."""
    lines = document.source_lines()
    if not lines:
        return ""

    if not color:
        return "\n".join(line.text for line in lines) + "\n"

    request_lines = {entry.request.line.number for entry in document.entries}
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        force_terminal=True,
        color_system="standard",
        soft_wrap=True,
        highlight=False,
    )
    for line in lines:
        console.print(_styled_line(line, line.number in request_lines))
    return buffer.getvalue()


def format_json(document: Document) -> str:
    """Render the document entries as JSON."""
    entries = [
        {
            "request": {
                "method": entry.request.method,
                "url": entry.request.url,
                "line": entry.request.line.number,
            },
            "lines": [line.text for line in entry.lines],
        }
        for entry in document.entries
    ]
    return json.dumps({"entries": entries}, indent=2) + "\n"


def _html_line(line: SourceLine, is_request: bool) -> str:
    if line.text.lstrip().startswith("#"):
        return f'<span class="comment">{html.escape(line.text)}</span>'
    if is_request:
        match = REQUEST_LINE.match(line.text)
        return (
            html.escape(line.text[: match.start("method")])
            + f'<span class="method">{html.escape(match.group("method"))}</span>'
            + html.escape(match.group("sep"))
            + f'<span class="url">{html.escape(match.group("url"))}</span>'
            + html.escape(match.group("rest"))
        )
    return html.escape(line.text)


def format_html(document: Document, standalone: bool = False) -> str:
    """Render the document as an HTML fragment or a complete HTML page."""
    request_lines = {entry.request.line.number for entry in document.entries}
    body = "\n".join(
        _html_line(line, line.number in request_lines)
        for line in document.source_lines()
    )
    fragment = f'<pre><code class="language-hurl">{body}</code></pre>'
    if standalone:
        return _STANDALONE_TEMPLATE.format(body=fragment)
    return fragment + "\n"


def format_ast(document: Document) -> str:
    """Dump the parsed structure for debugging."""
    return pprint.pformat(document, width=100) + "\n"
