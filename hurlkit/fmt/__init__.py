"""Formatter pipeline for ``hurlfmt``."""

from hurlkit.fmt.pipeline import FormatFlags, FormatPipeline, FormatRequest
from hurlkit.fmt.sink import OutputSink

__all__ = ["FormatFlags", "FormatPipeline", "FormatRequest", "OutputSink"]
