"""Destination for the formatter output: a file or standard output."""

import sys
from pathlib import Path
from typing import BinaryIO, Optional, Union

from hurlkit.errors import OutputWriteError
from hurlkit.logging import get_logger

logger = get_logger(__name__)


class OutputSink:
    """Writes the final bytes to ``path``, or to stdout when no path is set."""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        stdout: Optional[BinaryIO] = None,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self._stdout = stdout

    @property
    def destination(self) -> str:
        return str(self.path) if self.path is not None else "<stdout>"

    def write(self, data: bytes) -> None:
        """Write ``data`` in full.

        Raises:
            OutputWriteError: If the destination can not be created or written
        """
        try:
            if self.path is None:
                stream = self._stdout or sys.stdout.buffer
                stream.write(data)
                stream.flush()
            else:
                with open(self.path, "wb") as file:
                    file.write(data)
        except OSError as e:
            raise OutputWriteError(self.destination, e) from e

        logger.debug(f"Wrote {len(data)} bytes to {self.destination}")
