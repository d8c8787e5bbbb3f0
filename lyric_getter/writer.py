from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TextIO

from .config import OutputFormat, RunConfig
from .models import OutputError

logger = logging.getLogger(__name__)

RECORD_TERMINATOR = "\n"


class OutputWriter:
    """Append-only owner of the output file.

    In dry-run mode nothing is opened and ``append`` only pretends to write.
    """

    def __init__(
        self,
        path: Path,
        output_format: OutputFormat,
        handle: Optional[TextIO],
        flush_every: int = 50,
    ) -> None:
        self.path = path
        self.output_format = output_format
        self.dry_run = handle is None
        self._handle = handle
        self._flush_every = max(1, flush_every)
        self._pending = 0
        self._closed = False

    @classmethod
    def open(cls, config: RunConfig) -> "OutputWriter":
        if config.dry_run:
            logger.info("Dry run: nothing will be written to %s", config.output)
            return cls(config.output, config.output_format, None, config.flush_every)
        try:
            config.output.parent.mkdir(parents=True, exist_ok=True)
            # surrogateescape writes undecodable file name bytes back unchanged
            handle = config.output.open("a", encoding="utf-8", errors="surrogateescape")
        except OSError as exc:
            raise OutputError(config.output, f"failed to open output file: {exc}") from exc
        return cls(config.output, config.output_format, handle, config.flush_every)

    def append(self, rendered: str) -> bool:
        if self._closed:
            raise ValueError("append() on a closed OutputWriter")
        if self._handle is None:
            return True
        try:
            self._handle.write(rendered + RECORD_TERMINATOR)
            self._pending += 1
            if self._pending >= self._flush_every:
                self.flush()
        except (OSError, UnicodeError) as exc:
            raise OutputError(self.path, f"failed to append record: {exc}") from exc
        return True

    def flush(self) -> None:
        if self._handle is None:
            return
        try:
            self._handle.flush()
        except (OSError, UnicodeError) as exc:
            raise OutputError(self.path, f"failed to flush output: {exc}") from exc
        self._pending = 0

    def close(self) -> None:
        self._closed = True
        if self._handle is None:
            return
        try:
            self.flush()
        finally:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "OutputWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
