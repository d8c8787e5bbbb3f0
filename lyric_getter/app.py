from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import RunConfig
from .matching import ArtistMatcher
from .models import CandidateFile, MetadataReadError
from .records import RecordBuilder
from .report import Report
from .scanner import LibraryScanner
from .tagging import Id3TagReader, MetadataReader
from .writer import OutputWriter

logger = logging.getLogger(__name__)


@dataclass
class LyricGetterApp:
    config: RunConfig
    reader: MetadataReader
    matcher: ArtistMatcher
    builder: RecordBuilder
    report: Report = field(default_factory=Report)

    @classmethod
    def create(cls, config: RunConfig, reader: MetadataReader | None = None) -> "LyricGetterApp":
        return cls(
            config=config,
            reader=reader or Id3TagReader(),
            matcher=ArtistMatcher(config.artist_filter),
            builder=RecordBuilder(config.output_format),
        )

    def run(self) -> Report:
        """Scan the library and append every matching record.

        The writer is opened before scanning starts, so an unusable output
        path aborts the run with ``OutputError`` before any file is read.
        """
        writer = OutputWriter.open(self.config)
        try:
            scanner = LibraryScanner(self.config, self.report)
            for candidate in scanner.iter_candidates():
                self.process(candidate, writer)
        finally:
            writer.close()
        skipped = self.report.summary().depth_skipped_dirs
        if skipped and self.config.max_depth is not None:
            logger.warning(
                "Max depth %d prevented descending into %d directories.",
                self.config.max_depth,
                skipped,
            )
        return self.report

    def process(self, candidate: CandidateFile, writer: OutputWriter) -> None:
        path = candidate.path
        self.report.file_visited(path)
        try:
            meta = self.reader.read(path)
        except MetadataReadError as exc:
            logger.warning("Failed to read tags from '%s': %s", path, exc.cause)
            self.report.read_error(path, exc.cause)
            return

        artist = self.matcher.match(meta)
        if artist is None:
            logger.debug("Artist of %s does not match filter", path)
            self.report.skipped_no_artist(path)
            return
        self.report.matched(path)

        record = self.builder.build(meta, artist, path)
        if record is None:
            logger.info("Skipping '%s' by %s in %s: no lyrics found", meta.title or "?", artist, path)
            self.report.skipped_no_lyrics(path)
            return

        writer.append(self.builder.render(record))
        self.report.written(path)
        logger.info("Captured lyrics for '%s' by %s", record.title, record.artist)
