"""Pipeline orchestration for archive normalization runs."""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Dict, Mapping, Optional

from .archive import (
    extract_archive,
    list_files,
    output_path_for,
    scratch_directory,
    write_archive,
)
from .classifier import FileClassifier
from .config import ExtLintConfig
from .errors import ParseError, TransformError, UsageError
from .logging import FileLogAdapter, file_logger, get_logger
from .models import BatchReport, FileKind, FileOutcome, RunResult, SourceFile
from .normalizers import Normalizer, build_normalizers


class Orchestrator:
    """Coordinates extraction, per-file normalization and repacking."""

    def __init__(
        self,
        config: ExtLintConfig | None = None,
        classifier: FileClassifier | None = None,
        normalizers: Optional[Mapping[FileKind, Normalizer]] = None,
    ) -> None:
        self.config = config or ExtLintConfig(root=Path.cwd())
        self.classifier = classifier or FileClassifier(self.config.extensions)
        self.normalizers: Dict[FileKind, Normalizer] = dict(
            normalizers if normalizers is not None else build_normalizers(self.config)
        )
        self.logger = get_logger("orchestrator")

    def run(self, archive_path: str | Path) -> RunResult:
        """Normalize ``archive_path`` into a new archive written beside it."""
        archive = Path(archive_path).expanduser().resolve()
        if not archive.is_file():
            raise UsageError(f"Archive not found: {archive}")
        output = output_path_for(archive, self.config.output_prefix)

        with scratch_directory() as scratch:
            extract_archive(archive, scratch)
            report = self.normalize_tree(scratch)
            entries = write_archive(scratch, output)

        self.logger.debug("Packed %d entries into %s", len(entries), output)
        return RunResult(archive=archive, output=output, report=report)

    def normalize_tree(self, root: Path) -> BatchReport:
        """Normalize every recognized file below ``root`` in place."""
        report = BatchReport()
        for path in list_files(root):
            relative = path.relative_to(root).as_posix()
            kind = self.classifier.classify(path)
            if kind is FileKind.IGNORED or kind not in self.normalizers:
                report.skipped.append(relative)
                continue
            source = SourceFile(relative_path=relative, path=path, kind=kind)
            report.outcomes.append(self.normalize_file(source))

        self.logger.info(
            "Normalized %d file(s), %d failed, %d passed through unchanged",
            len(report.normalized),
            len(report.failed),
            len(report.skipped),
        )
        return report

    def normalize_file(self, source: SourceFile) -> FileOutcome:
        """Run one file through its normalizer chain; failures leave it untouched."""
        log = file_logger(self.logger, source.relative_path)
        try:
            source.raw = source.path.read_bytes()
            source.text = _decode(source.raw, source.relative_path)
            normalizer = self.normalizers[source.kind]
            source.text = normalizer.normalize(source.text, path=source.relative_path)
            source.path.write_bytes(source.text.encode("utf-8"))
        except (ParseError, TransformError) as exc:
            return self._failed(source, exc, log)
        except Exception as exc:  # normalizer engines raise their own exception types
            return self._failed(source, TransformError(f"{type(exc).__name__}: {exc}"), log)

        log.info("Linted: %s", source.relative_path)
        return FileOutcome(relative_path=source.relative_path, kind=source.kind, ok=True)

    def _failed(self, source: SourceFile, exc: Exception, log: FileLogAdapter) -> FileOutcome:
        log.error("Error linting %s: %s", source.relative_path, exc)
        log.debug("Failure details for %s", source.relative_path, exc_info=exc)
        return FileOutcome(
            relative_path=source.relative_path,
            kind=source.kind,
            ok=False,
            error=str(exc),
        )


def _decode(raw: bytes, relative_path: str) -> str:
    if raw.startswith(codecs.BOM_UTF8):
        raw = raw[len(codecs.BOM_UTF8) :]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TransformError(f"{relative_path} is not valid UTF-8: {exc}") from exc


__all__ = ["Orchestrator"]
