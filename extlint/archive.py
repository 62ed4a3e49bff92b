"""Zip archive extraction and repacking."""

from __future__ import annotations

import io
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

from .errors import ArchiveError
from .logging import get_logger

_LOGGER = get_logger("archive")


def output_path_for(archive_path: Path, prefix: str) -> Path:
    """Return the sibling path the normalized archive is written to."""
    return archive_path.with_name(f"{prefix}{archive_path.name}")


@contextmanager
def scratch_directory(prefix: str = "extlint-") -> Iterator[Path]:
    """Yield a private extraction directory that is removed on exit."""
    with tempfile.TemporaryDirectory(prefix=prefix) as tmp:
        yield Path(tmp)


def extract_archive(archive_path: Path, dest: Path) -> None:
    """Extract every entry of ``archive_path`` into ``dest``, overwriting."""
    _LOGGER.info("Extracting %s...", archive_path)
    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(dest)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as exc:
        raise ArchiveError(f"Failed to extract {archive_path}: {exc}") from exc


def list_files(root: Path) -> List[Path]:
    """Return leaf files below ``root`` in a stable order."""
    return sorted(path for path in root.rglob("*") if path.is_file())


def pack_files(entries: Iterable[Tuple[Path, str]]) -> bytes:
    """Build a zip from ``(absolute path, folder)`` pairs and return its bytes.

    An empty folder places the file at the archive root.
    """
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path, folder in entries:
                folder = folder.strip("/")
                arcname = f"{folder}/{path.name}" if folder else path.name
                archive.write(path, arcname)
    except OSError as exc:
        raise ArchiveError(f"Failed to pack archive: {exc}") from exc
    return buffer.getvalue()


def write_archive(source_dir: Path, output_path: Path) -> List[str]:
    """Pack ``source_dir`` into ``output_path`` and return the entry names."""
    entries: List[Tuple[Path, str]] = []
    names: List[str] = []
    for path in list_files(source_dir):
        relative = path.relative_to(source_dir).as_posix()
        folder = relative.rpartition("/")[0]
        entries.append((path, folder))
        names.append(relative)

    payload = pack_files(entries)
    try:
        if output_path.exists():
            _LOGGER.debug("Removing existing archive %s", output_path)
            output_path.unlink()
        output_path.write_bytes(payload)
    except OSError as exc:
        raise ArchiveError(f"Failed to write {output_path}: {exc}") from exc
    return names


def read_entries(archive_path: Path) -> dict[str, bytes]:
    """Return ``name -> bytes`` for every file entry in ``archive_path``."""
    try:
        with zipfile.ZipFile(archive_path) as archive:
            return {
                info.filename: archive.read(info)
                for info in archive.infolist()
                if not info.is_dir()
            }
    except (zipfile.BadZipFile, OSError) as exc:
        raise ArchiveError(f"Failed to read {archive_path}: {exc}") from exc


__all__ = [
    "extract_archive",
    "list_files",
    "output_path_for",
    "pack_files",
    "read_entries",
    "scratch_directory",
    "write_archive",
]
