"""Directory scanning for package archives."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .exceptions import DirectoryUnreadableError, MalformedVersionError
from .models import Version, parse_archive_name

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".nupkg"


@dataclass
class ArchiveEntry:
    """A package archive found in a directory."""
    file_name: str
    file_path: Path
    key: str
    version: Version


def scan_directory(path, extension: str = DEFAULT_EXTENSION) -> List[ArchiveEntry]:
    """
    List the package archives directly inside ``path``.

    Subdirectories and files with another extension are skipped. Archives
    whose name carries no valid version are skipped with a warning.
    The result keeps directory listing order.

    Raises:
        DirectoryUnreadableError: If ``path`` cannot be listed.
    """
    entries: List[ArchiveEntry] = []
    try:
        with os.scandir(path) as it:
            for dir_entry in it:
                if not dir_entry.name.endswith(extension):
                    continue
                if not dir_entry.is_file():
                    continue
                try:
                    key, version = parse_archive_name(dir_entry.name)
                except MalformedVersionError as e:
                    logger.warning(f"Skipping {dir_entry.path}: {e.reason}")
                    continue
                entries.append(ArchiveEntry(
                    file_name=dir_entry.name,
                    file_path=Path(dir_entry.path),
                    key=key,
                    version=version,
                ))
    except OSError as e:
        raise DirectoryUnreadableError(path, e.strerror or str(e)) from e

    return entries


def find_newest(path, extension: str = DEFAULT_EXTENSION) -> Optional[ArchiveEntry]:
    """Return the archive with the highest version in ``path``, or None."""
    entries = scan_directory(path, extension)
    if not entries:
        return None
    return max(entries, key=lambda entry: entry.version.as_tuple())
