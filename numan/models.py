"""Version, package record and configuration data models."""

import re
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import MalformedVersionError

UINT32_MAX = 2 ** 32 - 1

_NUMBER = re.compile(r"[0-9]+")


def _parse_component(token: str, file_name: str, label: str) -> int:
    if not _NUMBER.fullmatch(token):
        raise MalformedVersionError(file_name, f"{label} component '{token}' is not a number")
    value = int(token)
    if value > UINT32_MAX:
        raise MalformedVersionError(file_name, f"{label} component '{token}' is out of range")
    return value


def parse_archive_name(file_name: str) -> Tuple[str, "Version"]:
    """Split ``<name>.<major>.<minor>.<patch>.<ext>`` into name and version.

    Args:
        file_name: Base name of the archive, without directories.

    Returns:
        Tuple of (package key, Version).

    Raises:
        MalformedVersionError: If fewer than three numeric components precede
            the extension.
    """
    parts = file_name.split(".")
    # drop the extension
    parts = parts[:-1]
    if len(parts) < 3:
        raise MalformedVersionError(file_name, "expected <name>.<major>.<minor>.<patch>.<ext>")

    patch = _parse_component(parts.pop(), file_name, "patch")
    minor = _parse_component(parts.pop(), file_name, "minor")
    major = _parse_component(parts.pop(), file_name, "major")
    return ".".join(parts), Version(major=major, minor=minor, patch=patch)


class Version(BaseModel):
    """Three part semantic version ordered numerically by (major, minor, patch)."""

    model_config = ConfigDict(frozen=True)

    major: int = Field(ge=0, le=UINT32_MAX)
    minor: int = Field(ge=0, le=UINT32_MAX)
    patch: int = Field(ge=0, le=UINT32_MAX)

    @classmethod
    def parse(cls, file_name: str) -> "Version":
        """Parse the version embedded in an archive file name.

        Raises:
            MalformedVersionError: If the name has no valid version.
        """
        return parse_archive_name(file_name)[1]

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.major, self.minor, self.patch

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() <= other.as_tuple()

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() > other.as_tuple()

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() >= other.as_tuple()

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def compare(a: Version, b: Version) -> int:
    """Compare two versions.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b.
    """
    if a < b:
        return -1
    elif a > b:
        return 1
    return 0


class PackageRecord(BaseModel):
    """Remembered package of one directory.

    Attributes:
        key: Archive base name without the version suffix.
        version: Highest version seen in the directory.
        path: Directory containing the archives.
    """

    key: str
    version: Version
    path: str

    @classmethod
    def from_archive(cls, file_path) -> "PackageRecord":
        """Build a record from a concrete archive path."""
        file_path = Path(file_path).resolve()
        key, version = parse_archive_name(file_path.name)
        return cls(key=key, version=version, path=str(file_path.parent))


class Configuration(BaseModel):
    """Persisted state: the api key and the remembered packages.

    Serialized with the aliases ``key`` and ``packets``.
    """

    model_config = ConfigDict(populate_by_name=True)

    api_key: Optional[str] = Field(default=None, alias="key")
    packages: List[PackageRecord] = Field(default_factory=list, alias="packets")

    def find(self, path: str) -> Optional[PackageRecord]:
        """Return the record of directory ``path``.

        Stored paths may be relative, end in a separator or go through a
        symlink, so both sides are resolved before comparing.
        """
        target = Path(path).resolve()
        for record in self.packages:
            if Path(record.path).resolve() == target:
                return record
        return None

    def remember(self, record: PackageRecord) -> bool:
        """Merge a record into the configuration.

        An existing record of the same directory only ever moves up to a newer
        version; its key is kept. Unknown directories are appended.

        Returns:
            True if the configuration changed.
        """
        existing = self.find(record.path)
        if existing is None:
            self.packages.append(record)
            return True
        if existing.version < record.version:
            existing.version = record.version
            return True
        return False
