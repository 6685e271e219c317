"""Persistence of the numan configuration file."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .exceptions import ConfigCorruptError
from .models import Configuration, PackageRecord

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


class ConfigStore:
    """
    Loads and saves the numan configuration file.

    The whole document is read at the start of a command and written back in
    full when it changed. There is no locking between processes.
    """

    def __init__(self, config_dir: Path):
        self._config_dir = Path(config_dir)
        self.config_file = self._config_dir / CONFIG_FILE_NAME

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def ensure_dir(self) -> None:
        if not self._config_dir.exists():
            self._config_dir.mkdir(parents=True, exist_ok=True)

    def exists(self) -> bool:
        return self.config_file.is_file()

    def read_raw(self) -> Optional[str]:
        """Return the file contents verbatim, or None if not configured yet."""
        if not self.exists():
            return None
        return self.config_file.read_text(encoding="utf-8")

    def load(self) -> Configuration:
        """
        Read the configuration.

        Returns:
            The stored configuration, or an empty one if no file exists.

        Raises:
            ConfigCorruptError: If the file is not valid JSON or does not
                match the configuration schema.
        """
        raw = self.read_raw()
        if raw is None:
            return Configuration()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigCorruptError(self.config_file, str(e)) from e

        try:
            config = Configuration.model_validate(data)
        except ValidationError as e:
            raise ConfigCorruptError(self.config_file, str(e)) from e

        logger.debug(f"Loaded configuration with {len(config.packages)} package(s)")
        return config

    def save(self, config: Configuration) -> None:
        """Overwrite the configuration file with the full document."""
        self.ensure_dir()
        text = config.model_dump_json(indent=2, by_alias=True)

        fd, tmp_name = tempfile.mkstemp(prefix=".config-", suffix=".json", dir=self._config_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, self.config_file)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug(f"Saved configuration to {self.config_file}")

    def remember_or_update(self, config: Configuration, file_path) -> bool:
        """
        Remember the archive at ``file_path`` for its directory.

        A directory already known keeps its key and only moves to a strictly
        newer version. Unknown directories get a new record.

        Returns:
            True if ``config`` changed.

        Raises:
            MalformedVersionError: If the archive name carries no version.
        """
        record = PackageRecord.from_archive(file_path)
        changed = config.remember(record)
        if changed:
            logger.info(
                f"Remembered {record.key} {record.version}",
                extra={"package_path": record.path},
            )
        return changed
