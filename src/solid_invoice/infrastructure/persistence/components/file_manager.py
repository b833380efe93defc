"""File management component: atomic writes, rotating backups and recovery."""

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from solid_invoice.infrastructure.logging.logger import get_logger


class FileManager:
    """
    Owns every I/O operation on one data file.

    Writes go to a temporary file in the same directory and are renamed over
    the target, so readers never see a half-written file. Before each write the
    current file is copied to a timestamped backup; only the newest
    ``backup_count`` backups are kept.
    """

    def __init__(self, file_path: str, create_dirs: bool = True, backup_count: int = 5):
        """
        Initialize file manager.

        Args:
            file_path: Path to the data file
            create_dirs: Whether to create parent directories
            backup_count: Number of backup files to keep, 0 disables backups
        """
        self.file_path = Path(file_path)
        self.backup_count = backup_count
        self.logger = get_logger(__name__)

        if create_dirs and not self.file_path.parent.exists():
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.logger.info(f"Created directory: {self.file_path.parent}")

    def read_file(self) -> str:
        """
        Read the data file.

        Returns:
            File content, empty string if the file doesn't exist
        """
        if not self.file_path.exists():
            self.logger.debug(f"File does not exist: {self.file_path}")
            return ""

        with open(self.file_path, "r", encoding="utf-8") as f:
            content = f.read()

        self.logger.debug(f"Read {len(content)} characters from {self.file_path}")
        return content

    def write_file(self, content: str) -> None:
        """Write content to the data file atomically."""
        temp_dir = self.file_path.parent
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=temp_dir,
            delete=False,
            prefix=f".{self.file_path.name}.tmp",
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        try:
            temp_path.replace(self.file_path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink()
            raise

        self.logger.debug(f"Wrote {len(content)} characters to {self.file_path}")

    def create_backup(self) -> Optional[Path]:
        """
        Copy the current data file to a timestamped backup.

        Returns:
            Backup path, None if backups are disabled, there is nothing to back up
            or the copy failed
        """
        if self.backup_count <= 0 or not self.file_path.exists():
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = self.file_path.with_suffix(f".backup_{timestamp}{self.file_path.suffix}")

        try:
            shutil.copy2(self.file_path, backup_path)
        except OSError as e:
            self.logger.warning(f"Failed to create backup of {self.file_path}: {e}")
            return None

        self.logger.debug(f"Created backup: {backup_path}")
        self._cleanup_old_backups()
        return backup_path

    def list_backups(self) -> List[Path]:
        """Backups of the data file, newest first."""
        pattern = f"{self.file_path.stem}.backup_*{self.file_path.suffix}"
        backups = list(self.file_path.parent.glob(pattern))
        # Timestamped names sort chronologically
        backups.sort(key=lambda p: p.name, reverse=True)
        return backups

    def recover_from_backup(self) -> bool:
        """
        Replace the data file with its most recent backup.

        Returns:
            True if a backup was restored, False if none exists
        """
        backups = self.list_backups()
        if not backups:
            self.logger.warning(f"No backup files found for {self.file_path}")
            return False

        shutil.copy2(backups[0], self.file_path)
        self.logger.info(f"Recovered file from backup: {backups[0]}")
        return True

    def _cleanup_old_backups(self) -> None:
        for backup_file in self.list_backups()[self.backup_count:]:
            try:
                backup_file.unlink()
                self.logger.debug(f"Removed old backup: {backup_file}")
            except OSError as e:
                self.logger.warning(f"Failed to remove old backup {backup_file}: {e}")
