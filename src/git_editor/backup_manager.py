"""
Backup file management for files edited in place.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from .models import FileAccessError, FileNotFoundInEditorError


logger = logging.getLogger(__name__)


BACKUP_SUFFIX = ".backup"


class BackupManager:
    """Manage the ``<path>.backup`` sibling of a single edited file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.backup_path = self.path.with_name(self.path.name + BACKUP_SUFFIX)

    def create_backup(self) -> Path:
        """Copy the current file to its backup path.

        Returns the backup path.
        """
        if not self.path.exists():
            raise FileNotFoundInEditorError(self.path)
        try:
            shutil.copyfile(self.path, self.backup_path)
        except OSError as e:
            logger.error(f"Failed to back up {self.path}: {e}")
            raise FileAccessError(self.path, f"Failed to create backup: {e}") from e
        logger.info(f"Created backup {self.backup_path}")
        return self.backup_path

    def backup_exists(self) -> bool:
        return self.backup_path.exists()

    def get_backup_path(self) -> Optional[Path]:
        """Return the backup path if a backup exists."""
        return self.backup_path if self.backup_exists() else None

    def restore_backup(self, target: Optional[Union[str, Path]] = None) -> Path:
        """Copy the backup over ``target`` (default: the original file) and remove it.

        Returns the restored path.
        """
        if not self.backup_exists():
            raise FileNotFoundInEditorError(self.backup_path)

        target_path = Path(target) if target is not None else self.path
        try:
            shutil.copyfile(self.backup_path, target_path)
        except OSError as e:
            logger.error(f"Failed to restore {target_path} from {self.backup_path}: {e}")
            raise FileAccessError(target_path, f"Failed to restore backup: {e}") from e

        try:
            self.backup_path.unlink()
        except OSError as e:
            # The restore itself succeeded; a stale backup is only reported
            logger.warning(f"Could not remove backup {self.backup_path}: {e}")

        logger.info(f"Restored {target_path} from {self.backup_path}")
        return target_path

    def delete_backup(self) -> None:
        """Remove the backup if there is one."""
        if not self.backup_exists():
            return
        try:
            self.backup_path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete backup {self.backup_path}: {e}")
            raise FileAccessError(self.backup_path, f"Failed to delete backup: {e}") from e
        logger.info(f"Deleted backup {self.backup_path}")
