"""Backup creation, restoration, and cleanup for in-place MKV edits.

mkvpropedit edits files in place and the cover replacement takes two
invocations. A backup taken before the first one lets a failed second
invocation be rolled back instead of leaving the file without a cover.
"""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".postertag-backup"


class BackupRestorationError(Exception):
    """Raised when backup restoration fails verification."""


def get_backup_path(file_path: Path) -> Path:
    """Get the backup path for a given file."""
    return file_path.with_suffix(file_path.suffix + BACKUP_SUFFIX)


def create_backup(file_path: Path) -> Path:
    """Create a backup of a file before modification.

    An existing stale backup is replaced.

    Args:
        file_path: Path to the file to backup.

    Returns:
        Path to the created backup file.

    Raises:
        FileNotFoundError: If the source file does not exist.
        OSError: If the backup cannot be written.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Cannot backup: file not found: {file_path}")

    backup_path = get_backup_path(file_path)
    if backup_path.exists():
        backup_path.unlink()
        logger.debug(
            "Removed existing backup",
            extra={"backup_path": str(backup_path)},
        )

    logger.debug(
        "Creating backup",
        extra={
            "source_path": str(file_path),
            "backup_path": str(backup_path),
            "file_size_bytes": file_path.stat().st_size,
        },
    )
    shutil.copy2(file_path, backup_path)
    return backup_path


def restore_from_backup(backup_path: Path, original_path: Path) -> Path:
    """Restore a file from its backup.

    Args:
        backup_path: Path to the backup file.
        original_path: Path to restore to.

    Returns:
        Path to the restored file.

    Raises:
        FileNotFoundError: If the backup file does not exist.
        BackupRestorationError: If the restored file is missing afterwards.
    """
    if not backup_path.exists():
        raise FileNotFoundError(f"Backup file not found: {backup_path}")

    logger.info(
        "Restoring from backup",
        extra={
            "backup_path": str(backup_path),
            "target_path": str(original_path),
        },
    )

    if original_path.exists():
        original_path.unlink()
    shutil.move(str(backup_path), str(original_path))

    if not original_path.exists():
        raise BackupRestorationError(
            f"Restoration failed: {original_path} does not exist after move"
        )
    return original_path


def safe_restore_from_backup(backup_path: Path, original_path: Path) -> bool:
    """Restore from backup, logging instead of raising on failure.

    Used in error handlers where a restoration failure must not mask the
    original error.

    Returns:
        True if restoration succeeded, False otherwise.
    """
    try:
        restore_from_backup(backup_path, original_path)
        return True
    except (OSError, BackupRestorationError) as e:
        logger.error(
            "Failed to restore backup %s: %s. "
            "Original file may be missing its cover attachment.",
            backup_path,
            e,
        )
        return False


def cleanup_backup(backup_path: Path) -> None:
    """Remove a backup file. No-op if it does not exist."""
    if backup_path.exists():
        logger.debug("Cleaning up backup", extra={"backup_path": str(backup_path)})
        backup_path.unlink()
