"""File operations for list files.

Reads are plain; writes use the temp-file-rename pattern so an interrupted
write never leaves a truncated ID list behind.
"""

import os
import structlog
from pathlib import Path
from typing import Union

logger = structlog.get_logger()


def read_bytes(path: Union[str, Path]) -> bytes:
    """
    Read the whole file at path.

    Args:
        path: File to read

    Returns:
        File content

    Raises:
        OSError: If the file is missing or unreadable
    """
    return Path(path).read_bytes()


def atomic_write(path: Union[str, Path], data: bytes) -> None:
    """
    Atomically write data to file with temp-file-rename pattern.

    1. Write to temporary file in the target directory
    2. fsync to ensure data is on disk
    3. Atomic rename to replace original file

    Args:
        path: Target file path
        data: Content to write

    Raises:
        OSError: On file I/O errors
        PermissionError: On permission errors
    """
    path = Path(path)

    # Same directory keeps the rename on one filesystem
    temp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"

    try:
        with open(temp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        # On POSIX systems, this is atomic even if target exists
        temp_path.replace(path)

        logger.debug(
            "atomic_write_success",
            path=str(path),
            size=len(data)
        )

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error(
            "atomic_write_failed",
            path=str(path),
            error=str(e)
        )
        raise
