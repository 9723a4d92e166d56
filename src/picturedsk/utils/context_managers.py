"""
Context managers for PictureDSK.

Provides safe output file handling: image files are written to a
temporary file beside the destination and only renamed into place once
every byte has been written and flushed.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, Union

logger = logging.getLogger(__name__)


class AtomicOutputContext:
    """
    Context manager for writing an output file all at once.

    Opens a temporary file in the destination directory. On a clean exit
    the data is flushed, synced and renamed over the destination. On any
    exception the temporary file is removed and the destination is left
    untouched.

    Attributes:
        path: Final destination path
        temp_path: Temporary file path (set during context)

    Example:
        >>> with AtomicOutputContext("disk.woz") as f:
        ...     f.write(image_bytes)
        >>> # disk.woz now holds the complete image, or nothing changed
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize output context.

        Args:
            path: Destination file path
        """
        self.path = Path(path)
        self.temp_path: Optional[Path] = None
        self._file: Optional[BinaryIO] = None

    def __enter__(self) -> BinaryIO:
        """
        Enter context - create the temporary file.

        Returns:
            Binary file object to write to

        Raises:
            OSError: If the temporary file cannot be created
        """
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, temp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
        )
        self.temp_path = Path(temp_name)
        self._file = os.fdopen(fd, 'wb')
        logger.debug("Writing %s via %s", self.path, self.temp_path)
        return self._file

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit context - commit or discard the temporary file.

        Returns:
            False to not suppress exceptions
        """
        try:
            if exc_type is None:
                self._file.flush()
                os.fsync(self._file.fileno())
                self._file.close()
                os.chmod(self.temp_path, self._final_mode())
                os.replace(self.temp_path, self.path)
                logger.debug("Committed %s", self.path)
            else:
                self._file.close()
        finally:
            # Still present only if the write or the commit failed
            if self.temp_path is not None and self.temp_path.exists():
                try:
                    self.temp_path.unlink()
                    logger.debug("Removed partial output %s", self.temp_path)
                except OSError as cleanup_error:
                    logger.warning(
                        "Failed to remove partial output %s: %s",
                        self.temp_path, cleanup_error
                    )

        # Don't suppress exceptions
        return False

    def _final_mode(self) -> int:
        """Mode for the committed file: the replaced file's, else 0666 less umask."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask
