"""
Error handling utilities for PictureDSK.

Turns the exceptions raised while loading a picture, encoding tracks and
writing the image into one-line messages for the command line, and
classifies which of them are fatal.
"""

import errno
from typing import Optional

from pydantic import ValidationError

from picturedsk.codec.errors import EncodingError
from picturedsk.imaging.image_formats import (
    ImageError,
    ImageGeometryError,
    ImageFormatError,
    ImageReadError,
    ImageWriteError,
)


OS_ERROR_MESSAGES = {
    errno.EACCES: "Permission denied - check the file and directory permissions",
    errno.EPERM: "Operation not permitted",
    errno.ENOENT: "File or directory does not exist",
    errno.ENOSPC: "No space left on device",
    errno.EROFS: "File system is read-only",
    errno.EISDIR: "Path is a directory",
    errno.ENOTDIR: "A path component is not a directory",
    errno.EIO: "I/O error",
}


def handle_os_error(error_code: Optional[int], operation: str = "file operation") -> str:
    """
    Describe an errno value in context.

    Args:
        error_code: errno value (e.g., errno.EACCES), or None
        operation: Description of the operation that failed

    Returns:
        Formatted error message

    Example:
        >>> handle_os_error(errno.ENOSPC, "write disk.woz")
        'write disk.woz failed: No space left on device'
    """
    if error_code is None:
        return f"{operation} failed"
    code_name = errno.errorcode.get(error_code, 'UNKNOWN')
    message = OS_ERROR_MESSAGES.get(error_code, f"Error {error_code}: {code_name}")
    return f"{operation} failed: {message}"


def describe_error(error: BaseException) -> str:
    """
    One-line, user-facing description of an exception.

    Image and encoding errors already carry their context in the message.
    OS errors are described by errno; pydantic validation errors list each
    offending field.
    """
    if isinstance(error, (ImageError, EncodingError)):
        cause = error.__cause__
        if isinstance(cause, OSError) and cause.errno in OS_ERROR_MESSAGES:
            return f"{error} - {OS_ERROR_MESSAGES[cause.errno]}"
        return str(error)

    if isinstance(error, ValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in item['loc']) or 'settings'}: {item['msg']}"
            for item in error.errors()
        )
        return f"Invalid disk settings - {problems}"

    if isinstance(error, OSError):
        target = error.filename or "file"
        return handle_os_error(error.errno, f"access {target}")

    if isinstance(error, MemoryError):
        return "Out of memory"

    return f"{type(error).__name__}: {error}"


def is_fatal_error(error: BaseException) -> bool:
    """
    Determine if an error means no image can be produced.

    Input problems (an unreadable picture, bad settings, a track set that
    does not fit) are reported as usage errors; everything else stops the
    program without an output file.
    """
    return not isinstance(
        error,
        (ImageReadError, ImageGeometryError, ImageFormatError, EncodingError,
         ValidationError),
    )


def get_error_severity(error: BaseException) -> str:
    """
    Get the severity level of an error.

    Returns:
        Severity level: "critical", "error" or "warning"
    """
    if isinstance(error, MemoryError):
        return "critical"
    if isinstance(error, ImageWriteError) or is_fatal_error(error):
        return "error"
    return "warning"
