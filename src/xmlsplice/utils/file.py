# topmark:header:start
#
#   project      : xmlsplice
#   file         : file.py
#   file_relpath : src/xmlsplice/utils/file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Whole-file text I/O for xmlsplice.

Files are read and written as UTF-8 in one piece. Line endings are never translated,
so a patched file keeps the terminators of every line the patch did not touch. A
leading byte-order mark is accepted on read and never written.
"""

from __future__ import annotations

import os
from pathlib import Path

from xmlsplice.config.logging import get_logger
from xmlsplice.constants import TEXT_ENCODING
from xmlsplice.errors import ArgumentError, XmlSpliceIOError

logger = get_logger(__name__)


def require_path(path: Path | str | None, param_name: str) -> str:
    """Return ``path`` as a string, rejecting ``None`` and empty values.

    Args:
        path (Path | str | None): The path argument to check.
        param_name (str): Name of the parameter, reported in the error.

    Returns:
        str: The path as a string.

    Raises:
        ArgumentError: If ``path`` is ``None`` or empty.
    """
    if path is None or not os.fspath(path):
        raise ArgumentError("File path cannot be null or empty.", param_name)
    return os.fspath(path)


def read_text(path: Path | str, *, action: str = "reading") -> str:
    """Read the whole file at ``path`` as UTF-8 text.

    Args:
        path (Path | str): File to read.
        action (str): Verb used in the error message (e.g. ``"deserialization"``).

    Returns:
        str: The file contents, without a leading byte-order mark.

    Raises:
        XmlSpliceIOError: If the file is missing, unreadable or not valid UTF-8.
    """
    try:
        with open(path, encoding=f"{TEXT_ENCODING}-sig", newline="") as fh:
            text: str = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read %s: %s", path, exc)
        raise XmlSpliceIOError(f"IO error during {action} from file '{path}'.", str(path)) from exc
    logger.debug("Read %d characters from %s", len(text), path)
    return text


def write_text(path: Path | str, text: str, *, action: str = "writing") -> int:
    """Overwrite the file at ``path`` with ``text`` as UTF-8 (no byte-order mark).

    Args:
        path (Path | str): File to write.
        text (str): New file contents.
        action (str): Verb used in the error message (e.g. ``"serialization"``).

    Returns:
        int: Number of bytes written.

    Raises:
        XmlSpliceIOError: If the file cannot be written.
    """
    data: bytes = text.encode(TEXT_ENCODING)
    try:
        with open(path, "wb") as fh:
            fh.write(data)
    except OSError as exc:
        logger.error("Cannot write %s: %s", path, exc)
        raise XmlSpliceIOError(f"IO error during {action} to file '{path}'.", str(path)) from exc
    logger.debug("Wrote %d bytes to %s", len(data), path)
    return len(data)
