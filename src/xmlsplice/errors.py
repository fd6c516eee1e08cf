# topmark:header:start
#
#   project      : xmlsplice
#   file         : errors.py
#   file_relpath : src/xmlsplice/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the xmlsplice public API.

Usage:
    Public operations catch low-level failures (``lxml`` parse errors, ``OSError``,
    ``TypeError`` from model construction, ...) at their boundary and re-raise one of
    the exceptions below with ``raise ... from exc``. The original failure stays
    available as ``__cause__``.

Hierarchy:
    All exceptions derive from `XmlSpliceError`. Where a builtin category exists, the
    exception also derives from it (``ArgumentError`` is a ``ValueError``,
    ``XmlSpliceIOError`` is an ``OSError``, ``BlockNotFoundError`` is a ``LookupError``)
    so callers can keep catching the builtin family.
"""

from __future__ import annotations


class XmlSpliceError(Exception):
    """Base class for all xmlsplice errors."""


class ArgumentError(XmlSpliceError, ValueError):
    """Error for a missing or empty required argument.

    Attributes:
        param_name (str): Name of the offending parameter.
    """

    def __init__(self, message: str, param_name: str) -> None:
        super().__init__(message)
        self.param_name: str = param_name


class SerializationError(XmlSpliceError):
    """Error when an object cannot be marshalled to XML."""


class DeserializationError(XmlSpliceError):
    """Error for malformed or incomplete markup, or a model mismatch."""


class BlockNotFoundError(XmlSpliceError, LookupError):
    """Error when a document holds no ``<Tag>...</Tag>`` block for the model.

    Attributes:
        tag_name (str): The tag name that was searched for.
    """

    def __init__(self, tag_name: str) -> None:
        super().__init__(f"The specified XML block was not found: {tag_name}")
        self.tag_name: str = tag_name


class NullAfterMutationError(XmlSpliceError):
    """Error when a mutation callback leaves no usable object to re-serialize."""


class XmlSpliceIOError(XmlSpliceError, OSError):
    """Error for I/O failures reading or writing a document.

    Attributes:
        path (str): The file path involved in the failed operation.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path: str = path


class ConfigError(XmlSpliceError):
    """Error for configuration errors (missing/invalid/malformed TOML)."""
