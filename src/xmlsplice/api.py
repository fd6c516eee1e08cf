# topmark:header:start
#
#   project      : xmlsplice
#   file         : api.py
#   file_relpath : src/xmlsplice/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public xmlsplice API (stable surface).

Functions here are thin wrappers around the marshaller, the cleanup pass and the block
patcher. They validate arguments and translate every low-level failure into one of the
exceptions of `xmlsplice.errors`, chaining the original as ``__cause__``.

Configuration contract
----------------------
Every function that writes XML accepts ``options`` as a frozen
[`xmlsplice.config.WriterOptions`][] or as a plain mapping mirroring the TOML shape:

```python
from xmlsplice import api

text = api.serialize(project, options={"pretty_print": False, "omit_declaration": False})
```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from lxml import etree

from xmlsplice.block.locator import extract_block
from xmlsplice.block.patcher import PatchResult, patch_block
from xmlsplice.cleanup import clean
from xmlsplice.config.logging import get_logger
from xmlsplice.config.options import resolve_options
from xmlsplice.errors import ArgumentError, DeserializationError, SerializationError
from xmlsplice.marshal import marshal, unmarshal
from xmlsplice.utils.file import read_text, require_path, write_text

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from xmlsplice.config.logging import XmlspliceLogger
    from xmlsplice.config.options import WriterOptions

logger: XmlspliceLogger = get_logger(__name__)

T = TypeVar("T")

__all__ = [
    "PatchResult",
    "deserialize",
    "deserialize_from_file",
    "locate_block",
    "patch_block",
    "serialize",
    "serialize_to_file",
]


def serialize(value: Any, options: WriterOptions | Mapping[str, Any] | None = None) -> str:
    """Serialize a dataclass instance to XML text.

    The marshalled text goes through the cleanup pass configured by ``options``.

    Args:
        value (Any): The dataclass instance to serialize.
        options (WriterOptions | Mapping[str, Any] | None): Writer options.

    Returns:
        str: The XML text.

    Raises:
        ArgumentError: If ``value`` is ``None``.
        SerializationError: If ``value`` cannot be represented as XML.
    """
    if value is None:
        raise ArgumentError("Input object to serialize cannot be null.", "value")

    opts: WriterOptions = resolve_options(options)
    try:
        return clean(marshal(value, opts), opts)
    except (TypeError, ValueError, etree.XMLSyntaxError) as exc:
        raise SerializationError(
            f"Invalid operation attempted while serializing object to XML: {exc}"
        ) from exc
    except RecursionError as exc:
        raise SerializationError(f"Unexpected error: {exc}") from exc


def serialize_to_file(
    value: Any,
    path: Path | str,
    options: WriterOptions | Mapping[str, Any] | None = None,
) -> None:
    """Serialize a dataclass instance and write it to ``path`` (UTF-8, no BOM).

    Args:
        value (Any): The dataclass instance to serialize.
        path (Path | str): Destination file; overwritten if it exists.
        options (WriterOptions | Mapping[str, Any] | None): Writer options.

    Raises:
        ArgumentError: If ``path`` is empty or ``value`` is ``None``.
        SerializationError: If ``value`` cannot be represented as XML.
        XmlSpliceIOError: If the file cannot be written.
    """
    file_path: str = require_path(path, "path")
    text: str = serialize(value, options)
    write_text(file_path, text, action="serialization")


def deserialize(text: str, model: type[T]) -> T:
    """Rebuild an instance of ``model`` from XML text.

    Args:
        text (str): A whole XML document whose root element is named after ``model``.
        model (type[T]): The dataclass type to build.

    Returns:
        T: The new instance.

    Raises:
        ArgumentError: If ``text`` is ``None``.
        DeserializationError: If the markup is malformed or incomplete, or does not
            match ``model``.
    """
    if text is None:
        raise ArgumentError("Input text to deserialize cannot be null.", "text")
    try:
        return unmarshal(text, model)
    except (etree.XMLSyntaxError, TypeError, ValueError) as exc:
        raise DeserializationError(
            f"Invalid operation attempted while deserializing object from XML: {exc}"
        ) from exc


def deserialize_from_file(path: Path | str, model: type[T]) -> T:
    """Read ``path`` and rebuild an instance of ``model`` from it.

    Args:
        path (Path | str): The XML file to read.
        model (type[T]): The dataclass type to build.

    Returns:
        T: The new instance.

    Raises:
        ArgumentError: If ``path`` is empty.
        XmlSpliceIOError: If the file is missing or unreadable.
        DeserializationError: If the file content cannot be deserialized.
    """
    file_path: str = require_path(path, "path")
    text: str = read_text(file_path, action="deserialization")
    return deserialize(text, model)


def locate_block(text: str, tag_name: str) -> str | None:
    """Return the first ``<tag_name>`` ... ``</tag_name>`` block of ``text``, if any.

    Args:
        text (str): The document text.
        tag_name (str): The bare tag name to look for.

    Returns:
        str | None: The block text, or ``None`` when there is no such block.

    Raises:
        ArgumentError: If ``tag_name`` is empty.
    """
    if not tag_name:
        raise ArgumentError("Tag name cannot be null or empty.", "tag_name")
    return extract_block(text, tag_name)
