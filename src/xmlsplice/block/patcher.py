# topmark:header:start
#
#   project      : xmlsplice
#   file         : patcher.py
#   file_relpath : src/xmlsplice/block/patcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewrite one named block of a document through a typed model.

The patch pipeline, per call:

1. locate the first ``<Model>...</Model>`` block (`xmlsplice.block.locator`);
2. unmarshal the block into a ``Model`` instance;
3. hand the instance to the caller's ``mutate`` callback, exactly once;
4. marshal the result (pretty printed, no declaration) and run the cleanup pass;
5. re-indent it to the original block's column (`xmlsplice.block.splicer`);
6. replace the first occurrence of the original block text.

`patch_text` runs these steps over a string. `patch_block` wraps it with a whole-file
read and a whole-file write; there is no locking and no rollback, so concurrent patches
of one file must be serialized by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, TypeVar

from lxml import etree

from xmlsplice.block.locator import BlockSpan, locate
from xmlsplice.block.splicer import reindent
from xmlsplice.cleanup import clean
from xmlsplice.config.logging import get_logger
from xmlsplice.config.options import resolve_options
from xmlsplice.errors import (
    ArgumentError,
    BlockNotFoundError,
    DeserializationError,
    NullAfterMutationError,
    SerializationError,
)
from xmlsplice.marshal import marshal, unmarshal
from xmlsplice.utils.file import read_text, require_path, write_text

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    from xmlsplice.config.logging import XmlspliceLogger
    from xmlsplice.config.options import WriterOptions

logger: XmlspliceLogger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PatchResult:
    """Outcome of one block patch.

    Attributes:
        tag_name (str): Tag name of the patched block (the model's class name).
        span (BlockSpan): Position of the original block in the original document.
        original (str): The original block text.
        replacement (str): The re-indented block text that replaced it.
        path (str | None): The patched file, or ``None`` for in-memory patches.
        bytes_written (int): Number of UTF-8 bytes written to ``path``.
    """

    tag_name: str
    span: BlockSpan
    original: str
    replacement: str
    path: str | None = None
    bytes_written: int = 0

    @property
    def changed(self) -> bool:
        """Whether the replacement differs from the original block."""
        return self.original != self.replacement


def _apply_mutation(value: T, model: type[T], mutate: Callable[[T], T | None]) -> T:
    returned: Any = mutate(value)
    if returned is None:
        return value
    if isinstance(returned, model):
        return returned
    raise NullAfterMutationError(
        f"Mutation of <{model.__name__}> returned {type(returned).__name__!s}; "
        f"expected None or a {model.__name__} instance to serialize."
    )


def patch_text(
    document: str,
    model: type[T],
    mutate: Callable[[T], T | None],
    options: WriterOptions | Mapping[str, Any] | None = None,
) -> tuple[str, PatchResult]:
    """Rewrite the ``model`` block of ``document`` in memory.

    Args:
        document (str): The whole document text.
        model (type[T]): Dataclass type of the block; its class name is the tag name.
        mutate (Callable[[T], T | None]): Called once with the unmarshalled instance.
            Either mutate it in place and return ``None``, or return a replacement
            instance of ``model``.
        options (WriterOptions | Mapping[str, Any] | None): Writer options for the
            replacement block. The declaration is always omitted.

    Returns:
        tuple[str, PatchResult]: The updated document and a description of the patch.

    Raises:
        BlockNotFoundError: If the document has no block for ``model``.
        DeserializationError: If the block cannot be unmarshalled into ``model``.
        NullAfterMutationError: If ``mutate`` returns something other than ``None`` or
            a ``model`` instance.
        SerializationError: If the mutated instance cannot be marshalled.
    """
    if mutate is None:
        raise ArgumentError("Mutation callback cannot be null.", "mutate")
    opts: WriterOptions = resolve_options(options).evolve(omit_declaration=True)
    tag_name: str = model.__name__

    span: BlockSpan | None = locate(document, tag_name)
    if span is None:
        raise BlockNotFoundError(tag_name)
    block: str = span.slice(document)
    logger.debug("patch: found <%s> block at [%d, %d)", tag_name, span.start, span.end)

    try:
        value: T = unmarshal(block, model)
    except (etree.XMLSyntaxError, ValueError, TypeError) as exc:
        raise DeserializationError(
            f"Invalid operation attempted while deserializing object from XML: {exc}"
        ) from exc

    value = _apply_mutation(value, model, mutate)

    try:
        fresh: str = clean(marshal(value, opts), opts)
    except (etree.XMLSyntaxError, ValueError, TypeError) as exc:
        raise SerializationError(
            f"Invalid operation attempted while serializing object to XML: {exc}"
        ) from exc

    replacement: str = reindent(document, block, fresh, opts.line_terminator)
    updated: str = document.replace(block, replacement, 1)
    logger.trace("patch: <%s> replacement=%r", tag_name, replacement)
    return updated, PatchResult(
        tag_name=tag_name, span=span, original=block, replacement=replacement
    )


def patch_block(
    path: Path | str,
    model: type[T],
    mutate: Callable[[T], T | None],
    options: WriterOptions | Mapping[str, Any] | None = None,
) -> PatchResult:
    """Rewrite the ``model`` block of the file at ``path``.

    The file is read in full, patched with `patch_text`, and overwritten in full.
    Nothing is written when any step before the write fails.

    Args:
        path (Path | str): The XML file to patch.
        model (type[T]): Dataclass type of the block; its class name is the tag name.
        mutate (Callable[[T], T | None]): Mutation callback, see `patch_text`.
        options (WriterOptions | Mapping[str, Any] | None): Writer options for the
            replacement block.

    Returns:
        PatchResult: Description of the patch, including the bytes written.

    Raises:
        ArgumentError: If ``path`` is empty.
        XmlSpliceIOError: If the file cannot be read or written.
        BlockNotFoundError: If the file has no block for ``model``.
        DeserializationError: If the block cannot be unmarshalled into ``model``.
        NullAfterMutationError: If ``mutate`` leaves no usable object.
        SerializationError: If the mutated instance cannot be marshalled.
    """
    file_path: str = require_path(path, "path")
    document: str = read_text(file_path)
    updated, result = patch_text(document, model, mutate, options)
    written: int = write_text(file_path, updated)
    logger.info("Patched <%s> block in %s (%d bytes)", result.tag_name, file_path, written)
    return replace(result, path=file_path, bytes_written=written)
