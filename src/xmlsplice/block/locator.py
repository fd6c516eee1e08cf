# topmark:header:start
#
#   project      : xmlsplice
#   file         : locator.py
#   file_relpath : src/xmlsplice/block/locator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Locate a named block in raw document text.

A *block* is the substring from the first bare ``<Tag>`` to the first ``</Tag>`` that
follows it. The search is a literal substring search, not a parse:

* opening tags carrying attributes (``<Tag attr="x">``) or written self-closing
  (``<Tag/>``) are never matched;
* namespaces are ignored;
* if ``Tag`` also occurs inside its own subtree, the block ends at the first textual
  ``</Tag>``, which belongs to the *inner* element. Such a block is not a well-formed
  element; patching documents with same-named nested elements is unsupported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from xmlsplice.config.logging import get_logger

if TYPE_CHECKING:
    from xmlsplice.config.logging import XmlspliceLogger

logger: XmlspliceLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BlockSpan:
    """Position of a block within a document.

    Attributes:
        tag_name (str): The tag name the block was located by.
        start (int): Offset of the ``<`` of the opening tag.
        end (int): Offset one past the ``>`` of the closing tag.
    """

    tag_name: str
    start: int
    end: int

    def slice(self, document: str) -> str:
        """Return the block text of ``document``."""
        return document[self.start : self.end]


def start_tag(tag_name: str) -> str:
    """Return the bare opening tag for ``tag_name``."""
    return f"<{tag_name}>"


def end_tag(tag_name: str) -> str:
    """Return the closing tag for ``tag_name``."""
    return f"</{tag_name}>"


def locate(document: str, tag_name: str) -> BlockSpan | None:
    """Find the first ``<tag_name>`` ... ``</tag_name>`` block in ``document``.

    Args:
        document (str): The whole document text.
        tag_name (str): Tag name to look for.

    Returns:
        BlockSpan | None: The span of the block, or ``None`` when the opening tag is
        missing or no closing tag follows it.
    """
    opening: str = start_tag(tag_name)
    closing: str = end_tag(tag_name)

    start: int = document.find(opening)
    if start == -1:
        logger.debug("locate: no %s in document", opening)
        return None

    close: int = document.find(closing, start)
    if close == -1:
        logger.debug("locate: %s at %d has no %s after it", opening, start, closing)
        return None

    span = BlockSpan(tag_name=tag_name, start=start, end=close + len(closing))
    logger.trace("locate: %s -> [%d, %d)", tag_name, span.start, span.end)
    return span


def extract_block(document: str, tag_name: str) -> str | None:
    """Return the text of the first ``tag_name`` block of ``document``, if any."""
    span: BlockSpan | None = locate(document, tag_name)
    return span.slice(document) if span is not None else None
