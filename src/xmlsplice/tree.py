# topmark:header:start
#
#   project      : xmlsplice
#   file         : tree.py
#   file_relpath : src/xmlsplice/tree.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parse XML text into lxml trees and write them back with `WriterOptions`.

Marshalling and the cleanup pass share `write_tree` so that text produced by one call
can be re-serialized by the next with no formatting drift: pretty printing always
re-applies tab indentation from scratch and line terminators are normalized the same
way every time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from xmlsplice.config.logging import get_logger
from xmlsplice.constants import (
    INDENT_UNIT,
    XML_DECLARATION,
    XML_DECLARATION_END,
    XML_DECLARATION_START,
)

if TYPE_CHECKING:
    from xmlsplice.config.logging import XmlspliceLogger
    from xmlsplice.config.options import WriterOptions

logger: XmlspliceLogger = get_logger(__name__)


def split_declaration(text: str) -> tuple[str, str]:
    """Split a leading XML declaration (and the whitespace after it) from ``text``.

    Args:
        text (str): XML text.

    Returns:
        tuple[str, str]: ``(declaration, body)``; ``declaration`` is empty when ``text``
        does not start with ``<?xml``. The whitespace following the declaration is not
        part of either value.
    """
    if not text.startswith(XML_DECLARATION_START):
        return "", text
    end: int = text.find(XML_DECLARATION_END)
    if end == -1:
        logger.warning("Unterminated XML declaration; head=%r", text[:40])
        return "", text
    end += len(XML_DECLARATION_END)
    return text[:end], text[end:].lstrip()


def parse(text: str) -> etree._Element:
    """Parse a whole XML document held in memory.

    A leading declaration is dropped before parsing since lxml refuses ``str`` input that
    declares an encoding. Entities are not resolved and no network access is allowed.

    Args:
        text (str): XML text.

    Returns:
        etree._Element: The root element.

    Raises:
        etree.XMLSyntaxError: If the text is not well-formed.
    """
    _, body = split_declaration(text)
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    return etree.fromstring(body, parser)


def write_tree(root: etree._Element, options: WriterOptions, *, declaration: bool) -> str:
    """Serialize ``root`` to text according to ``options``.

    Args:
        root (etree._Element): Root element to serialize. When pretty printing, its
            whitespace-only text and tails are rewritten in place.
        options (WriterOptions): Formatting configuration.
        declaration (bool): Prefix the output with the XML declaration.

    Returns:
        str: The serialized document.
    """
    if options.pretty_print:
        etree.indent(root, space=INDENT_UNIT)
    text: str = etree.tostring(root, encoding="unicode")
    if declaration:
        text = f"{XML_DECLARATION}\n{text}"
    newline: str = options.line_terminator
    if newline != "\n":
        text = text.replace("\n", newline)
    return text
