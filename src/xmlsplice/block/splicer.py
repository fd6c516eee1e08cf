# topmark:header:start
#
#   project      : xmlsplice
#   file         : splicer.py
#   file_relpath : src/xmlsplice/block/splicer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Re-indent a replacement block to sit where the original block sat.

Only the *lead-in* of the original block is used: the whitespace between the start of
its line and its first character. Each continuation line of the replacement keeps its
own relative indentation (the depth the fresh serialization gave it) and is shifted by
that lead-in, so the new block's shape, not the old one's, decides the nesting.

Example, with a two-space lead-in and a tab-indented replacement:

    "  <Group>"            ->  "  <Group>"
    "\t<Name>x</Name>"     ->  "  \t<Name>x</Name>"
    "</Group>"             ->  "  </Group>"
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

from xmlsplice.config.logging import get_logger
from xmlsplice.constants import INDENT_UNIT

if TYPE_CHECKING:
    from xmlsplice.config.logging import XmlspliceLogger

logger: XmlspliceLogger = get_logger(__name__)

# Only real line terminators; U+2028 and friends are ordinary text in XML.
_LINE_BREAK: re.Pattern[str] = re.compile(r"\r\n|\r|\n")


def indentation_prefix(document: str, start: int) -> str | None:
    """Return the whitespace lead-in of the line containing offset ``start``.

    Args:
        document (str): The whole document text.
        start (int): Offset of the block's first character.

    Returns:
        str | None: The text between the preceding line terminator (or the document
        start) and ``start``, or ``None`` when it is empty or holds anything other than
        whitespace.
    """
    line_start: int = max(document.rfind("\n", 0, start), document.rfind("\r", 0, start)) + 1
    prefix: str = document[line_start:start]
    if not prefix or not prefix.isspace():
        return None
    return prefix


def reindent(document: str, block: str, new_block: str, newline: str | None = None) -> str:
    """Shift the continuation lines of ``new_block`` by the lead-in of ``block``.

    Args:
        document (str): The original document text.
        block (str): The original block text; its first occurrence in ``document`` is
            the anchor.
        new_block (str): The freshly serialized replacement block.
        newline (str | None): Line terminator for the result; ``None`` uses ``os.linesep``.

    Returns:
        str: The re-indented replacement. ``new_block`` is returned unchanged when
        ``block`` is not in ``document`` or does not start on a whitespace-only lead-in.
    """
    start: int = document.find(block)
    if start == -1:
        logger.debug("reindent: original block not found; keeping replacement as is")
        return new_block

    prefix: str | None = indentation_prefix(document, start)
    if prefix is None:
        logger.debug("reindent: block at %d has no whitespace lead-in", start)
        return new_block

    lines: list[str] = _LINE_BREAK.split(new_block)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return new_block
    if len(lines) == 1:
        return lines[0]

    out: list[str] = [lines[0]]
    for line in lines[1:]:
        content: str = line.lstrip()
        if not content:
            out.append("")
            continue
        rel_offset: int = len(line) - len(content)
        out.append(prefix + INDENT_UNIT * rel_offset + content)

    logger.trace("reindent: prefix=%r; %d line(s)", prefix, len(out))
    return (newline if newline is not None else os.linesep).join(out)
