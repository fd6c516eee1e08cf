# topmark:header:start
#
#   project      : xmlsplice
#   file         : __init__.py
#   file_relpath : src/xmlsplice/block/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Partial-document patching: locate, re-indent and replace a named block."""

from __future__ import annotations

from xmlsplice.block.locator import BlockSpan, extract_block, locate
from xmlsplice.block.patcher import PatchResult, patch_block, patch_text
from xmlsplice.block.splicer import indentation_prefix, reindent

__all__ = [
    "BlockSpan",
    "PatchResult",
    "extract_block",
    "indentation_prefix",
    "locate",
    "patch_block",
    "patch_text",
    "reindent",
]
