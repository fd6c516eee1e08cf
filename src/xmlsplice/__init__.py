# topmark:header:start
#
#   project      : xmlsplice
#   file         : __init__.py
#   file_relpath : src/xmlsplice/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""xmlsplice package.

xmlsplice converts dataclass models to and from XML and rewrites a single named block
of a larger, hand-written XML document (a project or config file) through such a model,
leaving the formatting of the rest of the document untouched.
"""

from __future__ import annotations

from xmlsplice.api import (
    PatchResult,
    deserialize,
    deserialize_from_file,
    locate_block,
    patch_block,
    serialize,
    serialize_to_file,
)
from xmlsplice.config.options import WriterOptions
from xmlsplice.errors import (
    ArgumentError,
    BlockNotFoundError,
    ConfigError,
    DeserializationError,
    NullAfterMutationError,
    SerializationError,
    XmlSpliceError,
    XmlSpliceIOError,
)
from xmlsplice.marshal import xml_field

__all__ = [
    "ArgumentError",
    "BlockNotFoundError",
    "ConfigError",
    "DeserializationError",
    "NullAfterMutationError",
    "PatchResult",
    "SerializationError",
    "WriterOptions",
    "XmlSpliceError",
    "XmlSpliceIOError",
    "deserialize",
    "deserialize_from_file",
    "locate_block",
    "patch_block",
    "serialize",
    "serialize_to_file",
    "xml_field",
]
