# topmark:header:start
#
#   project      : xmlsplice
#   file         : __init__.py
#   file_relpath : src/xmlsplice/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for xmlsplice: writer options, TOML loading and logging."""

from __future__ import annotations

from xmlsplice.config.io import discover_options, load_options
from xmlsplice.config.options import WriterOptions, resolve_options

__all__ = ["WriterOptions", "discover_options", "load_options", "resolve_options"]
