# topmark:header:start
#
#   project      : xmlsplice
#   file         : __init__.py
#   file_relpath : src/xmlsplice/utils/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Utility helpers for xmlsplice."""
