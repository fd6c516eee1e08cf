# topmark:header:start
#
#   project      : xmlsplice
#   file         : constants.py
#   file_relpath : src/xmlsplice/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""xmlsplice constants."""

from __future__ import annotations

from typing import Final

XSI_NAMESPACE: Final[str] = "http://www.w3.org/2001/XMLSchema-instance"
XSD_NAMESPACE: Final[str] = "http://www.w3.org/2001/XMLSchema"

XSI_PREFIX: Final[str] = "xsi"
XSD_PREFIX: Final[str] = "xsd"

# Prefix bindings emitted on every marshalled root element, in this order.
DEFAULT_NAMESPACES: Final[tuple[tuple[str, str], ...]] = (
    (XSI_PREFIX, XSI_NAMESPACE),
    (XSD_PREFIX, XSD_NAMESPACE),
)

# Clark notation of the nil marker attribute (xsi:nil).
NIL_ATTRIBUTE: Final[str] = f"{{{XSI_NAMESPACE}}}nil"
NIL_TRUE_VALUES: Final[frozenset[str]] = frozenset({"true", "1"})

XML_DECLARATION: Final[str] = '<?xml version="1.0" encoding="utf-8"?>'
XML_DECLARATION_START: Final[str] = "<?xml"
XML_DECLARATION_END: Final[str] = "?>"

# Pretty printing is always tab-indented; the splicer re-applies the same unit.
INDENT_UNIT: Final[str] = "\t"

TEXT_ENCODING: Final[str] = "utf-8"

# TOML spelling of line terminators (``native`` maps to ``os.linesep``).
NEWLINE_NAMES: Final[dict[str, str | None]] = {
    "lf": "\n",
    "crlf": "\r\n",
    "cr": "\r",
    "native": None,
}

PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
DEFAULT_TOML_CONFIG_NAME: Final[str] = "xmlsplice.toml"
PYPROJECT_SECTION: Final[tuple[str, ...]] = ("tool", "xmlsplice")
