# topmark:header:start
#
#   project      : xmlsplice
#   file         : options.py
#   file_relpath : src/xmlsplice/config/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Writer options shared by marshalling and the cleanup pass.

Formatting is never ambient: every call that produces or rewrites XML text receives
a `WriterOptions` value, and the cleanup pass re-serializes with the very same value
that produced the text it cleans.

TOML mapping:

    pretty_print = true
    omit_declaration = true
    remove_empty_nodes = true
    strip_namespaces = true
    newline = "native"        # "lf" | "crlf" | "cr" | "native"

    [namespaces]
    custom = "http://example.com/custom"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

from xmlsplice.constants import NEWLINE_NAMES
from xmlsplice.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class WriterOptions:
    """Immutable formatting configuration for one serialization call.

    Attributes:
        pretty_print (bool): Indent nested elements with one tab per level.
        omit_declaration (bool): Do not emit an ``<?xml ...?>`` declaration.
        namespaces (tuple[tuple[str, str], ...]): Ordered ``(prefix, uri)`` bindings
            declared on the root element after the standard ``xsi``/``xsd`` ones.
        remove_empty_nodes (bool): Prune empty and nil elements after marshalling.
        strip_namespaces (bool): Remove the ``xsi``/``xsd`` declarations from the root.
        newline (str | None): Line terminator; ``None`` uses the host's ``os.linesep``.
    """

    pretty_print: bool = True
    omit_declaration: bool = True
    namespaces: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    remove_empty_nodes: bool = True
    strip_namespaces: bool = True
    newline: str | None = None

    @property
    def line_terminator(self) -> str:
        """Return the effective line terminator."""
        return self.newline if self.newline is not None else os.linesep

    def evolve(self, **changes: Any) -> WriterOptions:
        """Return a copy of these options with ``changes`` applied."""
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, table: Mapping[str, Any] | None) -> WriterOptions:
        """Build options from a plain mapping mirroring the TOML shape.

        Unknown keys are rejected so typos surface instead of being ignored.

        Args:
            table (Mapping[str, Any] | None): Mapping of option names to values.
                ``None`` yields the defaults.

        Returns:
            WriterOptions: The resolved, immutable options.

        Raises:
            ConfigError: If a key is unknown or a value has the wrong type.
        """
        if table is None:
            return cls()

        known: set[str] = {f.name for f in fields(cls)}
        unknown: list[str] = sorted(str(k) for k in table if k not in known)
        if unknown:
            raise ConfigError(f"Unknown writer option(s): {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for key in ("pretty_print", "omit_declaration", "remove_empty_nodes", "strip_namespaces"):
            if key in table:
                value = table[key]
                if not isinstance(value, bool):
                    raise ConfigError(f"Writer option '{key}' must be a boolean, got {value!r}")
                kwargs[key] = value

        if "namespaces" in table:
            kwargs["namespaces"] = _coerce_namespaces(table["namespaces"])

        if "newline" in table:
            kwargs["newline"] = _coerce_newline(table["newline"])

        return cls(**kwargs)

    def to_mapping(self) -> dict[str, Any]:
        """Return the TOML-shaped mapping for these options."""
        newline_name: str | None = next(
            (name for name, value in NEWLINE_NAMES.items() if value == self.newline),
            self.newline,
        )
        return {
            "pretty_print": self.pretty_print,
            "omit_declaration": self.omit_declaration,
            "remove_empty_nodes": self.remove_empty_nodes,
            "strip_namespaces": self.strip_namespaces,
            "newline": newline_name,
            "namespaces": dict(self.namespaces),
        }


def _coerce_namespaces(value: Any) -> tuple[tuple[str, str], ...]:
    pairs: list[tuple[Any, Any]]
    if hasattr(value, "items"):
        pairs = list(value.items())
    elif isinstance(value, (list, tuple)):
        pairs = [tuple(item) for item in value]  # type: ignore[misc]
    else:
        raise ConfigError(f"Writer option 'namespaces' must be a table, got {value!r}")

    result: list[tuple[str, str]] = []
    for pair in pairs:
        if len(pair) != 2 or not all(isinstance(part, str) for part in pair):
            raise ConfigError(f"Invalid namespace binding: {pair!r}")
        result.append((str(pair[0]), str(pair[1])))
    return tuple(result)


def _coerce_newline(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        if value.lower() in NEWLINE_NAMES:
            return NEWLINE_NAMES[value.lower()]
        if value in ("\n", "\r\n", "\r"):
            return value
    raise ConfigError(
        f"Writer option 'newline' must be one of {', '.join(NEWLINE_NAMES)}, got {value!r}"
    )


def resolve_options(options: WriterOptions | Mapping[str, Any] | None) -> WriterOptions:
    """Normalize the ``options`` argument accepted by the public API.

    Args:
        options (WriterOptions | Mapping[str, Any] | None): A frozen options value, a
            TOML-shaped mapping, or ``None`` for the defaults.

    Returns:
        WriterOptions: The options to use for the call.
    """
    if isinstance(options, WriterOptions):
        return options
    return WriterOptions.from_mapping(options)
