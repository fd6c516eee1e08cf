# topmark:header:start
#
#   project      : xmlsplice
#   file         : io.py
#   file_relpath : src/xmlsplice/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load `WriterOptions` from TOML configuration files.

Two shapes are recognized:

- ``xmlsplice.toml``: options are top-level keys.
- ``pyproject.toml``: options live under ``[tool.xmlsplice]``.

Parsing is done with `tomlkit`, which keeps table key order; the order of the
``[namespaces]`` table is the order in which prefixes are declared on the root element.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from xmlsplice.config.logging import get_logger
from xmlsplice.config.options import WriterOptions
from xmlsplice.constants import (
    DEFAULT_TOML_CONFIG_NAME,
    PYPROJECT_SECTION,
    PYPROJECT_TOML_NAME,
)
from xmlsplice.errors import ConfigError

if TYPE_CHECKING:
    from xmlsplice.config.logging import XmlspliceLogger

TomlTable = dict[str, Any]

logger: XmlspliceLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``xmlsplice.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content as plain Python values.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as exc:
        logger.error("Error loading TOML from %s: %s", path, exc)
        raise ConfigError(f"Cannot read configuration file '{path}': {exc}") from exc
    except TomlkitParseError as exc:
        logger.error("Error decoding TOML from %s: %s", path, exc)
        raise ConfigError(f"Error parsing TOML document '{path}': {exc}") from exc

    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_options_table(data: TomlTable, *, for_pyproject: bool) -> TomlTable:
    """Return the table holding writer options.

    Args:
        data (TomlTable): Parsed TOML document.
        for_pyproject (bool): Whether the document is a ``pyproject.toml`` (options nested
            under ``tool.xmlsplice``).

    Returns:
        TomlTable: The options table; empty when a pyproject has no xmlsplice section.

    Raises:
        ConfigError: If a section on the path exists but is not a table.
    """
    if not for_pyproject:
        return data

    table: Any = data
    for key in PYPROJECT_SECTION:
        table = table.get(key, {})
        if not isinstance(table, dict):
            raise ConfigError(f"'{'.'.join(PYPROJECT_SECTION)}' exists but is not a TOML table")
    return cast("TomlTable", table)


def load_options(path: Path | str) -> WriterOptions:
    """Read `WriterOptions` from a TOML file.

    Args:
        path (Path | str): ``xmlsplice.toml`` or ``pyproject.toml`` file.

    Returns:
        WriterOptions: Options with defaults for every key the file leaves unset.

    Raises:
        ConfigError: If the file is unreadable, malformed, or holds invalid values.
    """
    path = Path(path)
    data: TomlTable = load_toml_dict(path)
    table: TomlTable = extract_options_table(data, for_pyproject=path.name == PYPROJECT_TOML_NAME)
    logger.debug("Loaded writer options from %s: %r", path, table)
    return WriterOptions.from_mapping(table)


def to_toml(options: WriterOptions) -> str:
    """Render writer options as an ``xmlsplice.toml`` document.

    Args:
        options (WriterOptions): Options to render.

    Returns:
        str: TOML text that `load_options` reads back into equal options.
    """
    table: dict[str, Any] = options.to_mapping()
    namespaces: dict[str, str] = table.pop("namespaces")
    doc: tomlkit.TOMLDocument = tomlkit.document()
    for key, value in table.items():
        doc[key] = value
    ns_table = tomlkit.table()
    for prefix, uri in namespaces.items():
        ns_table[prefix] = uri
    doc["namespaces"] = ns_table
    return tomlkit.dumps(doc)


def discover_options(directory: Path | str) -> WriterOptions:
    """Load writer options from the configuration file found in ``directory``.

    ``xmlsplice.toml`` wins over ``pyproject.toml``; a pyproject without an
    ``[tool.xmlsplice]`` table is skipped.

    Args:
        directory (Path | str): Directory to look in (not searched recursively).

    Returns:
        WriterOptions: The loaded options, or the defaults when no file applies.

    Raises:
        ConfigError: If a candidate file is unreadable, malformed, or invalid.
    """
    directory = Path(directory)
    candidate: Path = directory / DEFAULT_TOML_CONFIG_NAME
    if candidate.is_file():
        return load_options(candidate)

    pyproject: Path = directory / PYPROJECT_TOML_NAME
    if pyproject.is_file():
        data: TomlTable = load_toml_dict(pyproject)
        table: TomlTable = extract_options_table(data, for_pyproject=True)
        if table:
            logger.debug("Using [%s] of %s", ".".join(PYPROJECT_SECTION), pyproject)
            return WriterOptions.from_mapping(table)

    logger.debug("No xmlsplice configuration in %s; using defaults", directory)
    return WriterOptions()
