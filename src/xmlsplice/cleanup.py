# topmark:header:start
#
#   project      : xmlsplice
#   file         : cleanup.py
#   file_relpath : src/xmlsplice/cleanup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Post-serialization cleanup of freshly marshalled XML text.

Three independent passes, each idempotent and each text-in/text-out:

* ``prune_empty_nodes`` - remove empty and nil elements (bottom-up, so a parent left
  empty by the removal of its children is removed as well);
* ``strip_default_namespaces`` - drop the ``xmlns:xsi``/``xmlns:xsd`` declarations of
  the root element;
* ``strip_declaration`` - remove a leading ``<?xml ...?>`` and the whitespace after it.

`clean` runs the passes enabled in `WriterOptions`. The two tree passes parse the text
with lxml and write it back through `xmlsplice.tree.write_tree` using the same options
that produced the text, so they add no formatting drift of their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from xmlsplice.config.logging import get_logger
from xmlsplice.constants import DEFAULT_NAMESPACES, NIL_ATTRIBUTE, NIL_TRUE_VALUES
from xmlsplice.tree import parse, split_declaration, write_tree

if TYPE_CHECKING:
    from collections.abc import Callable

    from xmlsplice.config.logging import XmlspliceLogger
    from xmlsplice.config.options import WriterOptions

logger: XmlspliceLogger = get_logger(__name__)


# --- Tree passes ---


def is_prunable(element: etree._Element) -> bool:
    """Return True if ``element`` is nil, or has no attributes and no content.

    Args:
        element (etree._Element): Element to classify.

    Returns:
        bool: True if the element should be removed by the pruning pass.
    """
    if (element.get(NIL_ATTRIBUTE) or "").strip().lower() in NIL_TRUE_VALUES:
        return True
    if element.attrib or len(element):
        return False
    return not (element.text or "").strip()


def _layout_free(text: str | None) -> str:
    # Whitespace-only text is layout and is dropped; mixed content is kept verbatim.
    return text if text and text.strip() else ""


def _drop(element: etree._Element) -> None:
    # lxml removes the tail together with the element; give the element's tail to
    # whatever precedes it so the parent's remaining layout stays consistent.
    parent: etree._Element | None = element.getparent()
    if parent is None:
        return
    tail: str = element.tail or ""
    previous: etree._Element | None = element.getprevious()
    if previous is not None:
        previous.tail = _layout_free(previous.tail) + tail or None
    else:
        parent.text = _layout_free(parent.text) + tail or None
    parent.remove(element)


def prune_tree(root: etree._Element) -> int:
    """Remove empty and nil descendants of ``root`` in a single bottom-up sweep.

    Elements are visited in reverse document order, so every child is finalized
    before its parent is examined. The root element itself is never removed.

    Args:
        root (etree._Element): Root of the tree to prune in place.

    Returns:
        int: Number of elements removed.
    """
    removed: int = 0
    for element in reversed(list(root.iterdescendants(etree.Element))):
        if is_prunable(element):
            _drop(element)
            removed += 1
    return removed


def strip_namespace_declarations(root: etree._Element) -> etree._Element:
    """Remove the standard ``xsi``/``xsd`` namespace declarations from ``root``.

    Every other prefix is kept. A standard declaration that is still referenced in the
    tree (e.g. by a nil marker that was not pruned) is kept as well, since dropping it
    would leave the document malformed.

    Args:
        root (etree._Element): Root element, modified in place.

    Returns:
        etree._Element: ``root``.
    """
    standard: set[tuple[str, str]] = set(DEFAULT_NAMESPACES)
    keep: set[str] = set()
    for element in root.iter(etree.Element):
        for prefix, uri in element.nsmap.items():
            if prefix is not None and (prefix, uri) not in standard:
                keep.add(prefix)
    etree.cleanup_namespaces(root, keep_ns_prefixes=sorted(keep))
    return root


# --- Text passes ---


def _rewrite(text: str, options: WriterOptions, mutate: Callable[[etree._Element], object]) -> str:
    declaration, _ = split_declaration(text)
    root: etree._Element = parse(text)
    mutate(root)
    return write_tree(root, options, declaration=bool(declaration) and not options.omit_declaration)


def prune_empty_nodes(text: str, options: WriterOptions) -> str:
    """Remove empty and nil elements from XML text.

    Args:
        text (str): XML text.
        options (WriterOptions): The options that produced ``text``.

    Returns:
        str: The pruned XML text.
    """
    return _rewrite(text, options, prune_tree)


def strip_default_namespaces(text: str, options: WriterOptions) -> str:
    """Remove the ``xmlns:xsi``/``xmlns:xsd`` declarations from the root of XML text.

    Args:
        text (str): XML text.
        options (WriterOptions): The options that produced ``text``.

    Returns:
        str: The XML text without the standard declarations.
    """
    return _rewrite(text, options, strip_namespace_declarations)


def strip_declaration(text: str) -> str:
    """Remove a leading XML declaration and the whitespace that follows it.

    Args:
        text (str): XML text.

    Returns:
        str: ``text`` starting at its first non-whitespace character after the
        declaration, or ``text`` unchanged when it has no declaration.
    """
    return split_declaration(text)[1]


def clean(text: str, options: WriterOptions) -> str:
    """Run every cleanup pass enabled in ``options``.

    Args:
        text (str): Freshly marshalled XML text.
        options (WriterOptions): The options that produced ``text``.

    Returns:
        str: The cleaned XML text.
    """
    if options.remove_empty_nodes or options.strip_namespaces:
        declaration, _ = split_declaration(text)
        root: etree._Element = parse(text)
        if options.remove_empty_nodes:
            removed: int = prune_tree(root)
            logger.debug("cleanup: pruned %d empty/nil element(s)", removed)
        if options.strip_namespaces:
            strip_namespace_declarations(root)
        text = write_tree(
            root, options, declaration=bool(declaration) and not options.omit_declaration
        )
    if options.omit_declaration:
        text = strip_declaration(text)
    return text
