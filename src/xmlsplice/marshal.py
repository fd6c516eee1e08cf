# topmark:header:start
#
#   project      : xmlsplice
#   file         : marshal.py
#   file_relpath : src/xmlsplice/marshal.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Marshal dataclass models to XML text and back.

This is the serializer collaborator of the patch pipeline: `marshal` turns a model
instance into XML text, `unmarshal` rebuilds an instance from text. Both raise plain
``TypeError`` / ``ValueError`` / ``lxml.etree.XMLSyntaxError``; the public API wraps
them into xmlsplice errors.

The XML shape of a model:

    <ClassName xmlns:xsi="..." xmlns:xsd="...">...</ClassName> - the root element.
        named after the model class; declares the standard instance/schema namespaces
        followed by any custom prefixes from `WriterOptions.namespaces`.

    <field>text</field> - a scalar field (``str``, ``int``, ``float``, ``bool``,
        ``Decimal`` or an ``Enum``). Booleans are written ``true``/``false``, enums as
        their value.

    <field>...</field> - a nested dataclass; contains one element per field.

    <field><Item>...</Item>...</field> - a ``list[...]`` field; contains one element per
        item, named after the item class (``string``, ``int``, ``double``, ``boolean``
        and ``decimal`` for scalars) unless ``item_name`` is given.

    <field xsi:nil="true" /> - a field set to ``None``.

Fields map to elements named after the field unless ``xml_field(name=...)`` says
otherwise; ``xml_field(attribute=True)`` maps a scalar field to an attribute of the
parent element instead (``None`` attributes are simply left out).

When reading, children are matched by local name, unknown elements are ignored and
missing fields keep their dataclass defaults.
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import types
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, TypeVar, Union, get_args, get_origin, get_type_hints

from lxml import etree

from xmlsplice.config.logging import get_logger
from xmlsplice.constants import DEFAULT_NAMESPACES, NIL_ATTRIBUTE, NIL_TRUE_VALUES
from xmlsplice.tree import parse, write_tree

if TYPE_CHECKING:
    from xmlsplice.config.logging import XmlspliceLogger
    from xmlsplice.config.options import WriterOptions

logger: XmlspliceLogger = get_logger(__name__)

T = TypeVar("T")

# Keys of the dataclass field metadata written by `xml_field`.
XML_NAME: str = "xmlsplice.name"
XML_ATTRIBUTE: str = "xmlsplice.attribute"
XML_ITEM_NAME: str = "xmlsplice.item_name"

SCALAR_ITEM_NAMES: dict[type, str] = {
    str: "string",
    bool: "boolean",
    int: "int",
    float: "double",
    Decimal: "decimal",
}


def xml_field(
    *,
    name: str | None = None,
    attribute: bool = False,
    item_name: str | None = None,
    default: Any = None,
    default_factory: Any = None,
) -> Any:
    """Declare a dataclass field with an explicit XML mapping.

    Args:
        name (str | None): Element (or attribute) name; defaults to the field name.
        attribute (bool): Map the field to an attribute of the parent element.
        item_name (str | None): Element name of list items.
        default (Any): Default value (``None`` unless given).
        default_factory (Any): Default factory, e.g. ``list``; takes precedence over
            ``default``.

    Returns:
        Any: A ``dataclasses.field`` carrying the mapping in its metadata.
    """
    metadata: dict[str, Any] = {XML_NAME: name, XML_ATTRIBUTE: attribute, XML_ITEM_NAME: item_name}
    if default_factory is not None:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


@dataclasses.dataclass(frozen=True)
class FieldSpec:
    """Resolved XML mapping of one dataclass field."""

    name: str
    xml_name: str
    hint: Any
    attribute: bool = False
    item_hint: Any = None
    item_name: str | None = None


def _unwrap_optional(hint: Any) -> Any:
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(args) != 1:
            raise TypeError(f"Unsupported union type: {hint!r}")
        return args[0]
    return hint


def _is_list(hint: Any) -> bool:
    return hint is list or get_origin(hint) is list


def _item_hint(hint: Any) -> Any:
    args = get_args(hint)
    return args[0] if args else str


def _default_item_name(item_hint: Any) -> str:
    item_type = _unwrap_optional(item_hint)
    if item_type in SCALAR_ITEM_NAMES:
        return SCALAR_ITEM_NAMES[item_type]
    if isinstance(item_type, type):
        return item_type.__name__
    raise TypeError(f"Unsupported list item type: {item_hint!r}")


@functools.lru_cache(maxsize=None)
def model_fields(model: type) -> tuple[FieldSpec, ...]:
    """Return the XML mapping of every init field of the dataclass ``model``.

    Args:
        model (type): A dataclass type.

    Returns:
        tuple[FieldSpec, ...]: One spec per field, in declaration order.

    Raises:
        TypeError: If ``model`` is not a dataclass, its annotations do not resolve, or a
            field type is unsupported.
    """
    if not (isinstance(model, type) and dataclasses.is_dataclass(model)):
        raise TypeError(f"{model!r} is not a dataclass type")

    try:
        hints: dict[str, Any] = get_type_hints(model)
    except NameError as exc:
        raise TypeError(f"Cannot resolve the field types of {model.__name__}: {exc}") from exc

    specs: list[FieldSpec] = []
    for f in dataclasses.fields(model):
        if not f.init:
            continue
        hint: Any = _unwrap_optional(hints[f.name])
        xml_name: str = f.metadata.get(XML_NAME) or f.name
        attribute: bool = bool(f.metadata.get(XML_ATTRIBUTE))
        if attribute and (_is_list(hint) or dataclasses.is_dataclass(hint)):
            raise TypeError(f"Field '{f.name}' of {model.__name__} cannot be an attribute")
        if _is_list(hint):
            item_hint: Any = _item_hint(hint)
            item_name: str = f.metadata.get(XML_ITEM_NAME) or _default_item_name(item_hint)
            specs.append(
                FieldSpec(f.name, xml_name, hint, item_hint=item_hint, item_name=item_name)
            )
        else:
            specs.append(FieldSpec(f.name, xml_name, hint, attribute=attribute))
    return tuple(specs)


# --- Encoding ---


def format_scalar(value: Any) -> str:
    """Return the XML text of a scalar value.

    Raises:
        TypeError: If ``value`` is not a supported scalar.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, (str, int, Decimal)):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    raise TypeError(f"'{type(value).__name__}' is an unsupported type.")


def encode_fields(element: etree._Element, obj: Any) -> None:
    """Append the fields of the dataclass instance ``obj`` to ``element``."""
    for spec in model_fields(type(obj)):
        value: Any = getattr(obj, spec.name)
        if spec.attribute:
            if value is not None:
                element.set(spec.xml_name, format_scalar(value))
            continue
        encode_value(element, spec.xml_name, value, spec.hint, spec.item_name)


def encode_value(
    parent: etree._Element, name: str, value: Any, hint: Any, item_name: str | None = None
) -> None:
    """Append a ``<name>`` element holding ``value`` to ``parent``."""
    element: etree._Element = etree.SubElement(parent, name)
    if value is None:
        element.set(NIL_ATTRIBUTE, "true")
    elif _is_list(hint):
        item_hint: Any = _item_hint(hint)
        for item in value:
            encode_value(
                element,
                item_name or _default_item_name(item_hint),
                item,
                _unwrap_optional(item_hint),
            )
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        encode_fields(element, value)
    else:
        element.text = format_scalar(value)


def marshal(value: Any, options: WriterOptions) -> str:
    """Marshal the dataclass instance ``value`` to XML text.

    ``None`` fields are kept as nil elements; run the cleanup pass to prune them.

    Args:
        value (Any): A dataclass instance.
        options (WriterOptions): Formatting configuration.

    Returns:
        str: The XML text.

    Raises:
        TypeError: If ``value`` or one of its fields cannot be represented.
    """
    if not dataclasses.is_dataclass(value) or isinstance(value, type):
        raise TypeError(f"'{type(value).__name__}' is not a dataclass instance")

    nsmap: dict[str | None, str] = dict(DEFAULT_NAMESPACES)
    for prefix, uri in options.namespaces:
        nsmap[prefix or None] = uri

    root: etree._Element = etree.Element(type(value).__name__, nsmap=nsmap)
    encode_fields(root, value)
    text: str = write_tree(root, options, declaration=not options.omit_declaration)
    logger.trace("marshal(%s): %r", type(value).__name__, text)
    return text


# --- Decoding ---


def is_nil(element: etree._Element) -> bool:
    """Return True if ``element`` carries an ``xsi:nil`` marker."""
    return (element.get(NIL_ATTRIBUTE) or "").strip().lower() in NIL_TRUE_VALUES


def local_name(element: etree._Element) -> str:
    """Return the tag of ``element`` without its namespace."""
    return etree.QName(element).localname


def parse_scalar(text: str, hint: Any) -> Any:
    """Convert XML text to a value of the scalar type ``hint``.

    Raises:
        ValueError: If ``text`` is not a valid representation.
        TypeError: If ``hint`` is not a supported scalar type.
    """
    if hint is str or hint is Any:
        return text
    if hint is bool:
        token = text.strip().lower()
        if token in ("true", "1"):
            return True
        if token in ("false", "0"):
            return False
        raise ValueError(f"Invalid boolean value: {text!r}")
    if hint is int:
        return int(text.strip())
    if hint is float:
        return float(text.strip())
    if hint is Decimal:
        try:
            return Decimal(text.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Invalid decimal value: {text!r}") from exc
    if isinstance(hint, type) and issubclass(hint, enum.Enum):
        token = text.strip()
        for member in hint:
            if str(member.value) == token:
                return member
        try:
            return hint[token]
        except KeyError as exc:
            raise ValueError(f"{token!r} is not a valid {hint.__name__}") from exc
    raise TypeError(f"Unsupported field type: {hint!r}")


def decode_object(element: etree._Element, model: type[T]) -> T:
    """Build an instance of ``model`` from the children and attributes of ``element``."""
    children: dict[str, etree._Element] = {}
    for child in element.iterchildren(etree.Element):
        children.setdefault(local_name(child), child)

    kwargs: dict[str, Any] = {}
    for spec in model_fields(model):
        if spec.attribute:
            raw: str | None = element.get(spec.xml_name)
            if raw is not None:
                kwargs[spec.name] = parse_scalar(raw, spec.hint)
            continue
        child = children.get(spec.xml_name)
        if child is not None:
            kwargs[spec.name] = decode_value(child, spec.hint, spec.item_name)
    return model(**kwargs)


def decode_value(element: etree._Element, hint: Any, item_name: str | None = None) -> Any:
    """Convert ``element`` to a value of type ``hint``."""
    if is_nil(element):
        return None
    hint = _unwrap_optional(hint)
    if _is_list(hint):
        item_hint: Any = _item_hint(hint)
        name: str = item_name or _default_item_name(item_hint)
        return [
            decode_value(child, item_hint)
            for child in element.iterchildren(etree.Element)
            if local_name(child) == name
        ]
    if dataclasses.is_dataclass(hint):
        return decode_object(element, hint)
    return parse_scalar(element.text or "", hint)


def unmarshal(text: str, model: type[T]) -> T:
    """Rebuild an instance of ``model`` from XML text.

    Args:
        text (str): A whole XML document whose root element is named after ``model``.
        model (type[T]): The dataclass type to build.

    Returns:
        T: The new instance. Nothing partially built is ever returned.

    Raises:
        etree.XMLSyntaxError: If the text is not well-formed.
        ValueError: If the root element does not match ``model`` or a value is invalid.
        TypeError: If ``model`` is not a supported dataclass or required fields are missing.
    """
    root: etree._Element = parse(text)
    name: str = local_name(root)
    if name != model.__name__:
        raise ValueError(f"Expected <{model.__name__}> root element, found <{name}>")
    value: T = decode_object(root, model)
    logger.trace("unmarshal(%s): %r", model.__name__, value)
    return value
