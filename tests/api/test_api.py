# topmark:header:start
#
#   project      : xmlsplice
#   file         : test_api.py
#   file_relpath : tests/api/test_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the public xmlsplice API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pytest
from lxml import etree

from tests.models import ComplexSampleObject, SampleObject, Widget
from xmlsplice import (
    ArgumentError,
    ConfigError,
    DeserializationError,
    SerializationError,
    XmlSpliceIOError,
    api,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from xmlsplice.config.options import WriterOptions


def test_serialize_cleans_output(lf_options: WriterOptions) -> None:
    """Serialized text has no declaration, no namespaces and no empty elements."""
    text = api.serialize(SampleObject(name="Test", value=123), lf_options)

    assert text == "<SampleObject>\n\t<Name>Test</Name>\n\t<Value>123</Value>\n</SampleObject>"


def test_serialize_keeps_nil_markers_when_not_pruning(lf_options: WriterOptions) -> None:
    """Without pruning, nil markers stay along with the prefix they need."""
    text = api.serialize(SampleObject(name="Test"), lf_options.evolve(remove_empty_nodes=False))

    assert '<Value xsi:nil="true"/>' in text
    assert "xmlns:xsd" not in text
    etree.fromstring(text)


def test_serialize_with_mapping_options() -> None:
    """Options may be passed in their TOML shape."""
    text = api.serialize(
        SampleObject(name="Test"),
        {"pretty_print": False, "omit_declaration": False, "newline": "lf"},
    )

    assert text == (
        '<?xml version="1.0" encoding="utf-8"?>\n<SampleObject><Name>Test</Name></SampleObject>'
    )


def test_serialize_rejects_unknown_option() -> None:
    """Misspelled options are reported rather than ignored."""
    with pytest.raises(ConfigError, match="pretty"):
        api.serialize(SampleObject(name="Test"), {"pretty": False})


def test_serialize_none() -> None:
    """``None`` is an argument error naming the parameter."""
    with pytest.raises(ArgumentError, match="cannot be null") as excinfo:
        api.serialize(None)

    assert excinfo.value.param_name == "value"
    assert isinstance(excinfo.value, ValueError)


def test_serialize_unsupported_value() -> None:
    """Values that cannot be represented are serialization errors."""
    with pytest.raises(SerializationError) as excinfo:
        api.serialize(Widget(tags=[object()]))  # type: ignore[list-item]

    assert "Invalid operation attempted while serializing" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_serialize_non_dataclass() -> None:
    """Plain objects are serialization errors."""
    with pytest.raises(SerializationError):
        api.serialize({"Name": "x"})


def test_serialize_cyclic_value() -> None:
    """A value that contains itself is reported as an unexpected error."""
    value = ComplexSampleObject(title="loop")
    value.nested_object = value  # type: ignore[assignment]

    with pytest.raises(SerializationError, match="Unexpected error"):
        api.serialize(value)


def test_serialize_to_file(tmp_path: Path, lf_options: WriterOptions) -> None:
    """The file holds the cleaned UTF-8 text without a byte-order mark."""
    path = tmp_path / "out.xml"

    api.serialize_to_file(SampleObject(name="FileTest", value=456), path, lf_options)

    data = path.read_bytes()
    assert data.startswith(b"<SampleObject>")
    assert b"<Name>FileTest</Name>" in data
    assert b"<Value>456</Value>" in data


@pytest.mark.parametrize("path", ["", None])
def test_serialize_to_file_requires_path(path: str | None) -> None:
    """An empty destination is an argument error naming the parameter."""
    with pytest.raises(ArgumentError, match="File path cannot be null or empty") as excinfo:
        api.serialize_to_file(SampleObject(name="x"), path)  # type: ignore[arg-type]

    assert excinfo.value.param_name == "path"


def test_serialize_to_file_unwritable(tmp_path: Path) -> None:
    """Write failures are I/O errors naming the path."""
    path = tmp_path / "missing-dir" / "out.xml"

    with pytest.raises(XmlSpliceIOError, match="IO error during serialization") as excinfo:
        api.serialize_to_file(SampleObject(name="x"), path)

    assert excinfo.value.path == str(path)


def test_deserialize() -> None:
    """Nested values are rebuilt from markup."""
    text = (
        "<ComplexSampleObject><Title>Complex Test</Title>"
        "<NestedObject><Name>Nested</Name><Value>789</Value></NestedObject>"
        "</ComplexSampleObject>"
    )

    value = api.deserialize(text, ComplexSampleObject)

    assert value.title == "Complex Test"
    assert value.nested_object == SampleObject(name="Nested", value=789)
    assert value.items is None


def test_deserialize_unterminated() -> None:
    """Unterminated markup fails with the parser error as the cause."""
    with pytest.raises(DeserializationError) as excinfo:
        api.deserialize("<SampleObject><Name>Test</Name>", SampleObject)

    assert "Invalid operation attempted while deserializing" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, etree.XMLSyntaxError)


def test_deserialize_wrong_root() -> None:
    """A document for another model is a deserialization error."""
    with pytest.raises(DeserializationError, match="Expected <SampleObject>"):
        api.deserialize("<Other/>", SampleObject)


def test_unresolvable_annotations_are_reported_as_library_errors() -> None:
    """Models whose field types cannot be resolved fail with the library's errors."""

    @dataclass
    class Inner:
        x: int | None = None

    @dataclass
    class Outer:
        inner: Inner | None = None

    with pytest.raises(DeserializationError) as excinfo:
        api.deserialize("<Outer><inner><x>1</x></inner></Outer>", Outer)
    assert isinstance(excinfo.value.__cause__, TypeError)
    assert isinstance(excinfo.value.__cause__.__cause__, NameError)

    with pytest.raises(SerializationError, match="Cannot resolve the field types of Outer"):
        api.serialize(Outer(inner=Inner(x=1)))


def test_deserialize_none() -> None:
    """``None`` text is an argument error."""
    with pytest.raises(ArgumentError) as excinfo:
        api.deserialize(None, SampleObject)  # type: ignore[arg-type]

    assert excinfo.value.param_name == "text"


def test_deserialize_from_file(write_xml: Callable[..., Path]) -> None:
    """Files are read as UTF-8 and a byte-order mark is skipped."""
    path = write_xml("\ufeff<SampleObject><Name>FileTest</Name><Value>789</Value></SampleObject>")

    value = api.deserialize_from_file(path, SampleObject)

    assert value == SampleObject(name="FileTest", value=789)


def test_deserialize_from_file_missing(tmp_path: Path) -> None:
    """A missing file is an I/O error naming the path."""
    path = tmp_path / "missing.xml"

    with pytest.raises(XmlSpliceIOError) as excinfo:
        api.deserialize_from_file(path, SampleObject)

    message = str(excinfo.value)
    assert "IO error during deserialization" in message
    assert str(path) in message
    assert isinstance(excinfo.value, OSError)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_deserialize_from_file_invalid(write_xml: Callable[..., Path]) -> None:
    """A file with malformed content is a deserialization error."""
    path = write_xml("<SampleObject><Name>Test</Name>")

    with pytest.raises(DeserializationError, match="while deserializing"):
        api.deserialize_from_file(path, SampleObject)


def test_deserialize_from_file_requires_path() -> None:
    """An empty path is an argument error."""
    with pytest.raises(ArgumentError) as excinfo:
        api.deserialize_from_file("", SampleObject)

    assert excinfo.value.param_name == "path"


def test_locate_block() -> None:
    """The first block for the tag is returned verbatim."""
    text = "<Root><SampleObject><Name>Test</Name><Value>123</Value></SampleObject></Root>"

    assert api.locate_block(text, "SampleObject") == (
        "<SampleObject><Name>Test</Name><Value>123</Value></SampleObject>"
    )
    assert api.locate_block(text, "Missing") is None


def test_locate_block_first_of_many() -> None:
    """With several blocks the first one wins."""
    text = (
        "<Root><SampleObject><Name>First</Name></SampleObject>"
        "<SampleObject><Name>Second</Name></SampleObject></Root>"
    )

    block = api.locate_block(text, "SampleObject")

    assert block is not None
    assert "<Name>First</Name>" in block
    assert "Second" not in block


def test_locate_block_requires_tag() -> None:
    """An empty tag name is an argument error."""
    with pytest.raises(ArgumentError) as excinfo:
        api.locate_block("<Root/>", "")

    assert excinfo.value.param_name == "tag_name"


def test_round_trip_through_files(tmp_path: Path) -> None:
    """A value written to disk reads back equal."""
    path = tmp_path / "value.xml"
    value = ComplexSampleObject(
        title="Round trip",
        items=[SampleObject(name="a", value=1), SampleObject(name="b")],
        nested_object=SampleObject(value=2),
    )

    api.serialize_to_file(value, path)

    assert api.deserialize_from_file(path, ComplexSampleObject) == value
