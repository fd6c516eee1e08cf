# topmark:header:start
#
#   project      : xmlsplice
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the xmlsplice test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests pass an explicit ``newline="\\n"`` wherever they compare multi-line output, so
    expectations do not depend on the host's ``os.linesep``.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import pytest

from xmlsplice.config import logging
from xmlsplice.config.options import WriterOptions

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

DATA_DIR: Path = Path(__file__).parent / "data"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure logging for the test suite.

    Sets the logging level to TRACE for all tests, so every step of the patch pipeline
    is captured in the test output when a test fails.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def lf_options() -> WriterOptions:
    """Default writer options with LF line terminators."""
    return WriterOptions(newline="\n")


@pytest.fixture
def compact_options() -> WriterOptions:
    """Writer options without pretty printing."""
    return WriterOptions(pretty_print=False, newline="\n")


@pytest.fixture
def write_xml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing XML text to a file under ``tmp_path``.

    The helper writes bytes verbatim so line endings in the test text are preserved.
    """

    def _write(text: str, name: str = "document.xml") -> Path:
        path: Path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Copy ``data/sample-project.xml`` into ``tmp_path`` and return the copy."""
    target: Path = tmp_path / "sample-project.csproj"
    target.write_bytes((DATA_DIR / "sample-project.xml").read_bytes())
    return target
