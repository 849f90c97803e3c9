"""Type formatting for failure reports.

The current :class:`Formatting` is an immutable snapshot. Readers take the
reference as-is; writers build a new snapshot and swap it in under a lock.
Replace the formatter before tests start running, e.g. from ``conftest.py`` or
the pytest plugin's config file.
"""

from __future__ import annotations

import pprint
import textwrap
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable

from subcheck.kinds import Kind, Ref, deref, kind_of, type_name

TypeFormatter = Callable[[Any], str]

DEFAULT_INDENT = "    "


@dataclass(frozen=True)
class Formatting:
    """A formatter plus the indent it uses for nested values.

    ``type_formatter`` of ``None`` selects :func:`default_type_formatter`.
    """

    type_formatter: TypeFormatter | None = None
    indent: str = DEFAULT_INDENT

    def format_type(self, v: Any) -> str:
        if self.type_formatter is None:
            return default_type_formatter(v, indent=self.indent)
        return self.type_formatter(v)

    def indent_text(self, text: str) -> str:
        return textwrap.indent(text, self.indent, lambda line: True)


_current = Formatting()
_write_lock = threading.Lock()


def current() -> Formatting:
    return _current


def configure(formatting: Formatting) -> Formatting:
    """Install *formatting* as the current snapshot and return the previous one."""
    global _current
    with _write_lock:
        previous = _current
        _current = formatting
    return previous


def set_type_formatter(f: TypeFormatter | None = None) -> None:
    """Replace the type formatter. ``None`` restores the default formatter."""
    global _current
    with _write_lock:
        _current = replace(_current, type_formatter=f)


def set_indent(indent: str) -> None:
    global _current
    with _write_lock:
        _current = replace(_current, indent=indent)


def format_type(v: Any, formatting: Formatting | None = None) -> str:
    """Format *v* with *formatting*, or with the current snapshot."""
    return (formatting or _current).format_type(v)


def default_type_formatter(v: Any, indent: str = DEFAULT_INDENT) -> str:
    """Render the type name of *v* followed by its indented content."""
    from subcheck.errors import Errors

    def block(name: str, text: str) -> str:
        return f"{name}\n" + textwrap.indent(text, indent, lambda line: True)

    if isinstance(v, Errors):
        return block(type_name(type(v)), str(v))

    kind = kind_of(v)
    if kind is Kind.NONE:
        return "None"
    if kind is Kind.REF:
        name = v.type_name if isinstance(v, Ref) else type_name(type(v))
        target = deref(v)
        if target is None:
            return block(name, "None")
        return block(name, _content(target))
    return block(type_name(type(v)), _content(v))


def _content(v: Any) -> str:
    kind = kind_of(v)
    if kind in (Kind.BOOL, Kind.INT, Kind.FLOAT):
        return str(v)
    if kind in (Kind.STRING, Kind.BYTES):
        return repr(bytes(v)) if isinstance(v, memoryview) else repr(v)
    if kind is Kind.ERROR or _is_stringer(v):
        return repr(str(v))
    return pprint.pformat(v)


def _is_stringer(v: Any) -> bool:
    """Report whether the type of *v* defines its own ``__str__``."""
    str_impl = type(v).__str__
    return str_impl is not object.__str__ and str_impl is not type(v).__repr__
