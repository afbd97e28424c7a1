"""
AppleScript literal construction.

This is the only place caller evidence is turned into script text. The
script builder accepts nothing but ``AppleScriptLiteral`` values in its
evidence slots, and an ``AppleScriptLiteral`` can only be made by the
functions in this module.
"""

from typing import Iterable

_CONSTRUCT = object()


class AppleScriptLiteral:
    """Script text that is safe to interpolate into a generated AppleScript."""

    __slots__ = ("_text",)

    def __init__(self, text: str, _token: object = None):
        if _token is not _CONSTRUCT:
            raise TypeError("AppleScriptLiteral can only be built by fruitmail.escaping")
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"AppleScriptLiteral({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppleScriptLiteral):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)


def escape_applescript_string(value: str) -> str:
    """Escape a string for use inside a double-quoted AppleScript literal.

    Backslashes are escaped before quotes so the quote escapes are not
    doubled.
    """
    return value.replace("\\", "\\\\").replace('"', '\\"')


def string_literal(value: str) -> AppleScriptLiteral:
    """Quoted AppleScript string literal, e.g. ``"Inbox"``."""
    if not isinstance(value, str):
        raise TypeError(f"Expected str, got {type(value).__name__}")
    return AppleScriptLiteral(f'"{escape_applescript_string(value)}"', _CONSTRUCT)


def string_list_literal(values: Iterable[str]) -> AppleScriptLiteral:
    """AppleScript list of quoted strings, e.g. ``{"a", "b"}``."""
    items = ", ".join(string_literal(v).text for v in values)
    return AppleScriptLiteral("{" + items + "}", _CONSTRUCT)


def integer_list_literal(values: Iterable[int]) -> AppleScriptLiteral:
    """AppleScript list of positive integers, e.g. ``{12, 345}``.

    Integers are emitted bare. Anything that is not a positive int is
    rejected rather than quoted.
    """
    items = []
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"Row ids must be positive integers, got {value!r}")
        items.append(str(value))
    return AppleScriptLiteral("{" + ", ".join(items) + "}", _CONSTRUCT)
