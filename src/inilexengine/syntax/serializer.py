"""INI resource serializer.

Converts a mapping back to INI resource text. Scalar entries are written
first as global ``key="value"`` lines; nested mappings follow as
``[section]`` blocks separated by blank lines.

Value encoding:
    - str: double-quoted, '"' escaped as '\\"', newlines written as '\\n';
      a trailing backslash cannot be written (it would escape the closing
      quote) and raises ValueError
    - bool: true / false
    - int, float: bare
    - anything else: empty

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping

__all__ = ["serialize_ini", "serialize_ini_bytes"]


def _value_as_ini(value: object) -> str:
    """Encode a scalar value for the right-hand side of an INI line."""
    match value:
        case bool():
            return "true" if value else "false"
        case int() | float():
            return str(value)
        case str():
            if value.endswith("\\"):
                msg = f"Value ending in a backslash cannot be quoted: {value!r}"
                raise ValueError(msg)
            escaped = value.replace('"', '\\"').replace("\r\n", "\\n").replace("\n", "\\n")
            return f'"{escaped}"'
        case _:
            return ""


def serialize_ini(data: Mapping[str, object]) -> str:
    """Serialize a mapping to INI resource text.

    Args:
        data: Keys to values; Mapping values become sections

    Returns:
        INI source text (no trailing newline)

    Raises:
        ValueError: If a string value ends in a backslash

    Example:
        >>> serialize_ini({"HELLO": "Hello", "COUNT": 3})
        'HELLO="Hello"\\nCOUNT=3'
    """
    global_lines: list[str] = []
    section_lines: list[str] = []
    sections = [(key, value) for key, value in data.items() if isinstance(value, Mapping)]

    for key, value in data.items():
        if not isinstance(value, Mapping):
            global_lines.append(f"{key}={_value_as_ini(value)}")

    for position, (name, entries) in enumerate(sections):
        if position > 0 or global_lines:
            section_lines.append("")
        section_lines.append(f"[{name}]")
        section_lines.extend(f"{key}={_value_as_ini(value)}" for key, value in entries.items())

    return "\n".join(global_lines + section_lines)


def serialize_ini_bytes(data: Mapping[str, object]) -> bytes:
    """Serialize a mapping to UTF-8 encoded INI resource bytes."""
    return serialize_ini(data).encode("utf-8")
