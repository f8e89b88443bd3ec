"""Text - convenience facade over a Language for templates.

Adds the conveniences views use on top of Language.translate():

    - Comma pass-through: "COM_X_SAVED,Article" translates each part and
      substitutes the second part into the first if it has %s placeholders
    - alt(): prefer KEY_ALT when it exists
    - plural(): pick KEY_<suffix> from the language's plural suffixes
    - sprintf(): printf-style formatting of a translated pattern
    - Script store: strings requested with script=True are collected for
      export to client-side JavaScript

Placeholders follow printf: %s, %d, %u, %f (with optional .precision),
%x, %X, positional %1$s, and %% for a literal percent sign. Translators
may also write [[%1:label]], which is treated as %1$s.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inilexengine.localization.language import Language

__all__ = ["Text", "format_sprintf"]

_NAMED_PLACEHOLDER = re.compile(r"\[\[%([0-9]+):[^\]]*\]\]")
_STRING_PLACEHOLDER = re.compile(r"%([0-9]+\$)?s")
_PLACEHOLDER = re.compile(r"%(?:%|(?:([1-9][0-9]*)\$)?(?:\.([0-9]+))?([sdufFxX]))")


def _as_int(value: object) -> int:
    if isinstance(value, bool | int):
        return int(value)
    try:
        return int(float(str(value).strip() or 0))
    except ValueError:
        return 0


def _as_float(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0


def _format_one(value: object, precision: str | None, conversion: str) -> str:
    match conversion:
        case "s":
            text = "" if value is None else str(value)
            return text[: int(precision)] if precision is not None else text
        case "d":
            return str(_as_int(value))
        case "u":
            return str(_as_int(value) % (1 << 64))
        case "f" | "F":
            return f"{_as_float(value):.{6 if precision is None else int(precision)}f}"
        case "x":
            return f"{_as_int(value) % (1 << 64):x}"
        case _:
            return f"{_as_int(value) % (1 << 64):X}"


def format_sprintf(pattern: str, *args: object) -> str:
    """Format a printf-style pattern.

    Sequential placeholders consume arguments in order; positional ones
    (%2$s) pick an argument by 1-based index without moving the sequence.

    Args:
        pattern: Pattern with printf placeholders
        *args: Values to substitute

    Returns:
        Formatted string

    Raises:
        ValueError: If a placeholder refers past the last argument

    Example:
        >>> format_sprintf("%2$s, %1$s", "World", "Hello")
        'Hello, World'
        >>> format_sprintf("%d%% done", "42")
        '42% done'
    """
    position = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal position
        conversion = match.group(3)
        if conversion is None:
            return "%"
        if match.group(1) is not None:
            index = int(match.group(1)) - 1
        else:
            index = position
            position += 1
        if index >= len(args):
            msg = f"Too few arguments for pattern {pattern!r}: need {index + 1}, got {len(args)}"
            raise ValueError(msg)
        return _format_one(args[index], match.group(2), conversion)

    return _PLACEHOLDER.sub(replace, pattern)


class Text:
    """Template-facing translation helpers bound to a Language.

    The language may be given directly or as a zero-argument callable
    returning the language for the current request.

    Example:
        >>> text = Text(language)
        >>> text.sprintf("COM_USERS_N_ITEMS_DELETED", 3)
        '3 users deleted'
        >>> text.plural("COM_USERS_N_ITEMS", 1)
        '1 user'
    """

    __slots__ = ("_language", "_lock", "_script_strings")

    def __init__(self, language: Language | Callable[[], Language]) -> None:
        """Initialize with a language or a language provider."""
        self._language = language
        self._script_strings: dict[str, str] = {}
        self._lock = threading.Lock()

    def _get_language(self) -> Language:
        if callable(self._language):
            return self._language()
        return self._language

    def _store(self, key: str, value: str) -> None:
        with self._lock:
            self._script_strings[key] = value

    def translate(
        self,
        string: str,
        js_safe: bool = False,
        interpret_backslashes: bool = True,
        script: bool = False,
    ) -> str:
        """Translate a string, with comma pass-through.

        Args:
            string: Key, or "KEY,ARG1,ARG2" for pass-through formatting
            js_safe: Escape for a JavaScript string literal
            interpret_backslashes: Convert \\\\, \\t and \\n sequences
            script: Store the translation for JavaScript and return the key

        Returns:
            The translation, or the key itself when script is set
        """
        passed = self._pass_sprintf(string, js_safe, interpret_backslashes, script)
        if passed is not None:
            return passed

        language = self._get_language()
        translated = language.translate(string, js_safe, interpret_backslashes)
        if script:
            self._store(string, translated)
            return string
        return translated

    def _pass_sprintf(
        self,
        string: str,
        js_safe: bool,
        interpret_backslashes: bool,
        script: bool,
    ) -> str | None:
        """Format "PATTERN,ARG,..." strings; None if string is not one."""
        if "," not in string:
            return None

        language = self._get_language()
        parts = [language.translate(part, js_safe, interpret_backslashes) for part in string.split(",")]
        first = _NAMED_PLACEHOLDER.sub(r"%\1$s", parts[0])

        if not _STRING_PLACEHOLDER.search(first):
            return None

        try:
            final = format_sprintf(first, *parts[1:])
        except ValueError:
            return None

        if final == first:
            return None

        if script:
            for part in parts[1:]:
                self._store(part, part)
        return final

    def alt(
        self,
        string: str,
        alt: str,
        js_safe: bool = False,
        interpret_backslashes: bool = True,
        script: bool = False,
    ) -> str:
        """Translate STRING_ALT if the language has it, else STRING.

        Example:
            >>> text.alt("JACTION_SAVE", "ARTICLE")  # uses JACTION_SAVE_ARTICLE if present
            'Save article'
        """
        language = self._get_language()
        if language.has_key(f"{string}_{alt}"):
            string = f"{string}_{alt}"
        return self.translate(string, js_safe, interpret_backslashes, script)

    def plural(
        self,
        string: str,
        n: int,
        *args: object,
        js_safe: bool = False,
        interpret_backslashes: bool = True,
        script: bool = False,
    ) -> str:
        """Translate a counted message.

        Tries STRING_<n>, then STRING_<suffix> for each of the language's
        plural suffixes for n, then STRING. The chosen pattern is formatted
        with n as the first argument.

        Args:
            string: Base key
            n: The count
            *args: Further format arguments after n
            js_safe: Escape for a JavaScript string literal
            interpret_backslashes: Convert backslash sequences
            script: Store the formatted string for JavaScript and return the key

        Returns:
            The formatted translation, or the chosen key when script is set
        """
        language = self._get_language()
        count = int(n)

        key = string
        for suffix in [str(count), *language.get_plural_suffixes(count)]:
            candidate = f"{string}_{suffix}"
            if language.has_key(candidate):
                key = candidate
                break

        pattern = language.translate(key, js_safe, interpret_backslashes)
        formatted = format_sprintf(pattern, n, *args)
        if script:
            self._store(key, formatted)
            return key
        return formatted

    def sprintf(
        self,
        string: str,
        *args: object,
        js_safe: bool = False,
        interpret_backslashes: bool = True,
        script: bool = False,
    ) -> str:
        """Translate a pattern and format it with args.

        Returns:
            The formatted translation, or the key when script is set
        """
        language = self._get_language()
        pattern = _NAMED_PLACEHOLDER.sub(
            r"%\1$s", language.translate(string, js_safe, interpret_backslashes)
        )
        formatted = format_sprintf(pattern, *args)
        if script:
            self._store(string, formatted)
            return string
        return formatted

    def get_script_strings(self) -> dict[str, str]:
        """Copy of the strings collected for JavaScript."""
        with self._lock:
            return dict(self._script_strings)
