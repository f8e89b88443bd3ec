"""Language - per-language string resolver.

One Language holds the merged string table of a single language for one
application, assembled from per-extension INI files:

    <base>/language/<tag>/metadata.json          language metadata
    <base>/language/<tag>/system.ini             system strings
    <base>/language/<tag>/<ext>.ini              strings for extension <ext>
    <base>/language/<tag>/<tag>.<ext>.ini        legacy name for the same
    <base>/language/overrides/<tag>.override.ini site overrides

Precedence, lowest to highest: default-language strings, this language's
strings (later loads win), override patch. Outside debug mode every load
first brings in the default language's file for the same extension, so
an untranslated key falls back to the default language's text instead of
the raw key.

Construction runs UNINITIALIZED -> METADATA_LOADED -> OVERRIDE_LOADED ->
SYSTEM_LOADED -> READY; a failure before READY raises and leaves nothing
behind to reuse.

Thread Safety:
    Each Language guards its string table, load record and debug reports
    with an RWLock. load() and debug-mode translate() take the write lock;
    non-debug translate() and has_key() share the read lock.

Python 3.13+. External dependency: Babel (get_babel_locale only).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from inilexengine.constants import (
    DEBUG_FOUND_MARKER,
    DEBUG_MISSING_MARKER,
    DEFAULT_LOWER_LIMIT_SEARCH_WORD,
    DEFAULT_SEARCH_DISPLAYED_CHARACTERS,
    DEFAULT_UPPER_LIMIT_SEARCH_WORD,
    METADATA_FILENAME,
    SYSTEM_EXTENSION,
)
from inilexengine.enums import LoadStatus, ResolverState
from inilexengine.locale_utils import get_babel_locale
from inilexengine.localization.capabilities import LanguageCapabilities
from inilexengine.localization.config import LanguageConfig
from inilexengine.localization.debug import (
    CallerSite,
    DebugTrace,
    OrphanRecord,
    current_caller,
    current_trace,
)
from inilexengine.localization.helpers import get_language_path
from inilexengine.localization.loading import (
    IniFileLoader,
    LoadRecord,
    ResourceFileLoader,
    candidate_files,
)
from inilexengine.localization.metadata import LanguageMetadata, parse_metadata_file
from inilexengine.localization.overrides import OverrideResolver
from inilexengine.runtime.rwlock import RWLock
from inilexengine.validation import validate_resource_file

if TYPE_CHECKING:
    from os import PathLike

    from babel import Locale

    from inilexengine.localization.factory import LanguageFactoryProtocol
    from inilexengine.localization.types import Extension, LanguageTag, ResourceKey

__all__ = ["Language", "escape_js", "unescape_backslashes"]

logger = logging.getLogger(__name__)

# Sentinel for "locale list not computed yet"; None is a valid cached value.
_UNSET: object = object()

# \\ -> backslash, \t -> tab, \n -> newline, in one left-to-right pass.
_BACKSLASH_SEQUENCE = re.compile(r"\\([\\tn])")
_BACKSLASH_REPLACEMENTS: dict[str, str] = {"\\": "\\", "t": "\t", "n": "\n"}

_JS_ESCAPES: dict[int, str] = {
    ord("\\"): "\\\\",
    ord("'"): "\\'",
    ord('"'): '\\"',
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}
# Remaining C0 controls become \xNN.
for _code in range(0x20):
    _JS_ESCAPES.setdefault(_code, f"\\x{_code:02x}")
del _code


def unescape_backslashes(text: str) -> str:
    r"""Convert \\, \t and \n escape sequences in a single pass.

    Each sequence is replaced exactly once, so "\\n" (escaped backslash
    followed by n) becomes a literal backslash and n, never a newline.
    Other backslashes are left as they are.

    Example:
        >>> unescape_backslashes(r"Line\nNext")
        'Line\nNext'
        >>> unescape_backslashes(r"C:\\new")
        'C:\\new'
    """
    if "\\" not in text:
        return text
    return _BACKSLASH_SEQUENCE.sub(lambda m: _BACKSLASH_REPLACEMENTS[m.group(1)], text)


def escape_js(text: str) -> str:
    r"""Escape text for embedding in a quoted JavaScript string literal.

    Quotes, backslashes, control characters and the JavaScript line
    terminators U+2028/U+2029 are backslash-escaped.

    Example:
        >>> print(escape_js('Say "hi"'))
        Say \"hi\"
    """
    return text.translate(_JS_ESCAPES)


class Language:
    """Resolver for one language's strings.

    Obtain instances from a LanguageFactory (optionally through a
    LanguageCache) rather than constructing them per request: construction
    reads metadata, the override file and the system strings from disk.

    Debug mode:
        translate() marks hits as ``**KEY**`` (or ``**value**`` with
        debug_keys) and misses as ``??string??``, and records every
        lookup in the used/orphan reports. Default-language fallback is
        disabled so missing translations stay visible.

    Example:
        >>> language = Language(factory, "fr-FR")
        >>> language.load("com_users", app_dir)
        True
        >>> language.translate("COM_USERS_TITLE")
        'Utilisateurs'
        >>> language.translate("Not translated")
        'Not translated'
    """

    __slots__ = (
        "_base_path",
        "_capabilities",
        "_config",
        "_debug",
        "_debug_keys",
        "_default",
        "_error_files",
        "_ignored_search_words_callback",
        "_load_count",
        "_loader",
        "_locale",
        "_lock",
        "_lower_limit_search_word_callback",
        "_metadata",
        "_overrides",
        "_plural_suffixes_callback",
        "_record",
        "_search_displayed_characters_number_callback",
        "_state",
        "_strings",
        "_tag",
        "_trace",
        "_transliterator",
        "_upper_limit_search_word_callback",
    )

    def __init__(
        self,
        factory: LanguageFactoryProtocol,
        tag: LanguageTag | None = None,
        debug: bool = False,
        *,
        config: LanguageConfig | None = None,
        capabilities: LanguageCapabilities | None = None,
        loader: ResourceFileLoader | None = None,
    ) -> None:
        """Construct a resolver and load its metadata, overrides and system strings.

        Args:
            factory: Supplies the application whose base directory holds
                the language tree
            tag: Language tag; None or "" selects the default language
            debug: Enable debug markers and lookup tracing
            config: Resolver configuration (default: LanguageConfig())
            capabilities: Language pack capabilities (default: none)
            loader: Resource file parser (default: IniFileLoader())

        Raises:
            MetadataNotFoundError: If the language has no readable metadata.json
            MetadataInvalidError: If metadata.json is not a valid metadata object
        """
        self._config = config if config is not None else LanguageConfig()
        self._default: LanguageTag = self._config.default_language
        self._debug_keys = self._config.debug_keys
        self._tag: LanguageTag = tag or self._default
        self._debug = bool(debug)
        self._loader: ResourceFileLoader = loader if loader is not None else IniFileLoader()

        self._lock = RWLock()
        self._strings: dict[ResourceKey, str] = {}
        self._record = LoadRecord()
        self._trace = DebugTrace()
        self._error_files: dict[str, tuple[int, ...]] = {}
        self._load_count = 0
        self._locale: object = _UNSET
        self._state = ResolverState.UNINITIALIZED

        self._capabilities = capabilities if capabilities is not None else LanguageCapabilities()
        self._transliterator = self._capabilities.transliterate
        self._plural_suffixes_callback = self._capabilities.plural_suffixes
        self._ignored_search_words_callback = self._capabilities.ignored_search_words
        self._lower_limit_search_word_callback = self._capabilities.lower_limit_search_word
        self._upper_limit_search_word_callback = self._capabilities.upper_limit_search_word
        self._search_displayed_characters_number_callback = (
            self._capabilities.search_displayed_characters_number
        )

        self._base_path = Path(factory.get_application().get_dir())

        metadata_path = get_language_path(self._base_path, self._tag) / METADATA_FILENAME
        self._metadata: LanguageMetadata = parse_metadata_file(metadata_path)
        self._state = ResolverState.METADATA_LOADED

        self._overrides = OverrideResolver(self._parse)
        with self._lock.write():
            self._overrides.load(
                self._base_path, self._tag, default_tag=self._default, debug=self._debug
            )
        self._state = ResolverState.OVERRIDE_LOADED

        self.load(SYSTEM_EXTENSION, self._base_path)
        self._state = ResolverState.SYSTEM_LOADED

        self._state = ResolverState.READY
        logger.info(
            "Language %s ready (debug=%s, %d strings, %d overrides)",
            self._tag,
            self._debug,
            len(self._strings),
            len(self._overrides.patch),
        )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def translate(
        self,
        string: str,
        js_safe: bool = False,
        interpret_backslashes: bool = True,
        *,
        caller: CallerSite | None = None,
    ) -> str:
        r"""Translate a string or resource key.

        Lookup is case-insensitive: the key is upper-cased. Outside debug
        mode a miss returns the input unchanged.

        Args:
            string: Resource key or literal text
            js_safe: Escape the result for a JavaScript string literal
            interpret_backslashes: Convert \\, \t and \n sequences
                (ignored when js_safe is set)
            caller: Call site for the used report (debug mode); defaults
                to the innermost active call_site()

        Returns:
            The translated string, the input on a miss, or a debug marker

        Example:
            >>> language.translate("jyes")
            'Yes'
            >>> debug_language.translate("JYES")
            '**JYES**'
            >>> debug_language.translate("Nope")
            '??Nope??'
        """
        if string == "":
            return ""

        key = string.upper()

        if self._debug:
            with self._lock.write():
                value = self._strings.get(key)
                if value is not None:
                    shown = value if self._debug_keys else key
                    result = f"{DEBUG_FOUND_MARKER}{shown}{DEBUG_FOUND_MARKER}"
                    self._trace.record_use(key, caller if caller is not None else current_caller())
                else:
                    trace = current_trace()
                    if caller is not None:
                        trace = (caller, *trace)
                    self._trace.record_orphan(key, string, trace)
                    result = f"{DEBUG_MISSING_MARKER}{string}{DEBUG_MISSING_MARKER}"
        else:
            with self._lock.read():
                result = self._strings.get(key, string)

        if js_safe:
            return escape_js(result)
        if interpret_backslashes:
            return unescape_backslashes(result)
        return result

    def has_key(self, string: str) -> bool:
        """Check whether a key has a translation (case-insensitive)."""
        with self._lock.read():
            return string.upper() in self._strings

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(
        self,
        extension: Extension = SYSTEM_EXTENSION,
        base_path: str | PathLike[str] | None = None,
        lang: LanguageTag | None = None,
        reload: bool = False,
        load_default_first: bool = True,
    ) -> bool:
        """Load an extension's strings into the table.

        Tries ``<ext>.ini`` then ``<lang>.<ext>.ini`` (``system.ini`` then
        ``<lang>.ini`` for the system extension) and stops at the first
        file that contributes strings. Outside debug mode, loading a
        non-default language first loads the same extension for the
        default language. The override patch is re-applied after every
        file that contributes, so overrides always win.

        A file's outcome is remembered: calling load() again for the same
        extension and path does not re-read it unless reload is set.

        Args:
            extension: Extension name; "system" (or "") for system strings
            base_path: Application base directory (default: the one this
                resolver was built with)
            lang: Language to load (default: this resolver's tag)
            reload: Re-read files even if their outcome is recorded
            load_default_first: Load the default language first
                (production mode, non-default lang only)

        Returns:
            True if a file contributed strings in this call or an earlier
            one, including the default-language file
        """
        base = Path(base_path) if base_path is not None else self._base_path
        with self._lock.write():
            return self._load_locked(extension, base, lang or self._tag, reload, load_default_first)

    def _load_locked(
        self,
        extension: Extension,
        base_path: Path,
        lang: LanguageTag,
        reload: bool,
        load_default_first: bool,
    ) -> bool:
        fallback_loaded = False
        if not self._debug and lang != self._default and load_default_first:
            fallback_loaded = self._load_locked(extension, base_path, self._default, False, False)

        for path in candidate_files(extension, base_path, lang):
            outcome = None if reload else self._record.get(extension, path)
            if outcome is None:
                outcome = self._load_file(extension, path)
            else:
                logger.debug("%s %s (%s)", LoadStatus.CACHED, path, extension)
            if outcome:
                return True

        return fallback_loaded

    def _load_file(self, extension: Extension, path: Path) -> bool:
        self._load_count += 1
        strings = self._parse(path)
        outcome = bool(strings)

        if outcome:
            self._strings.update(strings)
            self._overrides.apply(self._strings)

        self._record.record(extension, path, outcome)
        logger.debug(
            "%s %s (%s, %d strings)",
            LoadStatus.LOADED if outcome else LoadStatus.EMPTY,
            path,
            extension,
            len(strings),
        )
        return outcome

    def _parse(self, path: Path) -> dict[ResourceKey, str]:
        strings = {str(key).upper(): value for key, value in self._loader.parse(path).items()}
        if self._debug and self._config.validate_on_load and path.is_file():
            self._validate_locked(path)
        return strings

    def get_paths(
        self, extension: Extension | None = None
    ) -> dict[str, bool] | dict[Extension, dict[str, bool]]:
        """Get the load record.

        Args:
            extension: Limit to one extension

        Returns:
            file -> outcome for one extension, or extension -> file ->
            outcome for all of them
        """
        with self._lock.read():
            if extension is not None:
                return self._record.for_extension(extension)
            return self._record.as_dict()

    @property
    def load_count(self) -> int:
        """Number of resource files parsed by load() so far."""
        with self._lock.read():
            return self._load_count

    # ------------------------------------------------------------------
    # Debug reports and validation
    # ------------------------------------------------------------------

    def validate_file(self, path: str | PathLike[str]) -> int:
        """Check a resource file for lines the parser would reject.

        Offending line numbers are recorded in the error-file report. A
        clean file leaves the report untouched.

        Args:
            path: Resource file to check

        Returns:
            Number of offending lines

        Raises:
            ResourceFileError: If the file does not exist or cannot be read
        """
        with self._lock.write():
            return self._validate_locked(Path(path))

    def _validate_locked(self, path: Path) -> int:
        findings = validate_resource_file(path)
        if findings:
            self._error_files[str(path)] = tuple(d.line for d in findings if d.line is not None)
        return len(findings)

    def get_used(self) -> dict[ResourceKey, list[CallerSite]]:
        """Keys found in debug mode, with the caller of each lookup."""
        with self._lock.read():
            return self._trace.used

    def get_orphans(self) -> dict[ResourceKey, list[OrphanRecord]]:
        """Keys missed in debug mode, with a record for each lookup."""
        with self._lock.read():
            return self._trace.orphans

    def get_error_files(self) -> dict[str, tuple[int, ...]]:
        """Files with validation findings, mapped to offending line numbers."""
        with self._lock.read():
            return dict(self._error_files)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def metadata(self) -> LanguageMetadata:
        """The language's metadata record."""
        return self._metadata

    @property
    def state(self) -> ResolverState:
        """Construction state (READY once construction succeeded)."""
        return self._state

    @property
    def tag(self) -> LanguageTag:
        """Tag this resolver was built for (its directory and cache key)."""
        return self._tag

    @property
    def base_path(self) -> Path:
        """Application base directory this resolver was built with."""
        return self._base_path

    def get(self, prop: str, default: object = None) -> object:
        """Get a raw metadata property, or default if absent."""
        return self._metadata.get(prop, default)

    def get_name(self) -> str:
        """Display name of the language."""
        return self._metadata.name

    def get_tag(self) -> LanguageTag:
        """Tag declared in the language's metadata record."""
        return self._metadata.tag

    def is_rtl(self) -> bool:
        """True for right-to-left languages."""
        return self._metadata.rtl

    def get_calendar(self) -> str:
        """Calendar name (default "gregorian")."""
        return self._metadata.calendar

    def get_locale(self) -> tuple[str, ...] | None:
        """System locale names from metadata, computed once and cached."""
        if self._locale is _UNSET:
            self._locale = self._metadata.locale
        return self._locale  # type: ignore[return-value]

    def get_first_day(self) -> int:
        """First day of the week (0 = Sunday)."""
        return self._metadata.first_day

    def get_week_end(self) -> str:
        """Weekend days as a comma-separated string (default "0,6")."""
        return self._metadata.weekend

    def get_babel_locale(self) -> Locale:
        """Babel Locale for this language.

        Raises:
            babel.core.UnknownLocaleError: If Babel does not know the tag
        """
        return get_babel_locale(self._tag)

    # ------------------------------------------------------------------
    # Mode switches
    # ------------------------------------------------------------------

    def get_debug(self) -> bool:
        """Current debug flag."""
        return self._debug

    def set_debug(self, debug: bool) -> bool:
        """Set the debug flag and return the previous value.

        A resolver obtained from a LanguageCache stays under its original
        (tag, debug) key.
        """
        with self._lock.write():
            previous, self._debug = self._debug, bool(debug)
        return previous

    def get_debug_keys(self) -> bool:
        """Whether debug hits show the value instead of the key."""
        return self._debug_keys

    def set_debug_keys(self, debug_keys: bool) -> bool:
        """Set the debug_keys flag and return the previous value."""
        with self._lock.write():
            previous, self._debug_keys = self._debug_keys, bool(debug_keys)
        return previous

    def get_default(self) -> LanguageTag:
        """The default (fallback) language tag."""
        return self._default

    def set_default(self, tag: LanguageTag) -> LanguageTag:
        """Set the default language for later loads and return the previous one."""
        with self._lock.write():
            previous, self._default = self._default, tag
        return previous

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def transliterate(self, string: str) -> str:
        """Transliterate text with the language's transliterator (identity by default)."""
        if self._transliterator is None:
            return string
        return self._transliterator(string)

    def get_transliterator(self) -> Callable[[str], str] | None:
        """The transliterator, or None for identity."""
        return self._transliterator

    def set_transliterator(self, function: Callable[[str], str] | None) -> Callable[[str], str] | None:
        """Replace the transliterator and return the previous one."""
        previous, self._transliterator = self._transliterator, function
        return previous

    def get_plural_suffixes(self, count: int = 1) -> list[str]:
        """Key suffixes to try for count, most specific first.

        Example:
            >>> language.get_plural_suffixes(3)
            ['3']
        """
        if self._plural_suffixes_callback is None:
            return [str(count)]
        return list(self._plural_suffixes_callback(count))

    def get_plural_suffixes_callback(self) -> Callable[[int], list[str]] | None:
        """The plural suffix callback, or None for the default."""
        return self._plural_suffixes_callback

    def set_plural_suffixes_callback(
        self, function: Callable[[int], list[str]] | None
    ) -> Callable[[int], list[str]] | None:
        """Replace the plural suffix callback and return the previous one."""
        previous, self._plural_suffixes_callback = self._plural_suffixes_callback, function
        return previous

    def get_ignored_search_words(self) -> list[str]:
        """Words search should ignore ([] by default)."""
        if self._ignored_search_words_callback is None:
            return []
        return list(self._ignored_search_words_callback())

    def get_ignored_search_words_callback(self) -> Callable[[], list[str]] | None:
        """The ignored-words callback, or None for the default."""
        return self._ignored_search_words_callback

    def set_ignored_search_words_callback(
        self, function: Callable[[], list[str]] | None
    ) -> Callable[[], list[str]] | None:
        """Replace the ignored-words callback and return the previous one."""
        previous, self._ignored_search_words_callback = self._ignored_search_words_callback, function
        return previous

    def get_lower_limit_search_word(self) -> int:
        """Minimum search word length (3 by default)."""
        if self._lower_limit_search_word_callback is None:
            return DEFAULT_LOWER_LIMIT_SEARCH_WORD
        return int(self._lower_limit_search_word_callback())

    def get_lower_limit_search_word_callback(self) -> Callable[[], int] | None:
        """The lower-limit callback, or None for the default."""
        return self._lower_limit_search_word_callback

    def set_lower_limit_search_word_callback(
        self, function: Callable[[], int] | None
    ) -> Callable[[], int] | None:
        """Replace the lower-limit callback and return the previous one."""
        previous, self._lower_limit_search_word_callback = (
            self._lower_limit_search_word_callback,
            function,
        )
        return previous

    def get_upper_limit_search_word(self) -> int:
        """Maximum search word length.

        Never below 200: a callback value of 200 or less yields 200.
        """
        if self._upper_limit_search_word_callback is not None:
            value = int(self._upper_limit_search_word_callback())
            if value > DEFAULT_UPPER_LIMIT_SEARCH_WORD:
                return value
        return DEFAULT_UPPER_LIMIT_SEARCH_WORD

    def get_upper_limit_search_word_callback(self) -> Callable[[], int] | None:
        """The upper-limit callback, or None for the default."""
        return self._upper_limit_search_word_callback

    def set_upper_limit_search_word_callback(
        self, function: Callable[[], int] | None
    ) -> Callable[[], int] | None:
        """Replace the upper-limit callback and return the previous one."""
        previous, self._upper_limit_search_word_callback = (
            self._upper_limit_search_word_callback,
            function,
        )
        return previous

    def get_search_displayed_characters_number(self) -> int:
        """Characters shown per search result (200 by default)."""
        if self._search_displayed_characters_number_callback is None:
            return DEFAULT_SEARCH_DISPLAYED_CHARACTERS
        return int(self._search_displayed_characters_number_callback())

    def get_search_displayed_characters_number_callback(self) -> Callable[[], int] | None:
        """The displayed-characters callback, or None for the default."""
        return self._search_displayed_characters_number_callback

    def set_search_displayed_characters_number_callback(
        self, function: Callable[[], int] | None
    ) -> Callable[[], int] | None:
        """Replace the displayed-characters callback and return the previous one."""
        previous, self._search_displayed_characters_number_callback = (
            self._search_displayed_characters_number_callback,
            function,
        )
        return previous

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Language(tag={self._tag!r}, debug={self._debug}, state={self._state})"
