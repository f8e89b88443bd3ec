"""Shared constants for IniLexEngine.

Single source of truth for directory layout, file naming, debug markers
and the defaults that apply when a language metadata record or a
localisation capability is silent.

Constants are grouped by domain:
- Layout: Where resource, override and metadata files live
- Languages: Default language tag
- Debug markers: Wrapping applied to strings in debug mode
- Validation: Reserved INI words
- Metadata defaults: Calendar, week layout
- Search limits: Defaults for search-word capabilities

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Layout
    "LANGUAGE_DIRNAME",
    "OVERRIDES_DIRNAME",
    "METADATA_FILENAME",
    "RESOURCE_FILE_SUFFIX",
    "OVERRIDE_FILE_SUFFIX",
    "SYSTEM_EXTENSION",
    # Languages
    "DEFAULT_LANGUAGE",
    # Debug markers
    "DEBUG_FOUND_MARKER",
    "DEBUG_MISSING_MARKER",
    # Validation
    "RESERVED_INI_WORDS",
    # Metadata defaults
    "DEFAULT_CALENDAR",
    "DEFAULT_FIRST_DAY",
    "DEFAULT_WEEKEND",
    # Search limits
    "DEFAULT_LOWER_LIMIT_SEARCH_WORD",
    "DEFAULT_UPPER_LIMIT_SEARCH_WORD",
    "DEFAULT_SEARCH_DISPLAYED_CHARACTERS",
]

# ============================================================================
# LAYOUT
# ============================================================================
#
# Given a base path B and a tag T:
#   B/language/T/system.ini            system strings (language-agnostic name)
#   B/language/T/T.ini                 system strings (language-qualified name)
#   B/language/T/<ext>.ini             extension strings
#   B/language/T/T.<ext>.ini           extension strings (language-qualified)
#   B/language/T/metadata.json         metadata record
#   B/language/overrides/T.override.ini
#
# ============================================================================

LANGUAGE_DIRNAME: str = "language"
OVERRIDES_DIRNAME: str = "overrides"
METADATA_FILENAME: str = "metadata.json"
RESOURCE_FILE_SUFFIX: str = ".ini"
OVERRIDE_FILE_SUFFIX: str = ".override.ini"

# Extension name whose candidate files are system.ini and <tag>.ini.
# An empty extension name is treated the same way.
SYSTEM_EXTENSION: str = "system"

# ============================================================================
# LANGUAGES
# ============================================================================

# Used when a resolver is constructed without a tag, and as the safety-net
# language whose strings are loaded first in production mode.
DEFAULT_LANGUAGE: str = "en-GB"

# ============================================================================
# DEBUG MARKERS
# ============================================================================

# Hit:  **KEY**   Miss:  ??original??
DEBUG_FOUND_MARKER: str = "**"
DEBUG_MISSING_MARKER: str = "??"

# ============================================================================
# VALIDATION
# ============================================================================

# Bare versions of these words are auto-cast by INI parsers, so they cannot
# be used as keys.
RESERVED_INI_WORDS: frozenset[str] = frozenset(
    ("YES", "NO", "NULL", "FALSE", "ON", "OFF", "NONE", "TRUE")
)

# ============================================================================
# METADATA DEFAULTS
# ============================================================================

DEFAULT_CALENDAR: str = "gregorian"
DEFAULT_FIRST_DAY: int = 0
DEFAULT_WEEKEND: str = "0,6"

# ============================================================================
# SEARCH LIMITS
# ============================================================================

DEFAULT_LOWER_LIMIT_SEARCH_WORD: int = 3

# Also a floor: a capability may raise the upper limit but never lower it.
DEFAULT_UPPER_LIMIT_SEARCH_WORD: int = 200

DEFAULT_SEARCH_DISPLAYED_CHARACTERS: int = 200
