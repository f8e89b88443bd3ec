"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating Language call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "Extension",
    "LanguageTag",
    "ResourceKey",
    "StringTable",
]

type LanguageTag = str
"""Language tag (e.g., 'en-GB', 'fr-FR'); case-sensitive identity."""

type ResourceKey = str
"""Translation key; normalized to upper case for every table operation."""

type Extension = str
"""Resource namespace (e.g., 'system', 'com_content')."""

type StringTable = Mapping[ResourceKey, str]
"""Read-only view of upper-cased keys to translated strings."""
