"""IniLexEngine - INI language resource resolution with fallback and caching.

Resolves translated strings for a multi-language application from
per-extension INI files, layering default-language fallback and site
overrides, sharing constructed resolvers through a single-flight cache,
and tracing lookups in debug mode.

Public API:
    Language - Per-language string resolver
    LanguageFactory - Builds resolvers for an application
    CachingLanguageFactory - Shares one resolver per (tag, debug)
    LanguageCache - Explicit, injectable resolver cache
    LanguageConfig - Resolver configuration
    Text - Template helpers (sprintf, plural, alt)
    parse_ini - Parse INI resource source
    serialize_ini - Serialize a mapping to INI resource source

Exceptions:
    LanguageError - Base exception class
    MetadataError - Language metadata missing or invalid
    ResourceFileError - Resource file requested for validation is missing

Submodules:
    inilexengine.localization - Resolver, factories, metadata, debug tracing
    inilexengine.syntax - INI parser and serializer
    inilexengine.validation - Line-level resource file validation
    inilexengine.diagnostics - Error types and diagnostic codes
    inilexengine.runtime - RWLock and LanguageCache
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    LanguageError,
    MetadataError,
    MetadataInvalidError,
    MetadataNotFoundError,
    ResourceFileError,
)
from .localization import (
    CachingLanguageFactory,
    Language,
    LanguageConfig,
    LanguageFactory,
    StaticApplication,
    Text,
    call_site,
)
from .runtime import LanguageCache
from .syntax import parse_ini_string as parse_ini
from .syntax import serialize_ini

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("inilexengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# Resource files are read and written as UTF-8 (a leading BOM is ignored)
__recommended_encoding__ = "UTF-8"

__all__ = [
    "CachingLanguageFactory",
    "Language",
    "LanguageCache",
    "LanguageConfig",
    "LanguageError",
    "LanguageFactory",
    "MetadataError",
    "MetadataInvalidError",
    "MetadataNotFoundError",
    "ResourceFileError",
    "StaticApplication",
    "Text",
    "__recommended_encoding__",
    "__version__",
    "call_site",
    "parse_ini",
    "serialize_ini",
]
