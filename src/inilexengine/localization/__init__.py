"""Language resolution package.

Provides the per-language resolver, its factories, and the collaborators
it is assembled from.

Submodules:
    types        - PEP 695 type aliases (LanguageTag, ResourceKey, Extension)
    config       - LanguageConfig
    metadata     - LanguageMetadata, parse_metadata_file
    loading      - ResourceFileLoader protocol, IniFileLoader, LoadRecord
    overrides    - OverrideResolver
    debug        - CallerSite, OrphanRecord, DebugTrace, call_site
    capabilities - LanguageCapabilities, CapabilityRegistry
    language     - Language (the resolver)
    factory      - Application, LanguageFactory, CachingLanguageFactory
    helpers      - Language directory discovery and INI writing
    text         - Text facade (sprintf, plural, alt, script strings)

Python 3.13+. External dependency: Babel (capabilities, locale lookup).
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from inilexengine.enums import LoadStatus, ResolverState
from inilexengine.localization.capabilities import (
    CapabilityRegistry,
    LanguageCapabilities,
    babel_plural_suffixes,
)
from inilexengine.localization.config import LanguageConfig
from inilexengine.localization.debug import (
    CallerSite,
    DebugTrace,
    OrphanRecord,
    call_site,
    current_caller,
    current_trace,
)
from inilexengine.localization.factory import (
    Application,
    CachingLanguageFactory,
    LanguageFactory,
    LanguageFactoryProtocol,
    StaticApplication,
)
from inilexengine.localization.helpers import (
    get_known_languages,
    get_language_path,
    language_exists,
    parse_language_files,
    save_to_ini_file,
)
from inilexengine.localization.language import Language, escape_js, unescape_backslashes
from inilexengine.localization.loading import (
    IniFileLoader,
    LoadRecord,
    ResourceFileLoader,
    candidate_files,
)
from inilexengine.localization.metadata import LanguageMetadata, parse_metadata_file
from inilexengine.localization.overrides import OverrideResolver, override_file
from inilexengine.localization.text import Text, format_sprintf
from inilexengine.localization.types import Extension, LanguageTag, ResourceKey, StringTable

__all__ = [
    # Resolver
    "Language",
    "LanguageConfig",
    "ResolverState",
    # Factories
    "Application",
    "StaticApplication",
    "LanguageFactoryProtocol",
    "LanguageFactory",
    "CachingLanguageFactory",
    # Loading
    "ResourceFileLoader",
    "IniFileLoader",
    "LoadRecord",
    "LoadStatus",
    "candidate_files",
    # Overrides
    "OverrideResolver",
    "override_file",
    # Metadata
    "LanguageMetadata",
    "parse_metadata_file",
    # Debug instrumentation
    "CallerSite",
    "OrphanRecord",
    "DebugTrace",
    "call_site",
    "current_caller",
    "current_trace",
    # Capabilities
    "LanguageCapabilities",
    "CapabilityRegistry",
    "babel_plural_suffixes",
    # Helpers
    "get_language_path",
    "language_exists",
    "parse_language_files",
    "get_known_languages",
    "save_to_ini_file",
    # Text facade
    "Text",
    "format_sprintf",
    "escape_js",
    "unescape_backslashes",
    # Type aliases
    "LanguageTag",
    "ResourceKey",
    "Extension",
    "StringTable",
]
