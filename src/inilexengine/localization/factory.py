"""Factories producing Language resolvers.

A Language never looks up its application on its own: it asks the factory
that built it, which keeps the resolver free of global state and lets
tests substitute a fake application with a temporary base directory.

Components:
    Application - Protocol: anything exposing get_dir()
    LanguageFactoryProtocol - What a Language needs from its factory
    LanguageFactory - Builds a fresh Language per call
    CachingLanguageFactory - Shares one Language per (tag, debug) through
        a LanguageCache

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from inilexengine.localization.capabilities import CapabilityRegistry
from inilexengine.localization.config import LanguageConfig
from inilexengine.localization.language import Language
from inilexengine.runtime.cache import LanguageCache

if TYPE_CHECKING:
    from os import PathLike

    from inilexengine.localization.loading import ResourceFileLoader
    from inilexengine.localization.types import LanguageTag

__all__ = [
    "Application",
    "CachingLanguageFactory",
    "LanguageFactory",
    "LanguageFactoryProtocol",
    "StaticApplication",
]

logger = logging.getLogger(__name__)


class Application(Protocol):
    """The application context a Language is built for."""

    def get_dir(self) -> str | PathLike[str]:
        """Return the application base directory (parent of language/)."""
        ...


class LanguageFactoryProtocol(Protocol):
    """What a Language requires from the factory constructing it."""

    def get_application(self) -> Application:
        """Return the active application."""
        ...


@dataclass(frozen=True, slots=True)
class StaticApplication:
    """Application with a fixed base directory.

    Example:
        >>> factory = LanguageFactory(StaticApplication("/srv/app"))
        >>> factory.create_language("en-GB").get_tag()
        'en-GB'
    """

    base_path: Path

    def get_dir(self) -> Path:
        """Return the base directory."""
        return self.base_path


class LanguageFactory:
    """Builds Language resolvers for one active application.

    Every create_language() call constructs a new resolver. Use
    CachingLanguageFactory to share resolvers across requests.

    Args:
        application: Initial active application (may be set later)
        config: Configuration passed to every resolver
        capabilities: Registry consulted for each tag's capabilities
        loader: Resource file parser passed to every resolver
    """

    __slots__ = ("_application", "_capabilities", "_config", "_loader", "_lock")

    def __init__(
        self,
        application: Application | None = None,
        *,
        config: LanguageConfig | None = None,
        capabilities: CapabilityRegistry | None = None,
        loader: ResourceFileLoader | None = None,
    ) -> None:
        """Initialize the factory."""
        self._application = application
        self._config = config if config is not None else LanguageConfig()
        self._capabilities = capabilities if capabilities is not None else CapabilityRegistry()
        self._loader = loader
        self._lock = threading.Lock()

    def get_application(self) -> Application:
        """Return the active application.

        Raises:
            RuntimeError: If no application has been set
        """
        with self._lock:
            application = self._application
        if application is None:
            msg = "LanguageFactory has no active application"
            raise RuntimeError(msg)
        return application

    def set_application(self, application: Application) -> Application | None:
        """Set the active application and return the previous one."""
        with self._lock:
            previous, self._application = self._application, application
        return previous

    @property
    def config(self) -> LanguageConfig:
        """Configuration passed to every resolver."""
        return self._config

    @property
    def capabilities(self) -> CapabilityRegistry:
        """Registry of per-language capabilities."""
        return self._capabilities

    def create_language(
        self,
        tag: LanguageTag | None = None,
        debug: bool = False,
        *,
        application: Application | None = None,
    ) -> Language:
        """Build a new Language.

        Args:
            tag: Language tag (default: the configured default language)
            debug: Debug mode flag
            application: Make this the active application first

        Returns:
            A READY Language

        Raises:
            MetadataError: If the language's metadata cannot be loaded
            RuntimeError: If no application is active
        """
        if application is not None:
            self.set_application(application)
        resolved = tag or self._config.default_language
        logger.debug("Creating language %s (debug=%s)", resolved, debug)
        return Language(
            self,
            resolved,
            debug,
            config=self._config,
            capabilities=self._capabilities.get(resolved),
            loader=self._loader,
        )


class CachingLanguageFactory(LanguageFactory):
    """LanguageFactory that shares one resolver per (tag, debug).

    The cache is injected so several factories (or a whole process) can
    share it; by default each factory gets its own.

    Example:
        >>> factory = CachingLanguageFactory(StaticApplication(app_dir))
        >>> factory.create_language("fr-FR") is factory.create_language("fr-FR")
        True
    """

    __slots__ = ("_cache",)

    def __init__(
        self,
        application: Application | None = None,
        *,
        cache: LanguageCache | None = None,
        config: LanguageConfig | None = None,
        capabilities: CapabilityRegistry | None = None,
        loader: ResourceFileLoader | None = None,
    ) -> None:
        """Initialize the factory with an optional shared cache."""
        super().__init__(application, config=config, capabilities=capabilities, loader=loader)
        self._cache = cache if cache is not None else LanguageCache()

    @property
    def cache(self) -> LanguageCache:
        """The resolver cache."""
        return self._cache

    def create_language(
        self,
        tag: LanguageTag | None = None,
        debug: bool = False,
        *,
        application: Application | None = None,
    ) -> Language:
        """Return the shared Language for (tag, debug), building it once.

        Args:
            tag: Language tag (default: the configured default language)
            debug: Debug mode flag
            application: Make this the active application first

        Returns:
            The cached READY Language

        Raises:
            MetadataError: If construction fails (nothing is cached)
        """
        if application is not None:
            self.set_application(application)
        resolved = tag or self._config.default_language
        return self._cache.get(resolved, debug, builder=self._build)

    def _build(self, tag: LanguageTag, debug: bool) -> Language:
        return LanguageFactory.create_language(self, tag, debug)
