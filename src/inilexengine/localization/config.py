"""Configuration for Language resolvers.

Groups the per-resolver knobs into one frozen dataclass so factories and
caches can pass a single typed object instead of a growing list of
keyword arguments.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from inilexengine.constants import DEFAULT_LANGUAGE

__all__ = ["LanguageConfig"]


@dataclass(frozen=True, slots=True)
class LanguageConfig:
    """Immutable configuration for Language construction.

    Constructing ``LanguageConfig()`` with no arguments gives the default
    behaviour.

    Attributes:
        default_language: Safety-net language tag. Its strings are loaded
            underneath every other language in production mode, and its
            override file is pre-read once per non-default resolver.
        debug_keys: In debug mode, wrap the translated value in hit
            markers instead of the key (default: False, show the key).
        validate_on_load: In debug mode, validate every existing resource
            file that load() parses and record offending lines in the
            error-file report (default: False; validate_file() is then
            the only way to populate that report).

    Example:
        >>> config = LanguageConfig(default_language="fr-FR", debug_keys=True)
        >>> language = Language(factory, "de-DE", debug=True, config=config)
    """

    default_language: str = DEFAULT_LANGUAGE
    debug_keys: bool = False
    validate_on_load: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If default_language is empty, has surrounding
                whitespace, or contains a path separator.
        """
        if not self.default_language:
            msg = "default_language must not be empty"
            raise ValueError(msg)
        if self.default_language.strip() != self.default_language:
            msg = f"default_language has leading/trailing whitespace: {self.default_language!r}"
            raise ValueError(msg)
        if "/" in self.default_language or "\\" in self.default_language:
            msg = f"Path separators not allowed in default_language: {self.default_language!r}"
            raise ValueError(msg)
