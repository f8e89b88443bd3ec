"""Resource file validation.

Standalone line-level checks for INI resource files, usable from debug
mode, CI pipelines and linters without constructing a Language.

Python 3.13+. Zero external dependencies.
"""

from .resource import validate_resource_file, validate_resource_lines

__all__ = ["validate_resource_file", "validate_resource_lines"]
