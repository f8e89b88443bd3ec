"""INI resource syntax: parsing and serialization.

The engine consumes resource files only through parse_ini_file(); the
string parser and serializer are exposed for tooling that edits files.

Python 3.13+. Zero external dependencies.
"""

from .parser import parse_ini_file, parse_ini_string
from .serializer import serialize_ini, serialize_ini_bytes

__all__ = [
    "parse_ini_file",
    "parse_ini_string",
    "serialize_ini",
    "serialize_ini_bytes",
]
