"""Runtime support for Language resolvers.

Provides the readers-writer lock guarding each resolver and the keyed,
single-flight cache sharing resolvers across requests.

Python 3.13+.
"""

from .cache import LanguageBuilder, LanguageCache
from .rwlock import RWLock

__all__ = [
    "LanguageBuilder",
    "LanguageCache",
    "RWLock",
]
