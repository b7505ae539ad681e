"""Import map validation and module specifier resolution.

Public API:
- validate: Check an import map and collect every problem found
- create_resolver / Resolver: Resolve specifiers against a validated map
- ValidationOutcome: Validity flag plus ordered error messages
- ImportMap: Typed (pydantic) view of an import map
- InvalidResolverError: Raised when resolving with an invalid map
"""

from .exceptions import ImportMapLoadError
from .exceptions import InvalidResolverError
from .models import ImportMap
from .resolver import Resolver
from .resolver import create_resolver
from .validation_result import ValidationOutcome
from .validator import validate

__all__ = [
    "ImportMap",
    "ImportMapLoadError",
    "InvalidResolverError",
    "Resolver",
    "ValidationOutcome",
    "create_resolver",
    "validate",
]
