"""Exceptions raised by the import map library.

Validation problems are never raised; they are collected in a
ValidationOutcome. Only caller contract violations and CLI input
failures surface as exceptions.
"""


class InvalidResolverError(RuntimeError):
    """Raised when resolve() is called on a resolver whose import map failed validation."""


class ImportMapLoadError(Exception):
    """Raised by the CLI loader when an import map file cannot be read or parsed."""
