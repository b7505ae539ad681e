"""Module specifier resolution against an import map.

Resolution order (first match wins):
1. Scopes whose prefix matches the importer, longest prefix first
2. Top-level imports
3. Unmatched specifiers: bare -> None, relative -> joined with the importer,
   anything else is returned unchanged

Within a mapping the longest key wins: keys are pre-sorted by length so an
exact or trailing-slash prefix match on a more specific key is always found
before a shorter one.
"""

import logging
from typing import Any
from urllib.parse import quote

from .exceptions import InvalidResolverError
from .models import ImportMap
from .urls import has_valid_origin
from .urls import is_bare_specifier
from .urls import is_relative_url
from .urls import parse_url
from .urls import url_origin
from .validation_result import ValidationOutcome
from .validator import validate

logger = logging.getLogger(__name__)

SortedImports = tuple[tuple[str, str], ...]

# Characters kept as-is when rebuilding a URL path
_PATH_SAFE_CHARS = "/:@!$&'()*+,;=-._~%"
_QUERY_SAFE_CHARS = _PATH_SAFE_CHARS + "?"


class Resolver:
    """Resolves module specifiers using one import map.

    The map is validated on construction. Lookup tables are built only for a
    valid map and never change afterwards, so a resolver can be shared freely.

    Example:
        >>> resolver = Resolver({"imports": {"react": "https://esm.sh/react@18"}})
        >>> resolver.resolve("react")
        'https://esm.sh/react@18'
        >>> resolver.resolve("vue") is None
        True
    """

    def __init__(self, import_map: Any):
        self._import_map = import_map
        self._validation_outcome = validate(import_map)
        self._sorted_imports: SortedImports = ()
        self._sorted_scopes: tuple[tuple[str, SortedImports], ...] = ()

        if self._validation_outcome.valid:
            self._prepare_resolution_data()
        else:
            logger.info(
                f"[importmap:resolve] resolver created for an invalid import map "
                f"({len(self._validation_outcome.errors)} error(s))"
            )

    @property
    def valid(self) -> bool:
        return self._validation_outcome.valid

    @property
    def validation_outcome(self) -> ValidationOutcome:
        return self._validation_outcome

    @property
    def sorted_imports(self) -> SortedImports:
        """Top-level (specifier, address) pairs, longest specifier first. Empty when invalid."""
        return self._sorted_imports

    @property
    def sorted_scopes(self) -> tuple[tuple[str, SortedImports], ...]:
        """(prefix, sorted imports) pairs, longest prefix first. Empty when invalid."""
        return self._sorted_scopes

    @property
    def import_map(self) -> Any:
        """The import map this resolver was created from, as passed in."""
        return self._import_map

    def resolve(self, specifier: str, importer: str | None = None) -> str | None:
        """Resolve a module specifier.

        Scoped mappings only apply when an importer is given.

        Args:
            specifier: Module specifier to resolve
            importer: Path or URL of the importing module

        Returns:
            The mapped address; the specifier itself (or joined with the
            importer when relative) if nothing matched; None for a bare
            specifier without a mapping

        Raises:
            InvalidResolverError: The import map failed validation
        """
        if not self.valid:
            raise InvalidResolverError("Cannot resolve using an invalid import map.")

        if importer and self._sorted_scopes:
            resolved = self._resolve_from_scopes(specifier, importer)
            if resolved is not None:
                return resolved

        resolved = _resolve_from_sorted_imports(specifier, self._sorted_imports)
        if resolved is not None:
            logger.debug(f"[importmap:resolve] {specifier} -> imports ({resolved})")
            return resolved

        if is_bare_specifier(specifier):
            logger.debug(f"[importmap:resolve] {specifier} -> unresolved bare specifier")
            return None

        if is_relative_url(specifier) and importer:
            resolved = _resolve_relative_path(specifier, importer)
            logger.debug(f"[importmap:resolve] {specifier} -> relative to {importer} ({resolved})")
            return resolved

        logger.debug(f"[importmap:resolve] {specifier} -> pass-through")
        return specifier

    def _prepare_resolution_data(self) -> None:
        """Build the length-sorted lookup tables from the validated map."""
        typed = self._import_map
        if not isinstance(typed, ImportMap):
            typed = ImportMap.model_validate(typed)

        if typed.imports:
            self._sorted_imports = _sort_by_key_length(typed.imports)

        if typed.scopes:
            self._sorted_scopes = tuple(
                sorted(
                    ((prefix, _sort_by_key_length(entries)) for prefix, entries in typed.scopes.items()),
                    key=lambda scope: len(scope[0]),
                    reverse=True,
                )
            )

    def _resolve_from_scopes(self, specifier: str, importer: str) -> str | None:
        # A matching scope without an applicable entry falls through to shorter matching scopes
        for scope_prefix, sorted_scope_imports in self._sorted_scopes:
            if not _scope_matches(importer, scope_prefix):
                continue
            resolved = _resolve_from_sorted_imports(specifier, sorted_scope_imports)
            if resolved is not None:
                logger.debug(f"[importmap:resolve] {specifier} -> scope {scope_prefix} ({resolved})")
                return resolved
        return None

    def __repr__(self) -> str:
        return (
            f"Resolver(valid={self.valid}, imports={len(self._sorted_imports)}, "
            f"scopes={len(self._sorted_scopes)})"
        )


def create_resolver(import_map: Any) -> Resolver:
    """Create a resolver for an import map.

    Never raises; check `resolver.valid` (or `resolver.validation_outcome`)
    before resolving.

    Args:
        import_map: Raw import map (usually a dict parsed from JSON) or an
            ImportMap model

    Returns:
        Resolver bound to the import map
    """
    return Resolver(import_map)


def _sort_by_key_length(entries: dict[str, str]) -> SortedImports:
    # sorted() is stable: keys of equal length keep their map order
    return tuple(sorted(entries.items(), key=lambda item: len(item[0]), reverse=True))


def _resolve_from_sorted_imports(specifier: str, sorted_imports: SortedImports) -> str | None:
    for key, address in sorted_imports:
        if key == specifier:
            return address
        if key.endswith("/") and specifier.startswith(key):
            return address + specifier[len(key) :]
    return None


def _scope_matches(importer: str, scope_prefix: str) -> bool:
    return importer == scope_prefix or (scope_prefix.endswith("/") and importer.startswith(scope_prefix))


def _apply_segments(base_segments: list[str], specifier: str) -> list[str]:
    """Walk specifier segments over a directory segment list.

    "." and empty segments are skipped, ".." drops the last segment.
    """
    segments = list(base_segments)
    for segment in specifier.split("/"):
        if segment in (".", ""):
            continue
        if segment == "..":
            if segments:
                segments.pop()
        else:
            segments.append(segment)
    return segments


def _resolve_relative_path(specifier: str, importer: str) -> str:
    """Resolve a ./ or ../ specifier against the importer's directory.

    Importers with a full origin are treated as URLs, anything else as a
    plain path. Importers that cannot serve as a base leave the specifier
    unchanged.
    """
    if "/" not in importer:
        return specifier

    if has_valid_origin(importer):
        try:
            parts = parse_url(importer)
        except ValueError:
            logger.debug(f"[importmap:resolve] importer {importer} is not a parseable URL, using it as a path")
        else:
            origin = url_origin(parts)
            if origin is None:
                logger.debug(f"[importmap:resolve] importer {importer} has an opaque origin")
                return specifier
            return _join_url(origin, _url_directory(parts.path or "/"), specifier)

    importer_dir = importer[: importer.rfind("/") + 1]
    directory = [segment for segment in importer_dir.split("/") if segment]
    result = "/".join(_apply_segments(directory, specifier))

    if importer.startswith("/") and not result.startswith("/"):
        result = "/" + result
    return result


def _url_directory(pathname: str) -> list[str]:
    """Normalized directory segments of a URL path."""
    directory = _apply_segments([], pathname)
    last_segment = pathname.rsplit("/", 1)[-1]
    # "/a/b.js" names a file; "/a/", "/a/." and "/a/b/.." name directories
    if last_segment not in ("", ".", "..") and directory:
        directory.pop()
    return directory


def _join_url(origin: str, directory: list[str], specifier: str) -> str:
    """Walk specifier over directory and serialize the result under origin.

    Query and fragment of the specifier are carried over unchanged apart
    from percent-encoding. Specifiers that cannot be encoded (lone
    surrogates) are returned as-is.
    """
    rest, hash_mark, fragment = specifier.partition("#")
    path, question_mark, query = rest.partition("?")
    path = "/" + "/".join(_apply_segments(directory, path))

    try:
        return (
            origin
            + quote(path, safe=_PATH_SAFE_CHARS)
            + question_mark
            + quote(query, safe=_QUERY_SAFE_CHARS)
            + hash_mark
            + quote(fragment, safe=_QUERY_SAFE_CHARS)
        )
    except UnicodeEncodeError:
        logger.debug(f"[importmap:resolve] {specifier!r} cannot be percent-encoded, leaving it unchanged")
        return specifier
