"""Import map validation.

Checks the structure of an import map and the format of its addresses,
scope prefixes and integrity metadata. Validation never raises: every
problem is recorded in the returned ValidationOutcome, and the pass runs to
completion unless the top-level value is not a plain mapping at all.
"""

import logging
from typing import Any

from .integrity import is_valid_integrity_value
from .models import ImportMap
from .unicode_security import scan_unicode_security
from .urls import is_full_url
from .urls import parses_against_base
from .validation_result import ValidationOutcome

logger = logging.getLogger(__name__)

VALID_TOP_LEVEL_KEYS = ("imports", "scopes", "integrity")

_PRIMITIVE_TYPES = (str, bytes, bytearray, int, float, complex, bool)


def validate(import_map: Any) -> ValidationOutcome:
    """Validate an import map.

    Args:
        import_map: Raw import map (usually a dict parsed from JSON) or an
            ImportMap model

    Returns:
        ValidationOutcome listing every problem found, in discovery order
    """
    result = ValidationOutcome()

    if isinstance(import_map, ImportMap):
        import_map = import_map.to_dict()

    if _is_primitive(import_map):
        result.add_error("Import map must be an object.")
        return result

    # Only exact dicts: subclasses and Mapping wrappers can report different keys on each call
    if not _is_plain_object(import_map):
        result.add_error("Import map must be a plain object (not a class instance, list, set, etc.).")
        return result

    if "imports" in import_map:
        imports = import_map["imports"]
        if _check_section(imports, 'The "ImportMap.imports" field', result):
            _validate_import_entries(imports, result, "Import")

    if "scopes" in import_map:
        scopes = import_map["scopes"]
        if _check_section(scopes, 'The "ImportMap.scopes" field', result):
            _validate_scopes(scopes, result)

    if "integrity" in import_map:
        integrity = import_map["integrity"]
        if _check_section(integrity, 'The "ImportMap.integrity" field', result):
            _validate_integrity_entries(integrity, result)

    for key in import_map:
        if key not in VALID_TOP_LEVEL_KEYS:
            result.add_error(f'Unknown import map key: "{key}"')

    if result.valid:
        logger.debug("[importmap:validate] import map is valid")
    else:
        logger.debug(f"[importmap:validate] import map has {len(result.errors)} error(s)")
    return result


def _is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, _PRIMITIVE_TYPES)


def _is_plain_object(value: Any) -> bool:
    return type(value) is dict


def _check_section(value: Any, label: str, result: ValidationOutcome) -> bool:
    """Record an error unless value is a plain mapping.

    Returns:
        True if the section contents can be validated
    """
    if _is_primitive(value):
        result.add_error(f"{label} must be an object.")
        return False
    if not _is_plain_object(value):
        result.add_error(f"{label} must be a plain object.")
        return False
    return True


def _validate_scopes(scopes: dict, result: ValidationOutcome) -> None:
    for scope_prefix, scope_imports in scopes.items():
        if not isinstance(scope_prefix, str):
            result.add_error(f"Scope prefix {scope_prefix!r} must be a string.")
            continue

        if not _check_section(scope_imports, f'Scope imports for "{scope_prefix}"', result):
            continue

        # Contents of an empty-prefix scope are still checked
        if scope_prefix == "":
            result.add_error("The scope object must not define an empty scope prefix.")

        if "://" in scope_prefix and not is_full_url(scope_prefix):
            result.add_error(f'Scope prefix "{scope_prefix}" appears to be a malformed URL')

        _validate_import_entries(scope_imports, result, "Scoped import", scope_prefix)


def _validate_import_entries(
    imports: dict,
    result: ValidationOutcome,
    context: str,
    scope_prefix: str | None = None,
) -> None:
    """Validate specifier/address pairs of the top-level imports or of one scope.

    Args:
        imports: Mapping of specifier to address
        result: Outcome to record errors in
        context: Message prefix ("Import" or "Scoped import")
        scope_prefix: Scope the entries belong to, None for top-level imports
    """
    scope_context = f' in scope "{scope_prefix}"' if scope_prefix else ""

    for specifier, address in imports.items():
        if not isinstance(specifier, str):
            result.add_error(f"{context} specifier {specifier!r}{scope_context} must be a string.")
            continue

        if not isinstance(address, str):
            result.add_error(f'{context} address for "{specifier}"{scope_context} must be a string.')
            continue

        if specifier == "":
            result.add_error(f"{context} specifier{scope_context} cannot be empty.")

        if address == "":
            result.add_error(f'{context} address for "{specifier}"{scope_context} cannot be empty.')

        if specifier == "" or address == "":
            continue

        if not is_full_url(address):
            if "://" in address:
                result.add_error(f'{context} address "{address}"{scope_context} appears to be a malformed URL.')
            elif not parses_against_base(address):
                result.add_error(f'{context} address "{address}"{scope_context} contains invalid URL characters.')

        for issue in scan_unicode_security(address):
            result.add_error(f'{context} address "{address}"{scope_context} {issue}.')

        if specifier.endswith("/") and not address.endswith("/"):
            result.add_error(
                f'{context} specifier "{specifier}"{scope_context} ends with "/" but address "{address}" does not.'
            )


def _validate_integrity_entries(integrity: dict, result: ValidationOutcome) -> None:
    for url, integrity_value in integrity.items():
        if not isinstance(url, str):
            result.add_error(f"Integrity URL {url!r} must be a string.")
            continue

        if not isinstance(integrity_value, str):
            result.add_error(f'Integrity value for "{url}" must be a string.')
            continue

        if url == "":
            result.add_error("Integrity URL cannot be empty.")

        if integrity_value == "":
            result.add_error(f'Integrity value for "{url}" cannot be empty')

        if url == "" or integrity_value == "":
            continue

        if not parses_against_base(url):
            result.add_error(f'Integrity URL "{url}" is not a valid URL.')
            continue

        for issue in scan_unicode_security(url):
            result.add_error(f'Integrity URL "{url}" {issue}.')

        if not is_valid_integrity_value(integrity_value):
            result.add_error(
                f'Integrity value "{integrity_value}" for "{url}" is not a valid subresource integrity hash.'
            )
