"""Split ``$ref`` strings and walk JSON Pointer paths through parsed trees.

A reference has one of two shapes:

* ``#/components/schemas/Pet`` -- an *internal* reference into the root
  document.
* ``<file-or-url>[#/<pointer>]`` -- an *external* reference, optionally
  addressing a sub-node of the external content.

Pointer segments use RFC 6901 escaping (``~1`` for ``/`` and ``~0`` for
``~``).  Unlike :func:`specref.parser.deserializer.deserialize`, navigation
never converts types: it hands back whatever dict, list, or scalar lives at
the end of the path.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from specref.exceptions import InvalidRefError, RefNotFoundError
from specref.models import RefFormat

logger = logging.getLogger(__name__)

FRAGMENT_SEPARATOR = "#/"

_ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")
_MISSING = object()


def compute_ref_format(ref: str) -> RefFormat:
    """Classify *ref* as internal, relative, or URL.

    Args:
        ref: A ``$ref`` value as written in the document.

    Returns:
        :attr:`RefFormat.URL` for ``http://`` and ``https://`` references,
        :attr:`RefFormat.INTERNAL` for references starting with ``#/``,
        and :attr:`RefFormat.RELATIVE` for everything else.
    """
    if ref.startswith(("http://", "https://")):
        return RefFormat.URL
    if ref.startswith(FRAGMENT_SEPARATOR):
        return RefFormat.INTERNAL
    return RefFormat.RELATIVE


def split_ref(ref: str) -> tuple[str, Optional[str]]:
    """Split an external reference into its file and pointer parts.

    ``"other.yaml#/components/schemas/Pet"`` becomes
    ``("other.yaml", "components/schemas/Pet")`` and ``"other.yaml"``
    becomes ``("other.yaml", None)``.  An empty pointer
    (``"other.yaml#/"``) is treated as absent.

    Raises:
        InvalidRefError: If *ref* contains more than one ``#/`` separator.
    """
    parts = ref.split(FRAGMENT_SEPARATOR)
    if len(parts) > 2:
        raise InvalidRefError(f"Invalid ref format: {ref}")

    file = parts[0]
    definition_path = parts[1] if len(parts) == 2 and parts[1] else None
    return file, definition_path


def unescape_pointer(segment: str) -> str:
    """Unescape one JSON Pointer segment (RFC 6901, section 4).

    ``~1`` is replaced before ``~0`` so that ``"~01"`` yields ``"~1"``
    rather than ``"/"``.
    """
    return segment.replace("~1", "/").replace("~0", "~")


def navigate(tree: Any, definition_path: str, file: str) -> Any:
    """Follow *definition_path* through *tree* one segment at a time.

    Mappings are descended by (unescaped) key and lists by integer index.
    Non-string mapping keys, such as the ``200`` PyYAML reads from an
    unquoted status code, match the segment by their string form.

    Args:
        tree: A parsed JSON/YAML document.
        definition_path: ``/``-delimited pointer path without the leading
            ``#/`` (e.g. ``"components/schemas/Pet"``).
        file: The file or URL *tree* was read from, used in error messages.

    Returns:
        The node at the end of the path.

    Raises:
        RefNotFoundError: If any segment does not name an existing child.
    """
    current = tree
    for segment in definition_path.split("/"):
        key = unescape_pointer(segment)
        child = _child(current, key) if isinstance(current, dict) else _MISSING
        if child is not _MISSING:
            current = child
        elif isinstance(current, list) and _ARRAY_INDEX.fullmatch(key) and int(key) < len(current):
            current = current[int(key)]
        else:
            logger.debug("Segment '%s' of '%s' missing in %s", key, definition_path, file)
            raise RefNotFoundError(definition_path, file)
    return current


def _child(mapping: dict, key: str) -> Any:
    if key in mapping:
        return mapping[key]
    for name, value in mapping.items():
        if not isinstance(name, str) and str(name) == key:
            return value
    return _MISSING
