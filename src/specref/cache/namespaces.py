"""The six root-document namespaces that internal references can address.

Each :class:`InternalNamespace` member pairs a ``#/...`` prefix with the
collection of :class:`~specref.models.OpenAPIDocument` it indexes.  Members
are tried in declaration order; the first whose pattern matches wins.
"""

from __future__ import annotations

import enum
import re
from typing import Any, Optional

from specref.models import OpenAPIDocument, RefType
from specref.parser.pointer import unescape_pointer


class InternalNamespace(enum.Enum):
    """Prefix-to-collection table for internal reference lookup."""

    SCHEMAS = (RefType.COMPONENTS, "schemas", "schemas")
    REQUEST_BODIES = (RefType.COMPONENTS, "requestBodies", "request_bodies")
    EXAMPLES = (RefType.COMPONENTS, "examples", "examples")
    RESPONSES = (RefType.COMPONENTS, "responses", "responses")
    PARAMETERS = (RefType.COMPONENTS, "parameters", "parameters")
    PATHS = (RefType.PATH, "", "paths")

    def __init__(self, ref_type: RefType, section: str, attribute: str) -> None:
        self.ref_type = ref_type
        self.attribute = attribute
        self.prefix = ref_type.internal_prefix + (f"{section}/" if section else "")
        self.pattern = re.compile("^" + re.escape(self.prefix) + "(?P<name>.+)$", re.DOTALL)

    def collection(self, document: OpenAPIDocument) -> Optional[dict[str, Any]]:
        """Return the named collection this namespace indexes, or ``None``."""
        if self.ref_type is RefType.PATH:
            return document.paths
        if document.components is None:
            return None
        return getattr(document.components, self.attribute)

    def lookup(self, document: OpenAPIDocument, ref: str) -> Optional[Any]:
        """Look *ref* up in this namespace; ``None`` if it does not match or is absent."""
        match = self.pattern.match(ref)
        if match is None:
            return None
        entries = self.collection(document)
        if entries is None:
            return None
        return entries.get(unescape_pointer(match.group("name")))


def lookup_internal(document: OpenAPIDocument, ref: str) -> Optional[Any]:
    """Find the entry an internal reference names in *document*.

    ``#/components/schemas/Pet`` returns ``document.components.schemas["Pet"]``
    and ``#/paths/~1pets`` returns ``document.paths["/pets"]``.  Unknown
    prefixes and names that are not present both yield ``None``.
    """
    for namespace in InternalNamespace:
        if namespace.pattern.match(ref):
            return namespace.lookup(document, ref)
    return None
