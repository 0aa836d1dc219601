"""Loading, pointer navigation, and deserialization for OpenAPI documents.

This sub-package supplies the collaborators :class:`~specref.cache.ResolverCache`
relies on, plus the helpers used to load a root document.

Typical usage::

    from specref.parser import load_spec, parse_document

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    document = parse_document(raw)

Sub-modules:

* :mod:`~specref.parser.loader` -- I/O layer (URL, file, stdin), JSON/YAML
  parsing, and the local/remote loaders for external references.
* :mod:`~specref.parser.pointer` -- ``$ref`` splitting and classification,
  RFC 6901 unescaping, and tree navigation.
* :mod:`~specref.parser.deserializer` -- Generic and schema-specific
  deserialization into :mod:`specref.models` types.
"""

from specref.parser.deserializer import (
    deserialize,
    deserialize_into_tree,
    deserialize_tree,
    get_schema,
    parse_document,
)
from specref.parser.loader import load_spec, validate_openapi_version
from specref.parser.pointer import (
    compute_ref_format,
    navigate,
    split_ref,
    unescape_pointer,
)

__all__ = [
    "compute_ref_format",
    "deserialize",
    "deserialize_into_tree",
    "deserialize_tree",
    "get_schema",
    "load_spec",
    "navigate",
    "parse_document",
    "split_ref",
    "unescape_pointer",
    "validate_openapi_version",
]
