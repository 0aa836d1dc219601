"""specref -- Reference resolution cache for multi-file OpenAPI 3.x documents.

An OpenAPI description is often split across a root document and any number
of linked files or URLs.  This package provides the primitives a bundler or
dereferencer calls while walking such a document graph: given a ``$ref``
string it returns the object the reference denotes, fetching and parsing each
external source at most once per resolution job.

Typical usage::

    from specref.cache import ResolverCache
    from specref.models import RefFormat, Schema
    from specref.parser import load_spec, parse_document

    raw = load_spec("openapi.yaml")
    cache = ResolverCache(parse_document(raw), [], "openapi.yaml")
    pet = cache.resolve("common.yaml#/components/schemas/Pet", RefFormat.RELATIVE, Schema)

Modules:
    cache: :class:`~specref.cache.ResolverCache` and the internal namespace table.
    parser: Loading, pointer navigation, and deserialization.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration and credential sources.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting for the ``specref`` CLI.
"""

__version__ = "0.1.0"
