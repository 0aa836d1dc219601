"""In-memory reference resolution cache for a single resolution job.

This package provides :class:`ResolverCache`, which resolves internal and
external ``$ref`` strings, fetches each external file or URL at most once,
and keeps the rename and referenced-key bookkeeping used when several
documents are merged.  Internal references are dispatched through the
:class:`~specref.cache.namespaces.InternalNamespace` table.
"""

from specref.cache.cache import ResolverCache
from specref.cache.namespaces import InternalNamespace, lookup_internal

__all__ = ["InternalNamespace", "ResolverCache", "lookup_internal"]
