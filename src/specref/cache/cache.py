"""Memoizing ``$ref`` resolution for a single resolution job.

:class:`ResolverCache` remembers everything that is expensive to repeat
while a document graph is walked:

1. reading a remote URL with authorization,
2. reading the contents of a file into memory,
3. extracting a sub-object from a JSON/YAML tree,
4. deserializing trees into typed objects.

It also keeps the bookkeeping a bundler needs when merging several
documents into one namespace: which component keys are already in use and
which external references were renamed to avoid a collision.

Internal references that resolve to the wrong type are soft misses
(``None``).  Every problem with an external reference raises a
:class:`~specref.exceptions.SpecrefError` subclass.

See Also:
    :mod:`specref.cache.namespaces` -- the internal lookup table.
    :mod:`specref.parser.loader` -- the local and remote loaders.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, TypeVar, get_origin

from specref.cache.namespaces import lookup_internal
from specref.models import (
    AuthorizationValue,
    OpenAPIDocument,
    RefFormat,
    ResolverConfig,
    Schema,
)
from specref.parser.deserializer import (
    deserialize,
    deserialize_into_tree,
    deserialize_tree,
    get_schema,
)
from specref.parser.loader import read_external_ref, read_external_url_ref
from specref.parser.pointer import navigate, split_ref

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResolverCache:
    """Resolve and memoize references for one root document.

    Create one instance per resolution job.  The instance is not thread-safe;
    concurrent jobs each need their own cache.

    Args:
        document: The root document.  Only read, never modified.
        auths: Credentials applied to every remote fetch.
        parent_file_location: File path or URL of the root document.  A URL
            makes relative references resolve against that URL; a file path
            makes them resolve against its directory; ``None`` means the
            current working directory.
        config: Fetch settings (timeouts, SSL verification).

    Example::

        cache = ResolverCache(document, [], "specs/openapi.yaml")
        pet = cache.resolve("common.yaml#/components/schemas/Pet", RefFormat.RELATIVE, Schema)
        assert cache.resolve("common.yaml#/components/schemas/Pet", RefFormat.RELATIVE, Schema) is pet
    """

    def __init__(
        self,
        document: OpenAPIDocument,
        auths: Optional[list[AuthorizationValue]],
        parent_file_location: Optional[str],
        config: Optional[ResolverConfig] = None,
    ) -> None:
        self._document = document
        self._auths = list(auths or [])
        self._root_path = parent_file_location
        self._config = config or ResolverConfig()

        self._parent_directory: Optional[Path]
        if parent_file_location is None:
            self._parent_directory = Path(".")
        elif parent_file_location.startswith("http"):
            self._parent_directory = None
        else:
            self._parent_directory = Path(parent_file_location).parent

        self._resolution_cache: dict[str, Any] = {}
        self._external_file_cache: dict[str, str] = {}
        self._rename_cache: dict[str, str] = {}
        self._referenced_keys: set[str] = set()

    @property
    def parent_directory(self) -> Optional[Path]:
        """Directory relative references are read from, or ``None`` for URL jobs."""
        return self._parent_directory

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #

    def resolve(self, ref: str, ref_format: RefFormat, expected_type: type[T]) -> Optional[T]:
        """Return the object *ref* denotes.

        Args:
            ref: The reference string, exactly as written in the document.
            ref_format: Classification of *ref*; see
                :func:`~specref.parser.pointer.compute_ref_format`.
            expected_type: The type the caller expects back.

        Returns:
            The resolved object.  For internal references, ``None`` when the
            entry is absent or not an instance of *expected_type*.

        Raises:
            InvalidRefError: If *ref* has more than one ``#/`` separator.
            RefNotFoundError: If the pointer path does not exist in the
                external content.
            FetchError: If the external content cannot be read.
            SpecParseError: If the external content cannot be deserialized.
        """
        if ref_format is RefFormat.INTERNAL:
            loaded = lookup_internal(self._document, ref)
            # Parameterized generics such as dict[str, Any] check by origin.
            if isinstance(loaded, get_origin(expected_type) or expected_type):
                return loaded
            if loaded is not None:
                logger.debug(
                    "Internal ref %s is a %s, not a %s",
                    ref, type(loaded).__name__, getattr(expected_type, "__name__", expected_type),
                )
            return None

        file, definition_path = split_ref(ref)

        if ref in self._resolution_cache:
            logger.debug("Resolution cache hit for %s", ref)
            return self._resolution_cache[ref]

        contents = self._load_contents(file, ref_format)

        if definition_path is None:
            result = deserialize(contents, file, expected_type)
            self._resolution_cache[ref] = result
            return result

        tree = navigate(deserialize_into_tree(contents, file), definition_path, file)
        if expected_type is Schema:
            result = get_schema(tree, definition_path.replace("/", "."))
        else:
            result = deserialize_tree(tree, file, expected_type)
        self._resolution_cache[ref] = result
        return result

    def _load_contents(self, file: str, ref_format: RefFormat) -> str:
        contents = self._external_file_cache.get(file)
        if contents is not None:
            return contents

        if self._parent_directory is not None:
            contents = read_external_ref(
                file, ref_format, self._auths, self._parent_directory, self._config
            )
        else:
            contents = read_external_url_ref(
                file, ref_format, self._auths, self._root_path or "", self._config
            )
        logger.info("Loaded external ref source %s", file)
        self._external_file_cache[file] = contents
        return contents

    # ------------------------------------------------------------------ #
    # Bookkeeping
    # ------------------------------------------------------------------ #

    def has_referenced_key(self, key: str) -> bool:
        return key in self._referenced_keys

    def add_referenced_key(self, key: str) -> None:
        self._referenced_keys.add(key)

    def get_renamed_ref(self, original_ref: str) -> Optional[str]:
        return self._rename_cache.get(original_ref)

    def put_renamed_ref(self, original_ref: str, new_ref: str) -> None:
        """Record that *original_ref* was renamed to *new_ref*.

        No cycle or uniqueness checks are made.
        """
        self._rename_cache[original_ref] = new_ref

    # ------------------------------------------------------------------ #
    # Read-only views
    # ------------------------------------------------------------------ #

    @property
    def resolution_cache(self) -> Mapping[str, Any]:
        """Resolved objects keyed by full reference string."""
        return MappingProxyType(self._resolution_cache)

    @property
    def external_file_cache(self) -> Mapping[str, str]:
        """Raw fetched content keyed by the file portion of the reference."""
        return MappingProxyType(self._external_file_cache)

    @property
    def rename_cache(self) -> Mapping[str, str]:
        return MappingProxyType(self._rename_cache)

    @property
    def referenced_keys(self) -> frozenset[str]:
        return frozenset(self._referenced_keys)
