"""Turn raw JSON/YAML text or parsed trees into typed objects.

Four entry points are used by :class:`~specref.cache.ResolverCache`:

* :func:`deserialize_into_tree` -- parse text into a plain dict/list tree
  for pointer navigation.
* :func:`deserialize` and :func:`deserialize_tree` -- the generic
  deserializer, for raw text and for already parsed nodes respectively.
  The target may be a Pydantic model such as
  :class:`~specref.models.Parameter`, a container like ``dict``, or
  ``object`` for "leave it as parsed".
* :func:`get_schema` -- the schema-specific deserializer, which also
  records where each schema came from.

:func:`parse_document` builds the root :class:`~specref.models.OpenAPIDocument`.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from specref.exceptions import SpecParseError
from specref.models import OpenAPIDocument, Schema
from specref.parser.loader import format_hint, parse_content, validate_openapi_version

T = TypeVar("T")


def deserialize_into_tree(contents: str, file: str) -> Any:
    """Parse *contents* read from *file* into a generic JSON-like tree."""
    return parse_content(contents, hint=format_hint(file), require_mapping=False)


def deserialize(contents: str, file: str, expected_type: type[T]) -> T:
    """Deserialize raw *contents* into an instance of *expected_type*.

    Args:
        contents: Raw JSON or YAML text.
        file: The file or URL the content came from, used in error messages.
        expected_type: Target type. ``object`` returns the parsed tree as-is.

    Returns:
        The deserialized value.

    Raises:
        SpecParseError: If the text is malformed or does not validate.
    """
    return deserialize_tree(deserialize_into_tree(contents, file), file, expected_type)


def deserialize_tree(tree: Any, file: str, expected_type: type[T]) -> T:
    """Validate an already parsed tree node into *expected_type*.

    Raises:
        SpecParseError: If the node does not validate.
    """
    if expected_type is object:
        return tree

    try:
        if isinstance(expected_type, type) and issubclass(expected_type, BaseModel):
            return expected_type.model_validate(tree)
        return TypeAdapter(expected_type).validate_python(tree)
    except ValidationError as exc:
        raise SpecParseError(
            f"Cannot deserialize content of {file} as {_type_name(expected_type)}: {exc}"
        ) from exc


def get_schema(node: Any, location: str) -> Schema:
    """Build a :class:`~specref.models.Schema` from a tree node.

    Args:
        node: The mapping found at the end of a pointer path.
        location: Dotted pointer path (``components.schemas.Pet``), kept on
            the schema and on every nested property and item schema.

    Raises:
        SpecParseError: If *node* is not a mapping or fails validation.
    """
    if not isinstance(node, dict):
        raise SpecParseError(
            f"{location} is not a schema object (got {type(node).__name__})"
        )
    try:
        schema = Schema.model_validate(node)
    except ValidationError as exc:
        raise SpecParseError(f"Invalid schema at {location}: {exc}") from exc

    _stamp_location(schema, location)
    return schema


def _stamp_location(schema: Schema, location: str) -> None:
    schema._location = location
    for name, prop in (schema.properties or {}).items():
        _stamp_location(prop, f"{location}.properties.{name}")
    if schema.items is not None:
        _stamp_location(schema.items, f"{location}.items")
    if isinstance(schema.additional_properties, Schema):
        _stamp_location(schema.additional_properties, f"{location}.additionalProperties")
    for keyword, members in (
        ("allOf", schema.all_of),
        ("anyOf", schema.any_of),
        ("oneOf", schema.one_of),
    ):
        for index, member in enumerate(members or []):
            _stamp_location(member, f"{location}.{keyword}.{index}")


def parse_document(raw: dict[str, Any], source: Optional[str] = None) -> OpenAPIDocument:
    """Validate a loaded root document into an :class:`OpenAPIDocument`.

    Raises:
        SpecParseError: If the document is not OpenAPI 3.x or fails validation.
    """
    validate_openapi_version(raw)
    try:
        return OpenAPIDocument.model_validate(raw)
    except ValidationError as exc:
        where = f" {source}" if source else ""
        raise SpecParseError(f"Invalid OpenAPI document{where}: {exc}") from exc


def _type_name(expected_type: Any) -> str:
    return getattr(expected_type, "__name__", repr(expected_type))
