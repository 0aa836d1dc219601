"""Canonical Pydantic models shared across all specref modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`ResolverConfig`, :class:`OutputConfig`, and :class:`GlobalConfig`.

**Reference vocabulary** -- how a ``$ref`` string is classified and which
credentials travel with a fetch:
    :class:`RefFormat`, :class:`RefType`, and :class:`AuthorizationValue`.

**Document models** -- the root OpenAPI document and the entity types a
reference can resolve to:
    :class:`Schema`, :class:`Parameter`, :class:`RequestBody`,
    :class:`Response`, :class:`Example`, :class:`PathItem`,
    :class:`Components`, and :class:`OpenAPIDocument`.

Document models use ``extra="allow"`` so that keywords not declared here
(including ``x-`` extensions) survive a round trip through the resolver.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


# --- Config ---


class ResolverConfig(BaseModel):
    """Settings applied to every remote fetch performed during a resolution job."""

    timeout: float = Field(default=30.0, description="Fetch timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = Field(
        default=True, description="Follow HTTP redirects when fetching URLs"
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, yaml, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/specref/config.json``.

    Loaded by :func:`~specref.config.load_global_config`. Fields here have
    the lowest precedence and can be overridden by environment variables or
    CLI flags. See :func:`~specref.config.resolve_config`.
    """

    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Reference vocabulary ---


class RefFormat(str, enum.Enum):
    """How a ``$ref`` string locates its target.

    ``INTERNAL`` references start with ``#/`` and point into the root
    document. ``RELATIVE`` references name a file relative to the document
    that contains them, and ``URL`` references are absolute ``http(s)``
    locations. The last two are both *external*.
    """

    INTERNAL = "internal"
    RELATIVE = "relative"
    URL = "url"

    @property
    def is_external(self) -> bool:
        return self is not RefFormat.INTERNAL


class RefType(str, enum.Enum):
    """Top-level sections of the root document that internal references address."""

    COMPONENTS = "components"
    PATH = "paths"

    @property
    def internal_prefix(self) -> str:
        """The ``#/...`` prefix every internal reference of this type starts with."""
        return f"#/{self.value}/"


class AuthorizationValue(BaseModel):
    """A credential attached to every remote fetch of a resolution job.

    ``type="header"`` sends ``key_name: value`` as an HTTP header;
    ``type="query"`` appends ``key_name=value`` to the query string.

    Example::

        AuthorizationValue(key_name="Authorization", value="Bearer tok", type="header")
    """

    key_name: str
    value: str
    type: str = Field(default="header", description="Where to send: header or query")


# --- Document models ---


class Schema(BaseModel):
    """An OpenAPI *Schema Object*.

    Only the structural keywords that nest further schemas are declared;
    every other keyword is kept in ``model_extra``. Schemas built by
    :func:`~specref.parser.deserializer.get_schema` remember the dotted
    pointer path they were read from in :attr:`location`.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ref: Optional[str] = Field(default=None, alias="$ref")
    type: Optional[Union[str, list[str]]] = None
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    required: Optional[list[str]] = None
    enum: Optional[list[Any]] = None
    properties: Optional[dict[str, Schema]] = None
    items: Optional[Schema] = None
    additional_properties: Optional[Union[bool, Schema]] = Field(
        default=None, alias="additionalProperties"
    )
    all_of: Optional[list[Schema]] = Field(default=None, alias="allOf")
    any_of: Optional[list[Schema]] = Field(default=None, alias="anyOf")
    one_of: Optional[list[Schema]] = Field(default=None, alias="oneOf")

    _location: Optional[str] = PrivateAttr(default=None)

    @property
    def location(self) -> Optional[str]:
        """Dotted pointer path this schema was deserialized from, if known."""
        return self._location


class Example(BaseModel):
    """An OpenAPI *Example Object*."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ref: Optional[str] = Field(default=None, alias="$ref")
    summary: Optional[str] = None
    description: Optional[str] = None
    value: Any = None
    external_value: Optional[str] = Field(default=None, alias="externalValue")


class Parameter(BaseModel):
    """An OpenAPI *Parameter Object*."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ref: Optional[str] = Field(default=None, alias="$ref")
    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    required: Optional[bool] = None
    description: Optional[str] = None
    schema_: Optional[Schema] = Field(default=None, alias="schema")


class RequestBody(BaseModel):
    """An OpenAPI *Request Body Object*."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ref: Optional[str] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    required: Optional[bool] = None
    content: Optional[dict[str, Any]] = None


class Response(BaseModel):
    """An OpenAPI *Response Object*."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ref: Optional[str] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    headers: Optional[dict[str, Any]] = None
    content: Optional[dict[str, Any]] = None


class PathItem(BaseModel):
    """An OpenAPI *Path Item Object*.

    Operations are kept as plain dicts; the resolver never looks inside them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ref: Optional[str] = Field(default=None, alias="$ref")
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[dict[str, Any]] = None
    put: Optional[dict[str, Any]] = None
    post: Optional[dict[str, Any]] = None
    delete: Optional[dict[str, Any]] = None
    options: Optional[dict[str, Any]] = None
    head: Optional[dict[str, Any]] = None
    patch: Optional[dict[str, Any]] = None
    trace: Optional[dict[str, Any]] = None
    parameters: Optional[list[Any]] = None


class Components(BaseModel):
    """The ``components`` section of the root document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schemas: Optional[dict[str, Schema]] = None
    request_bodies: Optional[dict[str, RequestBody]] = Field(
        default=None, alias="requestBodies"
    )
    examples: Optional[dict[str, Example]] = None
    responses: Optional[dict[str, Response]] = None
    parameters: Optional[dict[str, Parameter]] = None


class OpenAPIDocument(BaseModel):
    """The root OpenAPI 3.x document of a resolution job.

    Produced by :func:`~specref.parser.deserializer.parse_document` and held
    read-only by :class:`~specref.cache.ResolverCache`.

    See Also:
        :class:`Components`: The six namespaces internal references address
        live here and in :attr:`paths`.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    openapi: str
    info: Optional[dict[str, Any]] = None
    components: Optional[Components] = None
    paths: Optional[dict[str, PathItem]] = None


Schema.model_rebuild()
