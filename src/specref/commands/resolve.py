"""Resolve command -- look references up against a root document.

``specref resolve`` loads one root document, builds a single
:class:`~specref.cache.ResolverCache` for the invocation, and resolves each
reference given on the command line in order.  Because all references share
one cache, several pointers into the same external file cost one fetch;
``--show-cache`` prints the cache tables afterwards to make that visible.
"""

from __future__ import annotations

from typing import Any, Optional

import typer
from pydantic import BaseModel

from specref.cache import ResolverCache
from specref.config import parse_auth_option, resolve_config
from specref.exceptions import InvalidUsageError, SpecrefError
from specref.exit_codes import EXIT_REF_NOT_FOUND
from specref.models import (
    Example,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    Schema,
)
from specref.output import debug, error, format_data, print_table, warning
from specref.parser import compute_ref_format, load_spec, parse_document

EXPECTED_TYPES: dict[str, type] = {
    "schema": Schema,
    "parameter": Parameter,
    "response": Response,
    "request-body": RequestBody,
    "example": Example,
    "path-item": PathItem,
    "any": object,
}


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return value


def resolve_command(
    spec: str = typer.Argument(..., help="Root document: file path, URL, or '-' for stdin."),
    refs: list[str] = typer.Argument(..., help="References to resolve, e.g. '#/components/schemas/Pet'."),
    type_name: str = typer.Option(
        "any", "--type", "-t", help=f"Expected type: {', '.join(EXPECTED_TYPES)}."
    ),
    auth: Optional[list[str]] = typer.Option(
        None, "--auth", "-a", help="Credential for remote fetches: header:NAME=SOURCE or query:NAME=SOURCE."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Fetch timeout in seconds."
    ),
    show_cache: bool = typer.Option(
        False, "--show-cache", help="Print the cache tables after resolving."
    ),
) -> None:
    """Resolve one or more references against SPEC.

    Exits with code 4 when an internal reference does not resolve to an
    entry of the expected type.

    Example::

        specref resolve openapi.yaml '#/components/schemas/Pet'
        specref resolve openapi.yaml 'common.yaml#/components/schemas/Pet' --type schema
    """
    try:
        expected_type = EXPECTED_TYPES.get(type_name)
        if expected_type is None:
            raise InvalidUsageError(
                f"Unknown type '{type_name}'. Choose from: {', '.join(EXPECTED_TYPES)}"
            )

        config = resolve_config(cli_timeout=timeout)
        auths = [parse_auth_option(value) for value in auth or []]

        document = parse_document(load_spec(spec, auths, config.resolver), spec)
        cache = ResolverCache(
            document, auths, None if spec == "-" else spec, config.resolver
        )

        missing: list[str] = []
        for ref in refs:
            ref_format = compute_ref_format(ref)
            debug(f"Resolving {ref} ({ref_format.value})")
            result = cache.resolve(ref, ref_format, expected_type)
            if result is None:
                warning(f"No {type_name} found for {ref}")
                missing.append(ref)
                continue
            format_data(_dump(result))
    except SpecrefError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if show_cache:
        _print_cache(cache)

    if missing:
        raise typer.Exit(code=EXIT_REF_NOT_FOUND)


def _print_cache(cache: ResolverCache) -> None:
    files = cache.external_file_cache
    print_table(
        ["File", "Characters"],
        [[file, str(len(contents))] for file, contents in files.items()],
        title=f"External sources ({len(files)})",
    )
    resolved = cache.resolution_cache
    print_table(
        ["Reference", "Type"],
        [[ref, type(value).__name__] for ref, value in resolved.items()],
        title=f"Resolved references ({len(resolved)})",
    )
