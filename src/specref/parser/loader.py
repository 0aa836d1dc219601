"""Load OpenAPI documents and external ``$ref`` targets from files and URLs.

This module handles all I/O of the package.  It has two audiences:

* The CLI and library callers use :func:`load_spec` to read the **root**
  document (URL, local file, or stdin) into a dict, and
  :func:`validate_openapi_version` to reject anything that is not
  OpenAPI 3.x.
* :class:`~specref.cache.ResolverCache` uses :func:`read_external_ref`
  (local jobs) and :func:`read_external_url_ref` (jobs whose root is a URL)
  to fetch the raw **text** of external references.  These two never parse;
  parsing belongs to :mod:`specref.parser.deserializer`.

Every remote fetch goes through :func:`fetch_url`, which applies the job's
:class:`~specref.models.AuthorizationValue` list as headers or query
parameters.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urljoin

import httpx
import yaml

from specref.exceptions import FetchError, SpecParseError
from specref.models import AuthorizationValue, RefFormat, ResolverConfig

logger = logging.getLogger(__name__)


def load_spec(
    source: str,
    auths: Optional[list[AuthorizationValue]] = None,
    config: Optional[ResolverConfig] = None,
) -> dict[str, Any]:
    """Load an OpenAPI spec from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        auths: Credentials applied when *source* is a URL.
        config: Fetch settings for URL sources.

    Returns:
        The parsed spec as a dictionary.

    Raises:
        FetchError: If the source cannot be read.
        SpecParseError: If the content cannot be parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        content = fetch_url(source, auths or [], config)
        return parse_content(content, hint=format_hint(source))
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read spec from stdin."""
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise FetchError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return parse_content(content, hint="stdin")


def _load_from_file(path: str) -> dict[str, Any]:
    """Load spec from local file.

    Raises:
        FetchError: If the file does not exist or cannot be read.
        SpecParseError: If the file is empty or cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FetchError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FetchError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    return parse_content(content, hint=format_hint(path))


def format_hint(location: str) -> str:
    """Guess ``'json'`` or ``'yaml'`` from a file name or URL path, or ``''``."""
    suffix = location.split("?", 1)[0].rsplit(".", 1)[-1].lower()
    if suffix == "json":
        return "json"
    if suffix in ("yaml", "yml"):
        return "yaml"
    return ""


def parse_content(content: str, hint: str = "", require_mapping: bool = True) -> Any:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').
        require_mapping: Reject documents whose top level is not an object.

    Returns:
        The parsed document.

    Raises:
        SpecParseError: If the content cannot be parsed as either format.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            return _check_mapping(json.loads(content), require_mapping)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc

    try:
        return _check_mapping(yaml.safe_load(content), require_mapping)
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse content as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def _check_mapping(result: Any, require_mapping: bool) -> Any:
    if require_mapping and not isinstance(result, dict):
        raise SpecParseError(
            "Document must be a JSON/YAML object (got "
            f"{type(result).__name__ if result is not None else 'empty document'})"
        )
    return result


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Validate and return the OpenAPI version string.

    Raises:
        SpecParseError: If the version is missing or the document is Swagger 2.x.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Only OpenAPI 3.x documents can be resolved."
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise SpecParseError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(openapi_version)
    if not version_str.startswith("3."):
        raise SpecParseError(f"Unsupported OpenAPI version: {version_str}")
    return version_str


# --- External reference loaders ---


def fetch_url(
    url: str,
    auths: list[AuthorizationValue],
    config: Optional[ResolverConfig] = None,
) -> str:
    """GET *url* and return the response body as text.

    Header credentials are sent as request headers and query credentials are
    added to the query string.

    Raises:
        FetchError: On HTTP error statuses and network-level failures.
    """
    config = config or ResolverConfig()
    headers = {a.key_name: a.value for a in auths if a.type == "header"}
    params = {a.key_name: a.value for a in auths if a.type == "query"}

    logger.debug("Fetching %s", url)
    try:
        response = httpx.get(
            url,
            headers=headers or None,
            params=params or None,
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=config.follow_redirects,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            f"HTTP {exc.response.status_code} fetching {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc

    return response.text


def read_external_ref(
    file: str,
    ref_format: RefFormat,
    auths: list[AuthorizationValue],
    parent_directory: Path,
    config: Optional[ResolverConfig] = None,
) -> str:
    """Read the raw content of an external reference for a local job.

    URL references are fetched over HTTP.  Relative references are resolved
    against *parent_directory*; when that path does not exist the leading
    ``./`` or ``../`` is dropped and the lookup is retried once.

    Args:
        file: The file portion of the reference.
        ref_format: :attr:`RefFormat.RELATIVE` or :attr:`RefFormat.URL`.
        auths: Credentials for URL fetches.
        parent_directory: Directory of the root document.
        config: Fetch settings for URL fetches.

    Returns:
        The file content as text.

    Raises:
        FetchError: If the reference is internal or the content cannot be read.
    """
    if not ref_format.is_external:
        raise FetchError(f"Ref is not external: {file}")
    if ref_format is RefFormat.URL:
        return fetch_url(file, auths, config)

    candidates = [parent_directory / file]
    if file.startswith(("./", "../")):
        candidates.append(parent_directory / file.split("/", 1)[1])

    for path in candidates:
        if path.is_file():
            logger.debug("Reading %s from %s", file, path)
            try:
                return path.read_text(encoding="utf-8")
            except OSError as exc:
                raise FetchError(f"Unable to load {ref_format.value} ref: {file}: {exc}") from exc

    raise FetchError(f"Unable to load {ref_format.value} ref: {file} (not found under {parent_directory})")


def read_external_url_ref(
    file: str,
    ref_format: RefFormat,
    auths: list[AuthorizationValue],
    root_path: str,
    config: Optional[ResolverConfig] = None,
) -> str:
    """Read the raw content of an external reference for a job rooted at a URL.

    Relative references are joined against *root_path* before fetching, so
    ``schemas/pet.yaml`` under ``https://host/api/openapi.yaml`` becomes
    ``https://host/api/schemas/pet.yaml``.

    Raises:
        FetchError: If the reference is internal or the URL cannot be fetched.
    """
    if not ref_format.is_external:
        raise FetchError(f"Ref is not external: {file}")
    if ref_format is RefFormat.URL:
        return fetch_url(file, auths, config)
    return fetch_url(urljoin(root_path, file), auths, config)
