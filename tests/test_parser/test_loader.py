"""Tests for specref.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from specref.exceptions import FetchError, SpecParseError
from specref.models import AuthorizationValue, RefFormat, ResolverConfig
from specref.parser.loader import (
    fetch_url,
    format_hint,
    load_spec,
    parse_content,
    read_external_ref,
    read_external_url_ref,
    validate_openapi_version,
)


def _response(url: str, text: str = "a: 1\n", status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        text=text,
        request=httpx.Request("GET", url),
    )


# ---------------------------------------------------------------------------
# load_spec dispatch
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """Test load_spec dispatcher routes to the correct loader."""

    def test_loads_from_file_yaml(self, spec_dir: Path) -> None:
        result = load_spec(str(spec_dir / "openapi.yaml"))
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "Petstore"

    def test_loads_from_file_json(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "spec.json"
        spec_file.write_text(json.dumps({"openapi": "3.1.0", "paths": {}}), encoding="utf-8")
        assert load_spec(str(spec_file))["openapi"] == "3.1.0"

    def test_loads_from_stdin(self) -> None:
        spec_json = json.dumps({"openapi": "3.0.3", "info": {"title": "stdin test", "version": "1.0"}})
        with patch("specref.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(spec_json)
            result = load_spec("-")
        assert result["info"]["title"] == "stdin test"

    def test_empty_stdin_raises(self) -> None:
        with patch("specref.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("   ")
            with pytest.raises(SpecParseError, match="No input"):
                load_spec("-")

    def test_loads_from_url_with_auth(self) -> None:
        url = "https://example.com/openapi.yaml"
        auths = [AuthorizationValue(key_name="X-Token", value="secret", type="header")]
        with patch("specref.parser.loader.httpx.get", return_value=_response(url, "openapi: 3.0.0\n")) as mock_get:
            result = load_spec(url, auths)
        assert result == {"openapi": "3.0.0"}
        assert mock_get.call_args.kwargs["headers"] == {"X-Token": "secret"}

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(FetchError, match="not found"):
            load_spec("/nonexistent/path/to/spec.json")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.yaml"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            load_spec(str(empty))


# ---------------------------------------------------------------------------
# parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    def test_json_first(self) -> None:
        assert parse_content('{"a": 1}') == {"a": 1}

    def test_yaml_fallback(self) -> None:
        content = textwrap.dedent("""\
            a:
              - 1
              - 2
        """)
        assert parse_content(content) == {"a": [1, 2]}

    def test_json_hint_does_not_fall_back(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            parse_content("a: 1", hint="json")

    def test_non_object_rejected_by_default(self) -> None:
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            parse_content("[1, 2]")

    def test_non_object_allowed_when_not_required(self) -> None:
        assert parse_content("[1, 2]", require_mapping=False) == [1, 2]

    def test_unparseable_raises(self) -> None:
        with pytest.raises(SpecParseError, match="Failed to parse content"):
            parse_content("a: [unclosed", hint="yaml")


class TestFormatHint:
    @pytest.mark.parametrize(
        ("location", "expected"),
        [
            ("spec.json", "json"),
            ("spec.YAML", "yaml"),
            ("dir/spec.yml", "yaml"),
            ("https://example.com/spec.json?v=2", "json"),
            ("spec", ""),
        ],
    )
    def test_hint(self, location: str, expected: str) -> None:
        assert format_hint(location) == expected


class TestValidateOpenAPIVersion:
    def test_accepts_3x(self) -> None:
        assert validate_openapi_version({"openapi": "3.1.0"}) == "3.1.0"

    def test_rejects_other_major(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported OpenAPI version"):
            validate_openapi_version({"openapi": "4.0.0"})


# ---------------------------------------------------------------------------
# fetch_url
# ---------------------------------------------------------------------------


class TestFetchUrl:
    def test_applies_header_and_query_auths(self) -> None:
        url = "https://example.com/common.yaml"
        auths = [
            AuthorizationValue(key_name="Authorization", value="Bearer t", type="header"),
            AuthorizationValue(key_name="api_key", value="k", type="query"),
        ]
        config = ResolverConfig(timeout=5.0, verify_ssl=False)
        with patch("specref.parser.loader.httpx.get", return_value=_response(url)) as mock_get:
            text = fetch_url(url, auths, config)

        assert text == "a: 1\n"
        kwargs = mock_get.call_args.kwargs
        assert kwargs["headers"] == {"Authorization": "Bearer t"}
        assert kwargs["params"] == {"api_key": "k"}
        assert kwargs["timeout"] == 5.0
        assert kwargs["verify"] is False

    def test_http_error_raises(self) -> None:
        url = "https://example.com/missing.yaml"
        with patch("specref.parser.loader.httpx.get", return_value=_response(url, "", 404)):
            with pytest.raises(FetchError, match="HTTP 404"):
                fetch_url(url, [])

    def test_network_error_raises(self) -> None:
        url = "https://example.com/down.yaml"
        error = httpx.ConnectError("refused", request=httpx.Request("GET", url))
        with patch("specref.parser.loader.httpx.get", side_effect=error):
            with pytest.raises(FetchError, match="Failed to fetch"):
                fetch_url(url, [])


# ---------------------------------------------------------------------------
# External ref loaders
# ---------------------------------------------------------------------------


class TestReadExternalRef:
    def test_reads_relative_file(self, spec_dir: Path) -> None:
        text = read_external_ref("common.yaml", RefFormat.RELATIVE, [], spec_dir)
        assert "Owner" in text

    def test_reads_nested_relative_file(self, spec_dir: Path) -> None:
        (spec_dir / "schemas").mkdir()
        (spec_dir / "schemas" / "tag.yaml").write_text("type: string\n", encoding="utf-8")
        assert read_external_ref("./schemas/tag.yaml", RefFormat.RELATIVE, [], spec_dir) == "type: string\n"

    def test_retries_without_leading_parent_segment(self, spec_dir: Path) -> None:
        text = read_external_ref("../common.yaml", RefFormat.RELATIVE, [], spec_dir)
        assert "Owner" in text

    def test_missing_file_raises(self, spec_dir: Path) -> None:
        with pytest.raises(FetchError, match="Unable to load relative ref: nope.yaml"):
            read_external_ref("nope.yaml", RefFormat.RELATIVE, [], spec_dir)

    def test_internal_format_rejected(self, spec_dir: Path) -> None:
        with pytest.raises(FetchError, match="not external"):
            read_external_ref("#/components", RefFormat.INTERNAL, [], spec_dir)

    def test_url_format_is_fetched(self, spec_dir: Path) -> None:
        url = "https://example.com/remote.yaml"
        with patch("specref.parser.loader.httpx.get", return_value=_response(url, "b: 2\n")) as mock_get:
            assert read_external_ref(url, RefFormat.URL, [], spec_dir) == "b: 2\n"
        assert mock_get.call_args.args[0] == url


class TestReadExternalUrlRef:
    def test_relative_ref_joined_against_root(self) -> None:
        root = "https://example.com/api/openapi.yaml"
        expected = "https://example.com/api/schemas/pet.yaml"
        with patch("specref.parser.loader.httpx.get", return_value=_response(expected)) as mock_get:
            read_external_url_ref("schemas/pet.yaml", RefFormat.RELATIVE, [], root)
        assert mock_get.call_args.args[0] == expected

    def test_parent_relative_ref(self) -> None:
        root = "https://example.com/api/v1/openapi.yaml"
        expected = "https://example.com/api/common.yaml"
        with patch("specref.parser.loader.httpx.get", return_value=_response(expected)) as mock_get:
            read_external_url_ref("../common.yaml", RefFormat.RELATIVE, [], root)
        assert mock_get.call_args.args[0] == expected

    def test_absolute_url_used_as_is(self) -> None:
        url = "https://other.example.com/shared.yaml"
        with patch("specref.parser.loader.httpx.get", return_value=_response(url)) as mock_get:
            read_external_url_ref(url, RefFormat.URL, [], "https://example.com/openapi.yaml")
        assert mock_get.call_args.args[0] == url
