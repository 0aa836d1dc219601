"""Shared test fixtures for specref.

Provides a small multi-file petstore layout on disk, the matching root
document model, isolated config directories, and a CLI runner.  These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest

from specref.models import OpenAPIDocument
from specref.output import reset_output


ROOT_YAML = textwrap.dedent("""\
    openapi: "3.0.3"
    info:
      title: Petstore
      version: "1.0.0"
    paths:
      /pets:
        get:
          responses:
            "200":
              $ref: "#/components/responses/PetList"
      /pets/{petId}:
        get:
          parameters:
            - $ref: "#/components/parameters/PetId"
    components:
      schemas:
        Pet:
          type: object
          required: [name]
          properties:
            name:
              type: string
            owner:
              $ref: "common.yaml#/components/schemas/Owner"
        a/b:
          type: string
      requestBodies:
        NewPet:
          required: true
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Pet"
      examples:
        Fido:
          summary: A dog
          value:
            name: Fido
      responses:
        PetList:
          description: A list of pets
      parameters:
        PetId:
          name: petId
          in: path
          required: true
          schema:
            type: string
""")

COMMON_YAML = textwrap.dedent("""\
    components:
      schemas:
        Owner:
          type: object
          properties:
            email:
              type: string
              format: email
            address:
              type: object
              properties:
                city:
                  type: string
        Dog:
          type: object
          properties:
            bark:
              type: boolean
        "slash/name":
          type: integer
        "tilde~name":
          type: number
      parameters:
        Limit:
          name: limit
          in: query
          schema:
            type: integer
    tags:
      - name: first
      - name: second
""")

STANDALONE_PARAMETER_JSON = '{"name": "offset", "in": "query", "schema": {"type": "integer"}}'


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def spec_dir(tmp_path: Path) -> Path:
    """Write the root document and its external files into ``tmp_path/specs``."""
    specs = tmp_path / "specs"
    specs.mkdir()
    (specs / "openapi.yaml").write_text(ROOT_YAML, encoding="utf-8")
    (specs / "common.yaml").write_text(COMMON_YAML, encoding="utf-8")
    (specs / "offset.json").write_text(STANDALONE_PARAMETER_JSON, encoding="utf-8")
    return specs


@pytest.fixture
def root_raw() -> dict[str, Any]:
    """The root document as a plain dict."""
    import yaml

    return yaml.safe_load(ROOT_YAML)


@pytest.fixture
def root_document(root_raw: dict[str, Any]) -> OpenAPIDocument:
    """The root document as an :class:`OpenAPIDocument`."""
    return OpenAPIDocument.model_validate(root_raw)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of tmp_path
    and clears all SPECREF_* environment variables.
    """
    monkeypatch.setattr("specref.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["SPECREF_TIMEOUT", "SPECREF_VERIFY_SSL", "SPECREF_LOG_LEVEL"]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
