"""Configuration management with XDG paths and precedence resolution.

This module handles all persistent configuration for specref:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specref/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~specref.models.GlobalConfig`
  JSON file storing fetch and output defaults.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, and the global config file into the effective
  configuration.
* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from env vars or files, and :func:`parse_auth_option` turns a CLI
  ``--auth`` value into an :class:`~specref.models.AuthorizationValue`.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Optional

from specref.exceptions import ConfigError, InvalidUsageError
from specref.models import AuthorizationValue, GlobalConfig

_APP_NAME = "specref"
_CONFIG_FILENAME = "config.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/specref/`` (default ``~/.config/specref/``).
    On macOS/Windows: ``~/.specref/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/specref/`` (default ``~/.local/share/specref/``).
    On macOS/Windows: ``~/.specref/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Global config ---


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~specref.models.GlobalConfig`, or a default
        instance if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got '{value}'")


def resolve_config(
    cli_timeout: Optional[float] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_timeout``, ``cli_format``)
        2. Environment variables (``SPECREF_TIMEOUT``, ``SPECREF_VERIFY_SSL``)
        3. User config (``~/.config/specref/config.json``)
        4. Defaults

    Raises:
        ConfigError: If an environment variable holds an invalid value.
    """
    config = load_global_config()

    env_timeout = os.environ.get("SPECREF_TIMEOUT")
    if env_timeout:
        try:
            config.resolver.timeout = float(env_timeout)
        except ValueError as exc:
            raise ConfigError(
                f"Environment variable SPECREF_TIMEOUT must be a number, got '{env_timeout}'"
            ) from exc

    env_verify = os.environ.get("SPECREF_VERIFY_SSL")
    if env_verify:
        config.resolver.verify_ssl = _parse_bool("SPECREF_VERIFY_SSL", env_verify)

    if cli_timeout is not None:
        config.resolver.timeout = cli_timeout
    if cli_format is not None:
        config.output.format = cli_format

    return config


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - anything else -- used literally

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    return source


def parse_auth_option(text: str) -> AuthorizationValue:
    """Parse a ``--auth`` option value into an :class:`AuthorizationValue`.

    The syntax is ``<type>:<name>=<source>`` where ``type`` is ``header`` or
    ``query`` and ``source`` is anything :func:`resolve_credential` accepts::

        header:Authorization=env:API_TOKEN
        query:api_key=file:~/.api-key

    Raises:
        InvalidUsageError: If *text* does not follow the syntax.
        ConfigError: If the credential source cannot be resolved.
    """
    kind, sep, rest = text.partition(":")
    if not sep or kind not in ("header", "query"):
        raise InvalidUsageError(
            f"Invalid --auth value '{text}': expected header:NAME=SOURCE or query:NAME=SOURCE"
        )
    name, sep, source = rest.partition("=")
    if not sep or not name:
        raise InvalidUsageError(
            f"Invalid --auth value '{text}': expected {kind}:NAME=SOURCE"
        )
    return AuthorizationValue(key_name=name, value=resolve_credential(source), type=kind)
