"""Exception hierarchy for specref.

All exceptions inherit from :class:`SpecrefError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specref.exit_codes`.
The top-level error handler in :func:`specref.app.main` catches
``SpecrefError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Every fatal condition raised while resolving an external reference is one of
these types; soft misses on internal references are signalled by ``None``
instead and never raise.

Subclass hierarchy::

    SpecrefError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- InvalidRefError     (exit 3)
    +-- RefNotFoundError    (exit 4)
    +-- FetchError          (exit 6)
    +-- SpecParseError      (exit 7)
    +-- ConfigError         (exit 1)
"""

from specref.exit_codes import (
    EXIT_FETCH_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_REF,
    EXIT_INVALID_USAGE,
    EXIT_REF_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecrefError(Exception):
    """Base exception for all specref errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specref.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecrefError):
    """Raised for invalid CLI arguments such as a malformed ``--auth`` option."""

    exit_code = EXIT_INVALID_USAGE


class InvalidRefError(SpecrefError):
    """Raised when a reference string contains more than one ``#/`` separator."""

    exit_code = EXIT_INVALID_REF


class RefNotFoundError(SpecrefError):
    """Raised when a JSON Pointer path cannot be followed inside fetched content.

    Args:
        definition_path: The full pointer path that was being navigated.
        file: The file or URL whose content was navigated.
    """

    exit_code = EXIT_REF_NOT_FOUND

    def __init__(self, definition_path: str, file: str):
        super().__init__(f"Could not find {definition_path} in contents of {file}")
        self.definition_path = definition_path
        self.file = file


class FetchError(SpecrefError):
    """Raised when an external file or URL cannot be read."""

    exit_code = EXIT_FETCH_ERROR


class SpecParseError(SpecrefError):
    """Raised when content cannot be parsed or deserialized into the expected type."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(SpecrefError):
    """Raised for configuration problems (invalid JSON, unresolvable credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
