"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specref.exceptions.SpecrefError` subclass.
Scripts wrapping ``specref resolve`` can inspect the exit code to tell a
malformed reference from an unreachable file without parsing stderr.

Example::

    $ specref resolve openapi.yaml 'common.yaml#/components/schemas/Nope'
    $ echo $?
    4   # EXIT_REF_NOT_FOUND -- the pointer path does not exist
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or options."""

EXIT_INVALID_REF = 3
"""A reference string is malformed (e.g. more than one ``#/`` separator)."""

EXIT_REF_NOT_FOUND = 4
"""A reference points at a node that does not exist."""

EXIT_FETCH_ERROR = 6
"""An external file or URL could not be read (I/O, HTTP, or network error)."""

EXIT_SPEC_PARSE_ERROR = 7
"""Content could not be parsed or deserialized into the expected shape."""
