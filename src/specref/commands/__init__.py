"""Built-in CLI commands for specref.

Each sub-module defines a Typer command that is registered on the root
application in :mod:`specref.app`.

Sub-modules:
    resolve: ``specref resolve`` -- resolve references against a document.
"""
