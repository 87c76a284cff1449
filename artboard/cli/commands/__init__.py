"""Command modules for the artboard CLI."""

from artboard.cli.commands import canonicalize, resolve, store, uniquify

__all__ = ["canonicalize", "resolve", "store", "uniquify"]
