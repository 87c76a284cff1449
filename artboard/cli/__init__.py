"""Command line interface for artboard."""
