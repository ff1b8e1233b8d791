"""Command line interface for create-kapp."""

from create_kapp.cli.app import app

__all__ = ["app"]
