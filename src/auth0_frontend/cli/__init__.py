"""CLI module for the Auth0 frontend management core."""

from .main import cli, main

__all__ = ["cli", "main"]
