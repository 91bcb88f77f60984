"""Command-line interface for slax."""

from .main import main

__all__ = ["main"]
