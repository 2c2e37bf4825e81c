"""Typer command-line interface for aecli (`aecli` console script)."""

from .main import app, main

__all__ = ["app", "main"]
