"""Command-line entry point for docker-credential-acr."""

from .app import app, main

__all__ = ["app", "main"]
