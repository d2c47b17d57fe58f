"""HTTP surface for the generated vocabulary site."""

from .app import create_app

__all__ = ["create_app"]
