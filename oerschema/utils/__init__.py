"""
Utilities Module - Helper functions shared by the CLI and the server.
"""

from .logging import add_file_handler, remove_file_handler, setup_colored_logging

__all__ = [
    "add_file_handler",
    "remove_file_handler",
    "setup_colored_logging",
]
