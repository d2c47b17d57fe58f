"""
Base exception for the oerschema package.

Concrete errors live next to the code that raises them.
"""


class OerSchemaError(Exception):
    """Root of every error raised by the generator and the content server."""
