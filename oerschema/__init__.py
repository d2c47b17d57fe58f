"""
OER Schema - static site generator for the Open Educational Resources vocabulary.

Loads the schema YAML, publishes every class and property as JSON-LD,
Turtle, N-Triples and RDF/XML, and serves the result with content
negotiation.
"""

__version__ = "0.1.0"
