"""Negotiation package: representation choice and content lookup for terms."""

from .negotiator import (
    HTML,
    ContentNegotiator,
    ContentReader,
    HtmlMissing,
    NegotiationDecision,
    ServedContent,
    TermNotFound,
)

__all__ = [
    "HTML",
    "ContentNegotiator",
    "ContentReader",
    "HtmlMissing",
    "NegotiationDecision",
    "ServedContent",
    "TermNotFound",
]
