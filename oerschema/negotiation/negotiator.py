"""
Content Negotiator - Picks the representation to serve for a term.

The decision is a pure function of the requested term, the Accept header,
the `format` query parameter and the request path. File access happens
afterwards in ContentReader, which walks the decision's candidate paths in
priority order.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from oerschema.errors import OerSchemaError
from oerschema.publishing.planner import TERMS_DIR
from oerschema.triples import RdfFormat

logger = logging.getLogger(__name__)

HTML = "html"
HTML_MEDIA_TYPE = "text/html"


class TermNotFound(OerSchemaError):
    """No candidate file exists for an RDF representation."""

    def __init__(self, term_name: str, paths_tried: list[str], fmt: str = "turtle"):
        label = "Turtle" if fmt == RdfFormat.TURTLE.value else fmt
        super().__init__(f"{label} representation not found for term: {term_name}")
        self.term_name = term_name
        self.paths_tried = paths_tried
        self.format = fmt


class HtmlMissing(OerSchemaError):
    """The term has no HTML page; callers redirect to the site root."""

    def __init__(self, term_name: str, path: str):
        super().__init__(f"No HTML page for term: {term_name}")
        self.term_name = term_name
        self.path = path


@dataclass(frozen=True)
class NegotiationDecision:
    """Which representation to serve and where to look for it."""

    term_name: str
    format: str  # an RdfFormat value or "html"
    candidate_paths: tuple[str, ...]

    @property
    def is_html(self) -> bool:
        return self.format == HTML

    @property
    def media_type(self) -> str:
        if self.is_html:
            return HTML_MEDIA_TYPE
        return RdfFormat(self.format).media_type


# =============================================================================
# CONTENT NEGOTIATOR
# =============================================================================


class ContentNegotiator:
    """
    Resolves a request to a NegotiationDecision.

    Args:
        formats: RDF formats this site may serve. Turtle, when enabled, is
            always checked first.
    """

    def __init__(self, formats: Sequence[RdfFormat] = (RdfFormat.TURTLE,)):
        ordered = [RdfFormat(f) for f in formats]
        if RdfFormat.TURTLE in ordered:
            ordered.remove(RdfFormat.TURTLE)
            ordered.insert(0, RdfFormat.TURTLE)
        self.formats: tuple[RdfFormat, ...] = tuple(dict.fromkeys(ordered))

    def strip_suffix(self, term: str) -> str:
        """Remove a served format's extension (".ttl") from the term name."""
        for fmt in self.formats:
            if term.endswith(fmt.extension):
                return term[: -len(fmt.extension)]
        return term

    def resolve(
        self,
        term: str,
        accept: str | None = None,
        format_param: str | None = None,
        request_path: str | None = None,
    ) -> NegotiationDecision:
        """
        Decide the representation for one request; first match wins:

        1. explicit `format` parameter naming a served format (format=ttl)
        2. request path ending in a served format's extension (.ttl)
        3. Accept header containing a served format's media type (text/turtle)
        4. HTML otherwise
        """
        term_name = self.strip_suffix(term)
        fmt = (
            self._from_param(format_param)
            or self._from_path(request_path)
            or self._from_accept(accept)
        )

        if fmt is None:
            decision = NegotiationDecision(term_name, HTML, (f"{term_name}/index.html",))
        else:
            decision = NegotiationDecision(term_name, fmt.value, self.candidate_paths(term_name, fmt))

        logger.debug("Negotiated %s for '%s' (accept=%r)", decision.format, term_name, accept)
        return decision

    @staticmethod
    def candidate_paths(term_name: str, fmt: RdfFormat) -> tuple[str, ...]:
        """Per-term directory first, then the output root."""
        return (
            f"{TERMS_DIR}/{term_name}{fmt.extension}",
            f"{term_name}{fmt.extension}",
        )

    def _from_param(self, value: str | None) -> RdfFormat | None:
        if not value:
            return None
        fmt = RdfFormat.from_alias(value)
        return fmt if fmt in self.formats else None

    def _from_path(self, path: str | None) -> RdfFormat | None:
        if not path:
            return None
        path = path.split("?", 1)[0]
        for fmt in self.formats:
            if path.endswith(fmt.extension):
                return fmt
        return None

    def _from_accept(self, accept: str | None) -> RdfFormat | None:
        if not accept:
            return None
        accept = accept.lower()
        for fmt in self.formats:
            if fmt.media_type in accept:
                return fmt
        return None


# =============================================================================
# CONTENT READER
# =============================================================================


@dataclass(frozen=True)
class ServedContent:
    """File contents selected for a response."""

    decision: NegotiationDecision
    path: Path
    body: bytes

    @property
    def media_type(self) -> str:
        return self.decision.media_type


class ContentReader:
    """
    Reads the first existing candidate of a decision below a content root.

    Candidates that resolve outside the root are treated as missing.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def locate(self, relative: str) -> Path:
        return self.root / relative.lstrip("/")

    def exists(self, relative: str) -> bool:
        path = self.locate(relative)
        if not path.resolve().is_relative_to(self.root.resolve()):
            logger.warning("Rejected candidate outside content root: %s", relative)
            return False
        return path.is_file()

    def probe(self, decision: NegotiationDecision) -> dict[str, bool]:
        """Existence of every candidate, keyed by absolute path (diagnostics)."""
        return {str(self.locate(p)): self.exists(p) for p in decision.candidate_paths}

    def fetch(self, decision: NegotiationDecision) -> ServedContent:
        """
        Read the first existing candidate.

        Raises:
            TermNotFound: No RDF candidate exists
            HtmlMissing: The HTML page does not exist
        """
        for relative in decision.candidate_paths:
            if not self.exists(relative):
                continue
            path = self.locate(relative)
            try:
                body = path.read_bytes()
            except OSError as e:
                # Removed between the check and the read
                logger.warning("Could not read %s: %s", path, e)
                continue
            return ServedContent(decision=decision, path=path, body=body)

        if decision.is_html:
            raise HtmlMissing(decision.term_name, str(self.locate(decision.candidate_paths[0])))
        raise TermNotFound(
            decision.term_name,
            [str(self.locate(p)) for p in decision.candidate_paths],
            decision.format,
        )
