"""
Term routes - serves generated vocabulary files with content negotiation.

`GET /{term}` answers with Turtle (or another enabled RDF syntax) when the
client asks for it through `?format=ttl`, a `.ttl` suffix or the Accept
header, and with the term's HTML page otherwise.
"""

import logging
import os

from fastapi import APIRouter, Query, Request
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse, Response

from oerschema.negotiation import (
    ContentNegotiator,
    ContentReader,
    HtmlMissing,
    NegotiationDecision,
    TermNotFound,
)

logger = logging.getLogger(__name__)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

router = APIRouter(tags=["Vocabulary"])


def _negotiator(request: Request) -> ContentNegotiator:
    return request.app.state.negotiator


def _reader(request: Request) -> ContentReader:
    return request.app.state.reader


@router.get("/health")
def health_check():
    """
    Health check endpoint to verify that the server is running.
    """
    return {"status": "ok"}


@router.get("/", include_in_schema=False)
def site_index(request: Request):
    """Site front page, when the static build produced one."""
    index = _reader(request).locate("index.html")
    if index.is_file():
        return FileResponse(index, media_type="text/html")
    return JSONResponse(status_code=404, content={"error": "No index page has been built"})


@router.get(
    "/{term}",
    summary="Get a vocabulary term",
    description="""
Returns a class or property of the vocabulary. Turtle is served when the
`format=ttl` parameter is present, the path ends in `.ttl`, or the Accept
header includes `text/turtle`; otherwise the term's HTML page is served, or
the client is redirected to `/` when there is none.
""",
)
def get_term(
    request: Request,
    term: str,
    format: str | None = Query(default=None, description="Explicit format, e.g. 'ttl'"),
    debug: str | None = Query(default=None, description="Set to true for negotiation diagnostics"),
):
    accept = request.headers.get("accept", "")
    decision = _negotiator(request).resolve(
        term, accept=accept, format_param=format, request_path=request.url.path
    )

    if debug == "true":
        return _debug_report(request, term, format, accept, decision)

    try:
        content = _reader(request).fetch(decision)
    except TermNotFound as e:
        logger.info("%s (tried %s)", e, ", ".join(e.paths_tried))
        return JSONResponse(
            status_code=404,
            content={
                "error": str(e),
                "details": {"termName": e.term_name, "pathsTried": e.paths_tried},
            },
        )
    except HtmlMissing as e:
        logger.info("%s, redirecting to /", e)
        return RedirectResponse(url="/", status_code=302)

    headers = {} if decision.is_html else CORS_HEADERS
    return Response(content=content.body, media_type=content.media_type, headers=headers)


def _debug_report(
    request: Request,
    term: str,
    format_param: str | None,
    accept: str,
    decision: NegotiationDecision,
) -> dict:
    return {
        "slug": term,
        "termName": decision.term_name,
        "format": format_param,
        "accept": accept,
        "url": str(request.url),
        "method": request.method,
        "headers": dict(request.headers),
        "decision": {
            "format": decision.format,
            "mediaType": decision.media_type,
            "candidatePaths": list(decision.candidate_paths),
        },
        "paths": {
            "workingDir": os.getcwd(),
            "contentRoot": str(_reader(request).root),
        },
        "exists": _reader(request).probe(decision),
    }
