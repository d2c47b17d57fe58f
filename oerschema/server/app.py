"""
FastAPI application serving the generated vocabulary site.
"""

import logging

from fastapi import FastAPI

from oerschema import __version__
from oerschema.config.settings import Settings, get_settings
from oerschema.negotiation import ContentNegotiator, ContentReader
from oerschema.triples import RdfFormat

from .routes import router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application for one content root.

    Args:
        settings: Configuration (defaults to the global settings)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="OER Schema",
        description="Vocabulary terms of the Open Educational Resources schema, "
        "as HTML pages and linked data.",
        version=__version__,
    )
    app.state.negotiator = ContentNegotiator([RdfFormat(f) for f in settings.server.formats])
    app.state.reader = ContentReader(settings.content_root)
    app.include_router(router)

    logger.info(
        "Serving %s (formats: %s)",
        settings.content_root,
        ", ".join(f.value for f in app.state.negotiator.formats),
    )
    return app
