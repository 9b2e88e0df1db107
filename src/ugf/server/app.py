"""FastAPI application for the UGF analyzer."""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from ugf import __version__
from ugf.server.routes import health, sessions
from ugf.session import SessionRegistry

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ugf.config import UgfConfig
    from ugf.session import Classifier, Normalizer

logger = logging.getLogger(__name__)


class UgfServer:
    """Main server application.

    Owns the FastAPI app and the in-memory session registry.
    """

    def __init__(
        self,
        config: "UgfConfig",
        normalizer: "Normalizer",
        classifier: "Classifier",
    ):
        self._config = config
        self._sessions = SessionRegistry(
            normalizer=normalizer,
            classifier=classifier,
            max_sessions=config.server.max_sessions,
        )
        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application."""
        return self._app

    @property
    def sessions(self) -> SessionRegistry:
        return self._sessions

    def _create_app(self) -> FastAPI:
        @asynccontextmanager
        async def lifespan(app: FastAPI) -> "AsyncIterator[None]":
            logger.info(
                "server_starting",
                extra={"gemini.model": self._config.gemini.model},
            )
            yield
            logger.info("server_shutting_down")
            self._sessions.close()

        app = FastAPI(
            title="UGF Analyzer",
            description="Urban Greening Factor analysis of landscape masterplans",
            version=__version__,
            lifespan=lifespan,
        )

        app.state.server = self
        app.state.sessions = self._sessions

        app.include_router(health.router, tags=["health"])
        app.include_router(sessions.router, prefix="/sessions", tags=["sessions"])

        return app


def create_app(
    config: "UgfConfig",
    normalizer: "Normalizer | None" = None,
    classifier: "Classifier | None" = None,
) -> FastAPI:
    """Create the FastAPI application.

    Without an explicit classifier, a Gemini-backed one is built from
    ``config``, which must then carry an API key.
    """
    from ugf.config import require_api_key
    from ugf.ingest import FileNormalizer

    if normalizer is None:
        normalizer = FileNormalizer(config.upload)
    if classifier is None:
        from ugf.classify import ClassificationClient, GeminiClassificationProvider

        api_key = require_api_key(config)
        classifier = ClassificationClient(
            provider=GeminiClassificationProvider(api_key=api_key.get_secret_value()),
            gemini=config.gemini,
            classification=config.classification,
        )

    server = UgfServer(config=config, normalizer=normalizer, classifier=classifier)
    return server.app
