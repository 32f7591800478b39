"""FastAPI application setup."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from trello2asana.api.models import ErrorResponse, validation_messages
from trello2asana.api.routes import sync
from trello2asana.config import Settings, load_settings
from trello2asana.exceptions import Trello2AsanaError
from trello2asana.syncer import TrelloToAsanaSyncer

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, syncer: TrelloToAsanaSyncer | None = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Loaded settings; read from the environment when omitted
            and no syncer is given.
        syncer: Pre-built syncer (tests inject doubles here).
    """
    if syncer is None:
        syncer = TrelloToAsanaSyncer.from_settings(settings or load_settings())

    app = FastAPI(
        title="trello2asana",
        description="Copy Trello boards into Asana projects",
        version="0.1.0",
    )
    app.state.syncer = syncer

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                statusCode=status.HTTP_400_BAD_REQUEST,
                message=validation_messages(list(exc.errors())),
                error="Bad Request",
            ).model_dump(),
        )

    @app.exception_handler(Trello2AsanaError)
    async def sync_error_handler(_request: Request, exc: Trello2AsanaError) -> JSONResponse:
        logger.debug("Returning 500 for %s error", exc.kind.value)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                statusCode=status.HTTP_500_INTERNAL_SERVER_ERROR, message=str(exc)
            ).model_dump(exclude_none=True),
        )

    app.include_router(sync.router)

    return app
