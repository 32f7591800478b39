"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from trello2asana.syncer import TrelloToAsanaSyncer


def get_syncer(request: Request) -> TrelloToAsanaSyncer:
    """Dependency that provides the syncer stored on the app at creation time."""
    syncer = getattr(request.app.state, "syncer", None)
    if syncer is None:
        raise RuntimeError("Syncer not initialized. Build the app with create_app().")
    return syncer


# Type alias for dependency injection
SyncerDep = Annotated[TrelloToAsanaSyncer, Depends(get_syncer)]
