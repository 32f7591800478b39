"""Sync endpoint: copy a Trello board into an Asana workspace."""

from fastapi import APIRouter, status

from trello2asana.api.dependencies import SyncerDep
from trello2asana.api.models import ErrorResponse, SyncBoardRequest, SyncBoardResponse
from trello2asana.exceptions import SyncError, Trello2AsanaError

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post(
    "/board",
    status_code=status.HTTP_201_CREATED,
    response_model=SyncBoardResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def sync_board(body: SyncBoardRequest, syncer: SyncerDep) -> SyncBoardResponse:
    """Run one sync. Every failure, including a missing board, is a 500."""
    try:
        result = syncer.sync_board_to_project(body.board_id, body.workspace_id)
    except Trello2AsanaError:
        raise
    except Exception as e:
        raise SyncError(str(e), cause=e) from e

    return SyncBoardResponse(statusCode=status.HTTP_201_CREATED, **result.to_dict())
