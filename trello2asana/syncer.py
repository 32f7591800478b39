"""Trello board → Asana project sync orchestration."""

from __future__ import annotations

import logging

from trello2asana.asana_client import AsanaClient
from trello2asana.config import Settings
from trello2asana.exceptions import SyncError
from trello2asana.models import CreateTaskParams, SyncResult, TrelloCard, TrelloList
from trello2asana.trello_client import TrelloClient

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Sync completed successfully"


class TrelloToAsanaSyncer:
    """Copy a Trello board into an Asana workspace

    Mapping:
        board → project, list → section, card → task
        (card name → task name, desc → notes, due → due_on)

    The run is strictly sequential and all-or-nothing in what it reports,
    but not transactional: on failure, resources already created in Asana
    stay there. Runs are not idempotent; syncing the same board twice
    creates two projects.
    """

    def __init__(self, trello: TrelloClient, asana: AsanaClient):
        self.trello = trello
        self.asana = asana

    @classmethod
    def from_settings(cls, settings: Settings) -> TrelloToAsanaSyncer:
        """Build both API clients from loaded settings"""
        trello = TrelloClient(settings.trello_credentials(), timeout=settings.request_timeout)
        asana = AsanaClient(settings.asana_credentials(), timeout=settings.request_timeout)
        return cls(trello, asana)

    @staticmethod
    def order_lists(lists: list[TrelloList]) -> list[TrelloList]:
        """Sort lists into board order by ``pos``.

        The sort is stable; lists without a position keep their API order
        and go last.
        """
        return sorted(lists, key=lambda lst: (lst.pos is None, lst.pos or 0))

    @staticmethod
    def due_date(card: TrelloCard) -> str | None:
        """Trello's ISO 8601 due timestamp → Asana's YYYY-MM-DD due_on"""
        if not card.due:
            return None
        return card.due[:10]

    def card_to_task(self, card: TrelloCard, project_gid: str, section_gid: str) -> CreateTaskParams:
        return CreateTaskParams(
            name=card.name,
            notes=card.desc,
            due_on=self.due_date(card),
            projects=[project_gid],
            section=section_gid,
        )

    def sync_board_to_project(self, board_id: str, workspace_id: str) -> SyncResult:
        """Sync one Trello board into a new Asana project

        Args:
            board_id: Trello board ID
            workspace_id: Asana workspace GID the project is created in

        Returns:
            SyncResult(success=True, message="Sync completed successfully")

        Raises:
            SyncError: On the first failure of any step. The message is
                "Sync failed: <original message>" and ``kind`` is the
                original error's kind.
        """
        logger.info(
            "Starting sync from Trello board %s to Asana workspace %s", board_id, workspace_id
        )
        try:
            board = self.trello.get_board(board_id)
            logger.debug("Retrieved Trello board: %s", board.name)

            project = self.asana.create_project(board.name, workspace_id)
            logger.debug("Created Asana project: %s (%s)", project.name, project.gid)

            lists = self.order_lists(self.trello.get_board_lists(board_id))
            logger.debug("Retrieved %d lists from Trello board", len(lists))

            task_count = 0
            for trello_list in lists:
                logger.debug("Processing list: %s", trello_list.name)
                section = self.asana.create_section(trello_list.name, project.gid)

                cards = self.trello.get_list_cards(trello_list.id)
                logger.debug("Found %d cards in list %s", len(cards), trello_list.name)

                for card in cards:
                    self.asana.create_task(self.card_to_task(card, project.gid, section.gid))
                    task_count += 1
                    logger.debug("Created Asana task: %s", card.name)
        except Exception as e:
            logger.error("Sync failed: %s", e, exc_info=True)
            raise SyncError(f"Sync failed: {e}", cause=e) from e

        logger.info(
            "Sync completed successfully for board %s (%d sections, %d tasks)",
            board_id,
            len(lists),
            task_count,
        )
        return SyncResult(success=True, message=SUCCESS_MESSAGE)
