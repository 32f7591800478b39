"""Trello API client (source side of the sync)."""

from __future__ import annotations

import logging
from typing import Any, cast

import requests

from trello2asana.config import DEFAULT_TIMEOUT
from trello2asana.exceptions import NotFoundError, RateLimitError, RequestFailedError
from trello2asana.models import TrelloBoard, TrelloCard, TrelloCredentials, TrelloList

logger = logging.getLogger(__name__)


class TrelloClient:
    """Read board, list and card data from the Trello REST API

    Every call issues exactly one authenticated request: no retry, no
    pagination. Credentials are passed in once as an immutable value and
    sent as ``key``/``token`` query parameters.

    Example:
        >>> trello = TrelloClient(TrelloCredentials(api_key="...", token="..."))
        >>> board = trello.get_board("Bm0nnz1R")
        >>> lists = trello.get_board_lists(board.id)
    """

    BASE_URL = "https://api.trello.com/1"

    def __init__(
        self,
        credentials: TrelloCredentials,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(
        self,
        method: str,
        endpoint: str,
        failure_message: str,
        params: dict | None = None,
        not_found_message: str | None = None,
        expect_body: bool = True,
    ) -> Any:
        """Make one authenticated request to the Trello API

        Args:
            method: HTTP method
            endpoint: Path relative to the API root (e.g. "boards/abc123")
            failure_message: Prefix for the RequestFailedError message
            params: Extra query parameters
            not_found_message: If set, a 404 raises NotFoundError with this message
            expect_body: If set, a 2xx response with no content is a failure

        Raises:
            NotFoundError: 404 and not_found_message was given
            RateLimitError: 429 Too Many Requests
            RequestFailedError: Any other non-2xx response or network failure
                (or an empty body when expect_body is set)
        """
        url = f"{self.base_url}/{endpoint}"
        request_params: dict[str, Any] = dict(self.credentials.as_params())
        if params:
            request_params.update(params)

        logger.debug("Trello %s %s", method, endpoint)
        try:
            response = requests.request(method, url, params=request_params, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            reason = e.response.reason if e.response is not None else ""
            response_text = e.response.text if e.response is not None else ""

            if status_code == 404 and not_found_message:
                raise NotFoundError(
                    not_found_message, status_code=status_code, response_text=response_text
                ) from e
            if status_code == 429:
                raise RateLimitError(
                    f"{failure_message}: {reason}",
                    status_code=status_code,
                    response_text=response_text,
                ) from e
            raise RequestFailedError(
                f"{failure_message}: {reason}",
                status_code=status_code,
                response_text=response_text,
            ) from e
        except requests.RequestException as e:
            raise RequestFailedError(f"{failure_message}: {e}") from e

        if not response.content:
            if expect_body:
                raise RequestFailedError(
                    f"{failure_message}: empty response", status_code=response.status_code
                )
            return None
        return response.json()

    def get_board(self, board_id: str) -> TrelloBoard:
        """Get board info

        Raises:
            NotFoundError: If the board does not exist
            RequestFailedError: For any other failure
        """
        data = self._request(
            "GET",
            f"boards/{board_id}",
            "Failed to get board",
            params={"fields": "name,desc,closed"},
            not_found_message="Board not found",
        )
        return TrelloBoard.from_api(cast(dict, data))

    def get_board_lists(self, board_id: str) -> list[TrelloList]:
        """Get all lists on the board, in the order Trello returns them"""
        data = self._request(
            "GET",
            f"boards/{board_id}/lists",
            "Failed to get board lists",
            params={"fields": "name,closed,pos,idBoard"},
        )
        return [TrelloList.from_api(item) for item in cast(list[dict], data)]

    def get_list_cards(self, list_id: str) -> list[TrelloCard]:
        """Get all cards in a list (single page)"""
        data = self._request(
            "GET",
            f"lists/{list_id}/cards",
            "Failed to get list cards",
            params={"fields": "name,desc,due,idList,idMembers,labels"},
        )
        return [TrelloCard.from_api(item) for item in cast(list[dict], data)]

    def list_boards(self, filter_status: str = "open") -> list[dict]:
        """List all boards accessible to the authenticated member

        Used by the cleanup script to find test boards.

        Args:
            filter_status: "open" (default), "closed" or "all"
        """
        valid_filters = {"open", "closed", "all"}
        if filter_status not in valid_filters:
            raise ValueError(
                f"Invalid filter_status: '{filter_status}'. Must be one of: {valid_filters}"
            )

        boards = self._request(
            "GET",
            "members/me/boards",
            "Failed to list boards",
            params={"fields": "name,url,closed", "filter": filter_status},
        )
        return cast(list[dict], boards)

    def delete_board(self, board_id: str) -> None:
        """Permanently delete a board (cleanup script only)"""
        self._request(
            "DELETE", f"boards/{board_id}", "Failed to delete board", expect_body=False
        )
