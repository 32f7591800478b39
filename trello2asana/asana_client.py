"""Asana API client (destination side of the sync)."""

from __future__ import annotations

import logging
from typing import Any, cast

import requests

from trello2asana.config import DEFAULT_TIMEOUT
from trello2asana.exceptions import RateLimitError, RequestFailedError
from trello2asana.models import (
    AsanaCredentials,
    AsanaProject,
    AsanaSection,
    AsanaTask,
    AsanaUser,
    AsanaWorkspace,
    CreateTaskParams,
)

logger = logging.getLogger(__name__)


class AsanaClient:
    """Create projects, sections and tasks through the Asana REST API.

    Request bodies use Asana's ``{"data": {...}}`` envelope. The bearer
    header is built once from the credentials at construction time.

    Error Handling:
        Any non-2xx response raises RequestFailedError with a static message
        ("Failed to create task", ...). Asana's error body is kept on the
        exception as ``response_text`` but not parsed. 429 raises
        RateLimitError.

    Example:
        >>> asana = AsanaClient(AsanaCredentials(access_token="..."))
        >>> project = asana.create_project("Roadmap", workspace_id="12345")
        >>> section = asana.create_section("To Do", project.gid)
    """

    BASE_URL = "https://app.asana.com/api/1.0"

    def __init__(
        self,
        credentials: AsanaCredentials,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = credentials.as_headers()

    def _request(
        self,
        method: str,
        endpoint: str,
        failure_message: str,
        data: dict | None = None,
    ) -> Any:
        """Make one authenticated request to the Asana API

        Raises:
            RateLimitError: 429 Too Many Requests
            RequestFailedError: Any other non-2xx response or network failure
        """
        url = f"{self.base_url}/{endpoint}"
        body = {"data": data} if data is not None else None

        logger.debug("Asana %s %s", method, endpoint)
        try:
            response = requests.request(
                method, url, headers=self.headers, json=body, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_text = e.response.text if e.response is not None else ""
            error_class = RateLimitError if status_code == 429 else RequestFailedError
            raise error_class(
                failure_message, status_code=status_code, response_text=response_text
            ) from e
        except requests.RequestException as e:
            raise RequestFailedError(failure_message) from e

        if not response.content:
            return {}
        return response.json()

    def create_project(self, name: str, workspace_id: str) -> AsanaProject:
        """Create a project in the given workspace"""
        payload = self._request(
            "POST",
            "projects",
            "Failed to create project",
            data={"name": name, "workspace": workspace_id},
        )
        return AsanaProject.from_api(cast(dict, payload))

    def create_section(self, name: str, project_id: str) -> AsanaSection:
        """Create a section inside a project"""
        payload = self._request(
            "POST",
            "sections",
            "Failed to create section",
            data={"name": name, "project": project_id},
        )
        return AsanaSection.from_api(cast(dict, payload))

    def create_task(self, params: CreateTaskParams) -> AsanaTask:
        """Create a task from CreateTaskParams (None fields are not sent)"""
        payload = self._request(
            "POST", "tasks", "Failed to create task", data=params.to_payload()
        )
        return AsanaTask.from_api(cast(dict, payload))

    def get_me(self) -> AsanaUser:
        """The user the access token belongs to (credential check)"""
        payload = self._request("GET", "users/me", "Failed to get user")
        return AsanaUser.from_api(cast(dict, payload))

    # Cleanup helpers

    def list_workspaces(self) -> list[AsanaWorkspace]:
        payload = self._request("GET", "workspaces", "Failed to list workspaces")
        return [AsanaWorkspace.from_api(item) for item in payload.get("data", [])]

    def list_projects(self, workspace_id: str) -> list[AsanaProject]:
        payload = self._request(
            "GET", f"workspaces/{workspace_id}/projects", "Failed to list projects"
        )
        return [AsanaProject.from_api(item) for item in payload.get("data", [])]

    def delete_project(self, project_id: str) -> None:
        self._request("DELETE", f"projects/{project_id}", "Failed to delete project")
