"""Transient data objects for Trello sources, Asana destinations and sync results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "***"
    return f"{secret[:4]}...{secret[-4:]}"


@dataclass(frozen=True)
class TrelloCredentials:
    """API key + token pair, sent as query parameters on every Trello request"""

    api_key: str
    token: str

    def as_params(self) -> dict[str, str]:
        return {"key": self.api_key, "token": self.token}

    def __repr__(self) -> str:
        return f"TrelloCredentials(api_key={_mask(self.api_key)!r}, token={_mask(self.token)!r})"


@dataclass(frozen=True)
class AsanaCredentials:
    """Personal access token used as a bearer token for Asana"""

    access_token: str

    def as_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def __repr__(self) -> str:
        return f"AsanaCredentials(access_token={_mask(self.access_token)!r})"


# ===== Trello =====


@dataclass
class TrelloBoard:
    id: str
    name: str
    desc: str = ""
    closed: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloBoard:
        """Create from API response."""
        return cls(
            id=data["id"],
            name=data["name"],
            desc=data.get("desc") or "",
            closed=bool(data.get("closed", False)),
        )


@dataclass
class TrelloList:
    id: str
    name: str
    closed: bool = False
    pos: float | None = None
    id_board: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloList:
        """Create from API response."""
        return cls(
            id=data["id"],
            name=data["name"],
            closed=bool(data.get("closed", False)),
            pos=data.get("pos"),
            id_board=data.get("idBoard", ""),
        )


@dataclass
class TrelloLabel:
    id: str
    name: str = ""
    color: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloLabel:
        return cls(id=data["id"], name=data.get("name") or "", color=data.get("color"))


@dataclass
class TrelloCard:
    id: str
    name: str
    desc: str = ""
    due: str | None = None
    id_list: str = ""
    id_members: list[str] = field(default_factory=list)
    labels: list[TrelloLabel] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloCard:
        """Create from API response."""
        return cls(
            id=data["id"],
            name=data["name"],
            desc=data.get("desc") or "",
            due=data.get("due"),
            id_list=data.get("idList", ""),
            id_members=list(data.get("idMembers") or []),
            labels=[TrelloLabel.from_api(label) for label in data.get("labels") or []],
        )


# ===== Asana =====


def _unwrap(payload: dict[str, Any]) -> dict[str, Any]:
    """Asana wraps every resource in a {"data": {...}} envelope"""
    data = payload.get("data", payload)
    return dict(data)


@dataclass
class AsanaUser:
    gid: str
    name: str
    email: str | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> AsanaUser:
        data = _unwrap(payload)
        return cls(gid=data["gid"], name=data.get("name", ""), email=data.get("email"))


@dataclass
class AsanaWorkspace:
    gid: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> AsanaWorkspace:
        return cls(gid=data["gid"], name=data.get("name", ""))


@dataclass
class AsanaProject:
    gid: str
    name: str
    resource_type: str = "project"

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> AsanaProject:
        data = _unwrap(payload)
        return cls(
            gid=data["gid"],
            name=data.get("name", ""),
            resource_type=data.get("resource_type", "project"),
        )


@dataclass
class AsanaSection:
    gid: str
    name: str
    resource_type: str = "section"

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> AsanaSection:
        data = _unwrap(payload)
        return cls(
            gid=data["gid"],
            name=data.get("name", ""),
            resource_type=data.get("resource_type", "section"),
        )


@dataclass
class AsanaTask:
    gid: str
    name: str
    notes: str | None = None
    due_on: str | None = None
    resource_type: str = "task"

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> AsanaTask:
        data = _unwrap(payload)
        return cls(
            gid=data["gid"],
            name=data.get("name", ""),
            notes=data.get("notes"),
            due_on=data.get("due_on"),
            resource_type=data.get("resource_type", "task"),
        )


@dataclass
class CreateTaskParams:
    """Fields for POST /tasks.

    ``to_payload`` drops every field that is None so an unset due date is
    absent from the request rather than sent as an empty string.
    """

    name: str
    projects: list[str]
    notes: str | None = None
    due_on: str | None = None
    section: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "notes": self.notes,
            "due_on": self.due_on,
            "projects": list(self.projects),
            "section": self.section,
        }
        return {key: value for key, value in payload.items() if value is not None}


# ===== Sync =====


@dataclass(frozen=True)
class SyncResult:
    success: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message}
