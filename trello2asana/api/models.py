"""Request and response models for the sync API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

REQUIRED_FIELDS = ("boardId", "workspaceId")


class SyncBoardRequest(BaseModel):
    """Body of POST /sync/board."""

    model_config = ConfigDict(extra="forbid")

    board_id: StrictStr = Field(alias="boardId")
    workspace_id: StrictStr = Field(alias="workspaceId")

    @field_validator("board_id", "workspace_id")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("should not be empty")
        return value


class SyncBoardResponse(BaseModel):
    statusCode: int
    success: bool
    message: str


class ErrorResponse(BaseModel):
    statusCode: int
    message: str | list[str]
    error: str | None = None


def validation_messages(errors: list[dict[str, Any]]) -> list[str]:
    """Turn pydantic validation errors into one readable message per problem.

    A missing field reports both that it is empty and that it is not a
    string; a missing body reports that for every required field.
    """
    messages: list[str] = []
    for error in errors:
        error_type = error.get("type", "")
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]

        if error_type == "json_invalid":
            messages.append("request body must be valid JSON")
            continue

        if not loc:
            if error_type == "missing":
                for name in REQUIRED_FIELDS:
                    messages.extend([f"{name} should not be empty", f"{name} must be a string"])
            else:
                messages.append("request body must be a JSON object")
            continue

        name = loc[0]
        if error_type == "missing":
            messages.extend([f"{name} should not be empty", f"{name} must be a string"])
        elif error_type == "extra_forbidden":
            messages.append(f"property {name} should not exist")
        elif error_type == "string_type":
            messages.append(f"{name} must be a string")
        elif error_type in ("value_error", "string_too_short"):
            messages.append(f"{name} should not be empty")
        else:
            messages.append(f"{name}: {error.get('msg', 'is invalid')}")
    return messages
