"""HTTP API for trello2asana."""

from trello2asana.api.app import create_app

__all__ = ["create_app"]
