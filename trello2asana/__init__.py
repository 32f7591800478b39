"""One-way sync of Trello boards into Asana projects."""

from __future__ import annotations

from trello2asana.asana_client import AsanaClient
from trello2asana.cli import main
from trello2asana.config import Settings, load_settings
from trello2asana.exceptions import (
    ConfigurationError,
    ErrorKind,
    NotFoundError,
    RateLimitError,
    RequestFailedError,
    SyncError,
    Trello2AsanaError,
)
from trello2asana.logging_config import setup_logging
from trello2asana.models import (
    AsanaCredentials,
    CreateTaskParams,
    SyncResult,
    TrelloCredentials,
)
from trello2asana.syncer import TrelloToAsanaSyncer
from trello2asana.trello_client import TrelloClient

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "TrelloToAsanaSyncer",
    "TrelloClient",
    "AsanaClient",
    "TrelloCredentials",
    "AsanaCredentials",
    "CreateTaskParams",
    "SyncResult",
    "Settings",
    "load_settings",
    "setup_logging",
    # Exceptions
    "ErrorKind",
    "Trello2AsanaError",
    "NotFoundError",
    "RequestFailedError",
    "RateLimitError",
    "ConfigurationError",
    "SyncError",
    # CLI
    "main",
]
