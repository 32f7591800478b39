"""CLI entry point for trello2asana."""

from __future__ import annotations

import logging
import sys

from trello2asana.config import load_settings
from trello2asana.exceptions import ConfigurationError, SyncError, Trello2AsanaError
from trello2asana.logging_config import setup_logging
from trello2asana.syncer import TrelloToAsanaSyncer

logger = logging.getLogger("trello2asana.cli")

# Module docstring for --help
__doc__ = """
trello2asana - Copy a Trello board into an Asana project

Usage:
    export TRELLO_API_KEY="your-key"
    export TRELLO_TOKEN="your-token"
    export ASANA_ACCESS_TOKEN="your-asana-pat"

    # Serve the HTTP API (POST /sync/board) on $PORT (default 3000)
    python3 -m trello2asana

    # Serve on a custom host/port
    python3 -m trello2asana --host 127.0.0.1 --port 8080

    # Sync one board directly, without the HTTP server
    python3 -m trello2asana --board-id Bm0nnz1R --workspace-id 1204567890

    # Check that both sets of credentials reach their API, then exit
    python3 -m trello2asana --check

Logging:
    --verbose / -v       Debug output (one line per list and card)
    --quiet / -q         Errors only
    --log-level LEVEL    DEBUG, INFO, WARNING or ERROR
    --log-file PATH      Also write timestamped logs to PATH

Variables can also be set in a .env file (path: $TRELLO2ASANA_ENV_FILE, default .env).
"""


def _flag_value(name: str) -> str | None:
    """Return the value following a flag in sys.argv, exiting if it is missing"""
    if name not in sys.argv:
        return None
    idx = sys.argv.index(name)
    if idx + 1 >= len(sys.argv):
        logger.error(f"❌ Error: {name} requires a value")
        sys.exit(1)
    return sys.argv[idx + 1]


def run_sync(syncer: TrelloToAsanaSyncer, board_id: str, workspace_id: str) -> int:
    """Run one sync and return the process exit code"""
    try:
        result = syncer.sync_board_to_project(board_id, workspace_id)
    except SyncError as e:
        logger.error(f"❌ {e}")
        return 1
    logger.info(f"✅ {result.message}")
    return 0


def check_connections(syncer: TrelloToAsanaSyncer) -> int:
    """Call one read-only endpoint on each API and report the outcome

    Returns 0 when both Trello and Asana accept the credentials, 1 otherwise.
    """
    ok = True

    try:
        boards = syncer.trello.list_boards(filter_status="all")
        logger.info("✅ Trello connection OK")
        logger.info(f"📋 Boards found: {len(boards)}")
    except Trello2AsanaError as e:
        logger.error(f"❌ Trello connection failed: {e}")
        ok = False

    try:
        user = syncer.asana.get_me()
        logger.info("✅ Asana connection OK")
        logger.info(f"👤 Asana user: {user.name}")
    except Trello2AsanaError as e:
        logger.error(f"❌ Asana connection failed: {e}")
        ok = False

    return 0 if ok else 1


def serve(syncer: TrelloToAsanaSyncer, host: str, port: int) -> None:
    import uvicorn

    from trello2asana.api.app import create_app

    app = create_app(syncer=syncer)
    logger.info(f"🚀 Application is running on: http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_config=None)


def main() -> None:
    # Show help
    if "--help" in sys.argv or "-h" in sys.argv:
        print(__doc__)
        sys.exit(0)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logging("INFO")
        logger.error(f"❌ Error: {e}")
        logger.error("\nRequired environment variables:")
        logger.error("  TRELLO_API_KEY      - Your Trello API key")
        logger.error("  TRELLO_TOKEN        - Your Trello API token")
        logger.error("  ASANA_ACCESS_TOKEN  - Your Asana personal access token")
        logger.error("\nSet them in your environment or create a .env file.")
        sys.exit(1)

    # Parse logging flags (command line wins over LOG_LEVEL / LOG_FILE)
    log_level = settings.log_level
    if "--verbose" in sys.argv or "-v" in sys.argv:
        log_level = "DEBUG"
    elif "--quiet" in sys.argv or "-q" in sys.argv:
        log_level = "ERROR"
    elif "--log-level" in sys.argv:
        log_level = (_flag_value("--log-level") or log_level).upper()
    log_file = _flag_value("--log-file") or settings.log_file

    setup_logging(log_level, log_file)

    syncer = TrelloToAsanaSyncer.from_settings(settings)

    if "--check" in sys.argv:
        sys.exit(check_connections(syncer))

    board_id = _flag_value("--board-id")
    workspace_id = _flag_value("--workspace-id")
    if board_id or workspace_id:
        if not (board_id and workspace_id):
            logger.error("❌ Error: --board-id and --workspace-id must be given together")
            sys.exit(1)
        sys.exit(run_sync(syncer, board_id, workspace_id))

    host = _flag_value("--host") or settings.host
    port_value = _flag_value("--port")
    port = settings.port
    if port_value is not None:
        try:
            port = int(port_value)
        except ValueError:
            logger.error(f"❌ Error: --port must be a number, got: {port_value}")
            sys.exit(1)

    serve(syncer, host, port)


if __name__ == "__main__":
    main()
