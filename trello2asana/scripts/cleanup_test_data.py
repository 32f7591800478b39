#!/usr/bin/env python3
"""Cleanup script to remove test boards from Trello and test projects from Asana.

Integration runs leave boards and projects behind. This script finds the ones
whose name contains a test marker and deletes them, pacing the deletions to
stay under both APIs' rate limits.

Usage:
    # List what would be deleted
    python -m trello2asana.scripts.cleanup_test_data --list

    # Delete everything that matches (with confirmation)
    python -m trello2asana.scripts.cleanup_test_data

    # Only Asana, custom marker, no prompt
    python -m trello2asana.scripts.cleanup_test_data --asana-only --pattern Sandbox --yes
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Callable, Iterable

from trello2asana.asana_client import AsanaClient
from trello2asana.config import load_settings
from trello2asana.exceptions import ConfigurationError, RateLimitError, Trello2AsanaError
from trello2asana.logging_config import setup_logging
from trello2asana.trello_client import TrelloClient

logger = logging.getLogger("trello2asana.scripts.cleanup")

DEFAULT_PATTERNS = ("Test", "Teste", "Integration", "Integração")
DELETE_DELAY = 1.0  # seconds between deletions
RATE_LIMIT_BACKOFF = 10.0  # seconds to wait after a 429 before the single retry


def is_test_name(name: str, patterns: Iterable[str] = DEFAULT_PATTERNS) -> bool:
    """True if the name contains any of the test markers (case-sensitive)"""
    return any(pattern in name for pattern in patterns)


def delete_with_retry(
    delete: Callable[[], None],
    label: str,
    delay: float = DELETE_DELAY,
    backoff: float = RATE_LIMIT_BACKOFF,
) -> bool:
    """Delete one resource, backing off once on a rate limit

    Returns:
        True if the resource was deleted, False if it was skipped
    """
    try:
        logger.info("  🗑️  Deleting %s", label)
        delete()
        logger.info("  ✅ Deleted %s", label)
        time.sleep(delay)
        return True
    except RateLimitError:
        logger.warning("  ⏳ Rate limit hit, waiting %.0f seconds...", backoff)
        time.sleep(backoff)
    except Trello2AsanaError as e:
        logger.error("  ❌ Failed to delete %s: %s", label, e)
        return False

    try:
        delete()
    except Trello2AsanaError as e:
        logger.error("  ❌ Failed to delete %s after retry: %s", label, e)
        return False
    logger.info("  ✅ Deleted %s after retry", label)
    return True


def find_trello_boards(trello: TrelloClient, patterns: Iterable[str]) -> list[dict]:
    boards = trello.list_boards(filter_status="open")
    return [board for board in boards if is_test_name(board.get("name", ""), patterns)]


def cleanup_trello_boards(
    trello: TrelloClient,
    patterns: Iterable[str] = DEFAULT_PATTERNS,
    dry_run: bool = False,
    delay: float = DELETE_DELAY,
    backoff: float = RATE_LIMIT_BACKOFF,
) -> tuple[int, int]:
    """Delete Trello boards with test names. Returns (deleted_count, failed_count)"""
    logger.info("🧹 Cleaning up Trello boards...")
    try:
        boards = find_trello_boards(trello, patterns)
    except Trello2AsanaError as e:
        logger.error("❌ Could not list Trello boards: %s", e)
        return 0, 0

    if dry_run:
        for board in boards:
            logger.info("  %s (%s)", board["name"], board["id"])
        logger.info("Found %d test boards on Trello", len(boards))
        return 0, 0

    deleted = 0
    failed = 0
    for board in boards:
        board_id = board["id"]
        ok = delete_with_retry(
            lambda: trello.delete_board(board_id), f"board {board['name']}", delay, backoff
        )
        if ok:
            deleted += 1
        else:
            failed += 1

    logger.info("✅ %d boards removed from Trello", deleted)
    return deleted, failed


def cleanup_asana_projects(
    asana: AsanaClient,
    patterns: Iterable[str] = DEFAULT_PATTERNS,
    dry_run: bool = False,
    delay: float = DELETE_DELAY,
    backoff: float = RATE_LIMIT_BACKOFF,
) -> tuple[int, int]:
    """Delete Asana projects with test names in every workspace.

    Returns (deleted_count, failed_count)
    """
    logger.info("🧹 Cleaning up Asana projects...")
    try:
        workspaces = asana.list_workspaces()
    except Trello2AsanaError as e:
        logger.error("❌ Could not list Asana workspaces: %s", e)
        return 0, 0

    deleted = 0
    failed = 0
    for workspace in workspaces:
        try:
            projects = [
                project
                for project in asana.list_projects(workspace.gid)
                if is_test_name(project.name, patterns)
            ]
        except Trello2AsanaError as e:
            logger.error("❌ Could not process workspace %s: %s", workspace.name, e)
            continue

        if dry_run:
            for project in projects:
                logger.info("  %s (%s) in %s", project.name, project.gid, workspace.name)
            logger.info(
                "Found %d test projects in Asana workspace %s", len(projects), workspace.name
            )
            continue

        removed_here = 0
        for project in projects:
            project_gid = project.gid
            ok = delete_with_retry(
                lambda: asana.delete_project(project_gid),
                f"project {project.name}",
                delay,
                backoff,
            )
            if ok:
                removed_here += 1
            else:
                failed += 1
        deleted += removed_here
        logger.info("✅ %d projects removed from workspace %s", removed_here, workspace.name)

    return deleted, failed


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Remove test boards from Trello and test projects from Asana",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--list", action="store_true", help="Only list matching boards/projects"
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--trello-only", action="store_true", help="Only clean up Trello")
    target.add_argument("--asana-only", action="store_true", help="Only clean up Asana")
    parser.add_argument(
        "--pattern",
        action="append",
        metavar="TEXT",
        help=f"Name marker to match (repeatable, default: {', '.join(DEFAULT_PATTERNS)})",
    )
    parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip confirmation prompt (dangerous!)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", metavar="PATH", help="Also write logs to PATH")

    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "INFO", args.log_file)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("❌ Error: %s", e)
        sys.exit(1)

    patterns = tuple(args.pattern) if args.pattern else DEFAULT_PATTERNS
    trello = TrelloClient(settings.trello_credentials(), timeout=settings.request_timeout)
    asana = AsanaClient(settings.asana_credentials(), timeout=settings.request_timeout)

    if not args.list and not args.yes:
        print("\n⚠️  WARNING: This will permanently delete every board/project whose name")
        print(f"    contains one of: {', '.join(patterns)}")
        response = input("Continue? [y/N]: ")
        if response.lower() not in ("y", "yes"):
            print("Aborted.")
            return

    logger.info("🚀 Starting test data cleanup...")

    totals = {"deleted": 0, "failed": 0}
    if not args.asana_only:
        deleted, failed = cleanup_trello_boards(trello, patterns, dry_run=args.list)
        totals["deleted"] += deleted
        totals["failed"] += failed
    if not args.trello_only:
        deleted, failed = cleanup_asana_projects(asana, patterns, dry_run=args.list)
        totals["deleted"] += deleted
        totals["failed"] += failed

    if not args.list:
        logger.info("Deleted: %d", totals["deleted"])
        if totals["failed"]:
            logger.warning("Failed: %d", totals["failed"])
    logger.info("✨ Cleanup finished!")


if __name__ == "__main__":
    main()
