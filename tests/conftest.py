"""
Shared pytest fixtures for trello2asana tests
"""

import json
import logging
from pathlib import Path

import pytest

from trello2asana.models import AsanaCredentials, TrelloCredentials


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging() turns off propagation; restore it so caplog keeps working"""
    yield
    logger = logging.getLogger("trello2asana")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def simple_board_fixture(fixtures_dir):
    """Load simple board test fixture (3 lists, 3 cards)"""
    with open(fixtures_dir / "simple_board.json") as f:
        return json.load(f)


@pytest.fixture
def trello_credentials():
    return TrelloCredentials(api_key="test-api-key", token="test-token")


@pytest.fixture
def asana_credentials():
    return AsanaCredentials(access_token="test-access-token")
