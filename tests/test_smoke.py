"""
Smoke test to verify test infrastructure works
"""

from pathlib import Path


def test_can_import_main_module():
    """Verify we can import the main trello2asana package"""
    import trello2asana

    assert hasattr(trello2asana, "TrelloClient"), "Should export TrelloClient"
    assert hasattr(trello2asana, "AsanaClient"), "Should export AsanaClient"
    assert hasattr(trello2asana, "TrelloToAsanaSyncer"), "Should export TrelloToAsanaSyncer"


def test_package_layout():
    package_dir = Path(__file__).parent.parent / "trello2asana"
    assert (package_dir / "__init__.py").exists()
    assert (package_dir / "scripts" / "cleanup_test_data.py").exists()


def test_fixtures_directory_exists(fixtures_dir):
    """Verify fixtures directory is accessible"""
    assert fixtures_dir.exists()
    assert fixtures_dir.is_dir()
