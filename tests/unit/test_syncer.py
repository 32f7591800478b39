"""
Unit tests for TrelloToAsanaSyncer (sync orchestration)
"""

import pytest

from trello2asana import (
    ErrorKind,
    NotFoundError,
    RequestFailedError,
    SyncError,
    SyncResult,
    TrelloToAsanaSyncer,
)
from trello2asana.models import (
    AsanaProject,
    AsanaSection,
    AsanaTask,
    TrelloBoard,
    TrelloCard,
    TrelloList,
)


class FakeTrello:
    """In-memory stand-in for TrelloClient built from a board fixture"""

    def __init__(self, fixture, calls, fail_board=None):
        self.fixture = fixture
        self.calls = calls
        self.fail_board = fail_board

    def get_board(self, board_id):
        self.calls.append(("get_board", board_id))
        if self.fail_board:
            raise self.fail_board
        return TrelloBoard.from_api(self.fixture["board"])

    def get_board_lists(self, board_id):
        self.calls.append(("get_board_lists", board_id))
        return [TrelloList.from_api(item) for item in self.fixture["lists"]]

    def get_list_cards(self, list_id):
        self.calls.append(("get_list_cards", list_id))
        return [TrelloCard.from_api(item) for item in self.fixture["cards"].get(list_id, [])]


class FakeAsana:
    """Records every create call and hands out sequential gids"""

    def __init__(self, calls, fail_on=None):
        self.calls = calls
        self.fail_on = fail_on or {}
        self.counters = {"project": 0, "section": 0, "task": 0}
        self.deleted = []

    def _next(self, kind):
        self.counters[kind] += 1
        if self.fail_on.get(kind) == self.counters[kind]:
            raise RequestFailedError(f"Failed to create {kind}", status_code=400)
        return f"{kind}-{self.counters[kind]}"

    def create_project(self, name, workspace_id):
        self.calls.append(("create_project", name, workspace_id))
        return AsanaProject(gid=self._next("project"), name=name)

    def create_section(self, name, project_id):
        self.calls.append(("create_section", name, project_id))
        return AsanaSection(gid=self._next("section"), name=name)

    def create_task(self, params):
        self.calls.append(("create_task", params))
        return AsanaTask(gid=self._next("task"), name=params.name)

    def delete_project(self, project_id):
        self.deleted.append(project_id)


@pytest.fixture
def calls():
    return []


def make_syncer(fixture, calls, fail_board=None, fail_on=None):
    trello = FakeTrello(fixture, calls, fail_board=fail_board)
    asana = FakeAsana(calls, fail_on=fail_on)
    return TrelloToAsanaSyncer(trello, asana), asana


def creates(calls, name):
    return [call for call in calls if call[0] == name]


class TestSuccessfulSync:
    def test_returns_success_result(self, simple_board_fixture, calls):
        syncer, _ = make_syncer(simple_board_fixture, calls)

        result = syncer.sync_board_to_project("board123", "ws1")

        assert result == SyncResult(success=True, message="Sync completed successfully")
        assert result.to_dict() == {"success": True, "message": "Sync completed successfully"}

    def test_create_counts_match_board_shape(self, simple_board_fixture, calls):
        """1 project, L sections and C tasks"""
        syncer, _ = make_syncer(simple_board_fixture, calls)

        syncer.sync_board_to_project("board123", "ws1")

        total_cards = sum(len(cards) for cards in simple_board_fixture["cards"].values())
        assert len(creates(calls, "create_project")) == 1
        assert len(creates(calls, "create_section")) == len(simple_board_fixture["lists"])
        assert len(creates(calls, "create_task")) == total_cards == 3

    def test_calls_happen_in_board_list_card_order(self, simple_board_fixture, calls):
        syncer, _ = make_syncer(simple_board_fixture, calls)

        syncer.sync_board_to_project("board123", "ws1")

        sequence = [
            (call[0], call[1].name if call[0] == "create_task" else call[1]) for call in calls
        ]
        assert sequence == [
            ("get_board", "board123"),
            ("create_project", "Product Roadmap"),
            ("get_board_lists", "board123"),
            ("create_section", "To Do"),
            ("get_list_cards", "list-todo"),
            ("create_task", "Write README"),
            ("create_task", "Setup CI/CD"),
            ("create_section", "Doing"),
            ("get_list_cards", "list-doing"),
            ("create_task", "Add tests"),
            ("create_section", "Done"),
            ("get_list_cards", "list-done"),
        ]

    def test_tasks_reference_their_lists_section(self, simple_board_fixture, calls):
        syncer, _ = make_syncer(simple_board_fixture, calls)

        syncer.sync_board_to_project("board123", "ws1")

        tasks = {call[1].name: call[1] for call in creates(calls, "create_task")}
        assert tasks["Write README"].section == "section-1"
        assert tasks["Setup CI/CD"].section == "section-1"
        assert tasks["Add tests"].section == "section-2"
        for params in tasks.values():
            assert params.projects == ["project-1"]

    def test_sections_belong_to_created_project(self, simple_board_fixture, calls):
        syncer, _ = make_syncer(simple_board_fixture, calls)

        syncer.sync_board_to_project("board123", "ws1")

        assert {call[2] for call in creates(calls, "create_section")} == {"project-1"}

    def test_project_created_in_requested_workspace(self, simple_board_fixture, calls):
        syncer, _ = make_syncer(simple_board_fixture, calls)

        syncer.sync_board_to_project("board123", "ws-42")

        assert creates(calls, "create_project") == [
            ("create_project", "Product Roadmap", "ws-42")
        ]

    def test_lists_are_synced_in_position_order(self, simple_board_fixture, calls):
        simple_board_fixture["lists"].reverse()
        syncer, _ = make_syncer(simple_board_fixture, calls)

        syncer.sync_board_to_project("board123", "ws1")

        assert [call[1] for call in creates(calls, "create_section")] == [
            "To Do",
            "Doing",
            "Done",
        ]

    def test_empty_board_creates_only_project(self, calls):
        fixture = {"board": {"id": "b", "name": "Empty"}, "lists": [], "cards": {}}
        syncer, _ = make_syncer(fixture, calls)

        result = syncer.sync_board_to_project("b", "ws1")

        assert result.success is True
        assert len(creates(calls, "create_project")) == 1
        assert creates(calls, "create_section") == []

    def test_running_twice_creates_two_projects(self, simple_board_fixture, calls):
        """Sync is not idempotent: nothing is deduplicated between runs"""
        syncer, asana = make_syncer(simple_board_fixture, calls)

        syncer.sync_board_to_project("board123", "ws1")
        syncer.sync_board_to_project("board123", "ws1")

        assert len(creates(calls, "create_project")) == 2
        assert len(creates(calls, "create_section")) == 6
        assert len(creates(calls, "create_task")) == 6
        assert asana.counters["project"] == 2


class TestFailures:
    def test_board_read_failure_creates_nothing(self, simple_board_fixture, calls):
        syncer, _ = make_syncer(
            simple_board_fixture, calls, fail_board=NotFoundError("Board not found", 404)
        )

        with pytest.raises(SyncError) as exc_info:
            syncer.sync_board_to_project("missing", "ws1")

        assert str(exc_info.value) == "Sync failed: Board not found"
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert isinstance(exc_info.value.cause, NotFoundError)
        assert [call[0] for call in calls] == ["get_board"]

    def test_mid_run_failure_stops_without_rollback(self, simple_board_fixture, calls):
        """Second section create fails: no later creates, no deletes"""
        syncer, asana = make_syncer(simple_board_fixture, calls, fail_on={"section": 2})

        with pytest.raises(SyncError) as exc_info:
            syncer.sync_board_to_project("board123", "ws1")

        assert str(exc_info.value) == "Sync failed: Failed to create section"
        assert exc_info.value.kind is ErrorKind.REQUEST_FAILED
        # The failing call is the last thing that happened
        assert calls[-1] == ("create_section", "Doing", "project-1")
        assert len(creates(calls, "create_section")) == 2
        assert [call[1].name for call in creates(calls, "create_task")] == [
            "Write README",
            "Setup CI/CD",
        ]
        assert asana.deleted == []

    def test_task_failure_aborts_remaining_cards(self, simple_board_fixture, calls):
        syncer, _ = make_syncer(simple_board_fixture, calls, fail_on={"task": 1})

        with pytest.raises(SyncError, match="Sync failed: Failed to create task"):
            syncer.sync_board_to_project("board123", "ws1")

        assert len(creates(calls, "create_task")) == 1
        assert len(creates(calls, "create_section")) == 1

    def test_unexpected_errors_are_wrapped(self, simple_board_fixture, calls):
        syncer, _ = make_syncer(simple_board_fixture, calls, fail_board=KeyError("name"))

        with pytest.raises(SyncError) as exc_info:
            syncer.sync_board_to_project("board123", "ws1")

        assert exc_info.value.kind is ErrorKind.INTERNAL
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_failure_is_logged(self, simple_board_fixture, calls, caplog):
        syncer, _ = make_syncer(
            simple_board_fixture, calls, fail_board=NotFoundError("Board not found", 404)
        )

        with caplog.at_level("ERROR", logger="trello2asana"), pytest.raises(SyncError):
            syncer.sync_board_to_project("missing", "ws1")

        assert "Sync failed: Board not found" in caplog.text
