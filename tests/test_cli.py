"""Tests for the command line interface."""

from __future__ import annotations

import httpx
import pytest
import yaml
from task_tracker.cli import EXIT_PERSISTENCE_FAILURE, EXIT_REPORTED_ERROR, app
from task_tracker.storage.remote import RemoteBackend
from typer.testing import CliRunner

from tests.conftest import API_KEY, BASE_URL

runner = CliRunner()


@pytest.fixture
def invoke(state_file):
    """Run a command against a state document in tmp_path."""

    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(app, ["--file", str(state_file), *args], input=input)

    return _invoke


def _document(state_file) -> dict:
    return yaml.safe_load(state_file.read_text())


class TestTaskCommands:
    """Tests for task commands in local mode."""

    def test_createtask_with_options(self, invoke, state_file):
        result = invoke("createtask", "--name", "Write report", "--description", "Q3", "--eta", "Fri")

        assert result.exit_code == 0
        assert "Task created successfully!" in result.output
        assert _document(state_file)["tasks"] == [
            {"id": 1, "name": "Write report", "description": "Q3", "eta": "Fri", "category": None}
        ]

    def test_createtask_prompts_for_missing_values(self, invoke, state_file):
        result = invoke("createtask", input="Buy milk\n2L\nToday\n")

        assert result.exit_code == 0
        assert "Enter task name" in result.output
        assert _document(state_file)["tasks"][0]["name"] == "Buy milk"

    def test_edittask(self, invoke, state_file):
        invoke("createtask", "--name", "A", "--description", "a", "--eta", "1")

        result = invoke("edittask", "--id", "1", "--field", "eta", "--value", "2")

        assert result.exit_code == 0
        assert "Task updated successfully!" in result.output
        assert _document(state_file)["tasks"][0]["eta"] == "2"

    def test_edittask_invalid_field(self, invoke):
        invoke("createtask", "--name", "A", "--description", "a", "--eta", "1")

        result = invoke("edittask", "--id", "1", "--field", "owner", "--value", "me")

        assert result.exit_code == EXIT_REPORTED_ERROR
        assert "Invalid field 'owner'" in result.output

    def test_deltask_not_found(self, invoke):
        result = invoke("deltask", "--id", "7")

        assert result.exit_code == EXIT_REPORTED_ERROR
        assert "Task 7 not found" in result.output

    def test_deltask(self, invoke, state_file):
        invoke("createtask", "--name", "A", "--description", "a", "--eta", "1")

        result = invoke("deltask", "--id", "1")

        assert result.exit_code == 0
        assert _document(state_file)["tasks"] == []

    def test_non_integer_id_is_rejected(self, invoke):
        result = invoke("deltask", "--id", "abc")

        assert result.exit_code != 0


class TestCategoryCommands:
    """Tests for category commands in local mode."""

    def test_create_and_assign(self, invoke, state_file):
        invoke("createtask", "--name", "A", "--description", "a", "--eta", "1")
        invoke("createcategory", "--name", "Work")

        result = invoke("assigncategory", "--task-id", "1", "--category-id", "1")

        assert result.exit_code == 0
        assert "Task 1 assigned to category Work." in result.output
        assert _document(state_file)["tasks"][0]["category"] == "Work"

    def test_editcategory(self, invoke, state_file):
        invoke("createcategory", "--name", "Work")

        result = invoke("editcategory", "--id", "1", "--name", "Job")

        assert result.exit_code == 0
        assert "Category updated successfully!" in result.output
        assert _document(state_file)["categories"] == [{"id": 1, "name": "Job"}]

    def test_delcategory(self, invoke, state_file):
        invoke("createcategory", "--name", "Work")

        result = invoke("delcategory", "--id", "1")

        assert result.exit_code == 0
        assert "Category deleted successfully!" in result.output
        assert _document(state_file)["categories"] == []

    def test_assign_unknown_category(self, invoke):
        invoke("createtask", "--name", "A", "--description", "a", "--eta", "1")

        result = invoke("assigncategory", "--task-id", "1", "--category-id", "4")

        assert result.exit_code == EXIT_REPORTED_ERROR
        assert "Category 4 not found" in result.output


class TestListAndTheme:
    """Tests for listtasks, changetheme and theme."""

    def test_listtasks_empty(self, invoke):
        result = invoke("listtasks")

        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_listtasks_groups(self, invoke):
        invoke("createtask", "--name", "A", "--description", "a", "--eta", "1")
        invoke("createtask", "--name", "B", "--description", "b", "--eta", "2")
        invoke("createcategory", "--name", "Work")
        invoke("assigncategory", "--task-id", "2", "--category-id", "1")

        result = invoke("listtasks")

        assert result.exit_code == 0
        assert "Uncategorized" in result.output
        assert "Work" in result.output
        assert "B [ID2]" in result.output

    def test_changetheme(self, invoke, state_file):
        result = invoke("changetheme", "--theme", "Forest")

        assert result.exit_code == 0
        assert "Theme changed successfully!" in result.output
        assert _document(state_file)["theme"] == "Forest"

    def test_changetheme_invalid(self, invoke, state_file):
        result = invoke("changetheme", "--theme", "Midnight")

        assert result.exit_code == EXIT_REPORTED_ERROR
        assert "Invalid theme 'Midnight'" in result.output
        assert _document(state_file)["theme"] == "Desert"

    def test_theme_shows_accent(self, invoke):
        invoke("changetheme", "--theme", "Oasis")

        result = invoke("theme")

        assert result.exit_code == 0
        assert "Oasis" in result.output
        assert "cyan" in result.output


class TestFailures:
    """Tests for configuration and persistence failures."""

    def test_corrupt_document_aborts(self, invoke, state_file):
        state_file.write_text("tasks: [unclosed\n")

        result = invoke("listtasks")

        assert result.exit_code == EXIT_PERSISTENCE_FAILURE
        assert "Unable to parse" in result.output

    def test_remote_mode_without_settings(self):
        result = runner.invoke(app, ["--mode", "remote", "listtasks"])

        assert result.exit_code == EXIT_REPORTED_ERROR
        assert "Configuration error" in result.output

    def test_invalid_id_policy(self, state_file):
        result = runner.invoke(app, ["--file", str(state_file), "--id-policy", "x", "listtasks"])

        assert result.exit_code == EXIT_REPORTED_ERROR
        assert "Invalid id policy" in result.output

    def test_next_max_policy_option(self, state_file):
        args = ["--file", str(state_file), "--id-policy", "next-max"]
        for name in ("A", "B", "C"):
            runner.invoke(app, [*args, "createtask", "--name", name, "--description", "", "--eta", ""])
        runner.invoke(app, [*args, "deltask", "--id", "2"])

        runner.invoke(app, [*args, "createtask", "--name", "D", "--description", "", "--eta", ""])

        assert [t["id"] for t in _document(state_file)["tasks"]] == [1, 3, 4]

    def test_options_override_environment_mode_settings(self, monkeypatch, service):
        monkeypatch.setenv("TASK_TRACKER_MODE", "remote")
        monkeypatch.setattr(
            "task_tracker.cli.create_backend",
            lambda config: RemoteBackend(config, transport=service.transport),
        )
        service.add("GET", "/theme", body={"theme": "Desert"})
        service.add("GET", "/tasks", body=[])

        result = runner.invoke(app, ["--base-url", BASE_URL, "--api-key", API_KEY, "listtasks"])

        assert result.exit_code == 0
        assert "No tasks found." in result.output
        assert service.last_request.headers["api-key"] == API_KEY

    def test_id_policy_option_overrides_invalid_environment(self, monkeypatch, state_file):
        monkeypatch.setenv("TASK_TRACKER_ID_POLICY", "bogus")

        result = runner.invoke(app, ["--file", str(state_file), "--id-policy", "count", "listtasks"])

        assert result.exit_code == 0
        assert "Configuration error" not in result.output

    def test_invalid_environment_without_override(self, monkeypatch, state_file):
        monkeypatch.setenv("TASK_TRACKER_ID_POLICY", "bogus")

        result = runner.invoke(app, ["--file", str(state_file), "listtasks"])

        assert result.exit_code == EXIT_REPORTED_ERROR
        assert "Invalid id policy 'bogus'" in result.output


class TestRemoteMode:
    """Tests for commands routed to the remote backend."""

    @pytest.fixture
    def invoke_remote(self, monkeypatch, service):
        def backend_factory(config):
            return RemoteBackend(config, transport=service.transport)

        monkeypatch.setattr("task_tracker.cli.create_backend", backend_factory)
        args = ["--mode", "remote", "--base-url", BASE_URL, "--api-key", API_KEY]

        def _invoke(*command: str):
            return runner.invoke(app, [*args, *command])

        return _invoke

    def test_createtask(self, invoke_remote, service):
        service.add("GET", "/theme", body={"theme": "Oasis"})
        service.add("POST", "/tasks", status=201)

        result = invoke_remote("createtask", "--name", "A", "--description", "a", "--eta", "1")

        assert result.exit_code == 0
        assert "Task created successfully!" in result.output
        assert service.last_json()["id"] == 0

    def test_unexpected_status_is_reported(self, invoke_remote, service):
        service.add("GET", "/theme", body={"theme": "Oasis"})
        service.add("DELETE", "/tasks/3", status=500, body="database down")

        result = invoke_remote("deltask", "--id", "3")

        assert result.exit_code == EXIT_REPORTED_ERROR
        assert "HTTP 500: database down" in result.output

    def test_theme_lookup_failure_uses_default(self, invoke_remote, service):
        service.fail("GET", "/theme", httpx.ConnectError("refused"))
        service.add("GET", "/tasks", body=[])

        result = invoke_remote("listtasks")

        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_listtasks_groups_by_resolved_name(self, invoke_remote, service, sample_tasks_response):
        service.add("GET", "/theme", body="Forest")
        service.add("GET", "/tasks", body=sample_tasks_response)
        service.add("GET", "/categories/7", body={"id": 7, "name": "Work"})

        result = invoke_remote("listtasks")

        assert result.exit_code == 0
        for label in ("Work", "No Category", "Unknown"):
            assert label in result.output

    def test_theme_shows_palette(self, invoke_remote, service):
        service.add("GET", "/theme", body={"theme": "Snow"})

        result = invoke_remote("theme")

        assert result.exit_code == 0
        assert "#B0E0E6" in result.output

    def test_assign_reports_category_id(self, invoke_remote, service):
        service.add("GET", "/theme", body={"theme": "Desert"})
        service.add("POST", "/tasks/2/assign-category")

        result = invoke_remote("assigncategory", "--task-id", "2", "--category-id", "5")

        assert result.exit_code == 0
        assert "Task 2 assigned to category 5." in result.output
