"""Tests for CLI commands: add, attempt, due, list, show, edit, delete, stats, backups, config."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from leetsrs.infrastructure.storage.json_store import JsonFileProblemRepository
from leetsrs.interface.cli import app

runner = CliRunner()


@pytest.fixture
def data_file(mock_home, tmp_path):
    return tmp_path / "problems.json"


def invoke(data_file, *args, **kwargs):
    return runner.invoke(app, ["--data-file", str(data_file), *args], **kwargs)


def add_problem(data_file, name="Two Sum", difficulty="Easy"):
    result = invoke(data_file, "add", name, "--difficulty", difficulty, "--category", "Array")
    assert result.exit_code == 0, result.output
    return JsonFileProblemRepository(data_file).load_all()[-1]


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "spaced-repetition tracker" in result.stdout
    assert "attempt" in result.stdout
    assert "stats" in result.stdout


# --- Problems ---


def test_add_command(data_file):
    problem = add_problem(data_file)
    assert problem.name == "Two Sum"
    assert problem.category == "Array"
    assert problem.status.value == "new"


def test_attempt_command(data_file):
    problem = add_problem(data_file)

    result = invoke(data_file, "attempt", problem.id, "--fail", "--rating", "5")

    assert result.exit_code == 0, result.output
    assert "status=learning" in result.stdout
    assert "interval=1d" in result.stdout
    stored = JsonFileProblemRepository(data_file).get(problem.id)
    assert len(stored.attempts) == 1
    assert stored.attempts[0].success is False


def test_attempt_unknown_problem(data_file):
    result = invoke(data_file, "attempt", "missing", "--rating", "1")
    assert result.exit_code == 1
    assert "Problem not found" in result.output


def test_due_command(data_file):
    add_problem(data_file, "Valid Parentheses", "Hard")
    add_problem(data_file, "Two Sum", "Easy")
    add_problem(data_file, "Contains Duplicate", "Easy")

    result = invoke(data_file, "due")

    assert result.exit_code == 0
    assert "Due today: 2" in result.stdout
    assert "Two Sum" in result.stdout
    assert "Contains Duplicate" in result.stdout
    assert "Valid Parentheses" not in result.stdout


def test_due_command_empty(data_file):
    result = invoke(data_file, "due")
    assert result.exit_code == 0
    assert "Nothing due today" in result.stdout


def test_list_and_show(data_file):
    problem = add_problem(data_file)
    invoke(data_file, "attempt", problem.id, "--success", "--rating", "1", "--notes", "hash map")

    listed = invoke(data_file, "list", "--view", "all")
    assert listed.exit_code == 0
    assert problem.id in listed.stdout

    shown = invoke(data_file, "show", problem.id)
    assert shown.exit_code == 0
    assert "attempts=1" in shown.stdout
    assert "hash map" in shown.stdout


def test_edit_command(data_file):
    problem = add_problem(data_file)
    result = invoke(data_file, "edit", problem.id, "--name", "2Sum", "--difficulty", "Medium")

    assert result.exit_code == 0, result.output
    stored = JsonFileProblemRepository(data_file).get(problem.id)
    assert stored.name == "2Sum"
    assert stored.difficulty.value == "Medium"


def test_delete_command(data_file):
    problem = add_problem(data_file)

    aborted = invoke(data_file, "delete", problem.id, input="n\n")
    assert aborted.exit_code != 0
    assert JsonFileProblemRepository(data_file).get(problem.id) is not None

    result = invoke(data_file, "delete", problem.id, "--force")
    assert result.exit_code == 0
    assert JsonFileProblemRepository(data_file).load_all() == []


# --- Stats ---


def test_stats_json(data_file):
    add_problem(data_file)
    result = invoke(data_file, "stats", "--json")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["totalProblems"] == 1
    assert data["problemsDueToday"] == 1
    assert set(data["activityHeatmap"]) == {"windowYear", "calendarYear"}


def test_stats_text(data_file):
    add_problem(data_file)
    result = invoke(data_file, "stats")
    assert result.exit_code == 0
    assert "Problems: 1" in result.stdout
    assert "window_year" in result.stdout


# --- Backup ---


def test_export_import(data_file, tmp_path):
    problem = add_problem(data_file)
    backup = tmp_path / "backup.json"

    exported = invoke(data_file, "export", str(backup))
    assert exported.exit_code == 0
    assert json.loads(backup.read_text())["problems"][0]["id"] == problem.id

    other = tmp_path / "other.json"
    imported = invoke(other, "import", str(backup), "--force")
    assert imported.exit_code == 0, imported.output
    assert "Imported 1 problems" in imported.stdout
    assert [p.id for p in JsonFileProblemRepository(other).load_all()] == [problem.id]


def test_import_invalid_backup(data_file, tmp_path):
    add_problem(data_file)
    bad = tmp_path / "bad.json"
    bad.write_text('{"version": 1, "problems": "nope"}')

    result = invoke(data_file, "import", str(bad), "--force")

    assert result.exit_code == 1
    assert "Invalid backup format" in result.output
    assert len(JsonFileProblemRepository(data_file).load_all()) == 1


# --- Config / Server ---


def test_config_show_command(data_file):
    result = invoke(data_file, "config", "show")

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["data_file"] == str(data_file.resolve())
    assert output["interval_policy"] == "doubling"



def test_writes_log_file_in_log_dir(data_file, tmp_path, monkeypatch):
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("LEETSRS_LOG_DIR", str(log_dir))

    result = invoke(data_file, "-v", "-v", "add", "Two Sum", "--difficulty", "Easy")

    assert result.exit_code == 0, result.output
    assert "Added problem" in (log_dir / "leetsrs.log").read_text()

@patch("uvicorn.run")
def test_serve_command(mock_run):
    result = runner.invoke(app, ["serve", "--port", "9000"])
    assert result.exit_code == 0
    mock_run.assert_called_with("leetsrs.server:app", host="127.0.0.1", port=9000, reload=False)
