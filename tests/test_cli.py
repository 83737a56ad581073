"""Tests for the roster CLI and interactive menu."""

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from console.cli import app
from store.repository import StudentStore

runner = CliRunner()

HEADER = "id,name,age,grade,email\n"


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "students.csv"


@pytest.fixture
def seeded_path(data_path: Path) -> Path:
    data_path.write_text(
        HEADER + "1,Anna,20,A,anna@x.com\n2,Bob,21,B,bob@x.com\n3,Anand,22,C,anand@x.com\n",
        encoding="utf-8",
    )
    return data_path


def _invoke(data_path: Path, *args: str, input: str | None = None):
    return runner.invoke(app, ["--data", str(data_path), *args], input=input)


class TestCommands:
    def test_add_persists_record(self, data_path: Path) -> None:
        result = _invoke(data_path, "add", "1", "Ann", "20", "A", "ann@x.com")

        assert result.exit_code == 0
        assert "Student added successfully" in result.output
        assert data_path.read_text(encoding="utf-8") == HEADER + "1,Ann,20,A,ann@x.com\n"

    def test_add_duplicate_fails(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "add", "2", "Other", "30", "D", "o@x.com")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_add_invalid_email_fails(self, data_path: Path) -> None:
        result = _invoke(data_path, "add", "1", "Ann", "20", "A", "ann.x.com")

        assert result.exit_code == 1
        assert "email" in result.output
        assert not data_path.exists()

    def test_list_empty(self, data_path: Path) -> None:
        result = _invoke(data_path, "list")

        assert result.exit_code == 0
        assert "No students found" in result.output

    def test_list_shows_all_in_order(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "list")

        assert result.exit_code == 0
        assert "1. ID: 1 | Name: Anna" in result.output
        assert "3. ID: 3 | Name: Anand" in result.output
        assert "Total students: 3" in result.output

    def test_show_missing_fails(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "show", "9")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_search_by_name(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "search", "--name", "AN")

        assert result.exit_code == 0
        assert "Found 2 student(s)" in result.output
        assert "Bob" not in result.output

    def test_search_requires_exactly_one_criterion(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "search")

        assert result.exit_code == 1
        assert "exactly one" in result.output

    def test_update_partial(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "update", "2", "--grade", "A+")

        assert result.exit_code == 0
        student = StudentStore(seeded_path).get(2)
        assert (student.name, student.age, student.grade) == ("Bob", 21, "A+")

    def test_update_rejected_age_keeps_value(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "update", "2", "--age", "200")

        assert result.exit_code == 0
        assert "Keeping current age" in result.output
        assert StudentStore(seeded_path).get(2).age == 21

    def test_update_without_fields_fails(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "update", "2")

        assert result.exit_code == 1
        assert "Nothing to update" in result.output

    def test_delete_confirmed(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "delete", "2", input="y\n")

        assert result.exit_code == 0
        assert "Student deleted successfully" in result.output
        assert not StudentStore(seeded_path).exists(2)

    def test_delete_cancelled(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "delete", "2", input="n\n")

        assert result.exit_code == 0
        assert "Deletion cancelled" in result.output
        assert StudentStore(seeded_path).exists(2)

    def test_delete_yes_flag_skips_prompt(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "delete", "3", "--yes")

        assert result.exit_code == 0
        assert StudentStore(seeded_path).count() == 2

    def test_malformed_data_file_fails(self, data_path: Path) -> None:
        data_path.write_text(HEADER + "1,Ann\n", encoding="utf-8")

        result = _invoke(data_path, "list")

        assert result.exit_code == 1
        assert "malformed" in result.output

    def test_config_file_sets_data_path(self, tmp_path: Path) -> None:
        data_path = tmp_path / "from_config.csv"
        config_path = tmp_path / "roster.yaml"
        with open(config_path, "w") as f:
            yaml.dump({"data_file": str(data_path)}, f)

        result = runner.invoke(
            app, ["--config", str(config_path), "add", "5", "Eve", "19", "C", "eve@x.com"]
        )

        assert result.exit_code == 0
        assert StudentStore(data_path).exists(5)

    def test_missing_config_file_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "list"])

        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestMenu:
    def test_menu_starts_fresh_and_exits(self, data_path: Path) -> None:
        result = _invoke(data_path, input="6\n")

        assert result.exit_code == 0
        assert "Starting fresh" in result.output
        assert "MAIN MENU" in result.output
        assert "Thank you" in result.output

    def test_menu_add_then_view(self, data_path: Path) -> None:
        result = _invoke(data_path, "menu", input="1\n1\nAnn\n20\nA\nann@x.com\n2\n6\n")

        assert result.exit_code == 0
        assert "Student added successfully" in result.output
        assert "Total students: 1" in result.output
        assert StudentStore(data_path).get(1).name == "Ann"

    def test_menu_add_reports_validation_error(self, data_path: Path) -> None:
        result = _invoke(data_path, "menu", input="1\n1\nAnn\n0\nA\nann@x.com\n6\n")

        assert result.exit_code == 0
        assert "age" in result.output
        assert not data_path.exists()

    def test_menu_update_keeps_blank_fields(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "menu", input="3\n2\n\n35\n\n\n6\n")

        assert result.exit_code == 0
        assert "Student updated successfully" in result.output
        student = StudentStore(seeded_path).get(2)
        assert (student.name, student.age, student.email) == ("Bob", 35, "bob@x.com")

    def test_menu_delete_and_search(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "menu", input="4\n1\ny\n5\n2\nan\n6\n")

        assert result.exit_code == 0
        assert "Loaded 3 students" in result.output
        assert "Found 1 student(s)" in result.output
        assert not StudentStore(seeded_path).exists(1)

    def test_menu_recovers_from_bad_input(self, seeded_path: Path) -> None:
        result = _invoke(seeded_path, "menu", input="9\nabc\n3\nxyz\n6\n")

        assert result.exit_code == 0
        assert "Invalid choice" in result.output
        assert "valid number" in result.output
