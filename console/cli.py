"""CLI interface for managing student records."""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

import typer

from console.config import RosterConfig, load_config
from roster_core.errors import FormatError, RosterError
from roster_core.schemas import Student
from store.repository import LoadStatus, StudentStore

logger = logging.getLogger(__name__)

app = typer.Typer(help="Student record manager", invoke_without_command=True)


def _fail(message: str) -> NoReturn:
    typer.secho(f"❌ {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def _open_store(config: RosterConfig) -> StudentStore:
    try:
        return StudentStore(config.data_file, skip_malformed=config.skip_malformed)
    except FormatError as e:
        _fail(f"Data file {config.data_file} is malformed: {e}")


def _print_students(students: list[Student], title: str) -> None:
    typer.echo("\n" + "=" * 80)
    typer.echo(f"  📚 {title}")
    typer.echo("=" * 80)
    for index, student in enumerate(students, start=1):
        typer.echo(f"{index}. {student.display()}")
    typer.echo("=" * 80)
    typer.echo(f"Total students: {len(students)}")


def _report_rejected(rejected: dict[str, str]) -> None:
    for field, reason in rejected.items():
        typer.secho(
            f"⚠️  Invalid {field} ({reason}). Keeping current {field}.",
            fg=typer.colors.YELLOW,
        )


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to roster YAML config"
    ),
    data: Optional[str] = typer.Option(
        None, "--data", help="Data file path (overrides config)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Manage student records stored in a comma-delimited text file.

    Without a command, the interactive menu is started.
    """
    try:
        config = load_config(config_path) if config_path else RosterConfig()
    except FileNotFoundError as e:
        _fail(str(e))
    except ValueError as e:
        _fail(f"Invalid config: {e}")

    if data:
        config.data_file = data

    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        run_menu(_open_store(config))


@app.command()
def add(
    ctx: typer.Context,
    student_id: int = typer.Argument(..., help="Unique student ID"),
    name: str = typer.Argument(..., help="Full name"),
    age: int = typer.Argument(..., help="Age (1-149)"),
    grade: str = typer.Argument(..., help="Grade or class label"),
    email: str = typer.Argument(..., help="Email address"),
) -> None:
    """Add a new student."""
    store = _open_store(ctx.obj)
    student = Student(id=student_id, name=name, age=age, grade=grade, email=email)
    try:
        store.add(student)
    except RosterError as e:
        _fail(str(e))
    typer.secho("✅ Student added successfully!", fg=typer.colors.GREEN)


@app.command("list")
def list_students(ctx: typer.Context) -> None:
    """List all students in stored order."""
    store = _open_store(ctx.obj)
    students = store.all()
    if not students:
        typer.secho("📝 No students found.", fg=typer.colors.YELLOW)
        return
    _print_students(students, "ALL STUDENTS")


@app.command()
def show(
    ctx: typer.Context,
    student_id: int = typer.Argument(..., help="Student ID"),
) -> None:
    """Show one student by ID."""
    store = _open_store(ctx.obj)
    try:
        student = store.get(student_id)
    except RosterError as e:
        _fail(str(e))
    typer.echo(student.display())


@app.command()
def search(
    ctx: typer.Context,
    student_id: Optional[int] = typer.Option(None, "--id", help="Exact student ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Name or part of a name"),
) -> None:
    """Search students by ID or by name substring (case-insensitive)."""
    if (student_id is None) == (name is None):
        _fail("Pass exactly one of --id or --name")

    store = _open_store(ctx.obj)
    if student_id is not None:
        student = store.find_by_id(student_id)
        if student is None:
            _fail(f"No student found with ID: {student_id}")
        typer.secho("✅ Student Found:", fg=typer.colors.GREEN)
        typer.echo(student.display())
        return

    found = store.find_by_name(name)
    if not found:
        _fail(f"No students found with name containing: {name}")
    typer.secho(f"✅ Found {len(found)} student(s):", fg=typer.colors.GREEN)
    for index, student in enumerate(found, start=1):
        typer.echo(f"{index}. {student.display()}")


@app.command()
def update(
    ctx: typer.Context,
    student_id: int = typer.Argument(..., help="Student ID to update"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    age: Optional[int] = typer.Option(None, "--age", help="New age (1-149)"),
    grade: Optional[str] = typer.Option(None, "--grade", help="New grade"),
    email: Optional[str] = typer.Option(None, "--email", help="New email"),
) -> None:
    """Update some fields of a student; omitted fields keep their value."""
    changes = {
        key: value
        for key, value in {"name": name, "age": age, "grade": grade, "email": email}.items()
        if value is not None
    }
    if not changes:
        _fail("Nothing to update: pass at least one of --name, --age, --grade, --email")

    store = _open_store(ctx.obj)
    try:
        result = store.update(student_id, changes)
    except RosterError as e:
        _fail(str(e))
    _report_rejected(result.rejected)
    typer.secho("✅ Student updated successfully!", fg=typer.colors.GREEN)
    typer.echo(result.student.display())


@app.command()
def delete(
    ctx: typer.Context,
    student_id: int = typer.Argument(..., help="Student ID to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a student after confirmation."""
    store = _open_store(ctx.obj)
    student = store.find_by_id(student_id)
    if student is None:
        _fail(f"Student with ID {student_id} not found")

    typer.echo(f"Student to delete: {student.display()}")
    if not yes and not typer.confirm("Are you sure?", default=False):
        typer.secho("Deletion cancelled.", fg=typer.colors.YELLOW)
        return
    try:
        store.delete(student_id)
    except RosterError as e:
        _fail(str(e))
    typer.secho("✅ Student deleted successfully!", fg=typer.colors.GREEN)


# -- interactive menu ------------------------------------------------------

MENU_OPTIONS = (
    "➕ Add New Student",
    "📋 View All Students",
    "✏️  Update Student",
    "🗑️  Delete Student",
    "🔍 Search Student",
    "🚪 Exit",
)


def _error(message: str) -> None:
    typer.secho(f"❌ {message}", fg=typer.colors.RED)


def _ask(text: str) -> str:
    return typer.prompt(text, default="", show_default=False).strip()


def _ask_int(text: str) -> int | None:
    raw = _ask(text)
    try:
        return int(raw)
    except ValueError:
        _error("Please enter a valid number!")
        return None


def _menu_add(store: StudentStore) -> None:
    student_id = _ask_int("Enter Student ID")
    if student_id is None:
        return
    if store.exists(student_id):
        _error(f"Student ID {student_id} already exists!")
        return
    name = _ask("Enter Student Name")
    age = _ask_int("Enter Student Age")
    if age is None:
        return
    grade = _ask("Enter Student Grade")
    email = _ask("Enter Student Email")
    try:
        store.add(Student(id=student_id, name=name, age=age, grade=grade, email=email))
    except RosterError as e:
        _error(str(e))
        return
    typer.secho("✅ Student added successfully!", fg=typer.colors.GREEN)


def _menu_view(store: StudentStore) -> None:
    students = store.all()
    if not students:
        typer.echo("📝 No students found in the system.")
        return
    _print_students(students, "ALL STUDENTS")


def _menu_update(store: StudentStore) -> None:
    student_id = _ask_int("Enter Student ID to update")
    if student_id is None:
        return
    student = store.find_by_id(student_id)
    if student is None:
        _error(f"Student with ID {student_id} not found!")
        return

    typer.echo(f"\n📝 Current details: {student.display()}")
    typer.echo("🔄 Enter new details (press Enter to keep current value):")
    changes: dict[str, object] = {}
    name = _ask(f"New name [{student.name}]")
    if name:
        changes["name"] = name
    raw_age = _ask(f"New age [{student.age}]")
    if raw_age:
        try:
            changes["age"] = int(raw_age)
        except ValueError:
            typer.secho("⚠️  Invalid age format. Keeping current age.", fg=typer.colors.YELLOW)
    grade = _ask(f"New grade [{student.grade}]")
    if grade:
        changes["grade"] = grade
    email = _ask(f"New email [{student.email}]")
    if email:
        changes["email"] = email

    try:
        result = store.update(student_id, changes)
    except RosterError as e:
        _error(str(e))
        return
    _report_rejected(result.rejected)
    typer.secho("✅ Student updated successfully!", fg=typer.colors.GREEN)


def _menu_delete(store: StudentStore) -> None:
    student_id = _ask_int("Enter Student ID to delete")
    if student_id is None:
        return
    student = store.find_by_id(student_id)
    if student is None:
        _error(f"Student with ID {student_id} not found!")
        return
    typer.echo(f"Student to delete: {student.display()}")
    if not typer.confirm("Are you sure?", default=False):
        typer.echo("Deletion cancelled.")
        return
    try:
        store.delete(student_id)
    except RosterError as e:
        _error(str(e))
        return
    typer.secho("✅ Student deleted successfully!", fg=typer.colors.GREEN)


def _menu_search(store: StudentStore) -> None:
    typer.echo("1. Search by ID")
    typer.echo("2. Search by Name")
    search_type = _ask("Choose search type (1 or 2)")
    if search_type == "1":
        student_id = _ask_int("Enter Student ID")
        if student_id is None:
            return
        student = store.find_by_id(student_id)
        if student is None:
            _error(f"No student found with ID: {student_id}")
            return
        typer.secho("✅ Student Found:", fg=typer.colors.GREEN)
        typer.echo(student.display())
    elif search_type == "2":
        name = _ask("Enter Student Name (or part of name)")
        found = store.find_by_name(name)
        if not found:
            _error(f"No students found with name containing: {name}")
            return
        typer.secho(f"✅ Found {len(found)} student(s):", fg=typer.colors.GREEN)
        for index, student in enumerate(found, start=1):
            typer.echo(f"{index}. {student.display()}")
    else:
        _error("Invalid search type!")


_MENU_ACTIONS = {
    "1": _menu_add,
    "2": _menu_view,
    "3": _menu_update,
    "4": _menu_delete,
    "5": _menu_search,
}


def run_menu(store: StudentStore) -> None:
    """Interactive loop over the store until the user picks Exit."""
    typer.secho("🎓 Welcome to the Student Management System!", fg=typer.colors.BLUE)
    if store.last_load is not None:
        if store.last_load.status == LoadStatus.MISSING:
            typer.echo("📁 No existing data file found. Starting fresh.")
        elif store.last_load.status == LoadStatus.FAILED:
            _error(f"Error loading from file: {store.last_load.error}")
        else:
            typer.echo(f"📁 Loaded {store.last_load.loaded} students from file.")

    while True:
        typer.echo("\n" + "=" * 40)
        typer.echo("           📚 MAIN MENU")
        typer.echo("=" * 40)
        for number, label in enumerate(MENU_OPTIONS, start=1):
            typer.echo(f"{number}. {label}")
        typer.echo("=" * 40)

        choice = _ask(f"Choose an option (1-{len(MENU_OPTIONS)})")
        if choice == str(len(MENU_OPTIONS)):
            typer.echo("👋 Thank you for using the Student Management System!")
            typer.echo("💾 All data has been saved automatically.")
            return
        action = _MENU_ACTIONS.get(choice)
        if action is None:
            _error(f"Invalid choice! Please select 1-{len(MENU_OPTIONS)}.")
            continue
        logger.debug(f"Menu choice {choice}")
        action(store)


@app.command()
def menu(ctx: typer.Context) -> None:
    """Start the interactive menu."""
    run_menu(_open_store(ctx.obj))


if __name__ == "__main__":
    app()
