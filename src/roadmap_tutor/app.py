"""Interactive CLI application."""
import logging
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt, IntPrompt
from rich.table import Table

from roadmap_tutor.config import Settings, load_settings
from roadmap_tutor.db import init_db
from roadmap_tutor.exceptions import DayLockedError
from roadmap_tutor.flashcards import ReviewSession, open_review
from roadmap_tutor.importer import import_lessons
from roadmap_tutor.lessons import get_available_days, get_lesson, get_lesson_titles
from roadmap_tutor.levels import TOTAL_DAYS
from roadmap_tutor.models import DayStatus, SessionStatus
from roadmap_tutor.progress import complete_day, get_completed_days, get_user_progress
from roadmap_tutor.roadmap import build_roadmap, open_day
from roadmap_tutor.seed import is_seeded, seed_lessons

console = Console()
logger = logging.getLogger(__name__)

EXIT_WORDS = ("q", "menu")

STATUS_LABELS = {
    DayStatus.COMPLETED: "[green]Done[/green]",
    DayStatus.CURRENT: "[bold cyan]Current[/bold cyan]",
    DayStatus.AVAILABLE: "[cyan]Available[/cyan]",
    DayStatus.LOCKED: "[dim]Locked[/dim]",
    DayStatus.COMING_SOON: "[yellow]Coming soon[/yellow]",
}


class SessionExitRequested(Exception):
    """User asked to leave a drill and go back to the menu."""


def session_prompt(prompt: str, **kwargs) -> str:
    value = Prompt.ask(prompt, **kwargs)
    if value.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return value


def progress_bar(percent: float, color: str = "green", width: int = 20) -> str:
    filled = min(width, int(percent / (100 / width)))
    return f"[{color}]{'█' * filled}{'░' * (width - filled)}[/{color}]"


def show_welcome():
    console.print(Panel(
        "[bold]Roadmap to B2[/bold]\n[dim]120 days, 4 levels, 30 days each[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("roadmap", "Course roadmap and level progress"),
        ("lesson", "Open an unlocked lesson"),
        ("flashcards", "Review today's flashcards"),
        ("complete", "Mark today's lesson as done"),
        ("import", "Add lessons from a JSON/YAML file"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_review_summary(session: ReviewSession) -> None:
    summary = session.summary()
    table = Table(title=f"Day {session.day} review")
    table.add_column("Correct", justify="right", style="green")
    table.add_column("Incorrect", justify="right", style="red")
    table.add_column("New", justify="right")
    table.add_column("Learning", justify="right")
    table.add_column("Mastered", justify="right")
    table.add_row(
        str(summary["correct"]), str(summary["incorrect"]),
        str(summary["new"]), str(summary["learning"]), str(summary["mastered"]),
    )
    console.print(table)


def run_flashcard_session(session: ReviewSession, delay: float = 0.0) -> None:
    """Drill the session until its queue is empty.

    Raises SessionExitRequested when the user types q; everything answered so
    far is already saved.
    """
    if session.status is SessionStatus.NO_CARDS:
        console.print("[yellow]No flashcards available yet. Check back after the next lesson![/yellow]")
        return
    console.print(f"\n[bold]Flashcard Review[/bold]: day {session.day}, {len(session.cards)} cards\n")
    try:
        while session.status is SessionStatus.ACTIVE:
            card = session.current_card
            console.print(Panel(
                f"[bold]{card.word}[/bold]",
                title=f"{len(session.queue)} in queue", border_style="cyan",
            ))
            session_prompt("[dim]Press Enter to reveal answer (q to leave)[/dim]", default="")
            session.flip()
            back = card.translation + (f"\n[dim]{card.example}[/dim]" if card.example else "")
            console.print(Panel(back, border_style="green"))
            known = session_prompt("Did you know it?", choices=["y", "n", "q"]) == "y"
            pending = session.answer(known)
            console.print("[green]Correct![/green]" if known else "[red]Back in the queue soon.[/red]")
            if delay:
                time.sleep(delay)
            session.advance(pending)
            console.print()
    finally:
        session.close()
    console.print("[bold green]All cards mastered for this pass![/bold green]")
    show_review_summary(session)


def cmd_roadmap(db_path: str, user_id: str):
    progress = get_user_progress(db_path, user_id)
    roadmap = build_roadmap(progress.current_day, get_available_days(db_path), get_lesson_titles(db_path))
    course = roadmap["course"]

    console.print(Panel(
        f"Day [bold]{roadmap['current_day']}[/bold] of {TOTAL_DAYS}  {progress_bar(course['progress'])}\n"
        f"[cyan]{course['available']} available[/cyan]  |  "
        f"[green]{course['completed']} completed[/green]  |  "
        f"[yellow]{course['coming_soon']} coming soon[/yellow]",
        title="Roadmap to B2", border_style="blue",
    ))

    for key, title in (("first_week", "First week"), ("upcoming", "Coming next")):
        nodes = roadmap[key]
        if not nodes:
            continue
        table = Table(title=title)
        table.add_column("Day", justify="right")
        table.add_column("Lesson")
        table.add_column("Level")
        table.add_column("Status")
        for node in nodes:
            marker = " ←" if node["status"] is DayStatus.CURRENT else ""
            table.add_row(str(node["day"]), node["title"] + marker, node["level"], STATUS_LABELS[node["status"]])
        console.print(table)

    levels = Table(title="Levels")
    levels.add_column("Level", style="cyan")
    levels.add_column("Days")
    levels.add_column("Available", justify="right")
    levels.add_column("Progress")
    for entry in roadmap["levels"]:
        level = entry["level"]
        levels.add_row(
            level.name,
            f"{level.first_day}-{level.last_day}",
            f"{entry['available']}/{entry['total']}",
            f"{progress_bar(entry['progress'], level.color, width=10)} {entry['progress']:.0f}%",
        )
    console.print(levels)


def cmd_lesson(db_path: str, user_id: str):
    progress = get_user_progress(db_path, user_id)
    day = IntPrompt.ask("Day", default=progress.current_day)
    try:
        open_day(day, progress.current_day, get_available_days(db_path))
    except DayLockedError as e:
        console.print(f"[red]{e}.[/red] [dim]Finish day {progress.current_day} first, or wait for new content.[/dim]")
        return
    lesson = get_lesson(db_path, day)
    title = lesson["title"] or f"Day {day} lesson"
    console.print(Panel(f"[bold]{title}[/bold]", title=f"Day {day} · {lesson['level']}"))
    if not lesson["flashcards"]:
        console.print("[dim]This lesson has no vocabulary cards.[/dim]")
        return
    table = Table(title="Vocabulary")
    table.add_column("Word", style="cyan")
    table.add_column("Translation")
    table.add_column("Example", style="dim")
    for card in lesson["flashcards"]:
        table.add_row(
            card.get("front") or card.get("word") or "",
            card.get("back") or card.get("translation") or "",
            card.get("example") or "",
        )
    console.print(table)


def cmd_flashcards(db_path: str, user_id: str, settings: Settings):
    progress = get_user_progress(db_path, user_id)
    session = open_review(db_path, user_id, progress.current_day)
    try:
        run_flashcard_session(session, delay=settings.advance_delay)
    except SessionExitRequested:
        console.print("[dim]Progress saved. Pick up where you left off any time.[/dim]")
        return
    if session.status is SessionStatus.COMPLETED:
        again = Prompt.ask("Shuffle and start over?", choices=["y", "n"], default="n")
        if again == "y":
            session.reset()
            try:
                run_flashcard_session(session, delay=settings.advance_delay)
            except SessionExitRequested:
                console.print("[dim]Progress saved.[/dim]")


def cmd_complete(db_path: str, user_id: str):
    progress = get_user_progress(db_path, user_id)
    day = progress.current_day
    try:
        open_day(day, day, get_available_days(db_path))
    except DayLockedError:
        console.print(f"[yellow]Day {day} is coming soon. You can complete it once it's published.[/yellow]")
        return
    if day in get_completed_days(db_path, user_id):
        console.print("[green]You've finished the whole course![/green]")
        return
    updated = complete_day(db_path, user_id, day)
    if updated.current_day == day:
        console.print("[bold green]Day 120 done. You've reached B2![/bold green]")
    else:
        console.print(f"[green]Day {day} complete![/green] Day {updated.current_day} ({updated.current_level}) is unlocked.")


def cmd_import(db_path: str):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    result = import_lessons(db_path, file_path)
    days = ", ".join(str(d) for d in result["days"]) or "none"
    console.print(f"[green]Imported {result['filename']}: days {days} ({result['cards']} cards)[/green]")


def main():
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    db_path = settings.db_path
    user_id = settings.user_id
    init_db(db_path)
    first_run = not is_seeded(db_path)
    if first_run:
        console.print("[dim]Setting up for first use...[/dim]")
    seed_lessons(db_path)
    if first_run:
        console.print("[green]Ready![/green]\n")

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="roadmap").strip().lower()
        try:
            if choice == "roadmap":
                cmd_roadmap(db_path, user_id)
            elif choice == "lesson":
                cmd_lesson(db_path, user_id)
            elif choice == "flashcards":
                cmd_flashcards(db_path, user_id, settings)
            elif choice == "complete":
                cmd_complete(db_path, user_id)
            elif choice == "import":
                cmd_import(db_path)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]See you tomorrow![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("Command %r failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
