"""Interactive CLI application."""
from datetime import date, datetime

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from roadmap_tracker.config import DEFAULT_CONFIG, DEFAULT_DB_PATH
from roadmap_tracker.dashboard import (
    get_readiness_color, get_readiness_label, pattern_mastery, progress_stats,
)
from roadmap_tracker.db import (
    add_item, add_next_month, delete_item, delete_month, get_current_month_id, init_db,
    list_months, load_items, save_item,
)
from roadmap_tracker.focus import todays_focus
from roadmap_tracker.logging_config import configure_logging
from roadmap_tracker.models import Confidence, Difficulty, Status
from roadmap_tracker.revision import due_items, forecast, mark_status, submit_review
from roadmap_tracker.roadmap import compute_plan, current_phase

console = Console()

RATINGS = {"w": Confidence.WEAK, "m": Confidence.MEDIUM, "s": Confidence.STRONG}
CONFIDENCE_STYLE = {
    Confidence.WEAK: "red",
    Confidence.MEDIUM: "yellow",
    Confidence.STRONG: "green",
    Confidence.NONE: "dim",
}


class SessionExitRequested(Exception):
    """Raised when the user types 'q' in the middle of a session."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt + " [dim](q to stop)[/dim]", **kwargs)
    if answer.strip().lower() == "q":
        raise SessionExitRequested()
    return answer


def show_welcome():
    console.print(Panel(
        "[bold]Monthly Roadmap Tracker[/bold]\n[dim]Solve, revise, polish[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("roadmap", "Phases and daily targets for this month"),
        ("today", "Today's focus for the current phase"),
        ("revise", "Spaced review of due problems"),
        ("dashboard", "Progress + pattern mastery"),
        ("add", "Add a problem"),
        ("solve", "Mark a problem solved"),
        ("status", "Change a problem's status"),
        ("delete", "Remove a problem"),
        ("month", "Start the next month"),
        ("drop-month", "Delete a month and its problems"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def _fmt(day) -> str:
    return day.strftime("%b %d")


def _confidence(conf: Confidence) -> str:
    style = CONFIDENCE_STYLE[conf]
    return f"[{style}]{conf.value}[/{style}]"


def cmd_roadmap(db_path: str, now: datetime):
    month_id = get_current_month_id(db_path, now.date())
    items = load_items(db_path, month_id)
    plan = compute_plan(month_id, len(items), DEFAULT_CONFIG)
    active = current_phase(plan, now)
    console.print(Panel(
        f"{plan.total_days} Day Cycle  |  {len(items)} Questions  |  Buffer: {plan.buffer_days} Days\n"
        f"Daily (M-F): [bold]{plan.daily_capacity.weekday}[/bold]  |  "
        f"Weekend: [bold]{plan.daily_capacity.weekend}[/bold]  |  "
        f"Target: {_fmt(plan.phases[-1].end_date)}",
        title=f"Adaptive Roadmap - {month_id}", border_style="blue",
    ))
    table = Table(title="Phases")
    table.add_column("#", justify="right")
    table.add_column("Phase", style="cyan")
    table.add_column("Dates")
    table.add_column("Days", justify="right")
    table.add_column("Focus")
    table.add_column("Goal")
    for phase in plan.phases:
        marker = " ←" if phase.id == active else ""
        table.add_row(
            str(phase.id),
            phase.name + marker,
            f"{_fmt(phase.start_date)} - {_fmt(phase.end_date)}",
            str(phase.duration),
            phase.focus,
            phase.goal,
        )
    console.print(table)


def cmd_today(db_path: str, now: datetime):
    month_id = get_current_month_id(db_path, now.date())
    items = load_items(db_path, month_id)
    plan = compute_plan(month_id, len(items), DEFAULT_CONFIG)
    focus = todays_focus(items, plan, now, DEFAULT_CONFIG)
    console.print(Panel(f"[dim]{focus.subtitle}[/dim]", title=focus.title, border_style="cyan"))
    if not focus.items:
        console.print("[yellow]Nothing queued for today.[/yellow]")
        return
    for item in focus.items:
        console.print(f"  [cyan]{item.id}[/cyan] {item.name} ({item.pattern}) {_confidence(item.confidence)}")


def run_revision_session(db_path: str, items: list, now: datetime) -> int:
    """Prompt for a new rating on each item and save it. Returns the number reviewed."""
    if not items:
        console.print("[green]Nothing due! Your memory is fresh.[/green]")
        return 0
    console.print(f"\n[bold]Revision Session[/bold] - {len(items)} due\n")
    reviewed = 0
    for i, item in enumerate(items, 1):
        console.print(Panel(
            f"{item.name}\n[dim]{item.pattern} | {item.difficulty.value} | "
            f"revised {item.revision_count}x[/dim]",
            title=f"Problem {i}/{len(items)}", border_style="cyan",
        ))
        answer = session_prompt("Rate recall (w=weak, m=medium, s=strong)", choices=["w", "m", "s", "q"])
        save_item(db_path, submit_review(item, RATINGS[answer], now))
        reviewed += 1
    console.print(f"[bold]Reviewed {reviewed} problem(s).[/bold]\n")
    return reviewed


def cmd_revise(db_path: str, now: datetime):
    month_id = get_current_month_id(db_path, now.date())
    items = load_items(db_path, month_id)
    try:
        run_revision_session(db_path, due_items(items, now, DEFAULT_CONFIG), now)
    except SessionExitRequested:
        console.print("[dim]Session stopped. Progress saved.[/dim]")
    upcoming = forecast(load_items(db_path, month_id), now, config=DEFAULT_CONFIG)
    if upcoming:
        console.print("[bold]Coming up:[/bold]")
        for entry in upcoming:
            console.print(f"  {entry.item.name} - in {entry.days_until_due} day(s)")


def cmd_dashboard(db_path: str, now: datetime):
    month_id = get_current_month_id(db_path, now.date())
    items = load_items(db_path, month_id)
    stats = progress_stats(items)
    label = get_readiness_label(stats["strong_pct"], stats["weak_pct"])
    color = get_readiness_color(stats["strong_pct"])

    console.print(Panel(f"[bold]{month_id}[/bold]", title="Progress Dashboard", border_style="blue"))
    bar_filled = int(stats["solved_pct"] / 5)
    bar = f"[{color}]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/{color}]"
    console.print(f"\n  Solved: [bold]{stats['solved']}/{stats['total']}[/bold] {bar} [{color}]{label}[/{color}]\n")
    console.print(f"  Strong (goal ≥ 65%): [bold]{stats['strong_pct']}%[/bold]  |  "
                  f"Weak (goal ≤ 5%): [bold]{stats['weak_pct']}%[/bold]  |  "
                  f"Revisions: [bold]{stats['revisions']}[/bold]  |  "
                  f"Due now: [bold]{len(due_items(items, now, DEFAULT_CONFIG))}[/bold]")

    table = Table(title="Pattern Mastery")
    table.add_column("Pattern", style="cyan")
    table.add_column("Strong", justify="right")
    table.add_column("Status")
    for row in pattern_mastery(items, DEFAULT_CONFIG):
        status = "[green]Mastered[/green]" if row["mastered"] else f"{row['strong']}/{row['total']}"
        table.add_row(row["pattern"], f"{row['strong_pct']}%", status)
    console.print(table)


def cmd_add(db_path: str, now: datetime):
    month_id = get_current_month_id(db_path, now.date())
    name = Prompt.ask("Problem name")
    pattern = Prompt.ask("Pattern", default="General")
    difficulty = Prompt.ask("Difficulty", choices=[d.value for d in Difficulty], default=Difficulty.EASY.value)
    scheduled = Prompt.ask("Scheduled date", default=now.date().isoformat())
    item = add_item(
        db_path, month_id, name, pattern=pattern, difficulty=Difficulty(difficulty),
        scheduled_date=date.fromisoformat(scheduled),
    )
    console.print(f"[green]Added {item.name} ({item.id}) to {month_id}[/green]")


def pick_item(items: list):
    for n, item in enumerate(items, 1):
        console.print(f"  [cyan]{n}[/cyan]) {item.name} [dim]{item.status.value}[/dim]")
    choice = IntPrompt.ask("Which one", choices=[str(n) for n in range(1, len(items) + 1)])
    return items[choice - 1]


def cmd_solve(db_path: str, now: datetime):
    month_id = get_current_month_id(db_path, now.date())
    open_items = [i for i in load_items(db_path, month_id) if i.status is not Status.SOLVED]
    if not open_items:
        console.print("[green]Everything this month is solved.[/green]")
        return
    item = mark_status(pick_item(open_items), Status.SOLVED, now)
    save_item(db_path, item)
    days = DEFAULT_CONFIG.interval_for(item.confidence)
    console.print(f"[green]{item.name} solved. First review in {days} day(s).[/green]")


def cmd_status(db_path: str, now: datetime):
    month_id = get_current_month_id(db_path, now.date())
    items = load_items(db_path, month_id)
    if not items:
        console.print("[yellow]No problems this month.[/yellow]")
        return
    item = pick_item(items)
    new_status = Prompt.ask("New status", choices=[s.value for s in Status], default=item.status.value)
    item = mark_status(item, Status(new_status), now)
    save_item(db_path, item)
    console.print(f"[green]{item.name} is now {item.status.value}.[/green]")


def cmd_delete(db_path: str, now: datetime):
    month_id = get_current_month_id(db_path, now.date())
    items = load_items(db_path, month_id)
    if not items:
        console.print("[yellow]No problems this month.[/yellow]")
        return
    item = pick_item(items)
    if not Confirm.ask(f"Delete {item.name}?", default=False):
        return
    delete_item(db_path, item.id)
    console.print(f"[green]Deleted {item.name}.[/green]")


def cmd_month(db_path: str, now: datetime):
    month_id = add_next_month(db_path, now.date())
    console.print(f"[green]Now tracking {month_id}[/green] "
                  f"({len(list_months(db_path))} month(s) total)")


def cmd_drop_month(db_path: str, now: datetime):
    current = get_current_month_id(db_path, now.date())
    months = [m.id for m in list_months(db_path)]
    month_id = Prompt.ask("Month to delete", choices=months, default=current)
    count = len(load_items(db_path, month_id))
    if not Confirm.ask(f"Delete {month_id} and its {count} problem(s)?", default=False):
        return
    current = delete_month(db_path, month_id, now.date())
    console.print(f"[green]Deleted {month_id}. Now tracking {current}.[/green]")


COMMANDS = {
    "roadmap": cmd_roadmap,
    "today": cmd_today,
    "revise": cmd_revise,
    "dashboard": cmd_dashboard,
    "add": cmd_add,
    "solve": cmd_solve,
    "status": cmd_status,
    "delete": cmd_delete,
    "month": cmd_month,
    "drop-month": cmd_drop_month,
}


def main():
    configure_logging()
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    get_current_month_id(db_path, datetime.now().date())

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="today").strip().lower()
        try:
            if choice in ("quit", "exit", "q"):
                console.print("[dim]Keep the streak going![/dim]")
                break
            command = COMMANDS.get(choice)
            if command is None:
                console.print("[red]Unknown command. Try again.[/red]")
                continue
            command(db_path, datetime.now())
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.exception("Command {} failed", choice)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
