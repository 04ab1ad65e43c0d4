"""Interactive CLI application."""
import asyncio
import logging
import os
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.syntax import Syntax
from rich.table import Table

from interview_tracker.catalog import (
    find_topic, get_category, load_behavioral_questions, search_topics,
)
from interview_tracker.dashboard import (
    get_category_rows, get_dashboard_stats, get_progress_color, get_topic_status, progress_bar,
)
from interview_tracker.db import DEFAULT_DB_PATH
from interview_tracker.importer import DEFAULT_EXPORT_NAME, export_data, import_data
from interview_tracker.loader import load_code_for_display
from interview_tracker.models import CategoryId, Difficulty, Section
from interview_tracker.planner import days_remaining, group_plan_by_week
from interview_tracker.recommend import focus_areas, recommend_by_priority, recommend_topics
from interview_tracker.snapshot import parse_time
from interview_tracker.store import ProgressStore

console = Console()

TOPIC_CATEGORIES = [c.value for c in CategoryId if c is not CategoryId.LEETCODE]


def configure_logging() -> None:
    level = logging.INFO if os.environ.get("INTERVIEW_TRACKER_DEBUG") else logging.WARNING
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def show_welcome():
    console.print(Panel(
        "[bold]Interview Preparation Tracker[/bold]\n[dim]Data structures, algorithms, system design and more[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    for cmd, desc, _ in COMMANDS:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def ask_date(prompt: str, default: date | None = None) -> date | None:
    """Blank input means no date; anything else must parse or ValueError is raised."""
    raw = Prompt.ask(prompt, default=default.isoformat() if default else "").strip()
    if not raw:
        return None
    return date.fromisoformat(raw)


def _status_markup(store: ProgressStore, topic_id: str) -> str:
    status = get_topic_status(store.state, topic_id)
    return f"[green]{status}[/green]" if status == "Completed" else f"[dim]{status}[/dim]"


def _topic_table(store: ProgressStore, title: str, rows) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Topic")
    table.add_column("Category")
    table.add_column("Status")
    for category_id, topic in rows:
        table.add_row(topic.id, topic.name, category_id.label, _status_markup(store, topic.id))
    return table


def cmd_dashboard(store: ProgressStore):
    stats = get_dashboard_stats(store.state, len(store.problems))
    score = stats["overall_progress"]
    color = get_progress_color(score)
    console.print(Panel(
        f"Topics completed: [bold]{stats['topics_completed']}[/bold]  |  "
        f"LeetCode: [bold]{stats['problems_completed']}/{stats['problem_count']}[/bold]  |  "
        f"Stories: [bold]{stats['stories_written']}[/bold]  |  "
        f"Days until target: [bold]{stats['days_until_target']}[/bold]",
        title="Interview Prep Dashboard", border_style="blue",
    ))
    console.print(f"\n  Overall Progress: [bold]{score}%[/bold] [{color}]{progress_bar(score)}[/{color}]\n")

    table = Table(title="Progress by Category")
    table.add_column("Category", style="cyan")
    table.add_column("Progress", justify="right")
    table.add_column("")
    table.add_column("Status")
    for row in get_category_rows(store.state):
        row_color = get_progress_color(row["score"])
        table.add_row(
            row["name"], f"{row['score']}%",
            f"[{row_color}]{progress_bar(row['score'], 10)}[/{row_color}]",
            f"[{row_color}]{row['label']}[/{row_color}]",
        )
    console.print(table)

    upcoming = recommend_by_priority(store.catalog, store.state.completed_topic_ids)
    if upcoming:
        console.print(_topic_table(store, "Next Topics to Study", upcoming))
    else:
        console.print("[green]Great job! You've completed all topics![/green]")


def cmd_browse(store: ProgressStore):
    current = store.state.current_section.value
    default = current if current in TOPIC_CATEGORIES else TOPIC_CATEGORIES[0]
    section = Prompt.ask("Category", choices=TOPIC_CATEGORIES, default=default)
    store.navigate(section)
    category_id = CategoryId(section)
    category = get_category(store.catalog, category_id)
    if category is None or not category.topics:
        console.print("[yellow]No topics in this category.[/yellow]")
        return
    pct = store.state.progress_by_category[category_id]
    console.print(f"\n[bold]{category.name}[/bold] [dim]{category.description}[/dim]  ({pct}% complete)")
    console.print(_topic_table(store, category.name, [(category_id, t) for t in category.topics]))


def show_implementation(impl):
    code = asyncio.run(load_code_for_display(impl.path))
    console.print(Syntax(code, impl.language or "java", line_numbers=True))


def cmd_topic(store: ProgressStore):
    topic_id = Prompt.ask("Topic ID").strip()
    found = find_topic(store.catalog, topic_id)
    if not found:
        console.print(f"[red]Topic not found: {topic_id}[/red]")
        return
    category_id, topic = found
    console.print(Panel(
        f"{topic.description}\n\n[dim]Category:[/dim] {category_id.label}  "
        f"[dim]Status:[/dim] {_status_markup(store, topic.id)}",
        title=topic.name, border_style="cyan",
    ))
    if topic.complexity:
        table = Table(title="Complexity")
        table.add_column("Operation", style="cyan")
        table.add_column("Complexity")
        for op, value in topic.complexity.items():
            table.add_row(op.capitalize(), value)
        console.print(table)
    for resource in topic.resources:
        console.print(f"  [link={resource.url}]{resource.name}[/link] [dim]{resource.url}[/dim]")
    if topic.implementations:
        for i, impl in enumerate(topic.implementations, 1):
            console.print(f"  [cyan]{i})[/cyan] {impl.name} [dim]({impl.path})[/dim]")
        choice = Prompt.ask("View implementation (number, Enter to skip)", default="").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(topic.implementations):
            show_implementation(topic.implementations[int(choice) - 1])
    completed = Confirm.ask("Mark as completed?", default=topic.id in store.state.completed_topic_ids)
    store.mark_topic_completion(topic.id, completed)


def _set_topic(store: ProgressStore, completed: bool):
    topic_id = Prompt.ask("Topic ID").strip()
    category_id = store.mark_topic_completion(topic_id, completed)
    if category_id is None:
        console.print(f"[yellow]Unknown topic: {topic_id}[/yellow]")
        return
    console.print(f"[green]{category_id.label}: {store.state.progress_by_category[category_id]}%[/green]")


def cmd_done(store: ProgressStore):
    _set_topic(store, True)


def cmd_undo(store: ProgressStore):
    _set_topic(store, False)


def cmd_problems(store: ProgressStore):
    store.navigate(Section.LEETCODE)
    difficulty = Prompt.ask("Difficulty", choices=["all"] + [d.value for d in Difficulty], default="all")
    status = Prompt.ask("Status", choices=["all", "completed", "not-started"], default="all")
    done = store.state.completed_problem_ids
    table = Table(title=f"LeetCode Problems ({store.state.progress_by_category[CategoryId.LEETCODE]}% complete)")
    table.add_column("ID", style="cyan")
    table.add_column("Problem")
    table.add_column("Difficulty")
    table.add_column("Tags")
    table.add_column("Solved")
    for p in store.problems:
        if difficulty != "all" and p.difficulty.value != difficulty:
            continue
        if status == "completed" and p.id not in done or status == "not-started" and p.id in done:
            continue
        table.add_row(p.id, p.name, p.difficulty.value, ", ".join(p.tags),
                      "[green]yes[/green]" if p.id in done else "")
    console.print(table)


def cmd_solve(store: ProgressStore):
    problem_id = Prompt.ask("Problem ID").strip()
    solved = Confirm.ask("Solved?", default=True)
    store.mark_problem_completion(problem_id, solved)
    console.print(f"[green]LeetCode: {store.state.progress_by_category[CategoryId.LEETCODE]}%[/green]")


def cmd_add_problem(store: ProgressStore):
    name = Prompt.ask("Problem name").strip()
    link = Prompt.ask("Link", default="").strip()
    difficulty = Prompt.ask("Difficulty", choices=[d.value for d in Difficulty], default="Medium")
    tags = Prompt.ask("Tags (comma separated)", default="").split(",")
    problem = store.add_problem(name, link=link, difficulty=difficulty, tags=tags)
    console.print(f"[green]Added {problem.name} ({problem.id})[/green]")


def cmd_solution(store: ProgressStore):
    problem_id = Prompt.ask("Problem ID").strip()
    problem = next((p for p in store.problems if p.id == problem_id), None)
    if problem is None:
        console.print(f"[red]Problem not found: {problem_id}[/red]")
        return
    if problem.solution:
        console.print(Syntax(problem.solution, "java", line_numbers=True))
    if problem.notes:
        console.print(f"[dim]{problem.notes}[/dim]")
    solution = Prompt.ask("Solution (use \\n for new lines, Enter to keep)", default="")
    if not solution:
        return
    notes = Prompt.ask("Notes", default=problem.notes or "")
    store.save_solution(problem.id, solution.replace("\\n", "\n"), notes)
    console.print("[green]Solution saved.[/green]")


def cmd_plan(store: ProgressStore):
    store.navigate(Section.STUDY_PLAN)
    days = days_remaining(store.state.settings.target_date)
    if days is not None:
        console.print(f"You have [bold]{days} days[/bold] until your target date.")
    if not store.state.study_plan:
        console.print("[dim]No study plan generated yet. Set a target date with 'generate'.[/dim]")
        return
    done = store.state.completed_topic_ids
    for start, week in group_plan_by_week(store.state.study_plan):
        table = Table(title=f"Week of {start:%b %d}")
        table.add_column("Day")
        table.add_column("Topics")
        for day in week:
            topics = [
                f"[green]✓ {t.name}[/green]" if t.id in done else f"☐ {t.name} [dim]({t.category.label})[/dim]"
                for t in day.topics
            ]
            table.add_row(f"{day.date:%a %b %d}", "\n".join(topics))
        console.print(table)


def cmd_generate(store: ProgressStore):
    try:
        target = ask_date("Target interview date (YYYY-MM-DD)", store.state.settings.target_date)
    except ValueError:
        console.print("[red]Target date must look like YYYY-MM-DD[/red]")
        return
    if target is not None:
        store.replace_settings(target_date=target)
    result = store.generate_study_plan()
    if "error" in result:
        console.print(f"[red]{result['error']}[/red]")
        return
    console.print(f"[green]{result['message']}[/green]")
    cmd_plan(store)


def cmd_focus(store: ProgressStore):
    for area in focus_areas(store.catalog, store.state):
        console.print(f"\n[bold]{area['category'].label}[/bold] {area['progress']}% complete")
        if not area["topics"]:
            console.print("  [green]All topics in this category are completed![/green]")
        for topic in area["topics"]:
            console.print(f"  Study {topic.name} [dim]({topic.id})[/dim]")
    picks = recommend_topics(store.catalog, store.state.completed_topic_ids)
    if picks:
        console.print(_topic_table(store, "Try Next", picks))


def cmd_stories(store: ProgressStore):
    store.navigate(Section.BEHAVIORAL)
    stories = store.state.star_stories
    console.print(f"[bold]Behavioral[/bold] {store.state.progress_by_category[CategoryId.BEHAVIORAL]}% complete")
    if not stories:
        console.print("[dim]No STAR stories yet. Use 'add-story' to write one.[/dim]")
        return
    for story in stories:
        console.print(Panel(
            f"[bold]S:[/bold] {story.situation}\n[bold]T:[/bold] {story.task}\n"
            f"[bold]A:[/bold] {story.action}\n[bold]R:[/bold] {story.result}",
            title=f"{story.title} [dim]({story.category})[/dim]", border_style="magenta",
        ))


def cmd_add_story(store: ProgressStore):
    categories = list(load_behavioral_questions())
    fields = {
        "title": Prompt.ask("Title"),
        "category": Prompt.ask("Category", choices=categories, default=categories[0]),
        "situation": Prompt.ask("Situation"),
        "task": Prompt.ask("Task"),
        "action": Prompt.ask("Action"),
        "result": Prompt.ask("Result"),
    }
    questions = Prompt.ask("Applicable questions (separate with |)", default="").split("|")
    story = store.append_story(applicable_questions=questions, **fields)
    console.print(f"[green]Saved story {story.title}.[/green]")


def cmd_questions(store: ProgressStore):
    bank = load_behavioral_questions()
    category = Prompt.ask("Question category", choices=list(bank), default=next(iter(bank)))
    questions = bank[category]
    for i, question in enumerate(questions, 1):
        console.print(f"  [cyan]{i})[/cyan] {question}")
    choice = Prompt.ask("Prepare an answer (number, Enter to skip)", default="").strip()
    if not (choice.isdigit() and 1 <= int(choice) <= len(questions)):
        return
    question = questions[int(choice) - 1]

    stories = store.state.star_stories
    if stories:
        for story in stories:
            console.print(f"  [cyan]{story.id}[/cyan] {story.title} [dim]({story.category})[/dim]")
        story_id = Prompt.ask("Use existing story ID (Enter to write a new one)", default="").strip()
        if story_id:
            if store.link_question(story_id, question) is None:
                console.print(f"[red]Story not found: {story_id}[/red]")
            else:
                console.print("[green]Question linked to story.[/green]")
            return

    story = store.prepare_answer(
        question,
        category=category,
        situation=Prompt.ask("Situation"),
        task=Prompt.ask("Task"),
        action=Prompt.ask("Action"),
        result=Prompt.ask("Result"),
    )
    console.print(f"[green]Saved story {story.title}.[/green]")


def cmd_settings(store: ProgressStore):
    current = store.state.settings
    try:
        target = ask_date("Target interview date (YYYY-MM-DD, blank for none)", current.target_date)
    except ValueError:
        console.print("[red]Target date must look like YYYY-MM-DD[/red]")
        return
    dark_mode = Confirm.ask("Enable dark mode?", default=current.dark_mode)
    reminders = Confirm.ask("Enable reminders?", default=current.reminder_enabled)
    try:
        reminder_time = parse_time(Prompt.ask("Reminder time (HH:MM)", default=current.reminder_time or "09:00"))
    except ValueError:
        console.print("[red]Reminder time must look like HH:MM[/red]")
        return
    store.replace_settings(
        target_date=target, dark_mode=dark_mode,
        reminder_enabled=reminders, reminder_time=reminder_time,
    )
    console.print("[green]Settings saved successfully[/green]")


def cmd_search(store: ProgressStore):
    query = Prompt.ask("Search")
    results = search_topics(store.catalog, query)
    console.print(f'Found {len(results)} results for "{query.strip()}"')
    if results:
        console.print(_topic_table(store, "Search Results", results))


def cmd_export(store: ProgressStore):
    path = Prompt.ask("Export to", default=DEFAULT_EXPORT_NAME)
    result = export_data(store.state, path)
    console.print(f"[green]Data exported to {result['filename']} ({result['length']} chars)[/green]")


def cmd_import(store: ProgressStore):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    result = import_data(store, file_path)
    color = "green" if result["ok"] else "red"
    console.print(f"[{color}]{result['message']}[/{color}]")
    for warning in result["warnings"]:
        console.print(f"[yellow]{warning}[/yellow]")


def cmd_reset(store: ProgressStore):
    if Confirm.ask("Are you sure you want to reset all data? This cannot be undone.", default=False):
        store.reset_all()
        console.print("[green]All data has been reset[/green]")


COMMANDS = [
    ("dashboard", "Overall progress + next topics", cmd_dashboard),
    ("browse", "Topics in a category", cmd_browse),
    ("topic", "Topic details and implementations", cmd_topic),
    ("done", "Mark a topic completed", cmd_done),
    ("undo", "Mark a topic not started", cmd_undo),
    ("problems", "LeetCode problem list", cmd_problems),
    ("solve", "Mark a problem solved/unsolved", cmd_solve),
    ("add-problem", "Add a LeetCode problem", cmd_add_problem),
    ("solution", "View or save a solution", cmd_solution),
    ("plan", "View study plan", cmd_plan),
    ("generate", "Generate a study plan", cmd_generate),
    ("focus", "Recommended focus areas", cmd_focus),
    ("stories", "STAR stories", cmd_stories),
    ("add-story", "Write a STAR story", cmd_add_story),
    ("questions", "Question bank and STAR answers", cmd_questions),
    ("settings", "Target date and preferences", cmd_settings),
    ("search", "Search topics", cmd_search),
    ("export", "Export data to JSON", cmd_export),
    ("import", "Import exported data", cmd_import),
    ("reset", "Reset all data", cmd_reset),
    ("quit", "Exit", None),
]


def dispatch(store: ProgressStore, choice: str) -> bool:
    """Run one command; returns False when the user asked to quit."""
    if choice in ("quit", "exit", "q"):
        console.print("[dim]Good luck with your interviews![/dim]")
        return False
    handlers = {cmd: handler for cmd, _, handler in COMMANDS if handler}
    if choice not in handlers:
        console.print("[red]Unknown command. Try again.[/red]")
        return True
    handlers[choice](store)
    return True


def main():
    configure_logging()
    store = ProgressStore.open(DEFAULT_DB_PATH)
    for warning in store.warnings:
        console.print(f"[yellow]Saved data could not be fully restored: {warning}[/yellow]")

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="dashboard").strip().lower()
        try:
            if not dispatch(store, choice):
                break
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
