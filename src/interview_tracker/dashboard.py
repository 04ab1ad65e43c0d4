"""Dashboard statistics and progress labels."""
from datetime import datetime

from interview_tracker.models import CategoryId, ProgressState
from interview_tracker.planner import days_remaining
from interview_tracker.progress import overall_progress


def get_progress_label(score: float) -> str:
    if score >= 100:
        return "COMPLETE"
    elif score >= 75:
        return "ALMOST THERE"
    elif score >= 40:
        return "IN PROGRESS"
    elif score > 0:
        return "STARTED"
    return "NOT STARTED"


def get_progress_color(score: float) -> str:
    if score >= 75:
        return "green"
    elif score >= 40:
        return "yellow"
    elif score > 0:
        return "dark_orange"
    return "red"


def get_topic_status(state: ProgressState, topic_id: str) -> str:
    return "Completed" if topic_id in state.completed_topic_ids else "Not Started"


def progress_bar(score: float, width: int = 20) -> str:
    filled = int(score * width / 100)
    return "█" * filled + "░" * (width - filled)


def get_category_rows(state: ProgressState) -> list[dict]:
    rows = []
    for category in CategoryId:
        score = state.progress_by_category.get(category, 0)
        rows.append({
            "category": category,
            "name": category.label,
            "score": score,
            "label": get_progress_label(score),
        })
    return rows


def get_dashboard_stats(state: ProgressState, problem_count: int, now: datetime | None = None) -> dict:
    days = days_remaining(state.settings.target_date, now)
    return {
        "overall_progress": overall_progress(state.progress_by_category),
        "topics_completed": len(state.completed_topic_ids),
        "problems_completed": len(state.completed_problem_ids),
        "problem_count": problem_count,
        "stories_written": len(state.star_stories),
        "days_until_target": "--" if days is None else days,
    }
