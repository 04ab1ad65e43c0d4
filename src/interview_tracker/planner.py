"""Study plan generation against a target interview date."""
import logging
import math
from collections import deque
from datetime import date, datetime, time, timedelta

from interview_tracker.catalog import iter_topics
from interview_tracker.models import Catalog, CategoryId, PlannedTopic, StudyDay

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def days_until_target(target_date: date, now: datetime | None = None) -> int:
    """Whole days from ``now`` until midnight at the start of ``target_date``, rounded up."""
    now = now or datetime.now()
    target = datetime.combine(target_date, time.min)
    return math.ceil((target - now) / ONE_DAY)


def days_remaining(target_date: date | None, now: datetime | None = None) -> int | None:
    """Countdown for display: None when no target is set, never negative."""
    if target_date is None:
        return None
    return max(0, days_until_target(target_date, now))


def _next_category(categories: list[CategoryId], queues: dict, start: int) -> CategoryId | None:
    # Round-robin slot first, then the next category that still has topics.
    for offset in range(len(categories)):
        category = categories[(start + offset) % len(categories)]
        if queues[category]:
            return category
    return None


def generate_study_plan(
    target_date: date,
    completed_topic_ids: set[str],
    catalog: Catalog,
    now: datetime | None = None,
) -> dict:
    """Spread incomplete topics over the days left before ``target_date``.

    Returns ``{"error": ...}`` when the target is not in the future, else
    ``{"message": ..., "plan": [StudyDay, ...]}``. Each day takes its topics
    round-robin across categories so subjects are mixed within a day.
    """
    now = now or datetime.now()
    days = days_until_target(target_date, now)
    if days <= 0:
        return {"error": "Target date must be in the future"}

    incomplete = [
        PlannedTopic(id=topic.id, name=topic.name, category=category_id)
        for category_id, topic in iter_topics(catalog)
        if topic.id not in completed_topic_ids
    ]
    if not incomplete:
        return {"message": "All topics completed! You're ready for your interview.", "plan": []}

    topics_per_day = math.ceil(len(incomplete) / days)
    queues: dict[CategoryId, deque] = {}
    for planned in incomplete:
        queues.setdefault(planned.category, deque()).append(planned)
    categories = list(queues)

    plan = []
    remaining = len(incomplete)
    current_day = now.date()
    while remaining:
        day_topics = []
        for i in range(topics_per_day):
            category = _next_category(categories, queues, i % len(categories))
            if category is None:
                break
            day_topics.append(queues[category].popleft())
            remaining -= 1
        if day_topics:
            plan.append(StudyDay(date=current_day, topics=day_topics))
        current_day += ONE_DAY

    logger.info("Planned %d topics over %d days (%d per day)", len(incomplete), len(plan), topics_per_day)
    return {"message": f"Created study plan with {len(plan)} days", "plan": plan}


def week_start(day: date) -> date:
    """The Sunday that starts the week containing ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def group_plan_by_week(plan: list[StudyDay]) -> list[tuple[date, list[StudyDay]]]:
    weeks: dict[date, list[StudyDay]] = {}
    for day in sorted(plan, key=lambda d: d.date):
        weeks.setdefault(week_start(day.date), []).append(day)
    return list(weeks.items())
