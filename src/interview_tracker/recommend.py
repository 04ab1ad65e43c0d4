"""Pick what to study next from the incomplete topics."""
import random

from interview_tracker.catalog import get_category, iter_topics
from interview_tracker.models import Catalog, CategoryId, ProgressState, Topic


def incomplete_topics(catalog: Catalog, completed: set[str]) -> list[tuple[CategoryId, Topic]]:
    return [(c, t) for c, t in iter_topics(catalog) if t.id not in completed]


def recommend_topics(
    catalog: Catalog,
    completed: set[str],
    count: int = 5,
    rng: random.Random | None = None,
) -> list[tuple[CategoryId, Topic]]:
    """Topics with at least one implementation come first.

    Order within each group is random on purpose; pass a seeded ``rng``
    for a reproducible order.
    """
    rng = rng or random.Random()
    candidates = incomplete_topics(catalog, completed)
    with_impl = [c for c in candidates if c[1].implementations]
    without_impl = [c for c in candidates if not c[1].implementations]
    rng.shuffle(with_impl)
    rng.shuffle(without_impl)
    return (with_impl + without_impl)[:count]


def recommend_by_priority(
    catalog: Catalog, completed: set[str], count: int = 5
) -> list[tuple[CategoryId, Topic]]:
    """Lowest priority number first; topics without one count as 5."""
    candidates = incomplete_topics(catalog, completed)
    return sorted(candidates, key=lambda c: c[1].effective_priority)[:count]


def focus_areas(
    catalog: Catalog, state: ProgressState, limit: int = 3, per_category: int = 3
) -> list[dict]:
    """The least-progressed categories with a few incomplete topics from each."""
    ranked = sorted(CategoryId, key=lambda c: state.progress_by_category.get(c, 0))
    areas = []
    for category_id in ranked[:limit]:
        category = get_category(catalog, category_id)
        topics = [
            t for t in (category.topics if category else [])
            if t.id not in state.completed_topic_ids
        ]
        areas.append({
            "category": category_id,
            "progress": state.progress_by_category.get(category_id, 0),
            "topics": topics[:per_category],
        })
    return areas
