"""Completion percentage calculations."""
import math
from typing import Iterable, assert_never

from interview_tracker.catalog import catalog_problems, get_category
from interview_tracker.models import Catalog, CategoryId, Problem, ProgressRule, ProgressState

# Number of STAR stories that counts as a fully prepared behavioral category
STORY_TARGET = 10


def _percent(done: int, total: int) -> int:
    if total == 0:
        return 0
    return 100 * done // total


def topic_percentage(topic_ids: Iterable[str], completed: set[str]) -> int:
    ids = set(topic_ids)
    return _percent(len(ids & completed), len(ids))


def behavioral_percentage(story_count: int) -> int:
    return min(100, _percent(story_count, STORY_TARGET))


def problem_percentage(problems: list[Problem], completed: set[str]) -> int:
    # Stale ids of removed problems never count towards completion.
    ids = {p.id for p in problems}
    return _percent(len(ids & completed), len(ids))


def effective_problems(catalog: Catalog, state: ProgressState) -> list[Problem]:
    if state.leetcode_problems is not None:
        return state.leetcode_problems
    return catalog_problems(catalog)


def category_percentage(catalog: Catalog, state: ProgressState, category_id: CategoryId) -> int:
    rule = category_id.rule
    if rule is ProgressRule.TOPICS:
        category = get_category(catalog, category_id)
        topic_ids = [t.id for t in category.topics] if category else []
        return topic_percentage(topic_ids, state.completed_topic_ids)
    elif rule is ProgressRule.STORIES:
        return behavioral_percentage(len(state.star_stories))
    elif rule is ProgressRule.PROBLEMS:
        return problem_percentage(effective_problems(catalog, state), state.completed_problem_ids)
    else:
        assert_never(rule)


def recompute_all(catalog: Catalog, state: ProgressState) -> dict[CategoryId, int]:
    """Derive every category percentage from scratch."""
    return {c: category_percentage(catalog, state, c) for c in CategoryId}


def overall_progress(progress_by_category: dict[CategoryId, int]) -> int:
    """Unweighted mean over the six categories, rounded half up."""
    total = sum(progress_by_category.get(c, 0) for c in CategoryId)
    return math.floor(total / len(CategoryId) + 0.5)
