"""Progress state ownership: completion tracking, settings and persistence."""
import copy
import dataclasses
import logging
import time
from datetime import datetime

from interview_tracker.catalog import catalog_problems, find_topic_category, load_catalog
from interview_tracker.db import DEFAULT_DB_PATH, clear_snapshot, init_db, load_snapshot, save_snapshot
from interview_tracker.models import (
    Catalog, CategoryId, Difficulty, Problem, ProgressState, Section, StarStory, StudyDay,
)
from interview_tracker.planner import generate_study_plan
from interview_tracker.progress import (
    category_percentage, effective_problems, overall_progress, recompute_all,
)
from interview_tracker.snapshot import (
    SnapshotError, dumps, merge_snapshot, normalize_settings, parse_snapshot,
)

logger = logging.getLogger(__name__)


def _new_id(prefix: str, taken: set[str]) -> str:
    stamp = int(time.time() * 1000)
    while f"{prefix}-{stamp}" in taken:
        stamp += 1
    return f"{prefix}-{stamp}"


class ProgressStore:
    """Owns the ProgressState and flushes it after every mutation."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH, catalog: Catalog | None = None):
        self.db_path = db_path
        self.catalog = catalog or load_catalog()
        self.state = ProgressState()
        self.warnings: list[str] = []

    @classmethod
    def open(cls, db_path: str = DEFAULT_DB_PATH, catalog: Catalog | None = None) -> "ProgressStore":
        """Create the database if needed and load the last saved snapshot."""
        init_db(db_path)
        store = cls(db_path, catalog)
        store.warnings = store.load_or_init(load_snapshot(db_path))
        return store

    # -- persistence --------------------------------------------------------

    def flush(self) -> None:
        save_snapshot(self.db_path, dumps(self.state))

    def load_or_init(self, persisted: str | dict | None = None) -> list[str]:
        """Start from defaults, merging ``persisted`` over them when usable.

        Returns warnings for anything that was discarded.
        """
        self.state = ProgressState()
        warnings = []
        if persisted is not None:
            try:
                self.state, warnings = merge_snapshot(self.state, parse_snapshot(persisted))
            except SnapshotError as e:
                logger.warning("Discarding saved state: %s", e)
                warnings = [str(e)]
        self.state.progress_by_category = recompute_all(self.catalog, self.state)
        return warnings

    def import_snapshot(self, data: dict) -> list[str]:
        """Merge an imported document over the current state."""
        self.state, warnings = merge_snapshot(self.state, data)
        self.state.progress_by_category = recompute_all(self.catalog, self.state)
        self.flush()
        return warnings

    def reset_all(self) -> None:
        self.state = ProgressState()
        clear_snapshot(self.db_path)
        logger.info("All progress reset")

    # -- completion ---------------------------------------------------------

    def _recompute(self, category_id: CategoryId) -> None:
        self.state.progress_by_category[category_id] = category_percentage(
            self.catalog, self.state, category_id
        )

    def mark_topic_completion(self, topic_id: str, completed: bool) -> CategoryId | None:
        if completed:
            self.state.completed_topic_ids.add(topic_id)
        else:
            self.state.completed_topic_ids.discard(topic_id)
        category_id = find_topic_category(self.catalog, topic_id)
        if category_id is None:
            logger.warning("Topic not found: %s", topic_id)
        else:
            self._recompute(category_id)
        self.flush()
        return category_id

    @property
    def problems(self) -> list[Problem]:
        return effective_problems(self.catalog, self.state)

    def mark_problem_completion(self, problem_id: str, completed: bool) -> None:
        if completed:
            self.state.completed_problem_ids.add(problem_id)
        else:
            self.state.completed_problem_ids.discard(problem_id)
        if not any(p.id == problem_id for p in self.problems):
            logger.warning("Problem not found: %s", problem_id)
        self._recompute(CategoryId.LEETCODE)
        self.flush()

    def _editable_problems(self) -> list[Problem]:
        if self.state.leetcode_problems is None:
            self.state.leetcode_problems = copy.deepcopy(catalog_problems(self.catalog))
        return self.state.leetcode_problems

    def add_problem(self, name: str, link: str = "", difficulty: Difficulty | str = Difficulty.MEDIUM,
                    tags: list[str] | None = None) -> Problem:
        problems = self._editable_problems()
        problem = Problem(
            id=_new_id("lc", {p.id for p in problems}),
            name=name,
            difficulty=Difficulty(difficulty),
            link=link,
            tags=[t.strip() for t in tags or [] if t.strip()],
        )
        problems.append(problem)
        self._recompute(CategoryId.LEETCODE)
        self.flush()
        return problem

    def save_solution(self, problem_id: str, solution: str, notes: str = "") -> Problem | None:
        for problem in self._editable_problems():
            if problem.id == problem_id:
                problem.solution = solution
                problem.notes = notes
                self.flush()
                return problem
        logger.warning("Problem not found: %s", problem_id)
        return None

    # -- stories ------------------------------------------------------------

    def append_story(self, title: str, category: str = "", situation: str = "", task: str = "",
                     action: str = "", result: str = "",
                     applicable_questions: list[str] | None = None) -> StarStory:
        story = StarStory(
            id=_new_id("story", {s.id for s in self.state.star_stories}),
            title=title,
            category=category,
            situation=situation,
            task=task,
            action=action,
            result=result,
            applicable_questions=[q.strip() for q in applicable_questions or [] if q.strip()],
        )
        self.state.star_stories.append(story)
        self._recompute(CategoryId.BEHAVIORAL)
        self.flush()
        return story

    def prepare_answer(self, question: str, category: str = "", situation: str = "", task: str = "",
                       action: str = "", result: str = "") -> StarStory:
        """Write a new STAR story answering a question from the bank."""
        return self.append_story(
            title=f"{question[:40]}...",
            category=category,
            situation=situation,
            task=task,
            action=action,
            result=result,
            applicable_questions=[question],
        )

    def link_question(self, story_id: str, question: str) -> StarStory | None:
        """Record that an existing story also answers ``question``."""
        story = next((s for s in self.state.star_stories if s.id == story_id), None)
        if story is None:
            logger.warning("Story not found: %s", story_id)
            return None
        if question not in story.applicable_questions:
            story.applicable_questions.append(question)
            self.flush()
        return story

    # -- settings, navigation and plans ---------------------------------------

    def replace_settings(self, **changes) -> None:
        """Update settings by attribute name; raises ValueError/TypeError on bad values."""
        self.state.settings = dataclasses.replace(self.state.settings, **normalize_settings(changes))
        self.flush()

    def navigate(self, section: Section | str) -> None:
        self.state.current_section = Section(section)
        self.flush()

    def replace_study_plan(self, plan: list[StudyDay]) -> None:
        self.state.study_plan = list(plan)
        self.flush()

    def generate_study_plan(self, now: datetime | None = None) -> dict:
        """Build a plan for the configured target date and commit it on success."""
        target = self.state.settings.target_date
        if target is None:
            return {"error": "Please set a target interview date first"}
        result = generate_study_plan(target, self.state.completed_topic_ids, self.catalog, now=now)
        if "error" not in result:
            self.replace_study_plan(result["plan"])
        return result

    def overall_progress(self) -> int:
        return overall_progress(self.state.progress_by_category)
