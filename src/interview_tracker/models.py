"""Data classes for the interview tracker domain model."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

DEFAULT_PRIORITY = 5


class ProgressRule(Enum):
    TOPICS = "topics"
    STORIES = "stories"
    PROBLEMS = "problems"


class CategoryId(str, Enum):
    """The six fixed top-level subject areas, in display order."""

    DATA_STRUCTURES = "data-structures"
    ALGORITHMS = "algorithms"
    JAVA_CONCEPTS = "java-concepts"
    SYSTEM_DESIGN = "system-design"
    BEHAVIORAL = "behavioral"
    LEETCODE = "leetcode"

    @property
    def rule(self) -> ProgressRule:
        if self is CategoryId.BEHAVIORAL:
            return ProgressRule.STORIES
        if self is CategoryId.LEETCODE:
            return ProgressRule.PROBLEMS
        return ProgressRule.TOPICS

    @property
    def label(self) -> str:
        return " ".join(word.capitalize() for word in self.value.split("-"))


class Section(str, Enum):
    DASHBOARD = "dashboard"
    DATA_STRUCTURES = "data-structures"
    ALGORITHMS = "algorithms"
    JAVA_CONCEPTS = "java-concepts"
    SYSTEM_DESIGN = "system-design"
    BEHAVIORAL = "behavioral"
    LEETCODE = "leetcode"
    STUDY_PLAN = "study-plan"
    SETTINGS = "settings"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass
class Implementation:
    id: str
    name: str
    path: str
    language: str = "java"


@dataclass
class Resource:
    name: str
    url: str


@dataclass
class Topic:
    id: str
    name: str
    description: str = ""
    complexity: dict[str, str] = field(default_factory=dict)
    implementations: list[Implementation] = field(default_factory=list)
    resources: list[Resource] = field(default_factory=list)
    priority: Optional[int] = None

    @property
    def effective_priority(self) -> int:
        return self.priority if self.priority is not None else DEFAULT_PRIORITY


@dataclass
class Problem:
    id: str
    name: str
    difficulty: Difficulty
    link: str = ""
    tags: list[str] = field(default_factory=list)
    solution: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class Category:
    id: CategoryId
    name: str
    description: str = ""
    topics: list[Topic] = field(default_factory=list)
    problems: list[Problem] = field(default_factory=list)


@dataclass
class Catalog:
    categories: list[Category] = field(default_factory=list)


@dataclass
class PlannedTopic:
    id: str
    name: str
    category: CategoryId


@dataclass
class StudyDay:
    date: date
    topics: list[PlannedTopic] = field(default_factory=list)


@dataclass
class StarStory:
    id: str
    title: str
    category: str = ""
    situation: str = ""
    task: str = ""
    action: str = ""
    result: str = ""
    applicable_questions: list[str] = field(default_factory=list)


@dataclass
class Settings:
    dark_mode: bool = False
    reminder_enabled: bool = True
    reminder_time: Optional[str] = None  # HH:MM
    target_date: Optional[date] = None


def _empty_progress() -> dict[CategoryId, int]:
    return {category: 0 for category in CategoryId}


@dataclass
class ProgressState:
    current_section: Section = Section.DASHBOARD
    progress_by_category: dict[CategoryId, int] = field(default_factory=_empty_progress)
    completed_topic_ids: set[str] = field(default_factory=set)
    completed_problem_ids: set[str] = field(default_factory=set)
    study_plan: list[StudyDay] = field(default_factory=list)
    star_stories: list[StarStory] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
    leetcode_problems: Optional[list[Problem]] = None  # None = catalog list
