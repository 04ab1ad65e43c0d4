import pytest

from interview_tracker.models import (
    Catalog, Category, CategoryId, Difficulty, Implementation, Problem, Topic,
)
from interview_tracker.store import ProgressStore
from interview_tracker.db import init_db


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tracker.db")
    return db_path


def _impl(name):
    return [Implementation(id=f"impl-{name}", name=name, path=f"data structures/{name}.java")]


@pytest.fixture
def catalog():
    """A small catalog: 4 data-structure topics, 2 algorithms, no java topics."""
    return Catalog(categories=[
        Category(CategoryId.DATA_STRUCTURES, "Data Structures", topics=[
            Topic("ds-arrays", "Arrays", "Contiguous memory", implementations=_impl("Arrays"), priority=3),
            Topic("ds-lists", "Linked Lists", "Nodes and pointers", implementations=_impl("LinkedList")),
            Topic("ds-trees", "Trees", "Hierarchical data", priority=1),
            Topic("ds-graphs", "Graphs", "Vertices and edges"),
        ]),
        Category(CategoryId.ALGORITHMS, "Algorithms", topics=[
            Topic("algo-sort", "Sorting", "Ordering elements", implementations=_impl("QuickSort")),
            Topic("algo-dp", "Dynamic Programming", "Overlapping subproblems", priority=2),
        ]),
        Category(CategoryId.JAVA_CONCEPTS, "Java Concepts"),
        Category(CategoryId.SYSTEM_DESIGN, "System Design", topics=[
            Topic("sd-basics", "System Design Basics", "Load balancers and caches"),
        ]),
        Category(CategoryId.BEHAVIORAL, "Behavioral", topics=[
            Topic("behavioral-star", "STAR Method", "Situation, Task, Action, Result"),
        ]),
        Category(CategoryId.LEETCODE, "LeetCode", problems=[
            Problem("lc-two-sum", "Two Sum", Difficulty.EASY, tags=["Array", "Hash Table"]),
            Problem("lc-add-two", "Add Two Numbers", Difficulty.MEDIUM, tags=["Linked List"]),
        ]),
    ])


@pytest.fixture
def store(tmp_db, catalog):
    init_db(tmp_db)
    return ProgressStore(tmp_db, catalog)
