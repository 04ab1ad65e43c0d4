"""Load the static content catalog and look things up in it."""
import json
import logging
from pathlib import Path
from typing import Iterator

from interview_tracker.models import (
    Catalog, Category, CategoryId, Difficulty, Implementation, Problem, Resource, Topic,
)

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).parent / "content"


def implementation_from_dict(data: dict) -> Implementation:
    return Implementation(
        id=data["id"],
        name=data["name"],
        path=data.get("path", ""),
        language=data.get("language") or "java",
    )


def topic_from_dict(data: dict) -> Topic:
    return Topic(
        id=data["id"],
        name=data["name"],
        description=data.get("description", ""),
        complexity=dict(data.get("complexity") or {}),
        implementations=[implementation_from_dict(i) for i in data.get("implementations") or []],
        resources=[Resource(name=r["name"], url=r["url"]) for r in data.get("resources") or []],
        priority=data.get("priority"),
    )


def problem_from_dict(data: dict) -> Problem:
    """Build a Problem; raises KeyError/ValueError on a malformed entry."""
    tags = data.get("tags") or []
    if not isinstance(tags, list):
        raise ValueError(f"tags must be a list, got {type(tags).__name__}")
    return Problem(
        id=str(data["id"]),
        name=str(data["name"]),
        difficulty=Difficulty(data.get("difficulty", "Medium")),
        link=data.get("link") or "",
        tags=[str(t) for t in tags],
        solution=data.get("solution"),
        notes=data.get("notes"),
    )


def problem_to_dict(problem: Problem) -> dict:
    return {
        "id": problem.id,
        "name": problem.name,
        "difficulty": problem.difficulty.value,
        "link": problem.link,
        "tags": list(problem.tags),
        "solution": problem.solution,
        "notes": problem.notes,
    }


def catalog_from_dict(data: dict) -> Catalog:
    categories = []
    for cat in data["categories"]:
        categories.append(Category(
            id=CategoryId(cat["id"]),
            name=cat["name"],
            description=cat.get("description", ""),
            topics=[topic_from_dict(t) for t in cat.get("topics") or []],
            problems=[problem_from_dict(p) for p in cat.get("problems") or []],
        ))
    return Catalog(categories=categories)


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Load the catalog from catalog.json (the packaged one by default)."""
    path = Path(path) if path else CONTENT_DIR / "catalog.json"
    return catalog_from_dict(json.loads(path.read_text(encoding="utf-8")))


def load_behavioral_questions(path: str | Path | None = None) -> dict[str, list[str]]:
    path = Path(path) if path else CONTENT_DIR / "behavioral_questions.json"
    return json.loads(path.read_text(encoding="utf-8"))["questions"]


def get_category(catalog: Catalog, category_id: CategoryId) -> Category | None:
    for category in catalog.categories:
        if category.id == category_id:
            return category
    return None


def iter_topics(catalog: Catalog) -> Iterator[tuple[CategoryId, Topic]]:
    """Yield (category, topic) for every topic, in catalog order."""
    for category in catalog.categories:
        for topic in category.topics:
            yield category.id, topic


def find_topic(catalog: Catalog, topic_id: str) -> tuple[CategoryId, Topic] | None:
    for category_id, topic in iter_topics(catalog):
        if topic.id == topic_id:
            return category_id, topic
    return None


def find_topic_category(catalog: Catalog, topic_id: str) -> CategoryId | None:
    found = find_topic(catalog, topic_id)
    return found[0] if found else None


def find_implementation(catalog: Catalog, impl_id: str) -> tuple[CategoryId, Topic, Implementation] | None:
    for category_id, topic in iter_topics(catalog):
        for impl in topic.implementations:
            if impl.id == impl_id:
                return category_id, topic, impl
    logger.warning("Implementation not found: %s", impl_id)
    return None


def catalog_problems(catalog: Catalog) -> list[Problem]:
    category = get_category(catalog, CategoryId.LEETCODE)
    return list(category.problems) if category else []


def search_topics(catalog: Catalog, query: str) -> list[tuple[CategoryId, Topic]]:
    """Case-insensitive substring match over topic names and descriptions."""
    query = (query or "").strip().lower()
    if not query:
        return []
    return [
        (category_id, topic)
        for category_id, topic in iter_topics(catalog)
        if query in topic.name.lower() or query in (topic.description or "").lower()
    ]
