from interview_tracker.catalog import (
    catalog_from_dict, find_implementation, find_topic_category, get_category, iter_topics,
    load_behavioral_questions, load_catalog, problem_from_dict, search_topics,
)
from interview_tracker.models import CategoryId, Difficulty

import pytest


def test_packaged_catalog_loads():
    catalog = load_catalog()
    assert [c.id for c in catalog.categories] == list(CategoryId)
    topics = list(iter_topics(catalog))
    assert len(topics) == 34
    assert len({t.id for _, t in topics}) == 34  # ids are unique
    assert len(get_category(catalog, CategoryId.LEETCODE).problems) == 3


def test_packaged_catalog_topic_shape():
    catalog = load_catalog()
    arrays = get_category(catalog, CategoryId.DATA_STRUCTURES).topics[0]
    assert arrays.id == "ds-arrays"
    assert arrays.complexity["access"] == "O(1)"
    assert arrays.implementations[0].language == "java"
    assert arrays.resources[0].url.startswith("https://")
    assert arrays.priority == 1


def test_behavioral_questions():
    bank = load_behavioral_questions()
    assert set(bank) == {"leadership", "teamwork", "problem-solving", "failure", "conflict"}
    assert all(len(questions) == 5 for questions in bank.values())


def test_find_topic_category(catalog):
    assert find_topic_category(catalog, "algo-dp") is CategoryId.ALGORITHMS
    assert find_topic_category(catalog, "no-such-topic") is None


def test_find_implementation(catalog):
    category_id, topic, impl = find_implementation(catalog, "impl-LinkedList")
    assert category_id is CategoryId.DATA_STRUCTURES
    assert topic.id == "ds-lists"
    assert impl.path.endswith("LinkedList.java")
    assert find_implementation(catalog, "impl-missing") is None


def test_search_matches_name_and_description(catalog):
    assert [t.id for _, t in search_topics(catalog, "TREE")] == ["ds-trees"]
    assert [t.id for _, t in search_topics(catalog, "subproblems")] == ["algo-dp"]


def test_search_blank_query(catalog):
    assert search_topics(catalog, "   ") == []


def test_catalog_rejects_unknown_category():
    with pytest.raises(ValueError):
        catalog_from_dict({"categories": [{"id": "cooking", "name": "Cooking"}]})


def test_problem_from_dict_defaults():
    p = problem_from_dict({"id": "lc-1", "name": "One", "difficulty": "Hard"})
    assert p.difficulty is Difficulty.HARD
    assert p.tags == []
    assert p.solution is None


def test_problem_from_dict_rejects_bad_tags():
    with pytest.raises(ValueError):
        problem_from_dict({"id": "lc-1", "name": "One", "tags": "Array"})
