# tests/test_integration.py
"""End-to-end test of the core workflow."""
from datetime import date, datetime

from interview_tracker.dashboard import get_dashboard_stats
from interview_tracker.importer import export_data, import_data
from interview_tracker.models import CategoryId
from interview_tracker.recommend import focus_areas, recommend_by_priority
from interview_tracker.store import ProgressStore


def test_full_prep_workflow(tmp_db, catalog, tmp_path):
    """Track progress across categories, plan, restart and restore from an export."""
    store = ProgressStore.open(tmp_db, catalog)
    assert store.overall_progress() == 0

    # Study some topics
    for topic_id in ("ds-arrays", "ds-lists", "algo-sort"):
        store.mark_topic_completion(topic_id, True)
    store.mark_problem_completion("lc-two-sum", True)
    for i in range(5):
        store.append_story(f"Story {i}", "teamwork")

    progress = store.state.progress_by_category
    assert progress[CategoryId.DATA_STRUCTURES] == 50
    assert progress[CategoryId.ALGORITHMS] == 50
    assert progress[CategoryId.BEHAVIORAL] == 50
    assert progress[CategoryId.LEETCODE] == 50
    assert store.overall_progress() == 33  # 200 / 6

    # Plan the rest
    store.replace_settings(target_date=date(2026, 10, 22))
    result = store.generate_study_plan(now=datetime(2026, 10, 19, 9, 0))
    planned = [t.id for day in result["plan"] for t in day.topics]
    assert sorted(planned) == ["algo-dp", "behavioral-star", "ds-graphs", "ds-trees", "sd-basics"]

    # Recommendations skip completed topics
    assert [t.id for _, t in recommend_by_priority(catalog, store.state.completed_topic_ids, 2)] == [
        "ds-trees", "algo-dp",
    ]
    assert focus_areas(catalog, store.state, limit=1)[0]["category"] is CategoryId.JAVA_CONCEPTS

    # Restart picks up where we left off
    reopened = ProgressStore.open(tmp_db, catalog)
    assert reopened.state == store.state
    stats = get_dashboard_stats(reopened.state, len(reopened.problems), now=datetime(2026, 10, 19))
    assert stats["topics_completed"] == 3
    assert stats["stories_written"] == 5
    assert stats["days_until_target"] == 3

    # Export, wipe, import
    export_data(reopened.state, tmp_path / "backup.json")
    reopened.reset_all()
    assert reopened.overall_progress() == 0
    assert import_data(reopened, tmp_path / "backup.json")["ok"] is True
    assert reopened.state == store.state
