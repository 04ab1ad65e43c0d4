from datetime import date, timedelta
from unittest.mock import patch

from interview_tracker.app import COMMANDS, dispatch
from interview_tracker.catalog import load_behavioral_questions
from interview_tracker.models import CategoryId, Difficulty, Section


def test_dispatch_quit(store):
    for choice in ("quit", "exit", "q"):
        assert dispatch(store, choice) is False


def test_dispatch_unknown_command(store):
    assert dispatch(store, "flashcards") is True


def test_every_command_has_a_handler():
    assert all(handler for cmd, _, handler in COMMANDS if cmd != "quit")


def test_done_and_undo(store):
    with patch("interview_tracker.app.Prompt.ask", return_value="ds-arrays"):
        dispatch(store, "done")
    assert store.state.progress_by_category[CategoryId.DATA_STRUCTURES] == 25
    with patch("interview_tracker.app.Prompt.ask", return_value="ds-arrays"):
        dispatch(store, "undo")
    assert store.state.progress_by_category[CategoryId.DATA_STRUCTURES] == 0


def test_done_unknown_topic(store):
    with patch("interview_tracker.app.Prompt.ask", return_value="nope"):
        assert dispatch(store, "done") is True
    assert set(store.state.progress_by_category.values()) == {0}


def test_topic_shows_implementation_and_marks_complete(store):
    with patch("interview_tracker.app.Prompt.ask", side_effect=["ds-lists", "1"]), \
         patch("interview_tracker.app.Confirm.ask", return_value=True), \
         patch("interview_tracker.app.show_implementation") as show:
        dispatch(store, "topic")
    assert show.call_args[0][0].id == "impl-LinkedList"
    assert "ds-lists" in store.state.completed_topic_ids


def test_topic_not_found(store):
    with patch("interview_tracker.app.Prompt.ask", return_value="nope"), \
         patch("interview_tracker.app.Confirm.ask") as confirm:
        dispatch(store, "topic")
    confirm.assert_not_called()


def test_browse_navigates(store):
    with patch("interview_tracker.app.Prompt.ask", return_value="algorithms"):
        dispatch(store, "browse")
    assert store.state.current_section is Section.ALGORITHMS


def test_solve_problem(store):
    with patch("interview_tracker.app.Prompt.ask", return_value="lc-two-sum"), \
         patch("interview_tracker.app.Confirm.ask", return_value=True):
        dispatch(store, "solve")
    assert store.state.progress_by_category[CategoryId.LEETCODE] == 50


def test_add_problem(store):
    answers = ["Valid Parentheses", "", "Easy", "Stack, String"]
    with patch("interview_tracker.app.Prompt.ask", side_effect=answers):
        dispatch(store, "add-problem")
    added = store.problems[-1]
    assert added.name == "Valid Parentheses"
    assert added.difficulty is Difficulty.EASY
    assert added.tags == ["Stack", "String"]


def test_save_solution(store):
    answers = ["lc-two-sum", "Map<Integer, Integer> seen;\\nreturn seen;", "hash map"]
    with patch("interview_tracker.app.Prompt.ask", side_effect=answers):
        dispatch(store, "solution")
    problem = store.problems[0]
    assert problem.solution == "Map<Integer, Integer> seen;\nreturn seen;"
    assert problem.notes == "hash map"


def test_add_story(store):
    answers = ["Shipped a migration", "leadership", "S", "T", "A", "R", "Q1 | Q2"]
    with patch("interview_tracker.app.Prompt.ask", side_effect=answers):
        dispatch(store, "add-story")
    story = store.state.star_stories[0]
    assert story.title == "Shipped a migration"
    assert story.applicable_questions == ["Q1", "Q2"]
    assert store.state.progress_by_category[CategoryId.BEHAVIORAL] == 10


def test_settings_saved(store):
    with patch("interview_tracker.app.Prompt.ask", side_effect=["2026-12-01", "7:30"]), \
         patch("interview_tracker.app.Confirm.ask", side_effect=[True, False]):
        dispatch(store, "settings")
    settings = store.state.settings
    assert settings.target_date == date(2026, 12, 1)
    assert settings.dark_mode is True
    assert settings.reminder_enabled is False
    assert settings.reminder_time == "07:30"


def test_settings_bad_time_not_saved(store):
    with patch("interview_tracker.app.Prompt.ask", side_effect=["", "25:99"]), \
         patch("interview_tracker.app.Confirm.ask", side_effect=[True, True]):
        dispatch(store, "settings")
    assert store.state.settings.dark_mode is False


def test_generate_plan(store):
    target = date.today() + timedelta(days=30)
    with patch("interview_tracker.app.Prompt.ask", return_value=target.isoformat()):
        dispatch(store, "generate")
    assert store.state.settings.target_date == target
    assert sum(len(day.topics) for day in store.state.study_plan) == 8
    assert store.state.current_section is Section.STUDY_PLAN


def test_generate_without_target(store):
    with patch("interview_tracker.app.Prompt.ask", return_value=""):
        dispatch(store, "generate")
    assert store.state.study_plan == []


def test_import_missing_file(store, tmp_path):
    with patch("interview_tracker.app.Prompt.ask", return_value=str(tmp_path / "missing.json")):
        assert dispatch(store, "import") is True


def test_reset_requires_confirmation(store):
    store.mark_topic_completion("ds-arrays", True)
    with patch("interview_tracker.app.Confirm.ask", return_value=False):
        dispatch(store, "reset")
    assert store.state.completed_topic_ids == {"ds-arrays"}
    with patch("interview_tracker.app.Confirm.ask", return_value=True):
        dispatch(store, "reset")
    assert store.state.completed_topic_ids == set()


def test_read_only_views_render(store):
    store.mark_topic_completion("ds-arrays", True)
    for choice in ("dashboard", "focus", "stories", "plan"):
        assert dispatch(store, choice) is True


def test_settings_invalid_date_keeps_target(store):
    store.replace_settings(target_date=date(2026, 12, 1))
    with patch("interview_tracker.app.Prompt.ask", side_effect=["2026-13-01", "09:00"]), \
         patch("interview_tracker.app.Confirm.ask", side_effect=[True, True]):
        dispatch(store, "settings")
    assert store.state.settings.target_date == date(2026, 12, 1)
    assert store.state.settings.dark_mode is False


def test_generate_invalid_date_keeps_target(store):
    store.replace_settings(target_date=date(2026, 12, 1))
    with patch("interview_tracker.app.Prompt.ask", return_value="next friday"):
        dispatch(store, "generate")
    assert store.state.settings.target_date == date(2026, 12, 1)
    assert store.state.study_plan == []


def test_questions_prepare_new_answer(store):
    question = load_behavioral_questions()["leadership"][1]
    answers = ["leadership", "2", "S", "T", "A", "R"]
    with patch("interview_tracker.app.Prompt.ask", side_effect=answers):
        dispatch(store, "questions")
    story = store.state.star_stories[0]
    assert story.title == question[:40] + "..."
    assert story.category == "leadership"
    assert story.result == "R"
    assert story.applicable_questions == [question]
    assert store.state.progress_by_category[CategoryId.BEHAVIORAL] == 10


def test_questions_link_existing_story(store):
    story = store.append_story("Migration", "teamwork")
    question = load_behavioral_questions()["teamwork"][0]
    with patch("interview_tracker.app.Prompt.ask", side_effect=["teamwork", "1", story.id]):
        dispatch(store, "questions")
    assert len(store.state.star_stories) == 1
    assert store.state.star_stories[0].applicable_questions == [question]


def test_questions_list_only(store):
    with patch("interview_tracker.app.Prompt.ask", side_effect=["conflict", ""]):
        dispatch(store, "questions")
    assert store.state.star_stories == []
